"""
Bookmark Sync - API Database Operations

Database queries used by the import and export pipelines.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import asyncpg

from bookmark_formats import BookmarkRecord
from config import get_config
from .models import BookmarkCreate, ImportHistoryCreate, ImportHistoryEntry

logger = logging.getLogger(__name__)


class Database:
    """Async database connection pool manager"""

    def __init__(self, database_url: str, min_size: int = 2, max_size: int = 10):
        self.database_url = database_url
        self.min_size = min_size
        self.max_size = max_size
        self._pool: Optional[asyncpg.Pool] = None

    async def connect(self):
        """Create connection pool"""
        self._pool = await asyncpg.create_pool(
            self.database_url,
            min_size=self.min_size,
            max_size=self.max_size,
        )
        logger.info("Database pool created")

    async def disconnect(self):
        """Close connection pool"""
        if self._pool:
            await self._pool.close()
            logger.info("Database pool closed")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[asyncpg.Connection]:
        """Get a connection from the pool"""
        async with self._pool.acquire() as conn:
            yield conn

    async def bulk_create_bookmarks(self, bookmarks: list[BookmarkCreate]) -> int:
        """
        Insert bookmarks in a single transaction.

        Returns the number of rows created. Nothing is written if any
        insert fails.
        """
        if not bookmarks:
            return 0

        query = """
            INSERT INTO bookmarks (
                user_id,
                device_id,
                collection_id,
                title,
                url,
                description,
                favicon,
                tags,
                source_app
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
        """

        async with self.connection() as conn:
            async with conn.transaction():
                await conn.executemany(query, [
                    (
                        b.user_id,
                        b.device_id,
                        b.collection_id,
                        b.title,
                        b.url,
                        b.description,
                        b.favicon,
                        b.tags,
                        b.source_app,
                    )
                    for b in bookmarks
                ])

        logger.info(f"Inserted {len(bookmarks)} bookmarks")
        return len(bookmarks)

    async def create_import_history(self, record: ImportHistoryCreate) -> int:
        """Insert an import audit record and return its id"""
        query = """
            INSERT INTO import_history (
                user_id,
                device_id,
                source_type,
                file_name,
                total_bookmarks,
                successful_imports,
                failed_imports,
                status
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
            RETURNING id
        """

        async with self.connection() as conn:
            return await conn.fetchval(
                query,
                record.user_id,
                record.device_id,
                record.source_type,
                record.file_name,
                record.total_bookmarks,
                record.successful_imports,
                record.failed_imports,
                record.status,
            )

    async def finish_import_history(
        self,
        history_id: int,
        successful: int,
        failed: int,
        status: str,
    ) -> bool:
        """
        Move a processing import record to a terminal status.

        Returns False if the record was not in the processing state.
        """
        query = """
            UPDATE import_history
            SET
                successful_imports = $2,
                failed_imports = $3,
                status = $4
            WHERE id = $1 AND status = 'processing'
        """

        async with self.connection() as conn:
            result = await conn.execute(query, history_id, successful, failed, status)

        return result.endswith(" 1")

    async def get_import_history(self, user_id: str, limit: int = 50) -> list[ImportHistoryEntry]:
        """Get the user's import records, newest first"""
        query = """
            SELECT
                id,
                source_type,
                file_name,
                total_bookmarks,
                successful_imports,
                failed_imports,
                status,
                created_at
            FROM import_history
            WHERE user_id = $1
            ORDER BY created_at DESC
            LIMIT $2
        """

        async with self.connection() as conn:
            rows = await conn.fetch(query, user_id, limit)

        return [ImportHistoryEntry(**dict(row)) for row in rows]

    async def get_bookmarks_for_export(
        self,
        user_id: str,
        bookmark_ids: Optional[list[int]] = None,
        limit: int = 10000,
    ) -> list[BookmarkRecord]:
        """
        Get bookmarks for export with their device and collection names.

        With bookmark_ids=None every non-deleted bookmark of the user is
        returned, up to limit.
        """
        query = """
            SELECT
                b.id,
                b.title,
                b.url,
                b.description,
                b.favicon,
                b.tags,
                b.created_at,
                d.name AS device_name,
                c.name AS collection_name
            FROM bookmarks b
            LEFT JOIN devices d ON b.device_id = d.id
            LEFT JOIN collections c ON b.collection_id = c.id
            WHERE b.user_id = $1
              AND b.is_deleted = false
              AND ($2::int[] IS NULL OR b.id = ANY($2::int[]))
            ORDER BY b.created_at DESC
            LIMIT $3
        """

        async with self.connection() as conn:
            rows = await conn.fetch(query, user_id, bookmark_ids, limit)

        return [
            BookmarkRecord(
                id=row["id"],
                title=row["title"],
                url=row["url"],
                description=row["description"],
                favicon=row["favicon"],
                tags=list(row["tags"] or []),
                created_at=row["created_at"],
                device_name=row["device_name"],
                collection_name=row["collection_name"],
            )
            for row in rows
        ]


# Global database instance
_db: Optional[Database] = None


def get_database() -> Database:
    """Get the global database instance"""
    global _db
    if _db is None:
        settings = get_config().database
        _db = Database(
            settings.url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )
    return _db


async def init_database():
    """Initialize the database connection"""
    db = get_database()
    await db.connect()


async def close_database():
    """Close the database connection"""
    global _db
    if _db:
        await _db.disconnect()
        _db = None
