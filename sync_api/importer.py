"""
Bookmark Sync - Import Pipeline

Turns an uploaded bookmark file into persisted bookmarks:
path check -> format detection -> parse -> normalize -> bulk insert
-> audit record -> path check -> temp file cleanup.
"""

import asyncio
import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from bookmark_formats import (
    FormatError,
    RawImportEntry,
    UnsupportedFormatError,
    detect_import_format,
    parse_content,
)
from config import UploadSettings
from .models import BookmarkCreate, ImportHistoryCreate
from .paths import ensure_upload_dir, is_contained

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class ImportRejected(Exception):
    """An import request that failed validation; maps to a 4xx response"""

    def __init__(self, code: str, message: str, status_code: int = 400):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code


@dataclass
class UploadedFile:
    """An upload that has been written to the upload directory"""
    path: Path
    original_name: str
    content_type: Optional[str] = None


@dataclass
class ImportResult:
    """Counts reported back to the caller"""
    imported: int
    failed: int
    total: int


def stage_upload(
    source: BinaryIO,
    original_name: str,
    content_type: Optional[str],
    settings: UploadSettings,
) -> UploadedFile:
    """
    Copy an incoming file stream into the upload directory.

    The file gets a random name so client-supplied names never reach
    the file system.

    Raises:
        ImportRejected: If the file exceeds settings.max_upload_bytes
    """
    upload_dir = ensure_upload_dir(settings.upload_dir)
    target = upload_dir / uuid.uuid4().hex
    written = 0

    try:
        with open(target, "xb") as out:
            while True:
                chunk = source.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > settings.max_upload_bytes:
                    raise ImportRejected(
                        "file-too-large",
                        f"File exceeds the {settings.max_upload_bytes} byte upload limit",
                        status_code=413,
                    )
                out.write(chunk)
    except BaseException:
        target.unlink(missing_ok=True)
        raise

    return UploadedFile(path=target, original_name=original_name, content_type=content_type)


def stage_local_file(path: Path, settings: UploadSettings) -> UploadedFile:
    """Stage a file from the local file system, as the CLI does"""
    with open(path, "rb") as source:
        return stage_upload(source, path.name, None, settings)


def normalize_entry(
    entry: RawImportEntry,
    user_id: str,
    device_id: Optional[int] = None,
    collection_id: Optional[int] = None,
) -> Optional[BookmarkCreate]:
    """
    Convert a candidate entry into a persistable bookmark.

    Returns None when the entry has no URL.
    """
    url = (entry.url or "").strip()
    if not url:
        return None

    return BookmarkCreate(
        user_id=user_id,
        title=(entry.title or "").strip() or "Untitled",
        url=url,
        description=entry.description or "",
        favicon=entry.icon or "",
        tags=list(entry.tags or []),
        source_app="imported",
        device_id=device_id,
        collection_id=collection_id,
    )


def discard_upload(path: Path, upload_dir) -> bool:
    """Delete a staged upload if it is still inside upload_dir"""
    if not os.path.lexists(path):
        return False

    if not is_contained(path, upload_dir):
        logger.error(f"Cannot clean up file with invalid path: {path}")
        return False

    try:
        os.unlink(path)
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.error(f"Failed to remove upload {path}: {e}")
        return False
    return True


def _read_upload(path: Path) -> str:
    return path.read_text(encoding="utf-8-sig", errors="replace")


class ImportService:
    """
    Import orchestrator.

    Args:
        store: Persistence collaborator (see sync_api.db.Database)
        settings: Upload settings; upload_dir bounds every file touched
    """

    def __init__(self, store, settings: UploadSettings):
        self.store = store
        self.settings = settings

    async def import_file(
        self,
        user_id: str,
        upload: Optional[UploadedFile],
        device_id: Optional[int] = None,
        collection_id: Optional[int] = None,
    ) -> ImportResult:
        """
        Run the import pipeline for one uploaded file.

        Raises:
            ImportRejected: For missing files, paths outside the upload
                directory, unsupported formats and unparseable content
        """
        if upload is None:
            raise ImportRejected("missing-file", "No file uploaded")

        if not is_contained(upload.path, self.settings.upload_dir):
            logger.error(f"Invalid file path detected: {upload.path}")
            raise ImportRejected("invalid-path", "Invalid file path")

        try:
            return await self._process(user_id, upload, device_id, collection_id)
        finally:
            await self._cleanup(upload.path)

    async def _process(
        self,
        user_id: str,
        upload: UploadedFile,
        device_id: Optional[int],
        collection_id: Optional[int],
    ) -> ImportResult:
        try:
            fmt = detect_import_format(upload.content_type, upload.original_name)
        except UnsupportedFormatError as e:
            raise ImportRejected("unsupported-format", str(e)) from e

        content = await asyncio.to_thread(_read_upload, upload.path)

        try:
            entries = parse_content(fmt, content)
        except FormatError as e:
            logger.warning(f"Rejected {upload.original_name}: {e}")
            raise ImportRejected("invalid-format", "Invalid JSON file format") from e

        total = len(entries)
        bookmarks = []
        for entry in entries:
            bookmark = normalize_entry(entry, user_id, device_id, collection_id)
            if bookmark is not None:
                bookmarks.append(bookmark)

        history_id = await self.store.create_import_history(ImportHistoryCreate(
            user_id=user_id,
            source_type="file",
            file_name=upload.original_name,
            device_id=device_id,
            total_bookmarks=total,
            status="processing",
        ))

        try:
            created = await self.store.bulk_create_bookmarks(bookmarks)
        except Exception:
            await self.store.finish_import_history(history_id, 0, total, "failed")
            raise

        failed = total - created
        await self.store.finish_import_history(history_id, created, failed, "completed")

        logger.info(
            f"Imported {upload.original_name} for {user_id}: "
            f"{created} imported, {failed} failed, {total} total"
        )
        return ImportResult(imported=created, failed=failed, total=total)

    async def _cleanup(self, path: Path) -> bool:
        return await asyncio.to_thread(discard_upload, path, self.settings.upload_dir)
