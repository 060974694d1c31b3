"""
Bookmark Sync - Export Pipeline

Loads a user's bookmarks and renders them in the requested format.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from bookmark_formats import ExportFormat, ExportOptions, get_exporter

logger = logging.getLogger(__name__)


class NoBookmarksFound(LookupError):
    """None of the requested bookmark ids belong to the user"""


@dataclass
class ExportDocument:
    """A rendered export, ready to be sent as a download"""
    content: str
    media_type: str
    filename: str

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


class ExportService:
    """
    Export orchestrator.

    Args:
        store: Persistence collaborator (see sync_api.db.Database)
        limit: Maximum number of bookmarks in an export-all document
    """

    def __init__(self, store, limit: int = 10000):
        self.store = store
        self.limit = limit

    async def export(
        self,
        user_id: str,
        fmt: ExportFormat,
        bookmark_ids: Optional[list[int]] = None,
        options: Optional[ExportOptions] = None,
    ) -> ExportDocument:
        """
        Render the user's bookmarks.

        Args:
            user_id: Owner of the bookmarks
            fmt: Output format
            bookmark_ids: Bookmarks to include; None exports everything
            options: Metadata flags for the exporter

        Raises:
            NoBookmarksFound: If bookmark_ids matched no bookmarks
        """
        exporter = get_exporter(fmt)
        options = options or ExportOptions()

        limit = self.limit if bookmark_ids is None else len(bookmark_ids)
        bookmarks = await self.store.get_bookmarks_for_export(user_id, bookmark_ids, limit)

        if bookmark_ids is not None and not bookmarks:
            raise NoBookmarksFound("No bookmarks found")

        content = exporter.serialize(bookmarks, options)
        logger.info(f"Exported {len(bookmarks)} bookmarks as {exporter.extension} for {user_id}")

        return ExportDocument(
            content=content,
            media_type=exporter.media_type,
            filename=f"bookmarks-export-{date.today().isoformat()}.{exporter.extension}",
        )
