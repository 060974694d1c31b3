"""
Bookmark Sync - Export Routes

Routes for exporting bookmarks to various formats.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from bookmark_formats import ExportFormat, ExportOptions
from ..deps import get_export_service, get_user_id
from ..exporter import ExportDocument, ExportService, NoBookmarksFound
from ..models import ExportRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/export", tags=["Export"])


async def _render(
    service: ExportService,
    user_id: str,
    fmt: ExportFormat,
    bookmark_ids: Optional[list[int]],
    options: ExportOptions,
) -> Response:
    try:
        document: ExportDocument = await service.export(user_id, fmt, bookmark_ids, options)
    except NoBookmarksFound:
        raise HTTPException(404, "No bookmarks found")
    except Exception:
        logger.exception("Error exporting bookmarks")
        raise HTTPException(500, "Failed to export bookmarks")

    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": document.content_disposition},
    )


@router.get("")
async def export_bookmarks(
    format: ExportFormat = Query(ExportFormat.JSON),
    ids: Optional[list[int]] = Query(None, description="Bookmark IDs; omit to export all"),
    include_metadata: bool = Query(True),
    user_id: str = Depends(get_user_id),
    service: ExportService = Depends(get_export_service),
):
    """
    Export bookmarks as a downloadable document.

    Without ids every bookmark is exported. The default format is the
    full JSON dump.
    """
    return await _render(
        service,
        user_id,
        format,
        ids or None,
        ExportOptions.from_metadata_flag(include_metadata),
    )


@router.post("")
async def export_selected(
    request: ExportRequest,
    user_id: str = Depends(get_user_id),
    service: ExportService = Depends(get_export_service),
):
    """Export the selected bookmarks in the requested format."""
    return await _render(service, user_id, request.format, request.bookmark_ids, request.options())
