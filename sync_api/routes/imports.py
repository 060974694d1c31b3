"""
Bookmark Sync - Import Routes

Routes for uploading bookmark files and reviewing past imports.
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from config import UploadSettings
from ..deps import get_import_service, get_store, get_upload_settings, get_user_id
from ..importer import ImportRejected, ImportService, stage_upload
from ..models import ErrorResponse, ImportHistoryEntry, ImportResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/import", tags=["Import"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing file, invalid path or unsupported format"},
    413: {"model": ErrorResponse, "description": "File too large"},
}


@router.post("", response_model=ImportResponse, responses=ERROR_RESPONSES)
@router.post("/file", response_model=ImportResponse, responses=ERROR_RESPONSES)
async def import_file(
    bookmark_file: Optional[UploadFile] = File(None, alias="bookmarkFile"),
    device_id: Optional[int] = Form(None),
    collection_id: Optional[int] = Form(None),
    user_id: str = Depends(get_user_id),
    service: ImportService = Depends(get_import_service),
    settings: UploadSettings = Depends(get_upload_settings),
):
    """
    Import bookmarks from an uploaded browser export.

    Accepts Netscape bookmark HTML, Chrome's Bookmarks JSON, a flat
    JSON array, or a previous JSON export.
    """
    try:
        upload = None
        if bookmark_file is not None and bookmark_file.filename:
            upload = await asyncio.to_thread(
                stage_upload,
                bookmark_file.file,
                bookmark_file.filename,
                bookmark_file.content_type,
                settings,
            )

        result = await service.import_file(user_id, upload, device_id, collection_id)

    except ImportRejected as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=ErrorResponse(error=e.code, detail=e.message).model_dump(),
        )
    except Exception:
        logger.exception("Error importing bookmarks")
        raise HTTPException(500, "Failed to import bookmarks")

    return ImportResponse(
        success=True,
        imported=result.imported,
        failed=result.failed,
        total=result.total,
    )


@router.get("/history", response_model=list[ImportHistoryEntry])
async def import_history(
    user_id: str = Depends(get_user_id),
    store=Depends(get_store),
):
    """List the user's previous imports, newest first."""
    try:
        return await store.get_import_history(user_id)
    except Exception:
        logger.exception("Error fetching import history")
        raise HTTPException(500, "Failed to fetch import history")
