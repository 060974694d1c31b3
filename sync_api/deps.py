"""
Bookmark Sync - Route Dependencies

Shared FastAPI dependencies. Authentication happens upstream; routes
receive the already-authenticated user id.
"""

from fastapi import Depends, HTTPException

from config import AppSettings, UploadSettings, get_config
from .db import Database, get_database
from .exporter import ExportService
from .importer import ImportService


def get_app_settings() -> AppSettings:
    return get_config().app


def get_upload_settings() -> UploadSettings:
    return get_config().uploads


def get_user_id(settings: AppSettings = Depends(get_app_settings)) -> str:
    """Get the default user ID from configuration"""
    if not settings.default_user_id:
        raise HTTPException(500, "DEFAULT_USER_ID not configured")
    return settings.default_user_id


def get_store() -> Database:
    return get_database()


def get_import_service(
    store=Depends(get_store),
    settings: UploadSettings = Depends(get_upload_settings),
) -> ImportService:
    return ImportService(store, settings)


def get_export_service(store=Depends(get_store)) -> ExportService:
    return ExportService(store, limit=get_config().export.limit)
