"""
Bookmark Sync - API Pydantic Models

Models for API requests/responses and persistence.
"""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field

from bookmark_formats import ExportFormat, ExportOptions

ImportStatus = Literal["processing", "completed", "failed"]


class BookmarkCreate(BaseModel):
    """Persistence-ready bookmark produced by the importer"""
    user_id: str
    title: str
    url: str = Field(..., min_length=1)
    description: str = ""
    favicon: str = ""
    tags: list[str] = Field(default_factory=list)
    source_app: str = "imported"
    device_id: Optional[int] = None
    collection_id: Optional[int] = None


class ImportHistoryCreate(BaseModel):
    """New import audit record"""
    user_id: str
    source_type: str = "file"
    file_name: Optional[str] = None
    device_id: Optional[int] = None
    total_bookmarks: int = 0
    successful_imports: int = 0
    failed_imports: int = 0
    status: ImportStatus = "processing"


class ImportHistoryEntry(BaseModel):
    """Import audit record as returned by the API"""
    id: int
    source_type: str
    file_name: Optional[str]
    total_bookmarks: int
    successful_imports: int
    failed_imports: int
    status: str
    created_at: datetime


class ImportResponse(BaseModel):
    """Response for a completed import"""
    success: bool = True
    imported: int
    failed: int
    total: int


class ExportRequest(BaseModel):
    """Request for exporting selected bookmarks"""
    bookmark_ids: list[int] = Field(..., min_length=1, description="IDs of bookmarks to export")
    format: ExportFormat = Field(default=ExportFormat.HTML, description="Output format")
    include_metadata: bool = Field(default=True, description="Include timestamps and device info")

    def options(self) -> ExportOptions:
        return ExportOptions.from_metadata_flag(self.include_metadata)


class ErrorResponse(BaseModel):
    """Error response model"""
    error: str = Field(..., description="Error code")
    detail: Optional[str] = Field(None, description="Human readable message")


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    database: str
