"""
Bookmark Sync - API Routes
"""

from .imports import router as import_router
from .export import router as export_router

__all__ = ["import_router", "export_router"]
