"""
Bookmark Sync - API Service

FastAPI service for importing and exporting browser bookmarks.
"""

__version__ = "1.0.0"
