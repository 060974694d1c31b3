"""
Bookmark Sync - Ingest Module

Command-line tools to preview, import and export bookmark files
without going through the HTTP API.
"""

from .cli import main

__all__ = ["main"]
