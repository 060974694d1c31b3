"""
Bookmark Sync - Bookmark File Formats

Pure parsers and exporters for browser bookmark files.
"""

from .base import (
    BaseExporter,
    BaseImportParser,
    BookmarkRecord,
    ExportOptions,
    FormatError,
    RawImportEntry,
    UnsupportedFormatError,
)
from .exporters import CsvExporter, TextExporter, XmlExporter
from .json_formats import JsonBookmarkParser, JsonExporter, parse_chrome_tree, parse_json_array
from .netscape import NetscapeHtmlExporter, NetscapeHtmlParser
from .registry import (
    ExportFormat,
    ImportFormat,
    detect_import_format,
    get_exporter,
    get_parser,
    parse_content,
)

__all__ = [
    "BaseExporter",
    "BaseImportParser",
    "BookmarkRecord",
    "ExportOptions",
    "FormatError",
    "RawImportEntry",
    "UnsupportedFormatError",
    "CsvExporter",
    "TextExporter",
    "XmlExporter",
    "JsonBookmarkParser",
    "JsonExporter",
    "parse_chrome_tree",
    "parse_json_array",
    "NetscapeHtmlExporter",
    "NetscapeHtmlParser",
    "ExportFormat",
    "ImportFormat",
    "detect_import_format",
    "get_exporter",
    "get_parser",
    "parse_content",
]
