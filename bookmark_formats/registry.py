"""
Bookmark Sync - Format Registry

Maps import/export format names to their parser and exporter
implementations, and detects the import format of an uploaded file.
"""

from enum import Enum
from pathlib import PurePath
from typing import Dict, List, Optional

from .base import BaseExporter, BaseImportParser, RawImportEntry, UnsupportedFormatError
from .exporters import CsvExporter, TextExporter, XmlExporter
from .json_formats import JsonBookmarkParser, JsonExporter
from .netscape import NetscapeHtmlExporter, NetscapeHtmlParser


class ImportFormat(str, Enum):
    HTML = "html"
    JSON = "json"


class ExportFormat(str, Enum):
    HTML = "html"
    JSON = "json"
    CSV = "csv"
    XML = "xml"
    TXT = "txt"


PARSERS: Dict[ImportFormat, BaseImportParser] = {
    ImportFormat.HTML: NetscapeHtmlParser(),
    ImportFormat.JSON: JsonBookmarkParser(),
}

EXPORTERS: Dict[ExportFormat, BaseExporter] = {
    ExportFormat.HTML: NetscapeHtmlExporter(),
    ExportFormat.JSON: JsonExporter(),
    ExportFormat.CSV: CsvExporter(),
    ExportFormat.XML: XmlExporter(),
    ExportFormat.TXT: TextExporter(),
}

MIME_TYPES = {
    "application/json": ImportFormat.JSON,
    "text/html": ImportFormat.HTML,
}

EXTENSIONS = {
    ".json": ImportFormat.JSON,
    ".html": ImportFormat.HTML,
    ".htm": ImportFormat.HTML,
}


def detect_import_format(content_type: Optional[str], filename: Optional[str]) -> ImportFormat:
    """
    Determine the import format from the declared MIME type or file extension.

    JSON is checked first, by MIME type or .json extension, then HTML
    the same way. A Chrome "Bookmarks.json" sent as text/html is JSON.

    Raises:
        UnsupportedFormatError: If neither identifies a supported format
    """
    mime = (content_type or "").split(";", 1)[0].strip().lower()
    suffix = PurePath(filename).suffix.lower() if filename else ""

    for fmt in (ImportFormat.JSON, ImportFormat.HTML):
        if MIME_TYPES.get(mime) is fmt or EXTENSIONS.get(suffix) is fmt:
            return fmt

    raise UnsupportedFormatError(
        "Unsupported file format. Please upload HTML or JSON files."
    )


def get_parser(fmt) -> BaseImportParser:
    """Get the parser for an import format name or ImportFormat"""
    try:
        return PARSERS[ImportFormat(fmt)]
    except ValueError:
        raise UnsupportedFormatError(f"Unsupported import format: {fmt}") from None


def get_exporter(fmt) -> BaseExporter:
    """Get the exporter for an export format name or ExportFormat"""
    try:
        return EXPORTERS[ExportFormat(fmt)]
    except ValueError:
        supported = ", ".join(f.value for f in ExportFormat)
        raise UnsupportedFormatError(
            f"Unsupported export format: {fmt}. Supported formats: {supported}"
        ) from None


def parse_content(fmt, content: str) -> List[RawImportEntry]:
    """Parse content with the parser registered for fmt"""
    return get_parser(fmt).parse(content)
