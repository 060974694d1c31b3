"""
Bookmark Sync - CSV, XML and plain-text exporters
"""

import csv
import io
from typing import List, Sequence

from .base import BaseExporter, BookmarkRecord, ExportOptions

UNKNOWN_DEVICE = "Unknown"


def cdata(text: str) -> str:
    """Wrap text in a CDATA section, splitting any embedded ']]>'"""
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


class CsvExporter(BaseExporter):
    """
    Exporter producing a spreadsheet-friendly CSV file.

    Header is Title,URL plus optional Created At / Device columns.
    Every value is quoted and embedded quotes are doubled.
    """

    media_type = "text/csv"
    extension = "csv"

    def serialize(
        self,
        bookmarks: Sequence[BookmarkRecord],
        options: ExportOptions,
    ) -> str:
        headers = ["Title", "URL"]
        if options.include_timestamps:
            headers.append("Created At")
        if options.include_device_info:
            headers.append("Device")

        buffer = io.StringIO()
        buffer.write(",".join(headers) + "\n")
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")

        for b in bookmarks:
            row = [b.display_title, b.url or ""]
            if options.include_timestamps:
                row.append(b.created_at.isoformat() if b.created_at else "")
            if options.include_device_info:
                row.append(b.device_name or UNKNOWN_DEVICE)
            writer.writerow(row)

        return buffer.getvalue()


class XmlExporter(BaseExporter):
    """
    Exporter producing a <bookmarks> XML document.

    Free text goes into CDATA sections so untrusted titles and URLs
    need no escaping.
    """

    media_type = "application/xml"
    extension = "xml"

    def serialize(
        self,
        bookmarks: Sequence[BookmarkRecord],
        options: ExportOptions,
    ) -> str:
        lines = ['<?xml version="1.0" encoding="UTF-8"?>', "<bookmarks>"]

        for b in bookmarks:
            lines.append("  <bookmark>")
            lines.append(f"    <title>{cdata(b.display_title)}</title>")
            lines.append(f"    <url>{cdata(b.url or '')}</url>")
            if b.description:
                lines.append(f"    <description>{cdata(b.description)}</description>")
            if options.include_timestamps and b.created_at:
                lines.append(f"    <created>{b.created_at.isoformat()}</created>")
            if options.include_device_info and b.device_name:
                lines.append(f"    <device>{cdata(b.device_name)}</device>")
            lines.append("  </bookmark>")

        lines.append("</bookmarks>")
        return "\n".join(lines)


class TextExporter(BaseExporter):
    """Exporter producing a plain-text list, one block per bookmark"""

    media_type = "text/plain"
    extension = "txt"

    def serialize(
        self,
        bookmarks: Sequence[BookmarkRecord],
        options: ExportOptions,
    ) -> str:
        blocks: List[str] = []

        for b in bookmarks:
            lines = [b.display_title, b.url or ""]
            if options.include_timestamps and b.created_at:
                lines.append(f"Added: {b.created_at.isoformat()}")
            if options.include_device_info:
                lines.append(f"Device: {b.device_name or UNKNOWN_DEVICE}")
            blocks.append("\n".join(lines))

        return "\n\n".join(blocks) + ("\n" if blocks else "")
