"""
Bookmark Sync - Netscape Bookmark File Format

Reads and writes the NETSCAPE-Bookmark-file-1 pseudo-HTML that every
major browser uses for bookmark import/export.

Browser exports are not well-formed HTML (unclosed <DT>/<p> tags, one
bookmark per line), so the parser scans line by line and only hands
lines containing an anchor to BeautifulSoup's tolerant html.parser.
"""

import html
import re
import time
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup

from .base import (
    BaseExporter,
    BaseImportParser,
    BookmarkRecord,
    ExportOptions,
    RawImportEntry,
)

ANCHOR_PATTERN = re.compile(r"<a[\s>]", re.IGNORECASE)
DESCRIPTION_PATTERN = re.compile(r"^\s*<dd>(.*)$", re.IGNORECASE | re.DOTALL)

NETSCAPE_HEADER = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file. -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
<DL><p>
"""
NETSCAPE_FOOTER = "</DL><p>"


def _split_tags(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [tag.strip() for tag in value.split(",") if tag.strip()]


class NetscapeHtmlParser(BaseImportParser):
    """
    Parser for Netscape bookmark HTML exports.

    Each anchor with an href attribute and non-empty text becomes an
    entry. An href that is present but empty still produces an entry
    (with an empty URL) so the importer can count it as failed.

    Example input:
        <DT><A HREF="https://example.com" ADD_DATE="1700000000">Example</A>
        <DD>Optional description
    """

    name = "netscape_html"

    def parse(self, content: str) -> List[RawImportEntry]:
        entries: List[RawImportEntry] = []
        last_on_previous_line: Optional[RawImportEntry] = None

        for line in content.splitlines():
            if ANCHOR_PATTERN.search(line):
                found = self._parse_anchor_line(line)
                entries.extend(found)
                last_on_previous_line = found[-1] if found else None
                continue

            match = DESCRIPTION_PATTERN.match(line)
            if match and last_on_previous_line is not None:
                if not last_on_previous_line.description:
                    text = BeautifulSoup(match.group(1), "html.parser").get_text()
                    last_on_previous_line.description = text.strip()
            last_on_previous_line = None

        return entries

    def _parse_anchor_line(self, line: str) -> List[RawImportEntry]:
        entries = []
        soup = BeautifulSoup(line, "html.parser")

        for a_tag in soup.find_all("a"):
            href = a_tag.get("href")
            title = a_tag.get_text(strip=True)

            if href is None or not title:
                continue

            entries.append(RawImportEntry(
                title=title,
                url=href.strip(),
                tags=_split_tags(a_tag.get("tags")),
                icon=a_tag.get("icon") or None,
            ))

        return entries


class NetscapeHtmlExporter(BaseExporter):
    """Exporter producing a browser-importable Netscape bookmark file"""

    media_type = "text/html"
    extension = "html"

    def serialize(
        self,
        bookmarks: Sequence[BookmarkRecord],
        options: ExportOptions,
    ) -> str:
        lines = [NETSCAPE_HEADER]

        for bookmark in bookmarks:
            if bookmark.created_at:
                add_date = int(bookmark.created_at.timestamp())
            else:
                add_date = int(time.time())

            lines.append(
                f'    <DT><A HREF="{html.escape(bookmark.url or "")}" ADD_DATE="{add_date}">'
                f"{html.escape(bookmark.display_title, quote=False)}</A>\n"
            )
            if options.include_timestamps and bookmark.description:
                lines.append(f"    <DD>{html.escape(bookmark.description, quote=False)}\n")

        lines.append(NETSCAPE_FOOTER)
        return "".join(lines)
