"""
Bookmark Sync - JSON Bookmark Formats

Parses the JSON bookmark layouts we accept on import:
- a flat array of {title|name, url|href, description?, tags?} objects
- Chrome's "Bookmarks" file (roots.*.children[] tree)
- our own export envelope ({"version", ..., "bookmarks": [...]})

and writes the export envelope.
"""

import json
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Sequence

from .base import (
    BaseExporter,
    BaseImportParser,
    BookmarkRecord,
    ExportOptions,
    FormatError,
    RawImportEntry,
)

EXPORT_VERSION = "1.0"


def _first_string(item: dict, *keys: str) -> Optional[str]:
    """Return the first value under keys that is a non-empty string"""
    for key in keys:
        value = item.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _string_tags(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [tag for tag in value if isinstance(tag, str)]


def load_json(content: str) -> Any:
    """Decode JSON content, raising FormatError if it is not valid JSON"""
    try:
        return json.loads(content)
    except (json.JSONDecodeError, TypeError) as e:
        raise FormatError(f"Invalid JSON file format: {e}") from e


def parse_json_array(items: Iterable[Any]) -> List[RawImportEntry]:
    """
    Map a flat JSON array to candidate entries.

    Fallbacks: title -> name -> "Untitled", url -> href,
    description -> "", tags -> [], icon -> favicon.
    Elements that are not objects are skipped.
    """
    entries = []
    for item in items:
        if not isinstance(item, dict):
            continue

        entries.append(RawImportEntry(
            title=_first_string(item, "title", "name") or "Untitled",
            url=_first_string(item, "url", "href") or "",
            description=_first_string(item, "description") or "",
            tags=_string_tags(item.get("tags")),
            icon=_first_string(item, "icon", "favicon"),
        ))
    return entries


def parse_chrome_tree(roots: Any) -> List[RawImportEntry]:
    """
    Walk a Chrome bookmarks tree depth-first, pre-order.

    Every root's children are visited in source order. Nodes with
    type "url" become entries; nodes with children are descended into.
    Uses an explicit stack so folder depth is unbounded.
    """
    if not isinstance(roots, dict):
        return []

    entries = []
    for root in roots.values():
        if not isinstance(root, dict) or not isinstance(root.get("children"), list):
            continue

        stack = list(reversed(root["children"]))
        while stack:
            node = stack.pop()
            if not isinstance(node, dict):
                continue

            if node.get("type") == "url":
                entries.append(RawImportEntry(
                    title=_first_string(node, "name") or "Untitled",
                    url=_first_string(node, "url") or "",
                ))
            elif isinstance(node.get("children"), list):
                stack.extend(reversed(node["children"]))

    return entries


class JsonBookmarkParser(BaseImportParser):
    """Parser for JSON imports; picks the layout from the top-level shape"""

    name = "json"

    def parse(self, content: str) -> List[RawImportEntry]:
        data = load_json(content)

        if isinstance(data, list):
            return parse_json_array(data)

        if isinstance(data, dict):
            if "roots" in data:
                return parse_chrome_tree(data["roots"])
            if isinstance(data.get("bookmarks"), list):
                return parse_json_array(data["bookmarks"])

        return []


class JsonExporter(BaseExporter):
    """
    Exporter producing the full-dump JSON envelope.

    The envelope always carries every field, so the metadata options
    do not apply here.
    """

    media_type = "application/json"
    extension = "json"

    def serialize(
        self,
        bookmarks: Sequence[BookmarkRecord],
        options: ExportOptions,
    ) -> str:
        data = {
            "version": EXPORT_VERSION,
            "exported_at": datetime.now(timezone.utc).isoformat(),
            "total_bookmarks": len(bookmarks),
            "bookmarks": [
                {
                    "title": b.title,
                    "url": b.url,
                    "description": b.description or "",
                    "tags": list(b.tags or []),
                    "collection": b.collection_name,
                    "device": b.device_name,
                    "created_at": b.created_at.isoformat() if b.created_at else None,
                }
                for b in bookmarks
            ],
        }
        return json.dumps(data, indent=2, ensure_ascii=False)
