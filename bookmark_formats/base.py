"""
Bookmark Sync - Format Base Classes

Shared record types and the parser/exporter interfaces implemented by
every supported bookmark file format.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence


class FormatError(ValueError):
    """Raised when raw input cannot be parsed at all (e.g. invalid JSON)."""


class UnsupportedFormatError(FormatError):
    """Raised when a declared format has no parser or exporter."""


@dataclass
class RawImportEntry:
    """A candidate bookmark extracted from an import file, not yet validated"""

    title: str = ""
    url: str = ""
    description: str = ""
    tags: List[str] = field(default_factory=list)
    icon: Optional[str] = None


@dataclass
class BookmarkRecord:
    """A persisted, non-deleted bookmark as handed to exporters"""

    title: str
    url: str
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    favicon: Optional[str] = None
    created_at: Optional[datetime] = None
    device_name: Optional[str] = None
    collection_name: Optional[str] = None
    id: Optional[int] = None

    @property
    def display_title(self) -> str:
        return (self.title or "").strip() or "Untitled"


@dataclass
class ExportOptions:
    """Flags controlling which metadata exporters include"""

    include_timestamps: bool = False
    include_device_info: bool = False

    @classmethod
    def from_metadata_flag(cls, include_metadata: bool) -> "ExportOptions":
        return cls(include_timestamps=include_metadata, include_device_info=include_metadata)


class BaseImportParser(ABC):
    """
    Abstract base class for import file parsers.

    Parsers are pure: they turn file content into candidate entries and
    skip malformed individual entries instead of raising. They raise
    FormatError only when the content as a whole cannot be read.
    """

    name: str = "base"

    @abstractmethod
    def parse(self, content: str) -> List[RawImportEntry]:
        """
        Parse raw file content into candidate entries.

        Args:
            content: Decoded file content

        Returns:
            Candidate entries in document order
        """
        pass


class BaseExporter(ABC):
    """
    Abstract base class for export serializers.

    Each exporter knows the media type and file extension of the
    document it produces.
    """

    media_type: str = "application/octet-stream"
    extension: str = "bin"

    @abstractmethod
    def serialize(
        self,
        bookmarks: Sequence[BookmarkRecord],
        options: ExportOptions,
    ) -> str:
        """
        Serialize bookmarks into a complete document.

        Args:
            bookmarks: Bookmarks to export, in output order
            options: Metadata flags

        Returns:
            The document as a string
        """
        pass
