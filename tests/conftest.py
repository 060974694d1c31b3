"""
Bookmark Sync - Test Configuration and Fixtures

Shared fixtures for unit and API tests.
"""

import os
from datetime import datetime, timezone
from pathlib import Path

import pytest

from bookmark_formats import BookmarkRecord
from config import UploadSettings
from sync_api.importer import UploadedFile

from fakes import FakeStore

# Live server for the e2e suite
TEST_BASE_URL = os.environ.get("TEST_BASE_URL", "http://localhost:8000")


@pytest.fixture(scope="session")
def base_url() -> str:
    """Base URL of a running API server."""
    return TEST_BASE_URL


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def upload_settings(upload_dir: Path) -> UploadSettings:
    return UploadSettings(UPLOAD_DIR=upload_dir, MAX_UPLOAD_BYTES=1024 * 1024)


@pytest.fixture
def make_upload(upload_dir: Path):
    """Write content into the upload dir and describe it as an upload"""

    def _make(content: str, name: str = "bookmarks.html", content_type: str | None = None):
        path = upload_dir / f"tmp-{name}"
        path.write_text(content, encoding="utf-8")
        return UploadedFile(path=path, original_name=name, content_type=content_type)

    return _make


@pytest.fixture
def sample_records() -> list[BookmarkRecord]:
    created = datetime(2024, 1, 15, 12, 30, tzinfo=timezone.utc)
    return [
        BookmarkRecord(
            id=1,
            title="Python",
            url="https://www.python.org/",
            description="The Python home page",
            tags=["python", "lang"],
            created_at=created,
            device_name="Laptop",
            collection_name="Dev",
        ),
        BookmarkRecord(
            id=2,
            title='Say "hi"',
            url='https://example.com/?q="x"',
            created_at=created,
        ),
        BookmarkRecord(id=3, title="", url="https://blank.example.com/"),
    ]
