"""
Bookmark Sync - Import Pipeline Tests
"""

import io
import json
import os

import pytest

from bookmark_formats import RawImportEntry
from sync_api.importer import (
    ImportRejected,
    ImportService,
    UploadedFile,
    normalize_entry,
    stage_upload,
)

from fakes import TEST_USER_ID, netscape_document


@pytest.fixture
def service(store, upload_settings) -> ImportService:
    return ImportService(store, upload_settings)


async def test_html_import_counts_empty_hrefs_as_failed(service, store, make_upload):
    anchors = [f'<A HREF="https://site{i}.example">Site {i}</A>' for i in range(8)]
    anchors += ['<A HREF="">Broken 1</A>', '<A HREF="">Broken 2</A>']
    upload = make_upload(netscape_document(*anchors), "bookmarks.html", "text/html")

    result = await service.import_file(TEST_USER_ID, upload)

    assert (result.imported, result.failed, result.total) == (8, 2, 10)
    assert len(store.created) == 8


async def test_json_import_normalizes_entries(service, store, make_upload):
    content = json.dumps([
        {"title": "  Spaced  ", "url": " https://a.example ", "tags": ["t"], "icon": "i.png"},
        {"name": "", "href": "https://b.example"},
        {"title": "No URL"},
    ])
    upload = make_upload(content, "export.json")

    result = await service.import_file(TEST_USER_ID, upload, device_id=3, collection_id=7)

    assert (result.imported, result.failed, result.total) == (2, 1, 3)
    first, second = store.created
    assert first.title == "Spaced"
    assert first.url == "https://a.example"
    assert first.favicon == "i.png"
    assert first.tags == ["t"]
    assert first.source_app == "imported"
    assert first.user_id == TEST_USER_ID
    assert (first.device_id, first.collection_id) == (3, 7)
    assert second.title == "Untitled"


async def test_audit_record_completed(service, store, make_upload):
    upload = make_upload(json.dumps([{"url": "https://a.example"}, {}]), "a.json")

    await service.import_file(TEST_USER_ID, upload)

    (record,) = store.history.values()
    assert record["status"] == "completed"
    assert record["source_type"] == "file"
    assert record["file_name"] == "a.json"
    assert (record["total_bookmarks"], record["successful_imports"], record["failed_imports"]) == (2, 1, 1)


async def test_temp_file_removed_after_import(service, make_upload):
    upload = make_upload("[]", "empty.json")

    await service.import_file(TEST_USER_ID, upload)

    assert not upload.path.exists()


async def test_missing_file(service):
    with pytest.raises(ImportRejected) as exc_info:
        await service.import_file(TEST_USER_ID, None)

    assert exc_info.value.code == "missing-file"


async def test_path_outside_upload_dir_is_rejected_and_kept(service, store, tmp_path):
    outside = tmp_path / "outside.json"
    outside.write_text("[]")

    with pytest.raises(ImportRejected) as exc_info:
        await service.import_file(TEST_USER_ID, UploadedFile(outside, "outside.json"))

    assert exc_info.value.code == "invalid-path"
    assert outside.exists()
    assert store.history == {}


async def test_symlink_escape_is_rejected(service, upload_dir, tmp_path):
    target = tmp_path / "secret.json"
    target.write_text("[]")
    link = upload_dir / "link.json"
    os.symlink(target, link)

    with pytest.raises(ImportRejected) as exc_info:
        await service.import_file(TEST_USER_ID, UploadedFile(link, "link.json"))

    assert exc_info.value.code == "invalid-path"
    assert target.exists()


async def test_unsupported_format_is_rejected_and_cleaned(service, store, make_upload):
    upload = make_upload("hello", "notes.txt", "text/plain")

    with pytest.raises(ImportRejected) as exc_info:
        await service.import_file(TEST_USER_ID, upload)

    assert exc_info.value.code == "unsupported-format"
    assert not upload.path.exists()
    assert store.history == {}


async def test_invalid_json_is_rejected(service, store, make_upload):
    upload = make_upload("{broken", "bad.json", "application/json")

    with pytest.raises(ImportRejected) as exc_info:
        await service.import_file(TEST_USER_ID, upload)

    assert exc_info.value.code == "invalid-format"
    assert exc_info.value.message == "Invalid JSON file format"
    assert store.history == {}
    assert not upload.path.exists()


async def test_json_mime_type_beats_html_extension(service, store, make_upload):
    upload = make_upload('[{"url": "https://a.example"}]', "bookmarks.html", "application/json")

    result = await service.import_file(TEST_USER_ID, upload)

    assert result.imported == 1


async def test_json_extension_beats_html_mime_type(service, store, make_upload):
    content = json.dumps({
        "roots": {"bookmark_bar": {"children": [{"type": "url", "name": "A", "url": "https://a.example"}]}},
    })
    upload = make_upload(content, "Bookmarks.json", "text/html")

    result = await service.import_file(TEST_USER_ID, upload)

    assert (result.imported, result.total) == (1, 1)
    assert store.created[0].url == "https://a.example"


async def test_persistence_failure_marks_audit_failed(service, store, make_upload):
    store.fail_on_insert = True
    upload = make_upload(json.dumps([{"url": "https://a.example"}]), "a.json")

    with pytest.raises(RuntimeError):
        await service.import_file(TEST_USER_ID, upload)

    (record,) = store.history.values()
    assert record["status"] == "failed"
    assert record["successful_imports"] == 0
    assert record["successful_imports"] + record["failed_imports"] <= record["total_bookmarks"]
    assert not upload.path.exists()


async def test_cleanup_rechecks_path(service, make_upload, tmp_path, monkeypatch):
    """A file swapped for an escaping symlink after reading is not deleted."""
    outside = tmp_path / "victim.json"
    outside.write_text("keep me")
    upload = make_upload("[]", "a.json")
    original_process = service._process

    async def swap_then_process(*args, **kwargs):
        result = await original_process(*args, **kwargs)
        upload.path.unlink()
        os.symlink(outside, upload.path)
        return result

    monkeypatch.setattr(service, "_process", swap_then_process)

    await service.import_file(TEST_USER_ID, upload)

    assert outside.read_text() == "keep me"
    assert upload.path.is_symlink()


class TestNormalizeEntry:

    def test_drops_blank_url(self):
        assert normalize_entry(RawImportEntry(title="x", url="   "), TEST_USER_ID) is None

    def test_defaults(self):
        bookmark = normalize_entry(RawImportEntry(url="https://a.example"), TEST_USER_ID)

        assert bookmark.title == "Untitled"
        assert bookmark.description == ""
        assert bookmark.favicon == ""
        assert bookmark.tags == []


class TestStageUpload:

    def test_writes_into_upload_dir(self, upload_settings, upload_dir):
        upload = stage_upload(io.BytesIO(b"[]"), "../../evil.json", "application/json", upload_settings)

        assert upload.path.parent == upload_dir.resolve()
        assert upload.path.read_bytes() == b"[]"
        assert upload.original_name == "../../evil.json"

    def test_rejects_oversized_file(self, upload_settings, upload_dir):
        upload_settings.max_upload_bytes = 10

        with pytest.raises(ImportRejected) as exc_info:
            stage_upload(io.BytesIO(b"x" * 100), "big.json", None, upload_settings)

        assert exc_info.value.code == "file-too-large"
        assert exc_info.value.status_code == 413
        assert list(upload_dir.iterdir()) == []
