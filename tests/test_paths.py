"""
Bookmark Sync - Upload Path Safety Tests
"""

import os
import stat

import pytest

from sync_api.paths import ensure_upload_dir, is_contained


@pytest.fixture
def layout(tmp_path):
    """uploads/ with one file and a subdirectory, plus a secret outside it"""
    uploads = tmp_path / "uploads"
    (uploads / "sub").mkdir(parents=True)
    (uploads / "x.json").write_text("[]")
    secret = tmp_path / "etc" / "passwd"
    secret.parent.mkdir()
    secret.write_text("root:x:0:0")
    return uploads, secret


class TestIsContained:

    def test_file_inside_root(self, layout):
        uploads, _ = layout
        assert is_contained(uploads / "x.json", uploads)

    def test_relative_candidate(self, layout, monkeypatch):
        uploads, _ = layout
        monkeypatch.chdir(uploads.parent)
        assert is_contained("uploads/x.json", "uploads")

    def test_parent_traversal(self, layout):
        uploads, _ = layout
        assert not is_contained(f"{uploads}/../etc/passwd", uploads)

    def test_nested_parent_traversal(self, layout):
        uploads, _ = layout
        assert not is_contained(f"{uploads}/sub/../../etc/passwd", uploads)

    def test_absolute_path_outside(self, layout):
        uploads, secret = layout
        assert not is_contained(str(secret), uploads)

    def test_symlink_escaping_root(self, layout):
        uploads, secret = layout
        link = uploads / "link.json"
        os.symlink(secret, link)

        assert not is_contained(link, uploads)

    def test_symlink_within_root(self, layout):
        uploads, _ = layout
        link = uploads / "sub" / "alias.json"
        os.symlink(uploads / "x.json", link)

        assert is_contained(link, uploads)

    def test_root_itself_is_not_inside(self, layout):
        uploads, _ = layout
        assert not is_contained(uploads, uploads)

    def test_sibling_with_common_prefix(self, layout):
        uploads, _ = layout
        sibling = uploads.parent / "uploads-evil"
        sibling.mkdir()
        (sibling / "x.json").write_text("[]")

        assert not is_contained(sibling / "x.json", uploads)

    def test_missing_file_fails_closed(self, layout):
        uploads, _ = layout
        assert not is_contained(uploads / "missing.json", uploads)

    def test_missing_root_fails_closed(self, tmp_path):
        assert not is_contained(tmp_path / "x.json", tmp_path / "nope")


class TestEnsureUploadDir:

    def test_creates_directory(self, tmp_path):
        target = tmp_path / "new" / "uploads"

        resolved = ensure_upload_dir(target)

        assert target.is_dir()
        assert resolved == target.resolve()

    def test_warns_when_world_writable(self, tmp_path, caplog):
        target = tmp_path / "open"
        target.mkdir()
        target.chmod(target.stat().st_mode | stat.S_IWOTH)

        with caplog.at_level("WARNING"):
            ensure_upload_dir(target)

        assert "world-writable" in caplog.text
