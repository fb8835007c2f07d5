"""Tests for placing documents into per-person folders."""

import pytest

from rundown.exceptions import OutputFolderNotSetError
from rundown.files import sanitize, save_document


class TestSaveDocument:
    """Folder matching and creation."""

    def test_creates_sorted_folder(self, tmp_path):
        path = save_document(tmp_path, "rundown:01?.pdf", ["Ben", "Amy"], b"%PDF")

        assert path == tmp_path / "Amy & Ben" / "rundown01.pdf"
        assert path.read_bytes() == b"%PDF"

    def test_reuses_folder_with_same_names(self, tmp_path):
        existing = tmp_path / "Ben&Amy"
        existing.mkdir()

        path = save_document(tmp_path, "r.pdf", ["Amy", "Ben", "Amy"], b"x")

        assert path.parent == existing
        assert sorted(p.name for p in tmp_path.iterdir()) == ["Ben&Amy"]

    def test_subset_folder_is_not_reused(self, tmp_path):
        (tmp_path / "Amy").mkdir()

        path = save_document(tmp_path, "r.pdf", ["Amy", "Ben"], b"x")

        assert path.parent.name == "Amy & Ben"

    def test_names_are_sanitized(self, tmp_path):
        path = save_document(tmp_path, "r.pdf", ["A/my ", ""], b"x")
        assert path.parent.name == "Amy"

    @pytest.mark.parametrize("base_dir", [None, ""])
    def test_missing_output_folder(self, base_dir):
        with pytest.raises(OutputFolderNotSetError):
            save_document(base_dir, "r.pdf", ["Amy"], b"x")

    def test_sanitize(self):
        assert sanitize(' a<b>c:"d"|e?*\\/ ') == "abcde"
