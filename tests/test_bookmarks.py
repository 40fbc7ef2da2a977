"""
Tests for bookmark stores.
"""

import json
from pathlib import Path

import pytest

from web_surf.core.exceptions import (
    BookmarkError,
    BookmarkExistsError,
    BookmarkNotFoundError,
)
from web_surf.jar.bookmarks import FileBookmarks, MemoryBookmarks


class TestMemoryBookmarks:
    """Tests for MemoryBookmarks."""

    def test_save_and_read(self):
        """Saved URLs can be read back by name."""
        jar = MemoryBookmarks()

        jar.save("home", "https://example.com/")

        assert jar.read("home") == "https://example.com/"
        assert jar.has("home")
        assert len(jar) == 1

    def test_save_duplicate(self):
        """Saving under a taken name should raise."""
        jar = MemoryBookmarks({"home": "https://example.com/"})

        with pytest.raises(BookmarkExistsError) as exc_info:
            jar.save("home", "https://other.org/")

        assert exc_info.value.name == "home"
        assert jar.read("home") == "https://example.com/"

    def test_read_missing(self):
        """Reading an unknown name should raise."""
        with pytest.raises(BookmarkNotFoundError):
            MemoryBookmarks().read("nothing")

    def test_remove(self):
        """remove() deletes the bookmark."""
        jar = MemoryBookmarks({"home": "https://example.com/"})

        jar.remove("home")

        assert not jar.has("home")

    def test_remove_missing(self):
        """Removing an unknown name should raise."""
        with pytest.raises(BookmarkNotFoundError):
            MemoryBookmarks().remove("nothing")

    def test_all_is_copy(self):
        """all() returns a snapshot."""
        jar = MemoryBookmarks({"home": "https://example.com/"})

        jar.all()["other"] = "https://other.org/"

        assert not jar.has("other")


class TestFileBookmarks:
    """Tests for FileBookmarks."""

    def test_missing_file_starts_empty(self, temp_dir: Path):
        """A path that does not exist yet gives an empty store."""
        jar = FileBookmarks(temp_dir / "bookmarks.json")

        assert jar.all() == {}

    def test_persists_changes(self, temp_dir: Path):
        """Saves and removes are written to disk."""
        path = temp_dir / "nested" / "bookmarks.json"
        jar = FileBookmarks(path)

        jar.save("home", "https://example.com/")
        jar.save("docs", "https://example.com/docs")
        jar.remove("docs")

        assert json.loads(path.read_text()) == {"home": "https://example.com/"}
        assert FileBookmarks(path).read("home") == "https://example.com/"

    def test_invalid_json(self, temp_dir: Path):
        """A corrupt file should raise BookmarkError."""
        path = temp_dir / "bookmarks.json"
        path.write_text("{not json")

        with pytest.raises(BookmarkError):
            FileBookmarks(path)

    def test_non_object_json(self, temp_dir: Path):
        """The file must hold a JSON object."""
        path = temp_dir / "bookmarks.json"
        path.write_text('["https://example.com/"]')

        with pytest.raises(BookmarkError, match="JSON object"):
            FileBookmarks(path)

    def test_failed_save_does_not_write(self, temp_dir: Path):
        """A duplicate save leaves the file untouched."""
        path = temp_dir / "bookmarks.json"
        jar = FileBookmarks(path)
        jar.save("home", "https://example.com/")

        with pytest.raises(BookmarkExistsError):
            jar.save("home", "https://other.org/")

        assert json.loads(path.read_text()) == {"home": "https://example.com/"}

    def test_unwritable_save_rolls_back(self, temp_dir: Path):
        """A save that cannot be written is not kept in memory."""
        blocker = temp_dir / "blocker"
        blocker.write_text("not a directory")
        jar = FileBookmarks(blocker / "bookmarks.json")

        with pytest.raises(OSError):
            jar.save("home", "https://example.com/")

        assert not jar.has("home")
        with pytest.raises(OSError):
            jar.save("home", "https://example.com/")

    def test_unwritable_remove_rolls_back(self, temp_dir: Path, monkeypatch):
        """A remove that cannot be written keeps the bookmark."""
        path = temp_dir / "bookmarks.json"
        jar = FileBookmarks(path)
        jar.save("home", "https://example.com/")

        def fail_write():
            raise PermissionError("read-only")

        monkeypatch.setattr(jar, "_write", fail_write)

        with pytest.raises(PermissionError):
            jar.remove("home")

        assert jar.read("home") == "https://example.com/"
        assert json.loads(path.read_text()) == {"home": "https://example.com/"}
