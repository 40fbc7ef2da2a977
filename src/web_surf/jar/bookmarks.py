"""
Bookmark stores mapping names to URLs.

Two implementations share the BookmarksJar protocol:
- MemoryBookmarks keeps entries for the lifetime of the process
- FileBookmarks persists entries to a JSON file on every change
"""

import json
from pathlib import Path
from typing import Protocol

from web_surf.core.exceptions import (
    BookmarkError,
    BookmarkExistsError,
    BookmarkNotFoundError,
)
from web_surf.utils.logging import get_logger

logger = get_logger(__name__)


class BookmarksJar(Protocol):
    """Name to URL store used by bookmark_page() and open_bookmark()."""

    def save(self, name: str, url: str) -> None: ...

    def read(self, name: str) -> str: ...

    def remove(self, name: str) -> None: ...

    def has(self, name: str) -> bool: ...

    def all(self) -> dict[str, str]: ...


class MemoryBookmarks:
    """
    In-memory bookmark store.

    Example:
        >>> jar = MemoryBookmarks()
        >>> jar.save("home", "https://example.com/")
        >>> jar.read("home")
        'https://example.com/'
    """

    def __init__(self, bookmarks: dict[str, str] | None = None) -> None:
        self._bookmarks: dict[str, str] = dict(bookmarks or {})

    def save(self, name: str, url: str) -> None:
        """
        Store url under name.

        Raises:
            BookmarkExistsError: If name is already taken
        """
        if name in self._bookmarks:
            raise BookmarkExistsError(
                "Bookmark already exists", name=name)
        self._bookmarks[name] = url

    def read(self, name: str) -> str:
        """
        Return the URL stored under name.

        Raises:
            BookmarkNotFoundError: If no bookmark has that name
        """
        try:
            return self._bookmarks[name]
        except KeyError:
            raise BookmarkNotFoundError(
                "No bookmark with that name", name=name) from None

    def remove(self, name: str) -> None:
        """
        Delete the bookmark stored under name.

        Raises:
            BookmarkNotFoundError: If no bookmark has that name
        """
        if name not in self._bookmarks:
            raise BookmarkNotFoundError(
                "No bookmark with that name", name=name)
        del self._bookmarks[name]

    def has(self, name: str) -> bool:
        return name in self._bookmarks

    def all(self) -> dict[str, str]:
        """Return a copy of every bookmark."""
        return dict(self._bookmarks)

    def __len__(self) -> int:
        return len(self._bookmarks)


class FileBookmarks(MemoryBookmarks):
    """
    Bookmark store backed by a JSON file.

    The file is read once at construction and rewritten after every
    save or remove. A missing file starts an empty store. If the file
    cannot be written the change is undone in memory and the OSError
    propagates.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            content = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as e:
            raise BookmarkError(
                f"Invalid bookmark file: {e}",
                details={"path": str(self.path)},
            ) from e

        if not isinstance(content, dict):
            raise BookmarkError(
                "Bookmark file must contain a JSON object",
                details={"path": str(self.path)},
            )

        logger.debug(f"Loaded {len(content)} bookmarks from {self.path}")
        return {str(k): str(v) for k, v in content.items()}

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(self._bookmarks, indent=2, sort_keys=True),
            encoding="utf-8",
        )

    def save(self, name: str, url: str) -> None:
        super().save(name, url)
        try:
            self._write()
        except OSError:
            del self._bookmarks[name]
            raise

    def remove(self, name: str) -> None:
        url = self.read(name)
        super().remove(name)
        try:
            self._write()
        except OSError:
            self._bookmarks[name] = url
            raise
