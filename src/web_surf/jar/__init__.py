"""
Jars hold the state a browser accumulates between requests:
page snapshots, history and bookmarks.
"""

from web_surf.jar.state import PageState
from web_surf.jar.history import History, HistoryStack
from web_surf.jar.bookmarks import BookmarksJar, MemoryBookmarks, FileBookmarks

__all__ = [
    "PageState",
    "History",
    "HistoryStack",
    "BookmarksJar",
    "MemoryBookmarks",
    "FileBookmarks",
]
