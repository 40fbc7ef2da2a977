"""
Core module for web-surf.

Contains the exception hierarchy used throughout the application.
"""

from web_surf.core.exceptions import (
    WebSurfError,
    ConfigurationError,
    BrowserError,
    MalformedURLError,
    PageNotLoadedError,
    ElementNotFoundError,
    LinkNotFoundError,
    RedirectBlockedError,
    TooManyRedirectsError,
    FormError,
    UnsupportedCapabilityError,
    BookmarkError,
    BookmarkExistsError,
    BookmarkNotFoundError,
)

__all__ = [
    # Base
    "WebSurfError",
    "ConfigurationError",
    # Browser
    "BrowserError",
    "MalformedURLError",
    "PageNotLoadedError",
    "ElementNotFoundError",
    "LinkNotFoundError",
    "RedirectBlockedError",
    "TooManyRedirectsError",
    "FormError",
    "UnsupportedCapabilityError",
    # Bookmarks
    "BookmarkError",
    "BookmarkExistsError",
    "BookmarkNotFoundError",
]
