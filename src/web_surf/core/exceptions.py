"""
Custom exceptions for web-surf.

Provides a hierarchy of exceptions for precise error handling across
the browser and its collaborators. All exceptions inherit from WebSurfError.

Exception Hierarchy:
    WebSurfError (base)
    ├── ConfigurationError
    ├── BrowserError
    │   ├── MalformedURLError
    │   ├── PageNotLoadedError
    │   ├── ElementNotFoundError
    │   │   └── LinkNotFoundError
    │   ├── RedirectBlockedError
    │   ├── TooManyRedirectsError
    │   ├── FormError
    │   └── UnsupportedCapabilityError
    └── BookmarkError
        ├── BookmarkExistsError
        └── BookmarkNotFoundError

Network and protocol failures raised by httpx are not wrapped; they reach
the caller as httpx.HTTPError subclasses.
"""

from typing import Any


class WebSurfError(Exception):
    """
    Base exception for all web-surf errors.

    All custom exceptions inherit from this class, allowing for
    catch-all handling when needed.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary with additional context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(
                f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(WebSurfError):
    """
    Error in configuration loading or validation.

    Raised when:
    - Configuration file is missing or malformed
    - Setting values fail validation
    """

    pass


# =============================================================================
# Browser Errors
# =============================================================================


class BrowserError(WebSurfError):
    """
    Base error for browser navigation and page operations.
    """

    pass


class MalformedURLError(BrowserError):
    """
    Error when a URL cannot be parsed into an absolute http(s) URL.

    Local and never retried: sending the same string again will fail
    the same way.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if url is not None:
            details["url"] = url
        super().__init__(message, details)
        self.url = url


class PageNotLoadedError(BrowserError):
    """
    Error when an operation needs a current page and none was loaded.

    Raised by reload() and the page accessors before the first
    successful navigation.
    """

    pass


class ElementNotFoundError(BrowserError):
    """
    Error when a selector matches nothing, or matches the wrong tag.

    Attributes:
        expr: The CSS selector expression that failed
    """

    def __init__(
        self,
        message: str,
        expr: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if expr is not None:
            details["expr"] = expr
        super().__init__(message, details)
        self.expr = expr


class LinkNotFoundError(ElementNotFoundError):
    """
    Error when a matched anchor carries no href attribute.
    """

    pass


class RedirectBlockedError(BrowserError):
    """
    Error when a redirect is refused because redirect following is disabled.

    Attributes:
        url: The redirect target that was not followed
    """

    def __init__(
        self,
        message: str,
        url: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["url"] = url
        super().__init__(message, details)
        self.url = url


class TooManyRedirectsError(BrowserError):
    """
    Error when a redirect chain exceeds the configured hop limit.
    """

    def __init__(
        self,
        message: str,
        url: str,
        max_redirects: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["url"] = url
        details["max_redirects"] = max_redirects
        super().__init__(message, details)
        self.url = url
        self.max_redirects = max_redirects


class FormError(BrowserError):
    """
    Error when a form field does not exist or cannot be set.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field is not None:
            details["field"] = field
        super().__init__(message, details)
        self.field = field


class UnsupportedCapabilityError(BrowserError):
    """
    Error when an element is asked for a capability its kind lacks.

    For example, downloading a form or submitting an image.
    """

    def __init__(
        self,
        message: str,
        kind: str,
        capability: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["kind"] = kind
        details["capability"] = capability
        super().__init__(message, details)
        self.kind = kind
        self.capability = capability


# =============================================================================
# Bookmark Errors
# =============================================================================


class BookmarkError(WebSurfError):
    """
    Base error for bookmark store operations.
    """

    def __init__(
        self,
        message: str,
        name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if name is not None:
            details["name"] = name
        super().__init__(message, details)
        self.name = name


class BookmarkExistsError(BookmarkError):
    """
    Error when saving a bookmark under a name that is already taken.
    """

    pass


class BookmarkNotFoundError(BookmarkError):
    """
    Error when reading or removing a bookmark that does not exist.
    """

    pass
