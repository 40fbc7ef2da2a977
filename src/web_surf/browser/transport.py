"""
HTTP transport built on httpx.

The httpx client never follows redirects itself; HttpxTransport walks
the chain hop by hop so the browser can veto each one.
"""

from typing import Callable, Protocol, TYPE_CHECKING

import httpx

from web_surf.core.exceptions import TooManyRedirectsError
from web_surf.utils.logging import get_logger

if TYPE_CHECKING:
    from web_surf.config.settings import BrowserSettings

logger = get_logger(__name__)

RedirectCheck = Callable[[httpx.Request, list[httpx.Response]], None]


class Transport(Protocol):
    """Executes a request and returns the final response."""

    @property
    def cookies(self) -> httpx.Cookies: ...

    def execute(
        self,
        request: httpx.Request,
        check_redirect: RedirectCheck | None = None,
    ) -> httpx.Response: ...

    def close(self) -> None: ...


class HttpxTransport:
    """
    Transport over an httpx.Client with per-hop redirect approval.

    Cookies from the client jar are attached when a request is sent,
    on a copy, so the caller's request object is never modified and
    can be sent again later.

    Example:
        >>> transport = HttpxTransport()
        >>> request = httpx.Request("GET", "https://example.com/")
        >>> response = transport.execute(request)
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        max_redirects: int = 20,
        timeout_seconds: float = 30.0,
        verify_ssl: bool = True,
        cookies: httpx.Cookies | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            client: Preconfigured client. When given, timeout_seconds,
                verify_ssl and cookies are ignored.
            max_redirects: Maximum hops followed for one request
            timeout_seconds: Network timeout
            verify_ssl: Verify TLS certificates
            cookies: Initial cookie jar
        """
        self.max_redirects = max_redirects
        self.client = client or httpx.Client(
            timeout=timeout_seconds,
            verify=verify_ssl,
            cookies=cookies,
        )

    @classmethod
    def from_settings(
        cls,
        settings: "BrowserSettings",
        cookies: httpx.Cookies | None = None,
    ) -> "HttpxTransport":
        return cls(
            max_redirects=settings.max_redirects,
            timeout_seconds=settings.timeout_seconds,
            verify_ssl=settings.verify_ssl,
            cookies=cookies,
        )

    @property
    def cookies(self) -> httpx.Cookies:
        """Cookie jar shared by every request."""
        return self.client.cookies

    @cookies.setter
    def cookies(self, cookies: httpx.Cookies) -> None:
        self.client.cookies = cookies

    def _prepare(self, request: httpx.Request) -> httpx.Request:
        """Copy request with the jar's current cookies and client timeout."""
        headers = httpx.Headers(request.headers)
        headers.pop("Cookie", None)

        return httpx.Request(
            request.method,
            request.url,
            headers=headers,
            content=request.content or None,
            cookies=self.client.cookies,
            extensions={
                **request.extensions,
                "timeout": self.client.timeout.as_dict(),
            },
        )

    def execute(
        self,
        request: httpx.Request,
        check_redirect: RedirectCheck | None = None,
    ) -> httpx.Response:
        """
        Send request, following redirects approved by check_redirect.

        Args:
            request: Request to send
            check_redirect: Called before every hop with the next request
                and the redirect responses so far. Raising aborts the
                exchange with that error.

        Returns:
            Final response with its body read and history filled in

        Raises:
            TooManyRedirectsError: If the chain exceeds max_redirects
            httpx.HTTPError: On network or protocol failure
        """
        outgoing = self._prepare(request)
        history: list[httpx.Response] = []

        while True:
            logger.debug(f"{outgoing.method} {outgoing.url}")
            response = self.client.send(outgoing, follow_redirects=False)

            next_request = response.next_request
            if next_request is None:
                response.history = history
                return response

            if len(history) >= self.max_redirects:
                raise TooManyRedirectsError(
                    "Exceeded maximum allowed redirects",
                    url=str(next_request.url),
                    max_redirects=self.max_redirects,
                )

            history.append(response)
            if check_redirect is not None:
                check_redirect(next_request, history)

            outgoing = next_request

    def close(self) -> None:
        """Close the underlying client."""
        self.client.close()
