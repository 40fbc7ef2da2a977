"""
Outgoing request construction.

Applies the browser-wide headers, the User-Agent and the referer policy
to every request the browser sends.
"""

from typing import IO, Mapping, Sequence
from urllib.parse import urlencode, urlsplit, urlunsplit

import httpx

from web_surf.browser.attributes import Attribute, PolicyAttributes
from web_surf.core.exceptions import MalformedURLError

ALLOWED_SCHEMES = ("http", "https")

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

Body = bytes | str | IO[bytes] | IO[str]

FormValues = Mapping[str, str | Sequence[str]]


def parse_url(url: str | httpx.URL) -> httpx.URL:
    """
    Parse an absolute http(s) URL.

    Raises:
        MalformedURLError: If the URL is invalid, relative, or not http(s)
    """
    try:
        parsed = url if isinstance(url, httpx.URL) else httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise MalformedURLError(f"Invalid URL: {e}", url=str(url)) from e

    if parsed.scheme not in ALLOWED_SCHEMES or not parsed.host:
        raise MalformedURLError(
            "URL must be absolute with an http or https scheme",
            url=str(url),
        )

    return parsed


def encode_values(values: FormValues) -> str:
    """
    Urlencode form values; a sequence value yields one pair per item.

    Example:
        >>> encode_values({"q": "surf", "tag": ["a", "b"]})
        'q=surf&tag=a&tag=b'
    """
    return urlencode(values, doseq=True)


def replace_query(url: str | httpx.URL, values: FormValues) -> str:
    """Swap the query string of url for the encoded values."""
    parts = urlsplit(str(parse_url(url)))
    return urlunsplit(parts._replace(query=encode_values(values)))


def read_body(body: Body | None) -> bytes | None:
    """
    Materialize a request body as bytes.

    File-like bodies are read here, once, so the resulting request can
    be sent again by reload().
    """
    if body is None:
        return None
    if hasattr(body, "read"):
        body = body.read()
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    raise TypeError(f"Unsupported body type: {type(body).__name__}")


class RequestBuilder:
    """
    Builds httpx requests carrying the browser's headers and policies.

    The User-Agent header always receives the configured value, replacing
    any value from the extra headers. Referer is added only when the
    SEND_REFERER attribute is on and a via URL is given.

    Example:
        >>> builder = RequestBuilder("WebSurf/1.0", PolicyAttributes())
        >>> req = builder.build("GET", "https://example.com/b", via="https://example.com/a")
        >>> req.headers["Referer"]
        'https://example.com/a'
    """

    def __init__(
        self,
        user_agent: str,
        attributes: PolicyAttributes,
        headers: httpx.Headers | dict[str, str] | None = None,
    ) -> None:
        self.user_agent = user_agent
        self.attributes = attributes
        self.headers = httpx.Headers(headers)

    def build(
        self,
        method: str,
        url: str | httpx.URL,
        via: str | httpx.URL | None = None,
        body_type: str | None = None,
        body: Body | None = None,
    ) -> httpx.Request:
        """
        Build a request.

        Args:
            method: HTTP method, e.g. "GET" or "POST"
            url: Absolute target URL
            via: URL of the page the request originates from, if any
            body_type: Content-Type for POST requests
            body: Request body for POST requests

        Returns:
            A new httpx.Request

        Raises:
            MalformedURLError: If url is not an absolute http(s) URL
        """
        method = method.upper()
        target = parse_url(url)

        headers = httpx.Headers(self.headers)
        headers["User-Agent"] = self.user_agent

        if self.attributes[Attribute.SEND_REFERER] and via:
            headers["Referer"] = str(via)

        content = None
        if method == "POST":
            if body_type is not None:
                headers["Content-Type"] = body_type
            content = read_body(body)

        return httpx.Request(method, target, headers=headers, content=content)
