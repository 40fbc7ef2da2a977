"""
Stateful HTTP browser.

The Browser owns the current page, the history stack and the policy
attributes. Every request it sends, whatever operation started it,
goes through the same commit protocol:

1. cancel any pending meta-refresh
2. send through the transport, redirects approved by the RedirectGate
3. parse the response into a document
4. push the previous page onto history
5. install the new page
6. arm a meta-refresh reload if the new document asks for one

A failure in steps 2-3 leaves the current page and history untouched.
"""

import threading
import urllib.request
from http.cookiejar import Cookie, DefaultCookiePolicy
from typing import IO, Mapping, TYPE_CHECKING

import httpx
from bs4 import BeautifulSoup, Tag

from web_surf.browser.attributes import Attribute, PolicyAttributes
from web_surf.browser.capabilities import write_to
from web_surf.browser.document import DocumentParser
from web_surf.browser.elements import Image, Link
from web_surf.browser.form import Form
from web_surf.browser.redirect_gate import RedirectGate
from web_surf.browser.refresh import RefreshScheduler, find_refresh_delay
from web_surf.browser.request_builder import (
    FORM_CONTENT_TYPE,
    Body,
    FormValues,
    RequestBuilder,
    encode_values,
    replace_query,
)
from web_surf.browser.transport import HttpxTransport, Transport
from web_surf.browser.user_agent import create_user_agent
from web_surf.config.settings import BrowserSettings
from web_surf.core.exceptions import (
    ElementNotFoundError,
    LinkNotFoundError,
    MalformedURLError,
    PageNotLoadedError,
)
from web_surf.jar.bookmarks import BookmarksJar, FileBookmarks, MemoryBookmarks
from web_surf.jar.history import History, HistoryStack
from web_surf.jar.state import PageState
from web_surf.utils.logging import get_logger

if TYPE_CHECKING:
    from web_surf.config.settings import Settings

logger = get_logger(__name__)


class Browser:
    """
    Programmable browser: navigation, history, forms, bookmarks.

    Navigation methods are meant to be called from one thread at a time.
    All state changes, including the reload triggered by a meta refresh
    timer, happen under a single re-entrant lock.

    Example:
        >>> with Browser() as browser:
        ...     browser.open("https://example.com/")
        ...     browser.click("a.next")
        ...     browser.back()
        True
    """

    def __init__(
        self,
        transport: Transport | None = None,
        *,
        settings: BrowserSettings | None = None,
        user_agent: str | None = None,
        attributes: PolicyAttributes | None = None,
        headers: Mapping[str, str] | None = None,
        history: History | None = None,
        bookmarks: BookmarksJar | None = None,
        parser: DocumentParser | None = None,
        refresh_scheduler: RefreshScheduler | None = None,
    ) -> None:
        """
        Initialize the browser.

        Args:
            transport: Transport to send requests with. Defaults to an
                HttpxTransport built from settings.
            settings: Default policies and transport options
            user_agent: User-Agent value, overriding settings
            attributes: Policy attributes, overriding settings
            headers: Extra headers sent with every request, overriding settings
            history: History store. Defaults to a HistoryStack.
            bookmarks: Bookmark store. Defaults to MemoryBookmarks.
            parser: Document parser. Defaults to the settings backend.
            refresh_scheduler: Scheduler for meta-refresh reloads
        """
        settings = settings or BrowserSettings()

        self._attributes = attributes or PolicyAttributes.from_settings(settings)
        self._transport = transport or HttpxTransport.from_settings(settings)
        self._builder = RequestBuilder(
            user_agent=user_agent or settings.user_agent or create_user_agent(),
            attributes=self._attributes,
            headers=dict(headers) if headers is not None else settings.headers,
        )
        self._gate = RedirectGate(self._attributes)
        self._parser = parser or DocumentParser(settings.parser)
        self._history = history if history is not None else HistoryStack(
            settings.max_history)
        self._bookmarks = bookmarks if bookmarks is not None else MemoryBookmarks()
        self._refresh = refresh_scheduler or RefreshScheduler()

        self._state: PageState | None = None
        self._lock = threading.RLock()

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        transport: Transport | None = None,
    ) -> "Browser":
        """
        Create a browser from application settings.

        Uses a FileBookmarks store when a bookmark file is configured.
        """
        bookmarks: BookmarksJar
        if settings.bookmarks.file_path is not None:
            bookmarks = FileBookmarks(settings.bookmarks.file_path)
        else:
            bookmarks = MemoryBookmarks()

        return cls(transport, settings=settings.browser, bookmarks=bookmarks)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def user_agent(self) -> str:
        return self._builder.user_agent

    @user_agent.setter
    def user_agent(self, value: str) -> None:
        self._builder.user_agent = value

    @property
    def attributes(self) -> PolicyAttributes:
        return self._attributes

    def attribute(self, attribute: Attribute) -> bool:
        return self._attributes[attribute]

    def set_attribute(self, attribute: Attribute, value: bool) -> None:
        self._attributes[attribute] = value

    def set_attributes(self, values: Mapping[Attribute, bool]) -> None:
        """Set several attributes; attributes not named keep their value."""
        self._attributes.update(values)

    @property
    def request_headers(self) -> httpx.Headers:
        """Extra headers sent with every request."""
        return self._builder.headers

    def add_header(self, name: str, value: str) -> None:
        """Add a header sent with every request, keeping existing values."""
        self._builder.headers = httpx.Headers(
            [*self._builder.headers.multi_items(), (name, value)])

    def set_headers(self, headers: Mapping[str, str] | httpx.Headers) -> None:
        """Replace the headers sent with every request."""
        self._builder.headers = httpx.Headers(headers)

    @property
    def history(self) -> History:
        return self._history

    @history.setter
    def history(self, history: History) -> None:
        with self._lock:
            self._history = history

    @property
    def bookmarks(self) -> BookmarksJar:
        return self._bookmarks

    @bookmarks.setter
    def bookmarks(self, bookmarks: BookmarksJar) -> None:
        self._bookmarks = bookmarks

    @property
    def cookies(self) -> httpx.Cookies:
        """Cookie store shared with the transport."""
        return self._transport.cookies

    @cookies.setter
    def cookies(self, cookies: httpx.Cookies) -> None:
        self._transport.cookies = cookies

    @property
    def refresh_scheduler(self) -> RefreshScheduler:
        return self._refresh

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def open(self, url: str) -> None:
        """
        Load url with a GET request, without a Referer.

        Raises:
            MalformedURLError: If url is not an absolute http(s) URL
            RedirectBlockedError: If the server redirects and redirects are off
            httpx.HTTPError: On network failure
        """
        self._navigate("GET", url)

    def open_form(self, url: str, values: FormValues) -> None:
        """Replace the query string of url with the encoded values and open it."""
        self.open(replace_query(url, values))

    def open_bookmark(self, name: str) -> None:
        """
        Open the URL bookmarked under name.

        Raises:
            BookmarkNotFoundError: If the store has no such bookmark
        """
        self.open(self._bookmarks.read(name))

    def post(self, url: str, body_type: str, body: Body | None) -> None:
        """Send body to url with a POST request of the given content type."""
        self._navigate("POST", url, body_type=body_type, body=body)

    def post_form(self, url: str, values: FormValues) -> None:
        """POST urlencoded values to url."""
        self.post(url, FORM_CONTENT_TYPE, encode_values(values))

    def back(self) -> bool:
        """
        Return to the previous page.

        Returns:
            True if there was a previous page, False if history is empty
        """
        with self._lock:
            if len(self._history) == 0:
                return False

            self._refresh.cancel()
            self._state = self._history.pop()
            logger.debug(f"Back to {self._state.url}")
            return True

    def reload(self) -> None:
        """
        Send the current page's request again.

        Raises:
            PageNotLoadedError: If no page has been loaded
        """
        with self._lock:
            if self._state is None:
                raise PageNotLoadedError(
                    "Cannot reload, no page has been loaded.")
            self._send(self._state.request)

    def click(self, expr: str) -> None:
        """
        Follow the link matched by a CSS selector.

        The first matching element must be an anchor with an href. The
        request carries the current page as Referer when SEND_REFERER is on.

        Raises:
            ElementNotFoundError: If nothing matches or the match is not an anchor
            LinkNotFoundError: If the anchor has no href
        """
        with self._lock:
            matches = self._require_state().dom.select(expr)
            if not matches:
                raise ElementNotFoundError(
                    f"Element not found matching expr '{expr}'.", expr=expr)

            element = matches[0]
            if element.name != "a":
                raise ElementNotFoundError(
                    f"Expr '{expr}' must match an anchor tag.", expr=expr)

            href = element.get("href")
            if href is None:
                raise LinkNotFoundError(
                    f"No link found matching expr '{expr}'.", expr=expr)

            self._navigate("GET", self.resolve_url(href), via=str(self.url))

    def form(self, expr: str) -> Form:
        """
        Return the form matched by a CSS selector.

        Raises:
            ElementNotFoundError: If nothing matches or the match is not a form
        """
        matches = self._require_state().dom.select(expr)
        if not matches:
            raise ElementNotFoundError(
                f"Form not found matching expr '{expr}'.", expr=expr)

        element = matches[0]
        if element.name != "form":
            raise ElementNotFoundError(
                f"Expr '{expr}' does not match a form tag.", expr=expr)

        return Form(self, element)

    def forms(self) -> list[Form]:
        """Every form on the page. Empty when there are none or no page."""
        if self._state is None:
            return []
        return [Form(self, tag) for tag in self._state.dom.select("form")]

    def links(self) -> list[Link]:
        """Every anchor with an href, resolved to absolute URLs."""
        links = []
        for tag in self._require_state().dom.select("a[href]"):
            try:
                href = self.resolve_url(tag["href"])
            except MalformedURLError:
                continue
            links.append(Link(href=href, id=tag.get("id", ""), text=tag.get_text()))
        return links

    def images(self) -> list[Image]:
        """Every img with a src, resolved to absolute URLs."""
        images = []
        for tag in self._require_state().dom.select("img[src]"):
            try:
                src = self.resolve_url(tag["src"])
            except MalformedURLError:
                continue
            images.append(Image(
                src=src,
                id=tag.get("id", ""),
                alt=tag.get("alt", ""),
                title=tag.get("title", ""),
            ))
        return images

    def bookmark_page(self, name: str) -> None:
        """
        Save the current URL in the bookmark store.

        Raises:
            BookmarkExistsError: If name is already taken
        """
        self._bookmarks.save(name, str(self.url))

    def fetch(self, url: str) -> httpx.Response:
        """
        Fetch url without touching the current page or history.

        Used for downloading linked resources. Sends the current page as
        Referer when one is loaded.

        Raises:
            httpx.HTTPStatusError: If the response has an error status
        """
        with self._lock:
            via = str(self._state.url) if self._state is not None else None
            request = self._builder.build("GET", url, via=via)
            response = self._transport.execute(request, self._gate)
        response.raise_for_status()
        return response

    def close(self) -> None:
        """Cancel any pending refresh and close the transport."""
        self._refresh.cancel()
        self._transport.close()

    def __enter__(self) -> "Browser":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Current page
    # -------------------------------------------------------------------------

    @property
    def state(self) -> PageState | None:
        """Current page, or None before the first successful navigation."""
        return self._state

    @property
    def url(self) -> httpx.URL:
        """
        URL of the current page.

        This is the final URL after redirects, not the URL first requested;
        Referer, link resolution and bookmark_page() all use it.
        """
        return self._require_state().url

    @property
    def status_code(self) -> int:
        return self._require_state().status_code

    @property
    def headers(self) -> httpx.Headers:
        """Response headers of the current page."""
        return self._require_state().response.headers

    @property
    def title(self) -> str:
        title = self._require_state().dom.title
        return title.get_text() if title is not None else ""

    @property
    def body(self) -> str:
        """Inner markup of the body element."""
        body = self._require_state().dom.body
        return body.decode_contents() if body is not None else ""

    @property
    def dom(self) -> BeautifulSoup:
        return self._require_state().dom

    def find(self, expr: str) -> list[Tag]:
        """Elements matching a CSS selector."""
        return self._require_state().dom.select(expr)

    def site_cookies(self) -> list[Cookie]:
        """
        Cookies the store would send to the current URL.

        Domain and path matching use the stdlib cookie policy. Expired
        cookies, secure cookies on plain http, and host-only cookies from
        another host are left out.
        """
        url = self.url
        request = urllib.request.Request(str(url))
        policy = DefaultCookiePolicy()

        cookies = []
        for cookie in self.cookies.jar:
            if not (policy.domain_return_ok(cookie.domain, request)
                    and policy.path_return_ok(cookie.path, request)):
                continue
            if cookie.is_expired():
                continue
            if cookie.secure and url.scheme != "https":
                continue
            if not cookie.domain_specified and cookie.domain != url.host:
                continue
            cookies.append(cookie)
        return cookies

    def resolve_url(self, url: str | httpx.URL) -> str:
        """
        Resolve a possibly relative URL against the current page.

        Raises:
            MalformedURLError: If url cannot be parsed
        """
        base = self.url
        try:
            return str(base.join(url))
        except httpx.InvalidURL as e:
            raise MalformedURLError(f"Invalid URL: {e}", url=str(url)) from e

    def download(self, out: IO) -> int:
        """
        Write the current document's markup to out.

        Returns:
            Number of bytes written (UTF-8)
        """
        markup = str(self._require_state().dom)
        return write_to(out, markup.encode("utf-8"))

    # -------------------------------------------------------------------------
    # Commit protocol
    # -------------------------------------------------------------------------

    def _require_state(self) -> PageState:
        state = self._state
        if state is None:
            raise PageNotLoadedError("No page has been loaded.")
        return state

    def _navigate(
        self,
        method: str,
        url: str,
        via: str | None = None,
        body_type: str | None = None,
        body: Body | None = None,
    ) -> None:
        request = self._builder.build(
            method, url, via=via, body_type=body_type, body=body)
        self._send(request)

    def _send(self, request: httpx.Request) -> None:
        with self._lock:
            self._refresh.cancel()

            response = self._transport.execute(request, self._gate)
            dom = self._parser.parse(response)

            if self._state is not None:
                self._history.push(self._state)
            self._state = PageState(request=request, response=response, dom=dom)

            logger.debug(
                f"Loaded {response.url} ({response.status_code}), "
                f"history depth {len(self._history)}"
            )
            self._schedule_refresh(dom)

    def _schedule_refresh(self, dom: BeautifulSoup) -> None:
        if not self._attributes[Attribute.META_REFRESH_HANDLING]:
            return

        delay = find_refresh_delay(dom)
        if delay is not None:
            self._refresh.arm(delay, self._on_refresh)

    def _on_refresh(self, generation: int) -> None:
        """Timer callback: reload the page that armed this timer."""
        with self._lock:
            if self._state is None or not self._refresh.is_current(generation):
                return

            url = self._state.url
            logger.debug(f"Meta refresh reloading {url}")
            try:
                self._send(self._state.request)
            except Exception as e:
                logger.warning(f"Meta refresh reload of {url} failed: {e}")
