"""
Shared pytest fixtures for web-surf tests.

Provides reusable fixtures for:
- A fake website served through httpx.MockTransport
- Fake timers for meta-refresh scheduling
- A browser wired to both
- Temporary resources
"""

import tempfile
from pathlib import Path
from typing import Callable, Generator

import httpx
import pytest

from web_surf.browser import Browser, HttpxTransport, RefreshScheduler
from web_surf.utils.logging import reset_logging

BASE_URL = "https://example.com"

Handler = Callable[[httpx.Request], httpx.Response]


class FakeSite:
    """
    In-memory website keyed by URL path.

    Every request that reaches the site is recorded in `requests`.
    Unknown paths answer 404.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Handler] = {}
        self.requests: list[httpx.Request] = []

    def page(
        self,
        path: str,
        html: str,
        status: int = 200,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.routes[path] = lambda request: httpx.Response(
            status, html=html, headers=headers)

    def redirect(self, path: str, location: str, status: int = 302) -> None:
        self.routes[path] = lambda request: httpx.Response(
            status, headers={"Location": location})

    def route(self, path: str, handler: Handler) -> None:
        self.routes[path] = handler

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, html="<html><title>Not Found</title></html>")
        return route(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


class FakeTimer:
    """Stands in for threading.Timer; fires only when told to."""

    def __init__(self, interval, function, args=None, kwargs=None) -> None:
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.function(*self.args, **self.kwargs)


class TimerRecorder:
    """Timer factory remembering every timer it created."""

    def __init__(self) -> None:
        self.created: list[FakeTimer] = []

    def __call__(self, interval, function, args=None, kwargs=None) -> FakeTimer:
        timer = FakeTimer(interval, function, args, kwargs)
        self.created.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.created[-1]


def page_html(title: str, body: str = "", head: str = "") -> str:
    """Small HTML document with the given title."""
    return (
        f"<html><head><title>{title}</title>{head}</head>"
        f"<body>{body}</body></html>"
    )


@pytest.fixture(autouse=True)
def reset_global_state():
    """Reset logging configuration before and after each test."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that's cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def site() -> FakeSite:
    """Provide an empty fake website."""
    return FakeSite()


@pytest.fixture
def timers() -> TimerRecorder:
    """Provide a fake timer factory."""
    return TimerRecorder()


@pytest.fixture
def transport(site: FakeSite) -> Generator[HttpxTransport, None, None]:
    """Provide a transport that talks to the fake site."""
    client = httpx.Client(transport=httpx.MockTransport(site.handler))
    transport = HttpxTransport(client=client)
    yield transport
    transport.close()


@pytest.fixture
def browser(
    transport: HttpxTransport,
    timers: TimerRecorder,
) -> Generator[Browser, None, None]:
    """Provide a browser on the fake site with fake refresh timers."""
    browser = Browser(
        transport,
        user_agent="TestAgent/1.0",
        refresh_scheduler=RefreshScheduler(timer_factory=timers),
    )
    yield browser
    browser.close()


@pytest.fixture
def sample_html() -> str:
    """Provide a page with links, images and a form."""
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <title>Sample Page</title>
    </head>
    <body>
        <nav>
            <a id="home" href="/home">Home</a>
            <a id="about" href="about.html">About Us</a>
            <a id="external" href="https://other.org/page">Elsewhere</a>
            <a id="anchor-only" name="top">No link here</a>
        </nav>
        <main>
            <h1 id="heading">Welcome</h1>
            <img id="logo" src="/img/logo.png" alt="Logo" title="Our logo">
            <img id="broken" alt="Missing source">
            <form id="search" action="/search" method="get">
                <input type="text" name="q" value="">
                <input type="submit" name="go" value="Search">
            </form>
        </main>
    </body>
    </html>
    """
