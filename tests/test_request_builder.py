"""
Tests for request construction and redirect policy.

Tests URL helpers, the RequestBuilder header rules, the RedirectGate,
policy attributes and the default User-Agent.
"""

import io

import httpx
import pytest

from web_surf.browser import (
    Attribute,
    PolicyAttributes,
    RedirectGate,
    RequestBuilder,
    create_user_agent,
    encode_values,
    parse_url,
    replace_query,
)
from web_surf.browser.request_builder import read_body
from web_surf.config import BrowserSettings
from web_surf.core.exceptions import MalformedURLError, RedirectBlockedError


class TestUrlHelpers:
    """Tests for parse_url and the query helpers."""

    def test_parse_url(self):
        """Absolute http(s) URLs parse."""
        url = parse_url("https://example.com/a?b=c")

        assert url.host == "example.com"
        assert url.path == "/a"

    @pytest.mark.parametrize("url", [
        "example.com/page",
        "/page",
        "mailto:someone@example.com",
        "ftp://example.com/",
        "https://",
    ])
    def test_parse_url_rejects(self, url):
        """Relative, hostless and non-http URLs are malformed."""
        with pytest.raises(MalformedURLError) as exc_info:
            parse_url(url)

        assert exc_info.value.url == url

    def test_encode_values(self):
        """Sequence values produce repeated keys."""
        assert encode_values({"q": "a b", "t": ["x", "y"]}) == "q=a+b&t=x&t=y"

    def test_replace_query(self):
        """replace_query() drops the existing query."""
        assert replace_query("https://example.com/s?lang=en&q=old", {"q": "new"}) == (
            "https://example.com/s?q=new")
        assert replace_query("https://example.com/s", {"q": "1"}) == (
            "https://example.com/s?q=1")

    def test_replace_keeps_path_and_fragment(self):
        """Only the query changes."""
        assert replace_query("https://example.com/a/b?x=1#top", {"y": ["2", "3"]}) == (
            "https://example.com/a/b?y=2&y=3#top")

    def test_replace_with_empty_values(self):
        """Replacing with nothing drops the query."""
        assert replace_query("https://example.com/s?lang=en", {}) == (
            "https://example.com/s")

    def test_read_body(self):
        """Bodies are materialized as bytes."""
        assert read_body(None) is None
        assert read_body("héllo") == "héllo".encode("utf-8")
        assert read_body(b"raw") == b"raw"
        assert read_body(io.BytesIO(b"file")) == b"file"
        assert read_body(io.StringIO("text")) == b"text"

    def test_read_body_unsupported(self):
        """Other body types are rejected."""
        with pytest.raises(TypeError):
            read_body(42)


class TestRequestBuilder:
    """Tests for RequestBuilder."""

    @pytest.fixture
    def attributes(self) -> PolicyAttributes:
        return PolicyAttributes()

    @pytest.fixture
    def builder(self, attributes) -> RequestBuilder:
        return RequestBuilder("Builder/1.0", attributes, headers={"Accept": "text/html"})

    def test_get_request(self, builder: RequestBuilder):
        """GET requests carry the extra headers and User-Agent."""
        request = builder.build("get", "https://example.com/")

        assert request.method == "GET"
        assert request.headers["Accept"] == "text/html"
        assert request.headers["User-Agent"] == "Builder/1.0"
        assert "Referer" not in request.headers
        assert request.content == b""

    def test_referer_from_via(self, builder: RequestBuilder):
        """via becomes the Referer when the policy allows."""
        request = builder.build("GET", "https://example.com/b", via="https://example.com/a")

        assert request.headers["Referer"] == "https://example.com/a"

    def test_referer_disabled(self, builder: RequestBuilder, attributes):
        """SEND_REFERER off suppresses the header even with via."""
        attributes[Attribute.SEND_REFERER] = False

        request = builder.build("GET", "https://example.com/b", via="https://example.com/a")

        assert "Referer" not in request.headers

    def test_user_agent_wins(self, attributes):
        """The configured User-Agent replaces any extra one."""
        builder = RequestBuilder("Mine/1.0", attributes, headers={"User-Agent": "Theirs/2.0"})

        request = builder.build("GET", "https://example.com/")

        assert request.headers.get_list("User-Agent") == ["Mine/1.0"]

    def test_post_request(self, builder: RequestBuilder):
        """POST requests carry the body and its content type."""
        request = builder.build(
            "POST", "https://example.com/submit",
            body_type="application/json", body='{"a": 1}')

        assert request.method == "POST"
        assert request.headers["Content-Type"] == "application/json"
        assert request.content == b'{"a": 1}'

    def test_get_ignores_body(self, builder: RequestBuilder):
        """Bodies are only attached to POST requests."""
        request = builder.build("GET", "https://example.com/", body="ignored")

        assert request.content == b""

    def test_headers_not_shared(self, builder: RequestBuilder):
        """Changing one request's headers leaves the builder alone."""
        request = builder.build("GET", "https://example.com/")
        request.headers["X-Extra"] = "1"

        assert "X-Extra" not in builder.headers

    def test_malformed_url(self, builder: RequestBuilder):
        """Malformed targets are refused."""
        with pytest.raises(MalformedURLError):
            builder.build("GET", "nowhere")


class TestRedirectGate:
    """Tests for RedirectGate."""

    def test_allows_when_enabled(self):
        """Redirects pass while FOLLOW_REDIRECTS is on."""
        gate = RedirectGate(PolicyAttributes())

        gate(httpx.Request("GET", "https://example.com/next"), [])

    def test_blocks_when_disabled(self):
        """Redirects raise while FOLLOW_REDIRECTS is off."""
        attributes = PolicyAttributes({Attribute.FOLLOW_REDIRECTS: False})
        gate = RedirectGate(attributes)

        with pytest.raises(RedirectBlockedError) as exc_info:
            gate(httpx.Request("GET", "https://example.com/next"), [])

        assert exc_info.value.url == "https://example.com/next"
        assert "Redirects are disabled" in str(exc_info.value)

    def test_reads_attribute_each_time(self):
        """Toggling the attribute takes effect on the next hop."""
        attributes = PolicyAttributes()
        gate = RedirectGate(attributes)
        request = httpx.Request("GET", "https://example.com/next")

        gate(request, [])
        attributes[Attribute.FOLLOW_REDIRECTS] = False

        with pytest.raises(RedirectBlockedError):
            gate(request, [])


class TestPolicyAttributes:
    """Tests for PolicyAttributes."""

    def test_defaults_all_true(self):
        """Every attribute starts enabled."""
        attributes = PolicyAttributes()

        assert all(attributes[a] for a in Attribute)
        assert len(attributes) == 3

    def test_update_keeps_others(self):
        """update() leaves attributes it does not name."""
        attributes = PolicyAttributes()

        attributes.update({Attribute.SEND_REFERER: False})

        assert attributes.as_dict() == {
            Attribute.SEND_REFERER: False,
            Attribute.META_REFRESH_HANDLING: True,
            Attribute.FOLLOW_REDIRECTS: True,
        }

    def test_string_keys(self):
        """Attributes can be addressed by their value."""
        attributes = PolicyAttributes()

        attributes["follow_redirects"] = 0

        assert attributes[Attribute.FOLLOW_REDIRECTS] is False

    def test_from_settings(self):
        """Settings map onto the attributes."""
        settings = BrowserSettings(handle_meta_refresh=False, follow_redirects=False)

        attributes = PolicyAttributes.from_settings(settings)

        assert attributes[Attribute.SEND_REFERER] is True
        assert attributes[Attribute.META_REFRESH_HANDLING] is False
        assert attributes[Attribute.FOLLOW_REDIRECTS] is False


class TestUserAgent:
    """Tests for create_user_agent()."""

    def test_default(self):
        """The default names the package and its version."""
        from web_surf import __version__

        assert create_user_agent().startswith(f"WebSurf/{__version__} (")

    def test_custom(self):
        """Name and version can be chosen."""
        agent = create_user_agent("MyBot", "2.0")

        assert agent.startswith("MyBot/2.0 (")
        assert "Python" in agent
