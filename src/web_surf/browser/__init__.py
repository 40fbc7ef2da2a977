"""
Browser module for web-surf.

Provides the stateful navigation engine and its parts:
- Browser: current page, history, policies, commit protocol
- Request building, redirect gating and the httpx transport
- Meta-refresh scheduling
- Forms, links, images and their capabilities
"""

from web_surf.browser.attributes import Attribute, PolicyAttributes
from web_surf.browser.request_builder import (
    FORM_CONTENT_TYPE,
    RequestBuilder,
    parse_url,
    encode_values,
    replace_query,
)
from web_surf.browser.redirect_gate import RedirectGate
from web_surf.browser.transport import Transport, HttpxTransport
from web_surf.browser.document import DocumentParser
from web_surf.browser.refresh import RefreshScheduler, find_refresh_delay
from web_surf.browser.elements import ElementKind, Link, Image
from web_surf.browser.form import Form
from web_surf.browser.capabilities import submit, download
from web_surf.browser.user_agent import create_user_agent
from web_surf.browser.browser import Browser

__all__ = [
    "Attribute",
    "PolicyAttributes",
    "FORM_CONTENT_TYPE",
    "RequestBuilder",
    "parse_url",
    "encode_values",
    "replace_query",
    "RedirectGate",
    "Transport",
    "HttpxTransport",
    "DocumentParser",
    "RefreshScheduler",
    "find_refresh_delay",
    "ElementKind",
    "Link",
    "Image",
    "Form",
    "submit",
    "download",
    "create_user_agent",
    "Browser",
]
