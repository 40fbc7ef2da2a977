"""
Snapshot of one completed navigation.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

import httpx
from bs4 import BeautifulSoup


@dataclass(frozen=True)
class PageState:
    """
    Immutable request/response/document triple for one page.

    Created once per successful exchange and never modified afterwards;
    a later failed navigation leaves every existing PageState intact.

    Attributes:
        request: The request as built by the browser (first hop, before
            cookies are attached). reload() sends this object again.
        response: Final response after any redirects, body already read.
        dom: Parsed document.
        loaded_at: When the state was committed.
    """

    request: httpx.Request
    response: httpx.Response
    dom: BeautifulSoup
    loaded_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc))

    @property
    def url(self) -> httpx.URL:
        """Final URL of the page after redirects, not the URL first requested."""
        return self.response.url

    @property
    def status_code(self) -> int:
        """HTTP status code of the final response."""
        return self.response.status_code
