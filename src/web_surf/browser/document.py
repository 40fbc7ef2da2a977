"""
Response to document parsing.
"""

import httpx
from bs4 import BeautifulSoup

from web_surf.utils.logging import get_logger

logger = get_logger(__name__)


class DocumentParser:
    """
    Parses response bodies into BeautifulSoup documents.

    Errors from BeautifulSoup (such as an unavailable parser backend)
    propagate unchanged.

    Example:
        >>> parser = DocumentParser()
        >>> dom = parser.parse(response)
        >>> dom.select_one("title").get_text()
    """

    def __init__(self, features: str = "html.parser") -> None:
        """
        Args:
            features: BeautifulSoup parser backend name
        """
        self.features = features

    def parse(self, response: httpx.Response) -> BeautifulSoup:
        """Parse the response body, decoded with the response charset."""
        dom = BeautifulSoup(response.text, self.features)
        logger.debug(
            f"Parsed {len(response.content)} bytes from {response.url}")
        return dom
