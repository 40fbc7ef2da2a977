"""
Redirect approval consulted by the transport before each hop.
"""

import httpx

from web_surf.browser.attributes import Attribute, PolicyAttributes
from web_surf.core.exceptions import RedirectBlockedError
from web_surf.utils.logging import get_logger

logger = get_logger(__name__)


class RedirectGate:
    """
    Allows or refuses a redirect according to FOLLOW_REDIRECTS.

    Called with the request the transport is about to send for the next
    hop and the responses received so far.
    """

    def __init__(self, attributes: PolicyAttributes) -> None:
        self.attributes = attributes

    def __call__(
        self,
        request: httpx.Request,
        history: list[httpx.Response],
    ) -> None:
        """
        Approve the hop to request.url.

        Raises:
            RedirectBlockedError: If redirects are disabled
        """
        if self.attributes[Attribute.FOLLOW_REDIRECTS]:
            logger.debug(f"Following redirect #{len(history)} to {request.url}")
            return

        raise RedirectBlockedError(
            f"Redirects are disabled. Cannot follow '{request.url}'.",
            url=str(request.url),
        )
