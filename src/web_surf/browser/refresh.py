"""
Meta-refresh detection and the deferred reload timer.
"""

import re
import threading
from typing import Any, Callable, Protocol

from bs4 import BeautifulSoup

from web_surf.utils.logging import get_logger

logger = get_logger(__name__)

META_REFRESH_SELECTOR = "meta[http-equiv='refresh' i]"

# Only a bare delay is honored; "5; url=..." arms nothing
_DELAY_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*$")


def find_refresh_delay(dom: BeautifulSoup) -> float | None:
    """
    Return the delay in seconds requested by a meta refresh tag.

    Args:
        dom: Parsed document

    Returns:
        The delay, or None when the document has no usable refresh tag

    Example:
        >>> dom = BeautifulSoup('<meta http-equiv="refresh" content="5">', "html.parser")
        >>> find_refresh_delay(dom)
        5.0
    """
    tag = dom.select_one(META_REFRESH_SELECTOR)
    if tag is None:
        return None

    content = tag.get("content")
    if not isinstance(content, str):
        return None

    match = _DELAY_PATTERN.match(content)
    if match is None:
        logger.debug(f"Ignoring unsupported meta refresh content {content!r}")
        return None

    return float(match.group(1))


class Timer(Protocol):
    """The subset of threading.Timer the scheduler relies on."""

    daemon: bool

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[..., Timer]


class RefreshScheduler:
    """
    Holds at most one pending reload timer.

    Every arm() or cancel() bumps a generation number. The callback is
    invoked with the generation it was armed under, and is_current()
    tells the owner whether that firing has since been superseded.

    Example:
        >>> scheduler = RefreshScheduler()
        >>> scheduler.arm(5.0, on_refresh)
        1
        >>> scheduler.cancel()
    """

    def __init__(self, timer_factory: TimerFactory = threading.Timer) -> None:
        """
        Args:
            timer_factory: Called as timer_factory(delay, callback, args=(generation,)).
                Defaults to threading.Timer.
        """
        self._timer_factory = timer_factory
        self._timer: Timer | None = None
        self._delay: float | None = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def is_armed(self) -> bool:
        return self._timer is not None

    @property
    def delay(self) -> float | None:
        """Delay of the pending timer, if any."""
        return self._delay

    @property
    def generation(self) -> int:
        return self._generation

    def arm(self, delay: float, callback: Callable[[int], Any]) -> int:
        """
        Replace any pending timer with one firing after delay seconds.

        Returns:
            The generation number passed to callback
        """
        with self._lock:
            self._cancel_pending()
            self._generation += 1
            generation = self._generation

            timer = self._timer_factory(delay, callback, args=(generation,))
            timer.daemon = True
            self._timer = timer
            self._delay = delay
            timer.start()

        logger.debug(f"Refresh armed for {delay}s (generation {generation})")
        return generation

    def cancel(self) -> None:
        """Stop the pending timer. Safe to call when nothing is armed."""
        with self._lock:
            self._cancel_pending()
            self._generation += 1

    def is_current(self, generation: int) -> bool:
        """Whether generation is the timer still pending."""
        with self._lock:
            return self._timer is not None and generation == self._generation

    def _cancel_pending(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            logger.debug("Pending refresh cancelled")
        self._timer = None
        self._delay = None
