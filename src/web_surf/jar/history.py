"""
Page history for back navigation.
"""

from collections import deque
from typing import Iterator, Protocol

from web_surf.jar.state import PageState


class History(Protocol):
    """Storage for superseded pages, most recent last."""

    def push(self, state: PageState) -> None: ...

    def pop(self) -> PageState: ...

    def peek(self) -> PageState | None: ...

    def __len__(self) -> int: ...


class HistoryStack:
    """
    LIFO stack of PageState.

    Holds only superseded pages; the browser's current page is never
    in here. Unbounded unless max_size is given, in which case the
    oldest pages are dropped first.

    Example:
        >>> history = HistoryStack()
        >>> history.push(state)
        >>> len(history)
        1
        >>> history.pop() is state
        True
    """

    def __init__(self, max_size: int | None = None) -> None:
        self.max_size = max_size
        self._states: deque[PageState] = deque(maxlen=max_size)

    def push(self, state: PageState) -> None:
        """Append a state on top of the stack."""
        self._states.append(state)

    def pop(self) -> PageState:
        """
        Remove and return the most recently pushed state.

        Raises:
            IndexError: If the stack is empty
        """
        if not self._states:
            raise IndexError("pop from empty history")
        return self._states.pop()

    def peek(self) -> PageState | None:
        """Return the most recently pushed state without removing it."""
        return self._states[-1] if self._states else None

    def clear(self) -> None:
        """Drop every state."""
        self._states.clear()

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[PageState]:
        """Iterate oldest first."""
        return iter(self._states)

    def __repr__(self) -> str:
        return f"HistoryStack(len={len(self)}, max_size={self.max_size})"
