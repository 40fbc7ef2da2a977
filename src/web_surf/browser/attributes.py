"""
Policy toggles consulted on every request.
"""

from enum import Enum
from typing import Iterator, Mapping, TYPE_CHECKING

if TYPE_CHECKING:
    from web_surf.config.settings import BrowserSettings


class Attribute(str, Enum):
    """Browser capabilities that can be switched on and off."""

    SEND_REFERER = "send_referer"
    META_REFRESH_HANDLING = "meta_refresh_handling"
    FOLLOW_REDIRECTS = "follow_redirects"


class PolicyAttributes:
    """
    Mapping from Attribute to bool, every attribute defaulting to True.

    Values are looked up each time a request is built or a redirect is
    decided, so changes take effect on the next request.

    Example:
        >>> attrs = PolicyAttributes()
        >>> attrs[Attribute.FOLLOW_REDIRECTS] = False
        >>> attrs[Attribute.FOLLOW_REDIRECTS]
        False
    """

    def __init__(self, values: Mapping[Attribute, bool] | None = None) -> None:
        self._values: dict[Attribute, bool] = {a: True for a in Attribute}
        if values:
            self.update(values)

    @classmethod
    def from_settings(cls, settings: "BrowserSettings") -> "PolicyAttributes":
        """Build attributes from browser settings."""
        return cls({
            Attribute.SEND_REFERER: settings.send_referer,
            Attribute.META_REFRESH_HANDLING: settings.handle_meta_refresh,
            Attribute.FOLLOW_REDIRECTS: settings.follow_redirects,
        })

    def __getitem__(self, attribute: Attribute) -> bool:
        return self._values[Attribute(attribute)]

    def __setitem__(self, attribute: Attribute, value: bool) -> None:
        self._values[Attribute(attribute)] = bool(value)

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def update(self, values: Mapping[Attribute, bool]) -> None:
        """Set several attributes at once; unnamed ones keep their value."""
        for attribute, value in values.items():
            self[attribute] = value

    def as_dict(self) -> dict[Attribute, bool]:
        return dict(self._values)

    def __repr__(self) -> str:
        values = ", ".join(f"{a.value}={v}" for a, v in self._values.items())
        return f"PolicyAttributes({values})"
