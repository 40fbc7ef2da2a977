"""
Page elements exposed by the browser.

Each element type carries an ElementKind tag; capabilities.py dispatches
submit and download on that tag.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ElementKind(str, Enum):
    """Element variants the browser can act on."""

    FORM = "form"
    LINK = "link"
    IMAGE = "image"


@dataclass(frozen=True)
class Link:
    """An anchor with a resolved, absolute href."""

    href: str
    id: str = ""
    text: str = ""

    kind: ClassVar[ElementKind] = ElementKind.LINK

    @property
    def url(self) -> str:
        return self.href


@dataclass(frozen=True)
class Image:
    """An img tag with a resolved, absolute src."""

    src: str
    id: str = ""
    alt: str = ""
    title: str = ""

    kind: ClassVar[ElementKind] = ElementKind.IMAGE

    @property
    def url(self) -> str:
        return self.src
