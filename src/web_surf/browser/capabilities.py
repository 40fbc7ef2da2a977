"""
Capabilities of page elements, dispatched on ElementKind.

    kind    submit  download
    FORM    yes     no
    LINK    no      href target
    IMAGE   no      src target
"""

import io
from typing import IO, TYPE_CHECKING, Union

from web_surf.browser.elements import ElementKind, Image, Link
from web_surf.browser.form import Form
from web_surf.core.exceptions import UnsupportedCapabilityError

if TYPE_CHECKING:
    from web_surf.browser.browser import Browser

Element = Union[Form, Link, Image]


def write_to(out: IO, data: bytes) -> int:
    """
    Write data to a binary or text sink.

    Returns:
        Number of bytes written
    """
    if isinstance(out, io.TextIOBase):
        out.write(data.decode("utf-8", errors="replace"))
    else:
        out.write(data)
    return len(data)


def submit(element: Element) -> None:
    """
    Submit element through the browser it belongs to.

    Raises:
        UnsupportedCapabilityError: If element is not a form
    """
    if element.kind is ElementKind.FORM:
        element.submit()
        return

    raise UnsupportedCapabilityError(
        f"Cannot submit a {element.kind.value}",
        kind=element.kind.value,
        capability="submit",
    )


def download(browser: "Browser", element: Element, out: IO) -> int:
    """
    Fetch the resource element points at and write it to out.

    The fetch goes through the browser's transport, headers and redirect
    policy, but does not change the current page or history.

    Returns:
        Number of bytes written

    Raises:
        UnsupportedCapabilityError: If element is a form
        httpx.HTTPStatusError: If the server answers with an error status
    """
    if element.kind is ElementKind.LINK:
        url = element.href
    elif element.kind is ElementKind.IMAGE:
        url = element.src
    else:
        raise UnsupportedCapabilityError(
            f"Cannot download a {element.kind.value}",
            kind=element.kind.value,
            capability="download",
        )

    response = browser.fetch(url)
    return write_to(out, response.content)
