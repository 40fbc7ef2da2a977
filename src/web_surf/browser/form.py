"""
HTML form parsing and submission.
"""

from typing import ClassVar, TYPE_CHECKING

from bs4 import Tag

from web_surf.browser.elements import ElementKind
from web_surf.browser.request_builder import (
    FORM_CONTENT_TYPE,
    encode_values,
    replace_query,
)
from web_surf.core.exceptions import ElementNotFoundError, FormError
from web_surf.utils.logging import get_logger

if TYPE_CHECKING:
    from web_surf.browser.browser import Browser

logger = get_logger(__name__)

# Input types that never contribute a field value on their own
_BUTTON_INPUT_TYPES = {"submit", "image", "button", "reset"}
_CHECKABLE_INPUT_TYPES = {"checkbox", "radio"}


class Form:
    """
    A form on the current page, submittable through its browser.

    Field values are collected the way a browser would send them:
    unchecked boxes and disabled controls are left out, selects send
    their selected options (or the first option).

    Example:
        >>> form = browser.form("form#login")
        >>> form.input("user", "alice")
        >>> form.input("password", "secret")
        >>> form.submit()
    """

    kind: ClassVar[ElementKind] = ElementKind.FORM

    def __init__(self, browser: "Browser", tag: Tag) -> None:
        self._browser = browser
        self.tag = tag
        self.page_url = str(browser.url)

        action = tag.get("action")
        self.action = browser.resolve_url(action) if action else self.page_url
        self.method = (tag.get("method") or "GET").upper()

        self._fields: dict[str, list[str]] = {}
        self._buttons: dict[str, str] = {}
        self._parse()

    def _parse(self) -> None:
        for control in self.tag.find_all(["input", "textarea", "select", "button"]):
            name = control.get("name")
            if not name or control.has_attr("disabled"):
                continue

            if control.name == "input":
                self._parse_input(name, control)
            elif control.name == "textarea":
                self._fields.setdefault(name, []).append(control.get_text())
            elif control.name == "select":
                self._parse_select(name, control)
            elif (control.get("type") or "submit").lower() == "submit":
                self._buttons[name] = control.get("value", "")

    def _parse_input(self, name: str, control: Tag) -> None:
        input_type = (control.get("type") or "text").lower()

        if input_type in _BUTTON_INPUT_TYPES:
            if input_type == "submit":
                self._buttons[name] = control.get("value", "")
            return

        if input_type in _CHECKABLE_INPUT_TYPES:
            if control.has_attr("checked"):
                self._fields.setdefault(name, []).append(
                    control.get("value", "on"))
            return

        self._fields.setdefault(name, []).append(control.get("value", ""))

    def _parse_select(self, name: str, control: Tag) -> None:
        options = control.find_all("option")
        selected = [o for o in options if o.has_attr("selected")]
        if not selected and options and not control.has_attr("multiple"):
            selected = options[:1]

        values = self._fields.setdefault(name, [])
        for option in selected:
            values.append(option.get("value", option.get_text(strip=True)))

    @property
    def buttons(self) -> dict[str, str]:
        """Named submit buttons and their values."""
        return dict(self._buttons)

    def values(self) -> dict[str, list[str]]:
        """Copy of the field values that submit() would send."""
        return {name: list(values) for name, values in self._fields.items()}

    def input(self, name: str, value: str) -> None:
        """
        Set an existing field to a single value.

        Raises:
            FormError: If the form has no field with that name
        """
        if name not in self._fields:
            raise FormError("No form field with that name", field=name)
        self._fields[name] = [value]

    def set(self, name: str, value: str | list[str]) -> None:
        """Set a field, creating it when missing."""
        self._fields[name] = [value] if isinstance(value, str) else list(value)

    def submit(self) -> None:
        """Submit the form without a button."""
        self._send(self.values())

    def click(self, button: str) -> None:
        """
        Submit the form as if the named submit button were pressed.

        Raises:
            ElementNotFoundError: If the form has no button with that name
        """
        if button not in self._buttons:
            raise ElementNotFoundError(
                f"No submit button named '{button}'.", expr=button)

        values = self.values()
        values[button] = [self._buttons[button]]
        self._send(values)

    def _send(self, values: dict[str, list[str]]) -> None:
        logger.debug(f"Submitting form {self.method} {self.action}")
        if self.method == "POST":
            self._browser._navigate(
                "POST",
                self.action,
                via=self.page_url,
                body_type=FORM_CONTENT_TYPE,
                body=encode_values(values),
            )
        else:
            self._browser._navigate(
                "GET",
                replace_query(self.action, values),
                via=self.page_url,
            )

    def __repr__(self) -> str:
        return f"Form(method={self.method!r}, action={self.action!r}, fields={list(self._fields)})"
