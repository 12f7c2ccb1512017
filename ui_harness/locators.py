"""
================================================================================
Locators
================================================================================

Immutable descriptors of how to find elements on a page.

A Locator pairs a strategy with a value and renders itself as a Playwright
selector string:

    >>> Locator.css("#searchboxinput").selector
    'css=#searchboxinput'
    >>> Locator.id("searchboxinput").selector
    'id=searchboxinput'

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


# strategy -> selector builder
SELECTOR_BUILDERS: Dict[str, Callable[[str], str]] = {
    "css": lambda v: f"css={v}",
    "xpath": lambda v: f"xpath={v}",
    "id": lambda v: f"id={v}",
    "name": lambda v: f"css=[name={_quote(v)}]",
    "class_name": lambda v: f"css=.{v}",
    "tag_name": lambda v: f"css={v}",
    "link_text": lambda v: f"css=a:text-is({_quote(v)})",
    "text": lambda v: f"text={v}",
    "test_id": lambda v: f"data-testid={v}",
}


@dataclass(frozen=True)
class Locator:
    """
    How to find one or more elements.

    Attributes:
        strategy: One of SELECTOR_BUILDERS' keys
        value: Strategy-specific selector value
    """
    strategy: str
    value: str

    def __post_init__(self) -> None:
        if self.strategy not in SELECTOR_BUILDERS:
            raise ValueError(
                f"Unknown locator strategy '{self.strategy}'. "
                f"Expected one of: {', '.join(sorted(SELECTOR_BUILDERS))}"
            )
        if not self.value:
            raise ValueError("Locator value must not be empty")

    @property
    def selector(self) -> str:
        """Playwright selector string for this locator."""
        return SELECTOR_BUILDERS[self.strategy](self.value)

    def __str__(self) -> str:
        return f"By.{self.strategy}: {self.value}"

    @classmethod
    def css(cls, value: str) -> "Locator":
        return cls("css", value)

    @classmethod
    def xpath(cls, value: str) -> "Locator":
        return cls("xpath", value)

    @classmethod
    def id(cls, value: str) -> "Locator":
        return cls("id", value)

    @classmethod
    def name(cls, value: str) -> "Locator":
        return cls("name", value)

    @classmethod
    def class_name(cls, value: str) -> "Locator":
        return cls("class_name", value)

    @classmethod
    def tag_name(cls, value: str) -> "Locator":
        return cls("tag_name", value)

    @classmethod
    def link_text(cls, value: str) -> "Locator":
        return cls("link_text", value)

    @classmethod
    def text(cls, value: str) -> "Locator":
        return cls("text", value)

    @classmethod
    def test_id(cls, value: str) -> "Locator":
        return cls("test_id", value)


__all__ = [
    "Locator",
    "SELECTOR_BUILDERS",
]
