"""
================================================================================
Page Objects
================================================================================

Common ground for page objects built on the interaction layer.

A page object declares its path and expected title as class attributes and
its elements as Locator class attributes; everything it does goes through
ElementActions, so waits, failures and report events stay uniform.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os

import allure
from loguru import logger

from .element_actions import ElementActions


class BasePage:
    """
    Usage:
        class SearchPage(BasePage):
            URL_PATH = "/search"
            PAGE_TITLE = "Search"

            query = Locator.name("q")

            def search(self, term: str):
                self.actions.enter_text(self.query, term)
    """

    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(self, actions: ElementActions, base_url: str = ""):
        """
        Args:
            actions: Interaction layer of the test's execution unit
            base_url: Application root; UI_BASE_URL when empty
        """
        self.actions = actions
        root = base_url or os.getenv("UI_BASE_URL", "http://localhost:3000")
        self.base_url = root.rstrip("/")

    @property
    def url(self) -> str:
        return self.base_url + self.URL_PATH

    def open(self) -> "BasePage":
        """Load this page; returns self for chaining."""
        with allure.step(f"Open {type(self).__name__}"):
            self.actions.navigate(self.url)
        logger.debug(f"{type(self).__name__} opened at {self.url}")
        return self

    def navigate_to(self, path: str) -> None:
        """Load another path under the same base URL."""
        target = self.base_url + path
        with allure.step(f"Go to {path}"):
            self.actions.navigate(target)

    def title(self) -> str:
        return self.actions.title()

    def current_url(self) -> str:
        return self.actions.current_url()

    def is_loaded(self) -> bool:
        """PAGE_TITLE, when set, must appear in the document title."""
        return not self.PAGE_TITLE or self.PAGE_TITLE in self.title()


__all__ = [
    "BasePage",
]
