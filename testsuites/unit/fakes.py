"""
In-memory stand-ins for the Playwright objects the harness drives.

Only the calls the harness makes are modelled. Element lookups are keyed by
the exact selector string a Locator renders to.
"""

import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from playwright.sync_api import Error as PlaywrightError

from ui_harness.locators import Locator
from ui_harness.reporting import Reporter
from ui_harness.session import BrowserKind, Session


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


class FakeElement:
    def __init__(
        self,
        tag: str = "div",
        text: str = "",
        attributes: Optional[Dict[str, str]] = None,
        visible: bool = True,
        enabled: bool = True,
        options: Optional[List[Tuple[str, str]]] = None,
    ):
        self.tag = tag
        self.text = text
        self.attributes = dict(attributes or {})
        self.value = self.attributes.get("value", "")
        self.visible = visible
        self.enabled = enabled
        self.options = list(options or [])
        self.selected: Optional[str] = None
        self.events: List[str] = []


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str, index: int = 0):
        self.page = page
        self.selector = selector
        self.index = index

    def _matches(self) -> List[FakeElement]:
        return self.page.find(self.selector)

    def _element(self) -> FakeElement:
        matches = self._matches()
        if self.index >= len(matches):
            raise PlaywrightError(f"No element matches selector {self.selector}")
        return matches[self.index]

    def count(self) -> int:
        self.page.lookups += 1
        return len(self._matches())

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self.page, self.selector, 0)

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self.page, self.selector, index)

    def is_visible(self) -> bool:
        matches = self._matches()
        return self.index < len(matches) and matches[self.index].visible

    def is_enabled(self) -> bool:
        return self._element().enabled

    def click(self, button: str = "left") -> None:
        element = self._element()
        if not element.enabled:
            raise PlaywrightError("Element is not enabled")
        element.events.append("right_click" if button == "right" else "click")

    def dblclick(self) -> None:
        self._element().events.append("dblclick")

    def hover(self) -> None:
        self._element().events.append("hover")

    def scroll_into_view_if_needed(self) -> None:
        self._element().events.append("scroll")

    def clear(self) -> None:
        element = self._element()
        element.value = ""
        element.events.append("clear")

    def fill(self, text: str) -> None:
        element = self._element()
        if element.tag not in ("input", "textarea"):
            raise PlaywrightError("Element is not an <input> or <textarea>")
        element.value = text
        element.events.append("fill")

    def inner_text(self) -> str:
        """Rendered text only; empty for text fields, as in Playwright."""
        element = self._element()
        if element.tag in ("input", "textarea"):
            return ""
        if element.tag == "select":
            return "\n".join(label for _, label in element.options)
        return element.text

    def input_value(self) -> str:
        element = self._element()
        if element.tag == "select":
            return element.selected or ""
        if element.tag not in ("input", "textarea"):
            raise PlaywrightError("Node is not an <input>, <textarea> or <select> element")
        return element.value

    def evaluate(self, expression: str) -> Any:
        if expression != "e => e.tagName":
            raise NotImplementedError(expression)
        return self._element().tag.upper()

    def get_attribute(self, name: str) -> Optional[str]:
        element = self._element()
        if name == "value" and element.tag in ("input", "textarea"):
            return element.value
        return element.attributes.get(name)

    def select_option(self, value: str = None, label: str = None) -> List[str]:
        element = self._element()
        if element.tag != "select":
            raise PlaywrightError("Element is not a <select> element")
        for option_value, option_label in element.options:
            if value is not None and option_value == value:
                element.selected = option_value
                return [option_value]
            if label is not None and option_label == label:
                element.selected = option_value
                return [option_value]
        raise PlaywrightError("Did not find some options")


class FakePage:
    def __init__(self, title: str = "Fake Page", url: str = "about:blank"):
        self._title = title
        self.url = url
        self.elements: Dict[str, List[FakeElement]] = {}
        self.appear_at: Dict[str, float] = {}
        self.visits: List[str] = []
        self.reloads = 0
        self.lookups = 0
        self.navigation_error: Optional[Exception] = None
        self.viewport: Optional[Dict[str, int]] = None
        self.screenshot_error: Optional[Exception] = None

    def add(self, locator: Locator, *elements: FakeElement, delay: float = None) -> None:
        """Place elements under locator, optionally appearing after delay seconds."""
        self.elements.setdefault(locator.selector, []).extend(elements)
        if delay is not None:
            self.appear_at[locator.selector] = time.monotonic() + delay

    def find(self, selector: str) -> List[FakeElement]:
        appear_at = self.appear_at.get(selector)
        if appear_at is not None and time.monotonic() < appear_at:
            return []
        return self.elements.get(selector, [])

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def goto(self, url: str) -> None:
        if self.navigation_error is not None:
            raise self.navigation_error
        self.url = url
        self.visits.append(url)

    def reload(self) -> None:
        if self.navigation_error is not None:
            raise self.navigation_error
        self.reloads += 1

    def title(self) -> str:
        return self._title

    def set_viewport_size(self, size: Dict[str, int]) -> None:
        self.viewport = dict(size)

    def screenshot(self, path: str = None, full_page: bool = False) -> bytes:
        if self.screenshot_error is not None:
            raise self.screenshot_error
        if path:
            Path(path).write_bytes(PNG_BYTES)
        return PNG_BYTES


class RecordingReporter(Reporter):
    """Reporter that remembers every event."""

    def __init__(self):
        self.events: List[Tuple[str, str]] = []

    def log_info(self, message: str) -> None:
        self.events.append(("info", message))

    def log_pass(self, message: str) -> None:
        self.events.append(("pass", message))

    def log_fail(self, message: str) -> None:
        self.events.append(("fail", message))

    def log_warning(self, message: str) -> None:
        self.events.append(("warning", message))

    def log_skip(self, message: str) -> None:
        self.events.append(("skip", message))

    def attach_screenshot(self, path: Any, name: str = "Screenshot") -> None:
        self.events.append(("screenshot", str(path)))

    def of(self, kind: str) -> List[str]:
        return [message for event, message in self.events if event == kind]


class ExplodingReporter(Reporter):
    """Reporter whose every call raises."""

    def log_info(self, message: str) -> None:
        raise RuntimeError("report sink down")

    def log_fail(self, message: str) -> None:
        raise RuntimeError("report sink down")


def make_session(page: Any = None, explicit_wait: float = 0.2) -> Session:
    return Session(
        browser_kind=BrowserKind.CHROME,
        headless=True,
        implicit_wait=1,
        page_load_timeout=5,
        explicit_wait=explicit_wait,
        page=page if page is not None else FakePage(),
    )


# ================================================================================
# Playwright launcher fakes
# ================================================================================

class FakeContext:
    def __init__(self, options: Dict[str, Any]):
        self.options = options
        self.default_timeout: Optional[float] = None
        self.navigation_timeout: Optional[float] = None
        self.pages: List[FakePage] = []
        self.closed = False

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout: float) -> None:
        self.navigation_timeout = timeout

    def new_page(self) -> FakePage:
        page = FakePage()
        self.pages.append(page)
        return page

    def close(self) -> None:
        self.closed = True


class FakeBrowser:
    def __init__(self, close_error: Exception = None, context_error: Exception = None):
        self.contexts: List[FakeContext] = []
        self.closed = False
        self.close_error = close_error
        self.context_error = context_error

    def new_context(self, **options: Any) -> FakeContext:
        if self.context_error is not None:
            raise self.context_error
        context = FakeContext(options)
        self.contexts.append(context)
        return context

    def close(self) -> None:
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


class FakeBrowserType:
    def __init__(self, name: str):
        self.name = name
        self.launches: List[Dict[str, Any]] = []
        self.connections: List[Tuple[str, str]] = []
        self.launch_error: Optional[Exception] = None
        self.browser_kwargs: Dict[str, Any] = {}
        self.browsers: List[FakeBrowser] = []

    def _browser(self) -> FakeBrowser:
        browser = FakeBrowser(**self.browser_kwargs)
        self.browsers.append(browser)
        return browser

    def launch(self, **options: Any) -> FakeBrowser:
        self.launches.append(options)
        if self.launch_error is not None:
            raise self.launch_error
        return self._browser()

    def connect_over_cdp(self, endpoint_url: str) -> FakeBrowser:
        self.connections.append(("cdp", endpoint_url))
        return self._browser()

    def connect(self, ws_endpoint: str) -> FakeBrowser:
        self.connections.append(("ws", ws_endpoint))
        return self._browser()


class FakePlaywright:
    def __init__(self):
        self.chromium = FakeBrowserType("chromium")
        self.firefox = FakeBrowserType("firefox")
        self.webkit = FakeBrowserType("webkit")
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakePlaywrightFactory:
    """Callable standing in for sync_playwright."""

    def __init__(self):
        self.instances: List[FakePlaywright] = []
        self.configure = None

    def __call__(self) -> "FakePlaywrightFactory":
        return self

    def start(self) -> FakePlaywright:
        playwright = FakePlaywright()
        if self.configure is not None:
            self.configure(playwright)
        self.instances.append(playwright)
        return playwright

    @property
    def last(self) -> FakePlaywright:
        return self.instances[-1]
