# ================================================================================
# Element Actions Module
# ================================================================================
#
# Resilient element interactions for the active session of one execution unit.
#
# Every operation is wait-then-act:
#   1. wait phase - poll the session's WaitContext for presence, visibility
#      or clickability of the locator
#   2. act phase  - perform the action on the resolved element
#
# Key Features:
#   - One wait/timeout policy shared by all operations
#   - Typed failures (ElementNotFound, WaitTimeout, InteractionFailed,
#     NavigationFailed, NoActiveSession)
#   - Report events on success (mutating operations) and on every failure
#   - Silent state checks: is_displayed / is_enabled return False on failure
#
# There are no silent retries: one wait-then-act attempt per call.
#
# ================================================================================

from typing import Any, Callable, Hashable, List, Optional

from loguru import logger
from playwright.sync_api import Locator as PlaywrightLocator

from .exceptions import (
    ElementNotFound,
    InteractionFailed,
    NavigationFailed,
    NoActiveSession,
    WaitTimeout,
)
from .locators import Locator
from .reporting import Reporter, safe_report
from .session import Session, SessionRegistry


PRESENCE = "presence"
VISIBILITY = "visibility"
CLICKABILITY = "clickability"

# Elements whose text is their value rather than their inner text
FORM_FIELD_TAGS = ("INPUT", "TEXTAREA", "SELECT")


class ElementActions:
    """
    Interaction layer bound to one execution unit.

    The active session is looked up in the registry on every call, so the
    same instance keeps working across session re-creation.

    Example:
        actions = ElementActions(registry, unit, reporter)
        actions.navigate("https://www.google.com/maps")
        actions.enter_text(Locator.id("searchboxinput"), "Eiffel Tower")
        actions.click(Locator.id("searchbox-searchbutton"))
    """

    def __init__(
        self,
        registry: SessionRegistry,
        unit: Hashable,
        reporter: Optional[Reporter] = None,
    ):
        """
        Initialize ElementActions.

        Args:
            registry: Registry holding the unit's session
            unit: Execution unit identifier
            reporter: Receives info/fail events (optional)
        """
        self.registry = registry
        self.unit = unit
        self.reporter = reporter

    # =========================================================================
    # Internals
    # =========================================================================

    def _report(self, event: str, message: str) -> None:
        safe_report(self.reporter, event, message)

    def _fail(self, message: str, error: BaseException) -> None:
        logger.error(f"{message} ({error})")
        self._report("log_fail", message)

    def _session(self) -> Session:
        session = self.registry.get(self.unit)
        if session is None or session.page is None:
            error = NoActiveSession(self.unit)
            self._fail(f"No active browser session for unit: {self.unit}", error)
            raise error
        return session

    def _wait_for(
        self,
        session: Session,
        locator: Locator,
        condition: str,
        timeout: Optional[float] = None,
    ) -> PlaywrightLocator:
        """Wait phase: poll until locator satisfies condition, return first match."""
        matches = session.page.locator(locator.selector)

        if condition == PRESENCE:
            def ready() -> bool:
                return matches.count() > 0
        elif condition == VISIBILITY:
            def ready() -> bool:
                return matches.count() > 0 and matches.first.is_visible()
        elif condition == CLICKABILITY:
            def ready() -> bool:
                return (
                    matches.count() > 0
                    and matches.first.is_visible()
                    and matches.first.is_enabled()
                )
        else:
            raise ValueError(f"Unknown wait condition: {condition}")

        session.wait.until(
            ready,
            description=f"{condition} of element located by {locator}",
            timeout=timeout,
            locator=locator,
        )
        return matches.first

    def _present(self, session: Session, locator: Locator) -> PlaywrightLocator:
        try:
            return self._wait_for(session, locator, PRESENCE)
        except WaitTimeout as e:
            raise ElementNotFound(locator, e.timeout, e.elapsed, cause=e.cause) from e

    def _perform(
        self,
        action: str,
        locator: Locator,
        condition: str,
        act: Callable[[PlaywrightLocator], Any],
        success_message: str,
        failure_message: str,
    ) -> None:
        """Wait-then-act for mutating operations, with reporting."""
        session = self._session()
        try:
            element = self._wait_for(session, locator, condition)
            act(element)
        except Exception as e:
            self._fail(failure_message, e)
            raise InteractionFailed(action, locator, e) from e

        logger.info(success_message)
        self._report("log_info", success_message)

    # =========================================================================
    # Locating
    # =========================================================================

    def locate(self, locator: Locator) -> PlaywrightLocator:
        """
        Find the first element matching locator.

        Raises:
            ElementNotFound: Nothing matched within the explicit wait
        """
        session = self._session()
        try:
            element = self._present(session, locator)
        except ElementNotFound as e:
            self._fail(f"Element not found: {locator}", e)
            raise
        logger.debug(f"Element found: {locator}")
        return element

    def locate_all(self, locator: Locator) -> List[PlaywrightLocator]:
        """
        Find every element matching locator once at least one is present.

        Raises:
            ElementNotFound: Nothing matched within the explicit wait
        """
        session = self._session()
        try:
            self._present(session, locator)
        except ElementNotFound as e:
            self._fail(f"Elements not found: {locator}", e)
            raise
        matches = session.page.locator(locator.selector)
        elements = [matches.nth(i) for i in range(matches.count())]
        logger.debug(f"Elements found: {len(elements)} for locator: {locator}")
        return elements

    # =========================================================================
    # Mutating operations
    # =========================================================================

    def click(self, locator: Locator) -> None:
        """Click once the element is visible and enabled."""
        self._perform(
            "click",
            locator,
            CLICKABILITY,
            lambda element: element.click(),
            f"Clicked on element: {locator}",
            f"Failed to click on element: {locator}",
        )

    def enter_text(self, locator: Locator, text: str) -> None:
        """Clear the field, then type text into it."""
        shown = "*" * len(text) if "password" in locator.value.lower() else text

        def act(element: PlaywrightLocator) -> None:
            element.clear()
            element.fill(text)

        self._perform(
            "enter text into",
            locator,
            PRESENCE,
            act,
            f"Entered text '{shown}' in element: {locator}",
            f"Failed to enter text in element: {locator}",
        )

    def select_by_visible_text(self, locator: Locator, option_text: str) -> None:
        """Select the dropdown option whose label is option_text."""
        self._perform(
            "select option in",
            locator,
            PRESENCE,
            lambda element: element.select_option(label=option_text),
            f"Selected option '{option_text}' from dropdown: {locator}",
            f"Failed to select option '{option_text}' from dropdown: {locator}",
        )

    def select_by_value(self, locator: Locator, value: str) -> None:
        """Select the dropdown option whose value attribute is value."""
        self._perform(
            "select option in",
            locator,
            PRESENCE,
            lambda element: element.select_option(value=value),
            f"Selected option with value '{value}' from dropdown: {locator}",
            f"Failed to select option by value '{value}' from dropdown: {locator}",
        )

    def hover(self, locator: Locator) -> None:
        self._perform(
            "hover over",
            locator,
            PRESENCE,
            lambda element: element.hover(),
            f"Hovered over element: {locator}",
            f"Failed to hover over element: {locator}",
        )

    def double_click(self, locator: Locator) -> None:
        self._perform(
            "double click",
            locator,
            PRESENCE,
            lambda element: element.dblclick(),
            f"Double clicked on element: {locator}",
            f"Failed to double click on element: {locator}",
        )

    def right_click(self, locator: Locator) -> None:
        self._perform(
            "right click",
            locator,
            PRESENCE,
            lambda element: element.click(button="right"),
            f"Right clicked on element: {locator}",
            f"Failed to right click on element: {locator}",
        )

    def scroll_to(self, locator: Locator) -> None:
        """Scroll the element into view."""
        session = self._session()
        try:
            element = self._wait_for(session, locator, PRESENCE)
            element.scroll_into_view_if_needed()
        except Exception as e:
            self._fail(f"Failed to scroll to element: {locator}", e)
            raise InteractionFailed("scroll to", locator, e) from e
        logger.info(f"Scrolled to element: {locator}")

    # =========================================================================
    # Reading
    # =========================================================================

    def get_text(self, locator: Locator) -> str:
        """
        Text of the element. Form fields (input, textarea, select) report
        their current value, since Playwright's inner_text() is empty for them.
        """
        element = self.locate(locator)
        try:
            tag = str(element.evaluate("e => e.tagName")).upper()
            if tag in FORM_FIELD_TAGS:
                text = element.input_value()
            else:
                text = element.inner_text()
        except Exception as e:
            self._fail(f"Failed to get text from element: {locator}", e)
            raise InteractionFailed("read text from", locator, e) from e
        logger.info(f"Retrieved text '{text}' from element: {locator}")
        return text

    def get_attribute(self, locator: Locator, name: str) -> Optional[str]:
        """Attribute value of the element; None when the attribute is absent."""
        element = self.locate(locator)
        try:
            value = element.get_attribute(name)
        except Exception as e:
            self._fail(f"Failed to get attribute '{name}' from element: {locator}", e)
            raise InteractionFailed(f"read attribute '{name}' from", locator, e) from e
        logger.info(f"Retrieved attribute '{name}' value '{value}' from element: {locator}")
        return value

    def is_displayed(self, locator: Locator) -> bool:
        """
        Check visibility. Any failure, including unrelated driver errors,
        yields False without a report event.
        """
        session = self._session()
        try:
            element = self._wait_for(session, locator, PRESENCE)
            displayed = bool(element.is_visible())
        except Exception as e:
            logger.debug(f"Element not displayed: {locator} ({e})")
            return False
        logger.info(f"Element display status: {displayed} for locator: {locator}")
        return displayed

    def is_enabled(self, locator: Locator) -> bool:
        """Check enabled state; any failure yields False without a report event."""
        session = self._session()
        try:
            element = self._wait_for(session, locator, PRESENCE)
            enabled = bool(element.is_enabled())
        except Exception as e:
            logger.debug(f"Could not determine enabled state: {locator} ({e})")
            return False
        logger.info(f"Element enabled status: {enabled} for locator: {locator}")
        return enabled

    # =========================================================================
    # Explicit waits
    # =========================================================================

    def wait_for_visible(self, locator: Locator, timeout: float) -> PlaywrightLocator:
        """
        Wait up to timeout seconds for the element to become visible.

        Raises:
            WaitTimeout: The element did not become visible in time
        """
        return self._wait_explicit(locator, VISIBILITY, timeout, "visible")

    def wait_for_clickable(self, locator: Locator, timeout: float) -> PlaywrightLocator:
        """
        Wait up to timeout seconds for the element to become clickable.

        Raises:
            WaitTimeout: The element did not become clickable in time
        """
        return self._wait_explicit(locator, CLICKABILITY, timeout, "clickable")

    def _wait_explicit(
        self,
        locator: Locator,
        condition: str,
        timeout: float,
        state: str,
    ) -> PlaywrightLocator:
        session = self._session()
        try:
            element = self._wait_for(session, locator, condition, timeout=timeout)
        except WaitTimeout as e:
            self._fail(
                f"Element did not become {state} within {timeout} seconds: {locator}", e
            )
            raise
        logger.info(f"Element became {state}: {locator}")
        return element

    # =========================================================================
    # Navigation
    # =========================================================================

    def navigate(self, url: str) -> None:
        """Load url in the active session."""
        session = self._session()
        try:
            session.page.goto(url)
        except Exception as e:
            self._fail(f"Failed to navigate to URL: {url}", e)
            raise NavigationFailed(url, e) from e
        logger.info(f"Navigated to URL: {url}")
        self._report("log_info", f"Navigated to URL: {url}")

    def refresh(self) -> None:
        """Reload the current page."""
        session = self._session()
        try:
            session.page.reload()
        except Exception as e:
            self._fail("Failed to refresh page", e)
            raise NavigationFailed(None, e) from e
        logger.info("Page refreshed")
        self._report("log_info", "Page refreshed")

    def title(self) -> str:
        title = self._session().page.title()
        logger.info(f"Page title: {title}")
        return title

    def current_url(self) -> str:
        url = self._session().page.url
        logger.info(f"Current URL: {url}")
        return url


__all__ = [
    "ElementActions",
    "PRESENCE",
    "VISIBILITY",
    "CLICKABILITY",
]
