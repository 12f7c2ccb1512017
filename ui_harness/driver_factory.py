"""
================================================================================
Session Factory
================================================================================

Browser session lifecycle management for UI automation.

Features:
    - Browser-kind specific launch presets (chrome, firefox, edge, safari)
    - Remote execution against a grid / Playwright server endpoint
    - Timeouts applied from configuration
    - Registration under the caller's execution unit
    - Guaranteed teardown scope

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterator, List, Optional
from urllib.parse import urlparse

from loguru import logger
from playwright.sync_api import sync_playwright

from .config_loader import ConfigProvider
from .exceptions import (
    HarnessError,
    InvalidEndpoint,
    SessionCreationFailed,
    UnsupportedBrowser,
)
from .session import BrowserKind, Session, SessionRegistry


DEFAULT_GRID_URL = "http://localhost:4444/wd/hub"
DEFAULT_REMOTE_BROWSER = "chrome"
WINDOW_SIZE: Dict[str, int] = {"width": 1920, "height": 1080}

HEADLESS_ARG = "--headless"
STABILITY_ARGS = ["--no-sandbox", "--disable-dev-shm-usage"]
CHROME_EXTRA_ARGS = [
    "--disable-gpu",
    "--disable-extensions",
    "--disable-popup-blocking",
    "--disable-notifications",
    "--disable-infobars",
]
REMOTE_SCHEMES = ("http", "https", "ws", "wss")

# browser name -> (playwright launcher attribute, channel)
LAUNCHERS: Dict[BrowserKind, tuple] = {
    BrowserKind.CHROME: ("chromium", None),
    BrowserKind.EDGE: ("chromium", "msedge"),
    BrowserKind.FIREFOX: ("firefox", None),
    BrowserKind.SAFARI: ("webkit", None),
}


@dataclass
class LaunchPlan:
    """
    Resolved launch or connect instructions for one session.

    Attributes:
        kind: Requested browser kind
        launcher: Playwright browser type attribute ("chromium", ...)
        headless: Headless flag
        args: Command-line switches for local launches
        channel: Browser distribution channel (e.g. "msedge")
        endpoint: Remote endpoint URL for BrowserKind.REMOTE
    """
    kind: BrowserKind
    launcher: str
    headless: bool = False
    args: List[str] = field(default_factory=list)
    channel: Optional[str] = None
    endpoint: Optional[str] = None

    def launch_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"headless": self.headless, "args": list(self.args)}
        if self.channel:
            options["channel"] = self.channel
        return options


class SessionFactory:
    """
    Creates, registers and destroys browser sessions.

    Each session owns its own Playwright instance because the sync API is
    bound to the thread that started it.

    Usage:
        factory = SessionFactory(config, registry)
        with factory.session_scope("gw0::test_search") as session:
            session.page.goto("https://example.com")
    """

    def __init__(
        self,
        config: ConfigProvider,
        registry: SessionRegistry,
        playwright_factory: Callable[[], Any] = sync_playwright,
    ):
        """
        Args:
            config: Configuration provider
            registry: Registry receiving created sessions
            playwright_factory: Returns an object whose start() yields a
                Playwright instance
        """
        self.config = config
        self.registry = registry
        self._playwright_factory = playwright_factory

    # =========================================================================
    # Option resolution
    # =========================================================================

    def resolve_plan(self, browser: Any) -> LaunchPlan:
        """
        Resolve launch instructions for a browser name.

        Raises:
            UnsupportedBrowser: Unknown browser or remote browser name
            InvalidEndpoint: Malformed grid URL for the remote kind
        """
        kind = BrowserKind.parse(browser)
        headless = self.config.get_bool("headless")

        if kind is BrowserKind.REMOTE:
            return self._remote_plan(headless)

        launcher, channel = LAUNCHERS[kind]
        args: List[str] = []
        if headless:
            args.append(HEADLESS_ARG)

        if kind is BrowserKind.CHROME:
            args += STABILITY_ARGS + CHROME_EXTRA_ARGS
            args.append(f"--window-size={WINDOW_SIZE['width']},{WINDOW_SIZE['height']}")
        elif kind is BrowserKind.EDGE:
            args += STABILITY_ARGS
            args.append(f"--window-size={WINDOW_SIZE['width']},{WINDOW_SIZE['height']}")
        elif kind is BrowserKind.FIREFOX:
            args += STABILITY_ARGS
            args += [f"--width={WINDOW_SIZE['width']}", f"--height={WINDOW_SIZE['height']}"]
        else:
            # WebKit takes no chromium-style switches
            args = []

        return LaunchPlan(
            kind=kind,
            launcher=launcher,
            headless=headless,
            args=args,
            channel=channel,
        )

    def _remote_plan(self, headless: bool) -> LaunchPlan:
        grid_url = self.config.get_env("grid.url", DEFAULT_GRID_URL)
        remote_browser = self.config.get_env("remote.browser", DEFAULT_REMOTE_BROWSER)

        validate_endpoint(grid_url)

        remote_kind = BrowserKind.parse(remote_browser)
        if remote_kind is BrowserKind.REMOTE:
            raise UnsupportedBrowser(remote_browser)
        launcher, channel = LAUNCHERS[remote_kind]

        return LaunchPlan(
            kind=BrowserKind.REMOTE,
            launcher=launcher,
            headless=headless,
            args=list(STABILITY_ARGS),
            channel=channel,
            endpoint=grid_url,
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def create(self, unit: Hashable, browser: Any = None) -> Session:
        """
        Create a configured session and register it under unit.

        Args:
            unit: Execution unit identifier
            browser: Browser name; defaults to the "browser" setting

        Returns:
            The registered Session

        Raises:
            UnsupportedBrowser, InvalidEndpoint: Before anything is launched
            SessionCreationFailed: Launch or configuration failed
        """
        if browser is None:
            browser = self.config.get_env("browser", "chrome")

        try:
            plan = self.resolve_plan(browser)
        except HarnessError:
            logger.error(f"Unsupported browser configuration: {browser}")
            raise

        implicit_wait = self.config.get_float("browser.implicit.wait")
        page_load_timeout = self.config.get_float("browser.page.load.timeout")
        explicit_wait = self.config.get_float("browser.explicit.wait")

        playwright = None
        browser_handle = None
        try:
            playwright = self._playwright_factory().start()
            browser_handle = self._open_browser(playwright, plan)

            context = browser_handle.new_context(
                viewport=dict(WINDOW_SIZE),
                ignore_https_errors=True,
            )
            context.set_default_timeout(implicit_wait * 1000)
            context.set_default_navigation_timeout(page_load_timeout * 1000)

            page = context.new_page()
            # Maximize: the viewport covers the full configured window
            page.set_viewport_size(dict(WINDOW_SIZE))

            session = Session(
                browser_kind=plan.kind,
                headless=plan.headless,
                implicit_wait=implicit_wait,
                page_load_timeout=page_load_timeout,
                explicit_wait=explicit_wait,
                remote_endpoint=plan.endpoint,
                page=page,
                context=context,
                browser=browser_handle,
                playwright=playwright,
            )
        except Exception as e:
            logger.error(f"Failed to create browser session for '{browser}': {e}")
            self._abandon(browser_handle, playwright)
            raise SessionCreationFailed(browser, e) from e

        self.registry.set(unit, session)
        logger.info(
            f"Browser session created for '{plan.kind.value}' "
            f"(unit={unit}, headless={plan.headless})"
        )
        return session

    def _open_browser(self, playwright: Any, plan: LaunchPlan) -> Any:
        browser_type = getattr(playwright, plan.launcher)

        if plan.kind is not BrowserKind.REMOTE:
            return browser_type.launch(**plan.launch_options())

        scheme = urlparse(plan.endpoint).scheme.lower()
        if plan.launcher == "chromium" and scheme in ("http", "https"):
            logger.debug(f"Connecting over CDP: {plan.endpoint}")
            return browser_type.connect_over_cdp(plan.endpoint)

        logger.debug(f"Connecting to Playwright server: {plan.endpoint}")
        return browser_type.connect(plan.endpoint)

    @staticmethod
    def _abandon(browser_handle: Any, playwright: Any) -> None:
        """Release whatever a failed create() already started."""
        if browser_handle is not None:
            try:
                browser_handle.close()
            except Exception as e:
                logger.warning(f"Error closing partially created browser: {e}")
        if playwright is not None:
            try:
                playwright.stop()
            except Exception as e:
                logger.warning(f"Error stopping Playwright: {e}")

    def destroy(self, unit: Hashable) -> None:
        """
        Close the unit's session and remove its registry entry.

        Close errors are logged, never raised; the entry is removed
        regardless. Unknown units are ignored.
        """
        session = self.registry.remove(unit)
        if session is None:
            return
        try:
            session.close()
            logger.info(f"Browser session closed (unit={unit})")
        except Exception as e:
            logger.error(f"Error while closing browser session (unit={unit}): {e}")

    @contextmanager
    def session_scope(self, unit: Hashable, browser: Any = None) -> Iterator[Session]:
        """
        Create a session for the duration of a with-block.

        Teardown runs even when the block raises.
        """
        session = self.create(unit, browser)
        try:
            yield session
        finally:
            self.destroy(unit)


def validate_endpoint(url: Any) -> str:
    """
    Check a remote endpoint URL.

    Raises:
        InvalidEndpoint: If the URL has no supported scheme or host
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidEndpoint(url, "empty URL")
    try:
        parsed = urlparse(url.strip())
        port = parsed.port
    except ValueError as e:
        raise InvalidEndpoint(url, str(e)) from e
    if parsed.scheme.lower() not in REMOTE_SCHEMES:
        raise InvalidEndpoint(url, f"unsupported scheme '{parsed.scheme}'")
    if not parsed.hostname:
        raise InvalidEndpoint(url, "missing host")
    if port is not None and port <= 0:
        raise InvalidEndpoint(url, f"invalid port {port}")
    return url


__all__ = [
    "SessionFactory",
    "LaunchPlan",
    "validate_endpoint",
    "DEFAULT_GRID_URL",
    "WINDOW_SIZE",
]
