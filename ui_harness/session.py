"""
================================================================================
Browser Sessions
================================================================================

Session model and the per-execution-unit session registry.

Each concurrent test worker (execution unit) owns at most one live Session.
The registry is an explicit map keyed by the unit identifier, so isolation
between workers does not depend on thread-local state.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Hashable, List, Optional

from loguru import logger

from .exceptions import NoActiveSession, UnsupportedBrowser
from .waits import WaitContext


class BrowserKind(str, Enum):
    """Browsers a session can be created for."""

    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"
    SAFARI = "safari"
    REMOTE = "remote"

    @classmethod
    def parse(cls, name: Any) -> "BrowserKind":
        """
        Resolve a browser name (case-insensitive).

        Raises:
            UnsupportedBrowser: If the name is not a known kind
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise UnsupportedBrowser(name) from None


@dataclass
class Session:
    """
    One live browser-automation connection.

    Attributes:
        browser_kind: Requested browser kind
        headless: Whether the browser runs without a window
        implicit_wait: Default element action timeout in seconds
        page_load_timeout: Navigation timeout in seconds
        explicit_wait: Duration of the bound WaitContext in seconds
        remote_endpoint: Grid URL, only for BrowserKind.REMOTE
        page: Playwright Page the interaction layer drives
        context: Playwright BrowserContext owning the page
        browser: Playwright Browser
        playwright: Playwright instance started for this session
        wait: WaitContext bound to this session
    """
    browser_kind: BrowserKind
    headless: bool
    implicit_wait: float
    page_load_timeout: float
    explicit_wait: float
    remote_endpoint: Optional[str] = None
    page: Any = None
    context: Any = None
    browser: Any = None
    playwright: Any = None
    wait: WaitContext = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.wait = WaitContext(self.explicit_wait)

    def close(self) -> None:
        """Terminate the browser and release the Playwright instance."""
        try:
            try:
                if self.context is not None:
                    self.context.close()
            finally:
                if self.browser is not None:
                    self.browser.close()
        finally:
            if self.playwright is not None:
                self.playwright.stop()
            self.page = None
            self.context = None
            self.browser = None
            self.playwright = None


class SessionRegistry:
    """
    Maps execution units to their active Session.

    Usage:
        registry = SessionRegistry()
        registry.set("gw0::test_login", session)
        registry.get("gw0::test_login")   # -> session
        registry.remove("gw0::test_login")
        registry.get("gw0::test_login")   # -> None
    """

    def __init__(self) -> None:
        self._sessions: Dict[Hashable, Session] = {}
        self._lock = threading.Lock()

    def set(self, unit: Hashable, session: Session) -> None:
        """
        Store session for unit, replacing any previous entry.

        The previous session is not closed; destroy it first.
        """
        with self._lock:
            previous = self._sessions.get(unit)
            self._sessions[unit] = session
        if previous is not None and previous is not session:
            logger.warning(
                f"Replaced live session for unit '{unit}' without teardown; "
                f"the previous browser may leak"
            )

    def get(self, unit: Hashable) -> Optional[Session]:
        """Return the session for unit, or None if not initialized."""
        with self._lock:
            return self._sessions.get(unit)

    def require(self, unit: Hashable) -> Session:
        """
        Return the session for unit.

        Raises:
            NoActiveSession: If the unit has no session
        """
        session = self.get(unit)
        if session is None:
            raise NoActiveSession(unit)
        return session

    def remove(self, unit: Hashable) -> Optional[Session]:
        """Clear the mapping for unit. Removing an absent unit is a no-op."""
        with self._lock:
            return self._sessions.pop(unit, None)

    def is_active(self, unit: Hashable) -> bool:
        return self.get(unit) is not None

    def units(self) -> List[Hashable]:
        with self._lock:
            return list(self._sessions)

    def __contains__(self, unit: Hashable) -> bool:
        return self.is_active(unit)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = [
    "BrowserKind",
    "Session",
    "SessionRegistry",
]
