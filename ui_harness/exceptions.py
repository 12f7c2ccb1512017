"""
================================================================================
Harness Exceptions
================================================================================

Typed failures raised by the session lifecycle and the interaction layer.

Hierarchy:
    HarnessError
        ConfigurationError
        UnsupportedBrowser
        InvalidEndpoint
        SessionCreationFailed
        NoActiveSession
        WaitTimeout
            ElementNotFound
        InteractionFailed
        NavigationFailed

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Hashable, Optional


class HarnessError(Exception):
    """Base class for every error raised by ui_harness."""
    pass


class ConfigurationError(HarnessError):
    """Raised when configuration loading or access fails."""
    pass


class UnsupportedBrowser(HarnessError):
    """Raised when a session is requested for an unknown browser kind."""

    def __init__(self, browser: Any):
        self.browser = browser
        super().__init__(f"Browser not supported: {browser}")


class InvalidEndpoint(HarnessError):
    """Raised when the remote grid URL cannot be used."""

    def __init__(self, url: Any, reason: str = "malformed URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid grid endpoint '{url}': {reason}")


class SessionCreationFailed(HarnessError):
    """Wraps any failure while launching or configuring a browser session."""

    def __init__(self, browser: Any, cause: BaseException):
        self.browser = browser
        self.cause = cause
        super().__init__(f"Browser session creation failed for '{browser}': {cause}")


class NoActiveSession(HarnessError):
    """Raised when an interaction runs outside of a session scope."""

    def __init__(self, unit: Hashable):
        self.unit = unit
        super().__init__(f"No active browser session for execution unit '{unit}'")


class WaitTimeout(HarnessError):
    """Raised when a wait condition is not satisfied within its deadline."""

    def __init__(
        self,
        description: str,
        timeout: float,
        elapsed: float,
        locator: Any = None,
        cause: Optional[BaseException] = None,
    ):
        self.description = description
        self.timeout = timeout
        self.elapsed = elapsed
        self.locator = locator
        self.cause = cause
        message = (
            f"Timed out after {elapsed:.2f}s (limit {timeout}s) "
            f"waiting for: {description}"
        )
        if cause is not None:
            message += f". Last error: {cause}"
        super().__init__(message)


class ElementNotFound(WaitTimeout):
    """No element matched the locator before the explicit wait elapsed."""

    def __init__(
        self,
        locator: Any,
        timeout: float,
        elapsed: float,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(
            f"presence of element located by {locator}",
            timeout,
            elapsed,
            locator=locator,
            cause=cause,
        )


class InteractionFailed(HarnessError):
    """An element action (click, type, select, gesture...) failed."""

    def __init__(self, action: str, locator: Any, cause: BaseException):
        self.action = action
        self.locator = locator
        self.cause = cause
        super().__init__(f"Failed to {action} element {locator}: {cause}")


class NavigationFailed(HarnessError):
    """Loading or reloading a page failed."""

    def __init__(self, url: Optional[str], cause: BaseException):
        self.url = url
        self.cause = cause
        target = url if url else "current page"
        super().__init__(f"Navigation failed for {target}: {cause}")


__all__ = [
    "HarnessError",
    "ConfigurationError",
    "UnsupportedBrowser",
    "InvalidEndpoint",
    "SessionCreationFailed",
    "NoActiveSession",
    "WaitTimeout",
    "ElementNotFound",
    "InteractionFailed",
    "NavigationFailed",
]
