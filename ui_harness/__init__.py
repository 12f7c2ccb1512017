"""
================================================================================
UI Harness
================================================================================

Playwright-based UI test harness.

Components:
    - config_loader: YAML + environment configuration provider
    - session: Session model and per-execution-unit registry
    - driver_factory: Session creation, configuration and teardown
    - element_actions: Wait-then-act element interactions
    - reporting: Allure-backed report events
    - screenshots: Screenshot capture for the active session
    - page_base: Base page object
    - pytest_plugin: Per-test session fixtures and hooks

Author: Automation Team
License: MIT
================================================================================
"""

from .config_loader import ConfigProvider
from .driver_factory import SessionFactory
from .element_actions import ElementActions
from .exceptions import (
    ConfigurationError,
    ElementNotFound,
    HarnessError,
    InteractionFailed,
    InvalidEndpoint,
    NavigationFailed,
    NoActiveSession,
    SessionCreationFailed,
    UnsupportedBrowser,
    WaitTimeout,
)
from .locators import Locator
from .page_base import BasePage
from .reporting import AllureReporter, Reporter
from .screenshots import ScreenshotCapture
from .session import BrowserKind, Session, SessionRegistry
from .waits import WaitContext

__version__ = "1.0.0"

__all__ = [
    "ConfigProvider",
    "SessionFactory",
    "ElementActions",
    "Locator",
    "BasePage",
    "Reporter",
    "AllureReporter",
    "ScreenshotCapture",
    "BrowserKind",
    "Session",
    "SessionRegistry",
    "WaitContext",
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
