"""
================================================================================
UI Harness Pytest Plugin
================================================================================

Fixtures and hooks wiring the harness into pytest.

Key Features:
- One configuration / registry / reporter per test process
- One browser session per test (execution unit), torn down unconditionally
- Screenshot on failure (and optionally on pass) before teardown
- Test lifecycle logging

Enable it from a conftest.py:

    pytest_plugins = ["ui_harness.pytest_plugin"]

================================================================================
"""

import os
from typing import Generator

import pytest
from loguru import logger

from ui_harness.common import init_logger
from ui_harness.config_loader import ConfigProvider
from ui_harness.driver_factory import SessionFactory
from ui_harness.element_actions import ElementActions
from ui_harness.reporting import AllureReporter, Reporter, safe_report
from ui_harness.screenshots import ScreenshotCapture
from ui_harness.session import Session, SessionRegistry


# ================================================================================
# Pytest Configuration
# ================================================================================

def pytest_configure(config):
    """Register harness markers and initialize logging."""
    config.addinivalue_line(
        "markers", "ui: mark test as UI test"
    )
    config.addinivalue_line(
        "markers", "browser(name): run the test's session on a specific browser"
    )
    init_logger(config=ConfigProvider())


def execution_unit_id(nodeid: str) -> str:
    """Execution unit for a test: xdist worker plus test node id."""
    worker = os.environ.get("PYTEST_XDIST_WORKER", "master")
    return f"{worker}::{nodeid}"


# ================================================================================
# Harness Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def harness_config() -> ConfigProvider:
    """Configuration provider shared by every test in the process."""
    return ConfigProvider()


@pytest.fixture(scope="session")
def session_registry() -> SessionRegistry:
    """Registry of live sessions keyed by execution unit."""
    return SessionRegistry()


@pytest.fixture(scope="session")
def harness_reporter() -> Reporter:
    return AllureReporter()


@pytest.fixture(scope="session")
def session_factory(
    harness_config: ConfigProvider,
    session_registry: SessionRegistry,
) -> SessionFactory:
    return SessionFactory(harness_config, session_registry)


@pytest.fixture(scope="session")
def screenshot_capture(session_registry: SessionRegistry) -> ScreenshotCapture:
    return ScreenshotCapture(session_registry)


@pytest.fixture
def execution_unit(request) -> str:
    """Identifier isolating this test's session from concurrent tests."""
    return execution_unit_id(request.node.nodeid)


@pytest.fixture
def browser_session(
    request,
    harness_config: ConfigProvider,
    harness_reporter: Reporter,
    session_factory: SessionFactory,
    screenshot_capture: ScreenshotCapture,
    execution_unit: str,
) -> Generator[Session, None, None]:
    """
    Function-scoped browser session.

    The browser comes from a `browser(name)` marker, else configuration.
    Teardown always runs; screenshots are taken while the session is alive.
    """
    marker = request.node.get_closest_marker("browser")
    browser = marker.args[0] if marker and marker.args else None

    with session_factory.session_scope(execution_unit, browser) as session:
        safe_report(
            harness_reporter,
            "log_info",
            f"Test started with browser: {session.browser_kind.value}",
        )
        yield session
        capture_outcome_screenshot(
            request.node,
            execution_unit,
            harness_config,
            harness_reporter,
            screenshot_capture,
        )


@pytest.fixture
def element_actions(
    browser_session: Session,
    session_registry: SessionRegistry,
    harness_reporter: Reporter,
    execution_unit: str,
) -> ElementActions:
    """Interaction layer bound to this test's session."""
    return ElementActions(session_registry, execution_unit, harness_reporter)


def capture_outcome_screenshot(
    item,
    unit: str,
    config: ConfigProvider,
    reporter: Reporter,
    capture: ScreenshotCapture,
) -> None:
    """Screenshot the finished test according to configuration."""
    report = getattr(item, "rep_call", None)
    if report is None:
        return

    try:
        if report.failed and config.get_bool("screenshot.on.failure", True):
            path = capture.take_failure(unit, item.name)
            if path is not None:
                reporter.attach_screenshot(path, "Failure Screenshot")
        elif report.passed and config.get_bool("report.screenshots.on.pass"):
            path = capture.take(unit, f"{item.name}_PASSED")
            if path is not None:
                reporter.attach_screenshot(path, "Pass Screenshot")
    except Exception as e:
        # Log but don't fail if screenshot capture fails
        logger.warning(f"Failed to capture screenshot for {item.name}: {e}")


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Keep each phase's report on the item for fixture teardown."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


def pytest_runtest_logreport(report):
    """Log test outcomes."""
    if report.when == "setup" and report.skipped:
        logger.warning(f"Test SKIPPED: {report.nodeid}")
    elif report.when == "call":
        if report.passed:
            logger.info(f"Test PASSED: {report.nodeid}")
        elif report.failed:
            logger.error(f"Test FAILED: {report.nodeid}")
            if report.longreprtext:
                logger.error(f"Failure reason: {report.longreprtext.splitlines()[-1]}")
        elif report.skipped:
            logger.warning(f"Test SKIPPED: {report.nodeid}")
