"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Browser-backed suites. Harness fixtures (browser_session, element_actions)
come from ui_harness.pytest_plugin; this module skips the suite when no
browser can be launched on this machine.

================================================================================
"""

import pytest
from loguru import logger

from ui_harness.driver_factory import SessionFactory
from ui_harness.exceptions import SessionCreationFailed


@pytest.fixture(scope="session", autouse=True)
def _browser_available(session_factory: SessionFactory) -> None:
    """Launch and close one session up front; skip the suite if that fails."""
    try:
        session_factory.create("ui-preflight")
    except SessionCreationFailed as e:
        logger.warning(f"Browser unavailable, skipping UI suite: {e}")
        pytest.skip(f"Browser unavailable: {e.cause}")
    finally:
        session_factory.destroy("ui-preflight")
