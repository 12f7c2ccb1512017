"""
================================================================================
Screenshot Capture
================================================================================

Produces PNG artifacts from the active session of an execution unit.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Hashable, Optional, Union

from loguru import logger

from .common import ensure_directory, safe_filename
from .session import SessionRegistry


# Default output directory for screenshots
SCREENSHOT_DIR = Path("reports") / "screenshots"


class ScreenshotCapture:
    """
    Screenshot gateway for the surrounding test harness.

    Usage:
        capture = ScreenshotCapture(registry)
        path = capture.take_failure(unit, "test_search")
    """

    def __init__(
        self,
        registry: SessionRegistry,
        directory: Union[str, Path] = SCREENSHOT_DIR,
        full_page: bool = False,
    ):
        self.registry = registry
        self.directory = Path(directory)
        self.full_page = full_page

    def take(self, unit: Hashable, name: str) -> Optional[Path]:
        """
        Capture the unit's current page.

        Args:
            unit: Execution unit whose session is captured
            name: Base name; non-alphanumerics become underscores

        Returns:
            Path of the PNG, or None if there is no active session or
            the capture failed
        """
        session = self.registry.get(unit)
        if session is None or session.page is None:
            logger.warning(f"No active session for unit '{unit}', cannot take screenshot")
            return None

        ensure_directory(str(self.directory))
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.directory / f"{safe_filename(name)}_{timestamp}.png"

        try:
            session.page.screenshot(path=str(filepath), full_page=self.full_page)
        except Exception as e:
            logger.error(f"Failed to take screenshot: {e}")
            return None

        logger.info(f"Screenshot saved: {filepath}")
        return filepath

    def take_failure(self, unit: Hashable, test_name: str) -> Optional[Path]:
        """Capture a screenshot for a failed test."""
        return self.take(unit, f"FAILED_{test_name}")


__all__ = [
    "ScreenshotCapture",
    "SCREENSHOT_DIR",
]
