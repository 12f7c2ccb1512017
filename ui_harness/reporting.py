"""
================================================================================
Reporting Gateway
================================================================================

Structured report events emitted by the interaction layer and the test
lifecycle.

Features:
- Reporter base class that only logs (usable without a report backend)
- AllureReporter recording events as Allure steps and attachments
- Attachment helpers for text / JSON / PNG

================================================================================
"""

from pathlib import Path
from typing import Optional, Union

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_png(path: Union[str, Path], name: str = "Screenshot"):
    """
    Attach a PNG file to Allure report.

    Args:
        path: Image file path
        name: Attachment name
    """
    allure.attach.file(
        str(path),
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


# ================================================================================
# Reporters
# ================================================================================

class Reporter:
    """
    Sink for report events.

    The base implementation writes every event to the log only. Subclasses
    add a report backend; none of the methods is expected to raise.
    """

    def log_info(self, message: str) -> None:
        logger.info(message)

    def log_pass(self, message: str) -> None:
        logger.info(f"PASS: {message}")

    def log_fail(self, message: str) -> None:
        logger.error(f"FAIL: {message}")

    def log_warning(self, message: str) -> None:
        logger.warning(message)

    def log_skip(self, message: str) -> None:
        logger.info(f"SKIP: {message}")

    def attach_screenshot(self, path: Union[str, Path], name: str = "Screenshot") -> None:
        logger.info(f"Screenshot '{name}': {path}")


class AllureReporter(Reporter):
    """
    Records report events in the Allure results of the running test.

    Info and pass events become passed steps; failures, warnings and skips
    become text attachments; screenshots become PNG attachments. Backend
    errors are logged and swallowed.
    """

    def _safely(self, func, *args) -> None:
        try:
            func(*args)
        except Exception as e:
            logger.warning(f"Failed to record report event: {e}")

    def log_info(self, message: str) -> None:
        logger.debug(message)
        self._safely(self._step, message)

    def log_pass(self, message: str) -> None:
        logger.info(f"PASS: {message}")
        self._safely(self._step, f"PASS: {message}")

    def log_fail(self, message: str) -> None:
        logger.error(f"FAIL: {message}")
        self._safely(attach_text, message, "Failure")

    def log_warning(self, message: str) -> None:
        logger.warning(message)
        self._safely(attach_text, message, "Warning")

    def log_skip(self, message: str) -> None:
        logger.info(f"SKIP: {message}")
        self._safely(attach_text, message, "Skipped")

    def attach_screenshot(self, path: Union[str, Path], name: str = "Screenshot") -> None:
        if path is None:
            return
        logger.debug(f"Attaching screenshot '{name}': {path}")
        self._safely(attach_png, path, name)

    @staticmethod
    def _step(title: str) -> None:
        with allure.step(title):
            pass


def safe_report(reporter: Optional[Reporter], event: str, message: str) -> None:
    """
    Emit one event; reporter failures never reach the caller.

    Args:
        reporter: Target reporter (ignored when None)
        event: Reporter method name, e.g. "log_info"
        message: Event message
    """
    if reporter is None:
        return
    try:
        getattr(reporter, event)(message)
    except Exception as e:
        logger.warning(f"Reporter raised on {event}: {e}")


__all__ = [
    "Reporter",
    "AllureReporter",
    "safe_report",
    "attach_text",
    "attach_png",
]
