# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# Bounded polling used by the interaction layer's wait phase.
#
# Key Features:
#   - Deadline-based polling on a monotonic clock
#   - Exponential backoff between attempts, capped by the remaining time
#   - Playwright errors raised by a condition count as "not yet"
#   - Injectable clock/sleep for deterministic tests
#
# Usage:
#   wait = WaitContext(timeout=20)
#   wait.until(lambda: page.locator("#q").count() > 0, "search box present")
#
# ================================================================================

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from .exceptions import WaitTimeout


@dataclass(frozen=True)
class PollConfig:
    """
    Polling cadence for wait operations.

    Attributes:
        initial_interval: First sleep between attempts in seconds
        multiplier: Multiplier for exponential backoff
        max_interval: Maximum sleep between attempts
    """
    initial_interval: float = 0.1
    multiplier: float = 1.5
    max_interval: float = 1.0


DEFAULT_POLL = PollConfig()

# Errors a condition may raise while the page is still settling
IGNORED_EXCEPTIONS = (PlaywrightError,)


def calculate_next_interval(current_interval: float, config: PollConfig) -> float:
    """Next sleep interval with exponential backoff."""
    return min(current_interval * config.multiplier, config.max_interval)


def poll_until(
    condition: Callable[[], Any],
    timeout: float,
    description: str = "condition",
    config: Optional[PollConfig] = None,
    locator: Any = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> Any:
    """
    Poll a condition until it returns a truthy value or the deadline passes.

    The condition is always evaluated at least once, so a zero timeout is a
    single check. The timeout is only raised once the full duration elapsed.

    Args:
        condition: Zero-argument callable; truthy result ends the wait
        timeout: Maximum wait in seconds
        description: Human-readable description for logging and errors
        config: Polling cadence (DEFAULT_POLL if None)
        locator: Locator being waited on, carried into WaitTimeout
        clock: Monotonic time source
        sleep: Sleep function

    Returns:
        The condition's truthy result

    Raises:
        WaitTimeout: If the deadline passes without success
    """
    config = config or DEFAULT_POLL
    timeout = max(float(timeout), 0.0)

    start = clock()
    deadline = start + timeout
    interval = config.initial_interval
    attempt = 0
    last_error: Optional[BaseException] = None

    while True:
        attempt += 1
        try:
            result = condition()
            if result:
                logger.debug(
                    f"Wait satisfied after {attempt} attempt(s) "
                    f"({clock() - start:.2f}s): {description}"
                )
                return result
        except IGNORED_EXCEPTIONS as e:
            last_error = e

        now = clock()
        if now >= deadline:
            raise WaitTimeout(
                description,
                timeout,
                now - start,
                locator=locator,
                cause=last_error,
            )

        sleep(min(interval, deadline - now))
        interval = calculate_next_interval(interval, config)


class WaitContext:
    """
    Explicit-wait duration bound to one browser session.

    Created together with its Session and never outlives it.
    """

    def __init__(
        self,
        timeout: float,
        poll: Optional[PollConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            timeout: Default explicit-wait duration in seconds
            poll: Polling cadence
            clock: Monotonic time source
            sleep: Sleep function
        """
        if timeout < 0:
            raise ValueError(f"Explicit wait must be >= 0, got {timeout}")
        self.timeout = float(timeout)
        self.poll = poll or DEFAULT_POLL
        self._clock = clock
        self._sleep = sleep

    def until(
        self,
        condition: Callable[[], Any],
        description: str = "condition",
        timeout: Optional[float] = None,
        locator: Any = None,
    ) -> Any:
        """
        Wait for condition using this context's duration unless overridden.

        Args:
            condition: Zero-argument callable
            description: Human-readable description
            timeout: Override for the default duration
            locator: Locator carried into WaitTimeout

        Returns:
            The condition's truthy result
        """
        return poll_until(
            condition,
            self.timeout if timeout is None else timeout,
            description=description,
            config=self.poll,
            locator=locator,
            clock=self._clock,
            sleep=self._sleep,
        )

    def __repr__(self) -> str:
        return f"WaitContext(timeout={self.timeout})"


__all__ = [
    "PollConfig",
    "DEFAULT_POLL",
    "WaitContext",
    "poll_until",
    "calculate_next_interval",
]
