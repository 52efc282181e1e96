"""Bounded retry policy with fixed or exponential backoff and an injectable sleep."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], None]


@dataclass(frozen=True)
class RetryPolicy:
    """
    How many times to try and how long to wait in between.

    multiplier=1.0 gives a fixed delay; >1.0 grows the delay per attempt,
    capped by max_delay when set.
    """

    max_attempts: int
    delay: float
    multiplier: float = 1.0
    max_delay: float | None = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay < 0:
            raise ValueError("delay must not be negative")
        if self.multiplier < 1:
            raise ValueError("multiplier must be at least 1")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after the given 1-based failed attempt."""
        wait = self.delay * (self.multiplier ** (attempt - 1))
        if self.max_delay is not None:
            wait = min(wait, self.max_delay)
        return wait


def retry_call(
    func: Callable[[], T],
    policy: RetryPolicy,
    *,
    retry_on: tuple[type[BaseException], ...],
    sleep: Sleep = time.sleep,
    description: str = "operation",
) -> T:
    """
    Call func until it returns, retrying on the given exception types.

    The last exception is re-raised unchanged once the attempt budget is spent.
    """
    for attempt in range(1, policy.max_attempts + 1):
        try:
            return func()
        except retry_on as e:
            remaining = policy.max_attempts - attempt
            if remaining == 0:
                logger.error(
                    "%s failed after %s attempts: %s", description, attempt, e
                )
                raise
            wait = policy.delay_for(attempt)
            logger.warning(
                "%s failed (attempt %s/%s, retries left: %s): %s; retrying in %.1fs",
                description,
                attempt,
                policy.max_attempts,
                remaining,
                e,
                wait,
            )
            sleep(wait)
    # max_attempts >= 1 guarantees the loop returns or raises.
    raise AssertionError("unreachable")
