"""Restart policy for the Telegram transport loop."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

LOGGER = logging.getLogger(__name__)


class RetryPolicy(Protocol):
    def next_delay(self, attempt: int) -> float | None:
        """Seconds to wait before restarting after failed ``attempt``; None gives up."""


@dataclass(frozen=True, slots=True)
class InfiniteRetry:
    """Restart forever with a fixed delay (zero by default: no backoff, no cap)."""

    delay: float = 0.0

    def next_delay(self, attempt: int) -> float | None:
        return self.delay


@dataclass(frozen=True, slots=True)
class BoundedRetry:
    """Exponential backoff that gives up after ``max_attempts`` failures."""

    max_attempts: int = 5
    base_delay: float = 1.0
    max_delay: float = 60.0

    def next_delay(self, attempt: int) -> float | None:
        if attempt >= self.max_attempts:
            return None
        return min(self.base_delay * 2 ** (attempt - 1), self.max_delay)


def run_supervised(
    run_once: Callable[[], None],
    policy: RetryPolicy,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Call ``run_once`` until it returns normally, restarting it after exceptions.

    When the policy gives up, the last exception is re-raised.
    """
    failures = 0
    while True:
        try:
            run_once()
        except Exception as exc:  # broad: any transport failure restarts the loop
            failures += 1
            delay = policy.next_delay(failures)
            if delay is None:
                LOGGER.error("Transport failed %s times, giving up: %s", failures, exc)
                raise
            LOGGER.exception(
                "Transport loop failed (attempt %s), restarting in %ss: %s", failures, delay, exc
            )
            if delay > 0:
                sleep(delay)
            continue

        LOGGER.info("Transport loop stopped")
        return
