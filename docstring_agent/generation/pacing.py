"""Spacing between sequential generation requests."""

from __future__ import annotations

import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)


class RequestPacer:
    """Fixed delay between requests with multiplicative backoff on failure.

    The first request is never delayed.  ``record_failure`` multiplies the
    delay by ``backoff_factor`` up to ``max_delay``; ``record_success``
    resets it to the base delay.
    """

    def __init__(
        self,
        delay: float = 0.5,
        backoff_factor: float = 2.0,
        max_delay: float = 8.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if delay < 0 or max_delay < 0 or backoff_factor < 1:
            raise ValueError("delays must be >= 0 and backoff_factor >= 1")
        self.delay = delay
        self.backoff_factor = backoff_factor
        self.max_delay = max(max_delay, delay)
        self.current_delay = delay
        self._sleep = sleep
        self._requests = 0

    def wait(self) -> None:
        if self._requests and self.current_delay > 0:
            logger.debug("[Pacer] Sleeping %.2fs before request %d",
                         self.current_delay, self._requests + 1)
            self._sleep(self.current_delay)
        self._requests += 1

    def record_success(self) -> None:
        self.current_delay = self.delay

    def record_failure(self) -> None:
        self.current_delay = min(self.max_delay, self.current_delay * self.backoff_factor)
