"""Minimum-interval rate limiting for outgoing API calls.

The client consults a RateLimiter before each request. The limiter sleeps
just long enough to keep consecutive calls at least ``min_interval_ms``
apart. It performs no retries; a failed call is reported to the caller.
"""

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RateLimiter:
    """Enforce a minimum delay between consecutive calls.

    Example:
        >>> limiter = RateLimiter(500)
        >>> limiter.wait()  # returns immediately
        >>> limiter.wait()  # sleeps ~500ms
    """

    def __init__(
        self,
        min_interval_ms: int = 0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the limiter.

        Args:
            min_interval_ms: Minimum milliseconds between calls (0 disables)
            clock: Monotonic clock returning seconds
            sleep: Function used to wait, in seconds
        """
        if min_interval_ms < 0:
            raise ValueError("min_interval_ms must be >= 0")
        self.min_interval_ms = min_interval_ms
        self._clock = clock
        self._sleep = sleep
        self._last_call: Optional[float] = None

    def wait(self) -> float:
        """Block until the next call is allowed and record it.

        Returns:
            Seconds slept (0.0 when no wait was needed)
        """
        if self.min_interval_ms <= 0:
            return 0.0

        delay = 0.0
        now = self._clock()
        if self._last_call is not None:
            elapsed = now - self._last_call
            interval = self.min_interval_ms / 1000.0
            if elapsed < interval:
                delay = interval - elapsed
                logger.debug(f"Rate limiting: waiting {delay * 1000:.0f}ms")
                self._sleep(delay)

        self._last_call = self._clock()
        return delay
