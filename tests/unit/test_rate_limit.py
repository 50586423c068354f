"""Unit tests for wikijs_client.rate_limit module."""

import pytest
from unittest.mock import Mock

from src.wikijs_client.rate_limit import RateLimiter


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.now += seconds


class TestRateLimiter:
    """Test cases for RateLimiter."""

    def test_negative_interval_rejected(self):
        """A negative interval raises ValueError."""
        with pytest.raises(ValueError):
            RateLimiter(-1)

    def test_disabled_never_sleeps(self):
        """An interval of 0 never sleeps."""
        sleep = Mock()
        limiter = RateLimiter(0, sleep=sleep)

        assert limiter.wait() == 0.0
        assert limiter.wait() == 0.0
        sleep.assert_not_called()

    def test_first_call_is_immediate(self):
        """The first call does not wait."""
        clock = FakeClock()
        limiter = RateLimiter(500, clock=clock, sleep=clock.sleep)

        assert limiter.wait() == 0.0

    def test_second_call_waits_remaining_interval(self):
        """A call 200ms after the last one waits the remaining 300ms."""
        clock = FakeClock()
        limiter = RateLimiter(500, clock=clock, sleep=clock.sleep)

        limiter.wait()
        clock.now += 0.2
        delay = limiter.wait()

        assert delay == pytest.approx(0.3)

    def test_no_wait_after_interval_elapsed(self):
        """No wait when the interval already passed."""
        clock = FakeClock()
        sleep = Mock()
        limiter = RateLimiter(500, clock=clock, sleep=sleep)

        limiter.wait()
        clock.now += 1.0

        assert limiter.wait() == 0.0
        sleep.assert_not_called()
