"""Tests for the failed-login throttle."""

import pytest

from bbrecords.core.modules.session.throttle import LoginThrottle
from bbrecords.errors import TooManyAttemptsError


class FakeMonotonic:
    def __init__(self) -> None:
        self.current = 100.0

    def __call__(self) -> float:
        return self.current


class TestLoginThrottle:
    """Tests for LoginThrottle."""

    def test_disabled_never_blocks(self):
        """Test that max_attempts=0 allows unlimited retries."""
        throttle = LoginThrottle(0, 60)
        for _ in range(100):
            throttle.record_failure("10.0.0.1")
        throttle.check("10.0.0.1")
        assert throttle.enabled is False

    def test_blocks_after_max_failures(self):
        clock = FakeMonotonic()
        throttle = LoginThrottle(3, 60, clock=clock)
        for _ in range(2):
            throttle.record_failure("10.0.0.1")
            throttle.check("10.0.0.1")
        throttle.record_failure("10.0.0.1")
        with pytest.raises(TooManyAttemptsError):
            throttle.check("10.0.0.1")

    def test_block_is_per_client(self):
        clock = FakeMonotonic()
        throttle = LoginThrottle(1, 60, clock=clock)
        throttle.record_failure("10.0.0.1")
        with pytest.raises(TooManyAttemptsError):
            throttle.check("10.0.0.1")
        throttle.check("10.0.0.2")

    def test_block_lifts_after_window(self):
        clock = FakeMonotonic()
        throttle = LoginThrottle(1, 60, clock=clock)
        throttle.record_failure("10.0.0.1")
        clock.current += 60
        throttle.check("10.0.0.1")

    def test_failures_outside_window_do_not_accumulate(self):
        clock = FakeMonotonic()
        throttle = LoginThrottle(2, 60, clock=clock)
        throttle.record_failure("10.0.0.1")
        clock.current += 61
        throttle.record_failure("10.0.0.1")
        throttle.check("10.0.0.1")

    def test_reset_clears_failures(self):
        clock = FakeMonotonic()
        throttle = LoginThrottle(2, 60, clock=clock)
        throttle.record_failure("10.0.0.1")
        throttle.reset("10.0.0.1")
        throttle.record_failure("10.0.0.1")
        throttle.check("10.0.0.1")

    def test_expired_clients_are_forgotten(self):
        """Test that a failure from one client prunes others whose window has ended."""
        clock = FakeMonotonic()
        throttle = LoginThrottle(5, 60, clock=clock)
        for n in range(100):
            throttle.record_failure(f"10.0.1.{n}")
        assert throttle.tracked_clients == 100

        clock.current += 60
        throttle.record_failure("10.0.0.1")
        assert throttle.tracked_clients == 1

    def test_blocked_client_kept_until_block_ends(self):
        clock = FakeMonotonic()
        throttle = LoginThrottle(1, 60, clock=clock)
        throttle.record_failure("10.0.0.1")
        clock.current += 30
        throttle.record_failure("10.0.0.2")
        assert throttle.tracked_clients == 2
        with pytest.raises(TooManyAttemptsError):
            throttle.check("10.0.0.1")
