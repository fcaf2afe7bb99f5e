import time
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from bbrecords.errors import TooManyAttemptsError

logger = structlog.get_logger(__name__)


@dataclass
class FailedAttempts:
    """Failed login attempts of one client inside the current window."""

    window_start: float
    count: int = 0
    blocked_until: float = field(default=0.0)


class LoginThrottle:
    """Fixed-window limit on failed login attempts per client key.

    After `max_attempts` failures inside `window_seconds` the client is
    blocked until the window ends. `max_attempts == 0` disables the policy.
    """

    def __init__(self, max_attempts: int, window_seconds: int, clock: Callable[[], float] = time.monotonic) -> None:
        self._max_attempts = max_attempts
        self._window_seconds = window_seconds
        self._clock = clock
        self._attempts: dict[str, FailedAttempts] = {}

    @property
    def enabled(self) -> bool:
        return self._max_attempts > 0

    def check(self, key: str) -> None:
        """Raise TooManyAttemptsError if the client is currently blocked."""
        if not self.enabled:
            return
        entry = self._attempts.get(key)
        if entry is None:
            return
        now = self._clock()
        if now < entry.blocked_until:
            raise TooManyAttemptsError
        if now - entry.window_start >= self._window_seconds:
            del self._attempts[key]

    def record_failure(self, key: str) -> None:
        if not self.enabled:
            return
        now = self._clock()
        self._prune(now)
        entry = self._attempts.get(key)
        if entry is None or now - entry.window_start >= self._window_seconds:
            entry = FailedAttempts(window_start=now)
            self._attempts[key] = entry
        entry.count += 1
        if entry.count >= self._max_attempts:
            entry.blocked_until = entry.window_start + self._window_seconds
            logger.warning("login_throttled", client=key, attempts=entry.count)

    def reset(self, key: str) -> None:
        self._attempts.pop(key, None)

    @property
    def tracked_clients(self) -> int:
        return len(self._attempts)

    def _prune(self, now: float) -> None:
        """Forget clients whose window has ended and who are not blocked."""
        self._attempts = {
            key: entry
            for key, entry in self._attempts.items()
            if now - entry.window_start < self._window_seconds or now < entry.blocked_until
        }
