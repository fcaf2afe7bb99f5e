"""Shared pytest fixtures."""

import pytest

from bbrecords.config import Config
from bbrecords.core.modules.session.service import SessionService
from bbrecords.core.modules.session.verifier import SharedPasswordVerifier
from bbrecords.core.modules.share.service import ShareService

START_MS = 1_760_000_000_000
SECRET = "test-session-secret-with-32-bytes-or-more"
APP_PASSWORD = "secret123"


class FakeClock:
    """Controllable millisecond clock."""

    def __init__(self, start: int = START_MS) -> None:
        self.current = start

    def __call__(self) -> int:
        return self.current

    def advance(self, ms: int) -> None:
        self.current += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session_service(clock):
    return SessionService(SECRET, SharedPasswordVerifier(APP_PASSWORD), clock=clock)


@pytest.fixture
def share_service(clock):
    return ShareService(clock=clock)


@pytest.fixture
def config():
    """Configuration for an app that is never started (no database I/O)."""
    return Config(
        database_url="mongodb://localhost:27017/bbrecords_test",
        session_secret=SECRET,
        app_password=APP_PASSWORD,
        cron_secret="cron-secret",
    )


@pytest.fixture
def secret():
    return SECRET
