from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], int]


def now() -> datetime:
    return datetime.now(UTC)


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(now().timestamp() * 1000)


def token_preview(token: str, length: int = 20) -> str:
    """Shorten a token for log output."""
    return token[:length] + "..." if len(token) > length else token
