import hmac
from typing import Protocol


def check_password(candidate: str, configured: str | None) -> bool:
    """Compare a submitted password with the configured one after trimming both.

    An absent or blank configured password never matches.
    """
    if not configured or not configured.strip():
        return False
    return hmac.compare_digest(candidate.strip().encode("utf-8"), configured.strip().encode("utf-8"))


class PasswordVerifier(Protocol):
    """Source of truth for staff credentials."""

    def is_configured(self) -> bool: ...

    def verify(self, candidate: str) -> bool: ...


class SharedPasswordVerifier:
    """Single application-wide password shared by all staff members."""

    def __init__(self, configured: str | None) -> None:
        self._configured = configured

    def is_configured(self) -> bool:
        return bool(self._configured and self._configured.strip())

    def verify(self, candidate: str) -> bool:
        return check_password(candidate, self._configured)
