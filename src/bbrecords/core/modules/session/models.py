"""Session credential models."""

from typing import NewType

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

SessionToken = NewType("SessionToken", str)

SESSION_COOKIE_NAME = "bb-session"
SESSION_MAX_AGE_SECONDS = 7 * 24 * 60 * 60
SESSION_DURATION_MS = SESSION_MAX_AGE_SECONDS * 1000


class SessionCredential(BaseModel):
    """Claims carried by a signed session token.

    Timestamps are milliseconds since the epoch. The server keeps no session
    store, validity is decided by the signature and `expires_at` alone.
    """

    authenticated: bool
    created_at: int
    expires_at: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def is_expired(self, now_ms: int) -> bool:
        return now_ms > self.expires_at
