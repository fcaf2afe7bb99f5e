from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SHARE_TOKEN_DURATION_MS = 30 * 24 * 60 * 60 * 1000
SHARE_PATH_PREFIX = "/share/"


class ShareTokenData(BaseModel):
    """Payload embedded in a share token. Timestamps are epoch milliseconds."""

    patient_id: str = Field(min_length=1)
    timestamp: int
    password: str = Field(min_length=1)
    expires_at: int = Field(gt=0)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def is_expired(self, now_ms: int) -> bool:
        return now_ms > self.expires_at


class ShareTokenStatus(BaseModel):
    """Outcome of the password-less structural token check."""

    valid: bool = Field(..., description="Whether the token decodes and has not expired")
    error: str | None = Field(None, description="Reason the token was rejected")


class ShareLink(BaseModel):
    """A freshly generated share token and its relative URL."""

    token: str
    url: str
    expires_at: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def for_token(cls, token: str, expires_at: int) -> "ShareLink":
        return cls(token=token, url=f"{SHARE_PATH_PREFIX}{token}", expires_at=expires_at)
