import hmac

import pydantic
import structlog

from bbrecords.core.modules.share.codec import ShareTokenDecodeError, decode_payload, encode_payload
from bbrecords.core.modules.share.models import SHARE_TOKEN_DURATION_MS, ShareTokenData, ShareTokenStatus
from bbrecords.errors import ValidationError
from bbrecords.utils import Clock, now_ms, token_preview

logger = structlog.get_logger(__name__)

TOKEN_MISSING = "Token não fornecido"
TOKEN_MALFORMED = "Token malformado"
TOKEN_EXPIRED = "Token expirado"
TOKEN_CORRUPTED = "Token inválido ou corrompido"

REQUIRED_FIELDS = ("patientId", "password", "expiresAt")


class ShareService:
    """Issues and checks password-protected, read-only links to one patient's record.

    Tokens are self-contained: nothing is stored when a token is issued and a
    token stays usable until it expires.
    """

    def __init__(self, clock: Clock = now_ms) -> None:
        self._clock = clock

    def generate_share_token(self, patient_id: str, password: str) -> str:
        """Create a token granting read access to `patient_id` for thirty days."""
        patient_id = patient_id.strip()
        password = password.strip()
        if not patient_id:
            raise ValidationError("Patient id is required")
        if not password:
            raise ValidationError("Share password is required")

        timestamp = self._clock()
        data = ShareTokenData(
            patient_id=patient_id,
            timestamp=timestamp,
            password=password,
            expires_at=timestamp + SHARE_TOKEN_DURATION_MS,
        )
        logger.info("share_token_generated", patient_id=patient_id, expires_at=data.expires_at)
        return encode_payload(data.model_dump(by_alias=True))

    def decode_token(self, token: str) -> ShareTokenData | None:
        """Decode a token without checking password or expiry."""
        try:
            return ShareTokenData.model_validate(decode_payload(token))
        except (ShareTokenDecodeError, pydantic.ValidationError):
            return None

    def validate_share_token(self, token: str, password: str) -> ShareTokenData | None:
        """Return the token payload if `password` unlocks an unexpired token, else None.

        Callers get no hint about which check failed.
        """
        log = logger.bind(token=token_preview(token))
        data = self.decode_token(token)
        if data is None:
            log.info("share_token_rejected", reason="malformed")
            return None
        if not hmac.compare_digest(data.password.strip().encode("utf-8"), password.strip().encode("utf-8")):
            log.info("share_token_rejected", reason="wrong_password")
            return None
        if data.is_expired(self._clock()):
            log.info("share_token_rejected", reason="expired")
            return None
        return data

    def is_token_valid(self, token: str | None) -> ShareTokenStatus:
        """Structural check used before asking for a password."""
        if not token:
            return ShareTokenStatus(valid=False, error=TOKEN_MISSING)
        try:
            payload = decode_payload(token)
        except ShareTokenDecodeError:
            logger.debug("share_token_undecodable", token=token_preview(token))
            return ShareTokenStatus(valid=False, error=TOKEN_CORRUPTED)

        if not all(payload.get(name) for name in REQUIRED_FIELDS):
            return ShareTokenStatus(valid=False, error=TOKEN_MALFORMED)
        expires_at = payload["expiresAt"]
        if not isinstance(expires_at, int | float) or isinstance(expires_at, bool):
            return ShareTokenStatus(valid=False, error=TOKEN_MALFORMED)
        if self._clock() > expires_at:
            return ShareTokenStatus(valid=False, error=TOKEN_EXPIRED)
        return ShareTokenStatus(valid=True)
