import jwt
import pydantic
import structlog

from bbrecords.core.modules.session.models import SESSION_DURATION_MS, SessionCredential, SessionToken
from bbrecords.core.modules.session.verifier import PasswordVerifier
from bbrecords.errors import ConfigurationError
from bbrecords.utils import Clock, now_ms

logger = structlog.get_logger(__name__)

ALGORITHM = "HS256"


class SessionService:
    """Issues and verifies stateless, signed staff sessions."""

    def __init__(self, secret: str | None, verifier: PasswordVerifier, clock: Clock = now_ms) -> None:
        self._secret = secret
        self._verifier = verifier
        self._clock = clock

    @property
    def verifier(self) -> PasswordVerifier:
        return self._verifier

    def _secret_key(self) -> str:
        if not self._secret:
            raise ConfigurationError("Session secret is not configured")
        return self._secret

    def create_session(self) -> SessionToken:
        """Sign a credential valid for seven days from now."""
        created_at = self._clock()
        credential = SessionCredential(
            authenticated=True,
            created_at=created_at,
            expires_at=created_at + SESSION_DURATION_MS,
        )
        payload = credential.model_dump(by_alias=True)
        payload["iat"] = created_at // 1000
        payload["exp"] = credential.expires_at // 1000
        return SessionToken(jwt.encode(payload, self._secret_key(), algorithm=ALGORITHM))

    def validate_session(self, token: str | None) -> SessionCredential | None:
        """Return the credential carried by `token`, or None if it is not a valid session.

        Expiry is checked against the service clock, so the library's own
        time-based claim checks are turned off.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret_key(),
                algorithms=[ALGORITHM],
                options={"verify_exp": False, "verify_iat": False, "verify_nbf": False},
            )
            credential = SessionCredential.model_validate(payload)
        except ConfigurationError:
            logger.error("session_secret_missing")
            return None
        except jwt.InvalidTokenError as e:
            logger.debug("session_rejected", reason="invalid_token", error=str(e))
            return None
        except pydantic.ValidationError:
            logger.debug("session_rejected", reason="malformed_payload")
            return None

        if not credential.authenticated:
            logger.debug("session_rejected", reason="not_authenticated")
            return None
        if credential.is_expired(self._clock()):
            logger.debug("session_rejected", reason="expired")
            return None
        return credential
