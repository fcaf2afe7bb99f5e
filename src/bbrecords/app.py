from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog

from bbrecords.config import Config
from bbrecords.core.core import Core
from bbrecords.core.modules.heartbeat.models import DiagnosticsReport, HeartbeatResult
from bbrecords.core.modules.heartbeat.service import is_cron_authorized
from bbrecords.core.modules.patient.models import SharedRecord
from bbrecords.core.modules.session.models import SessionCredential, SessionToken
from bbrecords.core.modules.share.models import ShareLink, ShareTokenData, ShareTokenStatus
from bbrecords.errors import AuthenticationError, ConfigurationError, ValidationError

logger = structlog.get_logger(__name__)

WRONG_PASSWORD = "Senha incorreta"
SHARE_ACCESS_DENIED = "Senha incorreta ou link inválido/expirado"
SHARE_CREDENTIALS_REQUIRED = "Token e senha são obrigatórios"


class App:
    """Facade for all application operations, checks credentials before delegating to Core."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def validate_session(self, session_token: str | None) -> SessionCredential | None:
        return self._core.services.session.validate_session(session_token)

    def login(self, password: str, client: str) -> SessionToken:
        """Check the shared staff password and issue a session token.

        Raises ConfigurationError when no password is configured,
        AuthenticationError on a wrong password and TooManyAttemptsError
        while the client is throttled.
        """
        throttle = self._core.services.login_throttle
        session = self._core.services.session
        throttle.check(client)

        if not session.verifier.is_configured():
            logger.error("app_password_not_configured")
            raise ConfigurationError("Application password is not configured")

        if not session.verifier.verify(password):
            throttle.record_failure(client)
            logger.warning("login_failed", client=client)
            raise AuthenticationError(WRONG_PASSWORD)

        throttle.reset(client)
        token = session.create_session()
        logger.info("login_succeeded", client=client)
        return token

    def create_share_link(self, session_token: str | None, patient_id: str, password: str) -> ShareLink:
        """Issue a share link for one patient (staff only)."""
        self._ensure_authenticated(session_token)
        share = self._core.services.share
        token = share.generate_share_token(patient_id, password)
        data = share.decode_token(token)
        if data is None:
            raise RuntimeError("Generated share token does not decode")
        return ShareLink.for_token(token, data.expires_at)

    def check_share_token(self, token: str | None) -> ShareTokenStatus:
        return self._core.services.share.is_token_valid(token)

    async def open_shared_record(self, token: str, password: str) -> tuple[ShareTokenData, SharedRecord]:
        """Unlock a share token and load the single patient it grants access to."""
        if not token or not password.strip():
            raise ValidationError(SHARE_CREDENTIALS_REQUIRED)
        data = self._core.services.share.validate_share_token(token, password)
        if data is None:
            raise AuthenticationError(SHARE_ACCESS_DENIED)
        record = await self._core.services.patient.get_shared_record(data.patient_id)
        return data, record

    async def run_heartbeat(self, authorization: str | None) -> HeartbeatResult:
        """Run and record the scheduled database health check."""
        if not is_cron_authorized(authorization, self.config.cron_secret):
            logger.error("heartbeat_unauthorized")
            raise AuthenticationError("Unauthorized")
        heartbeat = self._core.services.heartbeat
        result = await heartbeat.execute_check()
        await heartbeat.log_heartbeat(result)
        return result

    async def run_diagnostics(self) -> DiagnosticsReport:
        return await self._core.services.heartbeat.run_diagnostics()

    def _ensure_authenticated(self, session_token: str | None) -> SessionCredential:
        credential = self.validate_session(session_token)
        if credential is None:
            raise AuthenticationError
        return credential
