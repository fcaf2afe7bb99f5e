import hmac
import time
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from bbrecords.core.core import Service
from bbrecords.core.modules.heartbeat.models import DiagnosticCheck, DiagnosticsReport, HeartbeatResult
from bbrecords.core.modules.patient.service import DIAGNOSES, PATIENTS, VISITS

logger = structlog.get_logger(__name__)

HEARTBEAT_LOGS = "heartbeat_logs"


def is_cron_authorized(authorization: str | None, cron_secret: str | None) -> bool:
    """Check the `Authorization` header against the cron secret.

    Without a configured secret the endpoint is open.
    """
    if not cron_secret:
        logger.warning("cron_secret_not_configured")
        return True
    if not authorization:
        return False
    return hmac.compare_digest(authorization.encode("utf-8"), f"Bearer {cron_secret}".encode())


class HeartbeatService(Service):
    """Database liveness checks for the scheduler and the diagnostics page."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._logs = database.get_collection(HEARTBEAT_LOGS)

    async def execute_check(self) -> HeartbeatResult:
        started = time.perf_counter()
        try:
            count = await self.core.services.patient.count_patients()
        except PyMongoError as e:
            elapsed = int((time.perf_counter() - started) * 1000)
            logger.exception("heartbeat_failed", response_time_ms=elapsed)
            return HeartbeatResult(status="failure", response_time_ms=elapsed, error=str(e))
        elapsed = int((time.perf_counter() - started) * 1000)
        logger.info("heartbeat_succeeded", patient_count=count, response_time_ms=elapsed)
        return HeartbeatResult(status="success", response_time_ms=elapsed, patient_count=count)

    async def log_heartbeat(self, result: HeartbeatResult) -> None:
        """Persist a heartbeat outcome; a failure to persist is logged, not raised."""
        try:
            await self._logs.insert_one(result.model_dump())
        except PyMongoError:
            logger.exception("heartbeat_log_failed")

    async def run_diagnostics(self) -> DiagnosticsReport:
        results: list[DiagnosticCheck] = []
        try:
            await self.database.command("ping")
        except PyMongoError as e:
            results.append(DiagnosticCheck(test="Conexão básica", passed=False, message=f"Erro de conexão: {e}"))
            return DiagnosticsReport(success=False, results=results)
        results.append(DiagnosticCheck(test="Conexão básica", passed=True, message="Conectado ao banco de dados"))

        existing = set(await self.database.list_collection_names())
        for name in (PATIENTS, DIAGNOSES, VISITS):
            if name in existing:
                results.append(DiagnosticCheck(test=f"Coleção {name}", passed=True, message="Coleção existe"))
            else:
                results.append(DiagnosticCheck(test=f"Coleção {name}", passed=False, message="Coleção não encontrada"))

        return DiagnosticsReport(success=all(r.passed for r in results), results=results)
