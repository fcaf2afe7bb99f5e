from typing import Annotated

from fastapi import APIRouter, Header, Response

from bbrecords.core.modules.heartbeat.models import DiagnosticsReport, HeartbeatResult
from bbrecords.web.deps import AppDep
from bbrecords.web.openapi import ErrorResponse

router = APIRouter(tags=["monitoring"])


@router.get(
    "/api/cron/heartbeat",
    summary="Database heartbeat",
    description="Scheduled database liveness check. Requires `Bearer <cron secret>` when one is configured.",
    operation_id="heartbeat",
    response_model_exclude_none=True,
    responses={
        200: {"description": "Database reachable"},
        401: {"model": ErrorResponse, "description": "Invalid cron secret"},
        500: {"model": HeartbeatResult, "description": "Database check failed"},
    },
)
async def heartbeat(
    app: AppDep, response: Response, authorization: Annotated[str | None, Header()] = None
) -> HeartbeatResult:
    result = await app.run_heartbeat(authorization)
    if result.status == "failure":
        response.status_code = 500
    return result


@router.get(
    "/diagnostics",
    summary="Database diagnostics",
    description="Check database connectivity and the presence of the record collections.",
    operation_id="diagnostics",
)
async def diagnostics(app: AppDep) -> DiagnosticsReport:
    return await app.run_diagnostics()
