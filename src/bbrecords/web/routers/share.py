from typing import Annotated

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from bbrecords.core.modules.patient.models import Diagnosis, Patient, Visit
from bbrecords.core.modules.share.models import ShareLink, ShareTokenStatus
from bbrecords.web.deps import AppDep, SessionTokenDep
from bbrecords.web.openapi import ErrorResponse

router = APIRouter(tags=["share"])

MIN_SHARE_PASSWORD_LENGTH = 4


class CreateShareRequest(BaseModel):
    """Password the recipient will need to open the link."""

    password: Annotated[str, StringConstraints(strip_whitespace=True, min_length=MIN_SHARE_PASSWORD_LENGTH)]


class OpenShareRequest(BaseModel):
    password: str = Field("", description="Password chosen when the link was created")


class TokenInfo(BaseModel):
    patient_id: str
    expires_at: int
    created_at: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SharedRecordResponse(BaseModel):
    """Read-only view of one patient's history."""

    patient: Patient
    diagnoses: list[Diagnosis]
    visits: list[Visit]
    token_info: TokenInfo

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


@router.post(
    "/api/patients/{patient_id}/share",
    summary="Create share link",
    description="Create a password-protected, read-only link to a patient's history, valid for 30 days.",
    operation_id="createShareLink",
    responses={
        200: {"description": "Share link created"},
        400: {"model": ErrorResponse, "description": "Invalid patient id or password"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_share_link(
    patient_id: str, data: CreateShareRequest, app: AppDep, session_token: SessionTokenDep
) -> ShareLink:
    return app.create_share_link(session_token, patient_id, data.password)


@router.get(
    "/api/share/{token}",
    summary="Check share link",
    description="Check that a share token is well-formed and not expired, without a password.",
    operation_id="checkShareToken",
    response_model_exclude_none=True,
)
async def check_share_token(token: str, app: AppDep) -> ShareTokenStatus:
    return app.check_share_token(token)


@router.post(
    "/api/share/{token}",
    summary="Open share link",
    description="Unlock a share token with its password and return the patient's records.",
    operation_id="openSharedRecord",
    responses={
        200: {"description": "Patient records"},
        400: {"model": ErrorResponse, "description": "Password missing"},
        401: {"model": ErrorResponse, "description": "Wrong password or invalid/expired link"},
        404: {"model": ErrorResponse, "description": "Patient not found"},
    },
)
async def open_shared_record(token: str, data: OpenShareRequest, app: AppDep) -> SharedRecordResponse:
    token_data, record = await app.open_shared_record(token, data.password)
    return SharedRecordResponse(
        patient=record.patient,
        diagnoses=record.diagnoses,
        visits=record.visits,
        token_info=TokenInfo(
            patient_id=token_data.patient_id,
            expires_at=token_data.expires_at,
            created_at=token_data.timestamp,
        ),
    )
