from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from bbrecords.utils import now


class HeartbeatResult(BaseModel):
    """Outcome of a scheduled database health check."""

    status: Literal["success", "failure"]
    timestamp: datetime = Field(default_factory=now)
    response_time_ms: int
    patient_count: int | None = None
    error: str | None = None


class DiagnosticCheck(BaseModel):
    test: str
    passed: bool
    message: str


class DiagnosticsReport(BaseModel):
    """Result of the database diagnostics page."""

    success: bool
    results: list[DiagnosticCheck]
