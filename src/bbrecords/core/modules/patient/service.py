from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from bbrecords.core.core import Service
from bbrecords.core.modules.patient.models import Diagnosis, Patient, SharedRecord, Visit
from bbrecords.errors import NotFoundError

logger = structlog.get_logger(__name__)

PATIENTS = "patients"
DIAGNOSES = "diagnoses"
VISITS = "visits"


class PatientService(Service):
    """Read-only access to patient records keyed by patient id."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._patients = database.get_collection(PATIENTS)
        self._diagnoses = database.get_collection(DIAGNOSES)
        self._visits = database.get_collection(VISITS)

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._diagnoses.create_index([("patient_id", 1)])
        await self._visits.create_index([("diagnosis_id", 1)])

    async def get_patient(self, patient_id: str) -> Patient | None:
        doc = await self._patients.find_one({"_id": patient_id})
        return Patient.model_validate(doc) if doc else None

    async def get_diagnoses(self, patient_id: str) -> list[Diagnosis]:
        cursor = self._diagnoses.find({"patient_id": patient_id}).sort("start_date", -1)
        return await Diagnosis.list_cursor(cursor)

    async def get_visits(self, diagnosis_ids: list[str]) -> list[Visit]:
        if not diagnosis_ids:
            return []
        cursor = self._visits.find({"diagnosis_id": {"$in": diagnosis_ids}}).sort("date", -1)
        return await Visit.list_cursor(cursor)

    async def get_shared_record(self, patient_id: str) -> SharedRecord:
        """Load a patient with their diagnoses and only the visits under those diagnoses."""
        patient = await self.get_patient(patient_id)
        if patient is None:
            logger.info("shared_patient_not_found", patient_id=patient_id)
            raise NotFoundError("Paciente não encontrado")
        diagnoses = await self.get_diagnoses(patient_id)
        visits = await self.get_visits([d.id for d in diagnoses])
        return SharedRecord(patient=patient, diagnoses=diagnoses, visits=visits)

    async def count_patients(self) -> int:
        return await self._patients.count_documents({})
