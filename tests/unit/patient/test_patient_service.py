"""Tests for read-only patient record access."""

import asyncio
from typing import Any

import pytest

from bbrecords.core.modules.patient.service import PatientService
from bbrecords.errors import NotFoundError


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, *_: Any) -> "FakeCursor":
        return self

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self._docs:
            yield doc


class FakeCollection:
    """Minimal in-memory stand-in for an async pymongo collection."""

    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self.docs = docs

    def _matches(self, doc: dict[str, Any], query: dict[str, Any]) -> bool:
        for key, expected in query.items():
            if isinstance(expected, dict) and "$in" in expected:
                if doc.get(key) not in expected["$in"]:
                    return False
            elif doc.get(key) != expected:
                return False
        return True

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        return next((doc for doc in self.docs if self._matches(doc, query)), None)

    def find(self, query: dict[str, Any]) -> FakeCursor:
        return FakeCursor([doc for doc in self.docs if self._matches(doc, query)])

    async def count_documents(self, query: dict[str, Any]) -> int:
        return len([doc for doc in self.docs if self._matches(doc, query)])


class FakeDatabase:
    def __init__(self, collections: dict[str, FakeCollection]) -> None:
        self._collections = collections

    def get_collection(self, name: str) -> FakeCollection:
        return self._collections.setdefault(name, FakeCollection([]))


@pytest.fixture
def patient_service():
    database = FakeDatabase(
        {
            "patients": FakeCollection(
                [
                    {"_id": "patient-42", "name": "Maria", "cpf": "000.000.000-00"},
                    {"_id": "patient-7", "name": "João"},
                ]
            ),
            "diagnoses": FakeCollection(
                [
                    {"_id": "d1", "patient_id": "patient-42", "doctor": "Dr. Silva"},
                    {"_id": "d2", "patient_id": "patient-42"},
                    {"_id": "d3", "patient_id": "patient-7"},
                ]
            ),
            "visits": FakeCollection(
                [
                    {"_id": "v1", "diagnosis_id": "d1", "heart_rate": 72},
                    {"_id": "v2", "diagnosis_id": "d2", "saturation": 97},
                    {"_id": "v3", "diagnosis_id": "d3"},
                ]
            ),
        }
    )
    return PatientService(database)  # type: ignore[arg-type]


class TestPatientService:
    """Tests for PatientService."""

    def test_get_patient(self, patient_service):
        patient = asyncio.run(patient_service.get_patient("patient-42"))
        assert patient is not None
        assert patient.id == "patient-42"
        assert patient.name == "Maria"

    def test_get_missing_patient(self, patient_service):
        assert asyncio.run(patient_service.get_patient("nobody")) is None

    def test_shared_record_contains_only_that_patient(self, patient_service):
        record = asyncio.run(patient_service.get_shared_record("patient-42"))

        assert record.patient.id == "patient-42"
        assert {d.id for d in record.diagnoses} == {"d1", "d2"}
        assert {v.id for v in record.visits} == {"v1", "v2"}

    def test_shared_record_missing_patient(self, patient_service):
        with pytest.raises(NotFoundError, match="Paciente não encontrado"):
            asyncio.run(patient_service.get_shared_record("nobody"))

    def test_visits_without_diagnoses(self, patient_service):
        assert asyncio.run(patient_service.get_visits([])) == []

    def test_count_patients(self, patient_service):
        assert asyncio.run(patient_service.count_patients()) == 2

    def test_serializes_with_camel_case_keys(self, patient_service):
        record = asyncio.run(patient_service.get_shared_record("patient-42"))
        dumped = record.model_dump(by_alias=True)
        assert dumped["patient"]["id"] == "patient-42"
        assert "heartRate" in dumped["visits"][0]
