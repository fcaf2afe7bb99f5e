from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from bbrecords.core.db import MongoModel


class Patient(MongoModel):
    """Patient demographics."""

    name: str
    cpf: str | None = None
    birth_date: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    created_at: datetime | None = None


class Diagnosis(MongoModel):
    """Hospitalization episode of a patient, holding its visits."""

    patient_id: str
    start_date: str | None = None
    discharge_date: str | None = None
    doctor: str | None = None
    anamnesis: str | None = None
    diagnosis: str | None = None
    medications: str | None = None
    created_at: datetime | None = None


class Visit(MongoModel):
    """Clinical visit recorded under a diagnosis."""

    diagnosis_id: str
    date: datetime | None = None
    heart_rate: float | None = None
    respiratory_rate: float | None = None
    saturation: float | None = None
    temperature: float | None = None
    cardiac_auscultation: str | None = None
    evolution: str | None = None
    additional_guidance: str | None = None
    created_at: datetime | None = None


class SharedRecord(BaseModel):
    """Everything a share link exposes: one patient with their diagnoses and visits."""

    patient: Patient
    diagnoses: list[Diagnosis]
    visits: list[Visit]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
