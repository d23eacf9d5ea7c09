"""Patient and nutritionist lookups."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from diet_planner.domain.errors import NotFoundError
from diet_planner.domain.people import Nutritionist, Patient


class PeopleRepository(Protocol):
    """Persistence interface for patients and nutritionists."""

    def find_patient(self, patient_id: UUID) -> Patient | None:
        """Return the patient, if present."""

    def find_nutritionist(self, nutritionist_id: UUID) -> Nutritionist | None:
        """Return the nutritionist, if present."""

    def is_patient_assigned_to(self, patient_id: UUID, nutritionist_id: UUID) -> bool:
        """Return True when the patient is currently assigned to the nutritionist."""


@dataclass
class PeopleService:
    """Application service resolving people or raising NotFound."""

    repository: PeopleRepository

    def get_patient(self, patient_id: UUID) -> Patient:
        patient = self.repository.find_patient(patient_id)
        if patient is None:
            raise NotFoundError(f"Patient {patient_id} not found")
        return patient

    def get_nutritionist(self, nutritionist_id: UUID) -> Nutritionist:
        nutritionist = self.repository.find_nutritionist(nutritionist_id)
        if nutritionist is None:
            raise NotFoundError(f"Nutritionist {nutritionist_id} not found")
        return nutritionist

    def is_assigned(self, patient_id: UUID, nutritionist_id: UUID) -> bool:
        return self.repository.is_patient_assigned_to(patient_id, nutritionist_id)
