"""Supabase-backed patient and nutritionist lookups."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diet_planner.domain.people import Nutritionist, Patient
from diet_planner.services.people import PeopleRepository


@dataclass
class SupabasePeopleRepository(PeopleRepository):
    """Supabase implementation for people lookups."""

    client: Client

    def find_patient(self, patient_id: UUID) -> Patient | None:
        """Return the patient, if present."""
        response = (
            self.client.table("patients")
            .select("id, name, nutritionist_id")
            .eq("id", str(patient_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        nutritionist_raw = row.get("nutritionist_id")
        return Patient(
            id=UUID(row["id"]),
            name=str(row.get("name", "")),
            nutritionist_id=UUID(nutritionist_raw) if nutritionist_raw else None,
        )

    def find_nutritionist(self, nutritionist_id: UUID) -> Nutritionist | None:
        """Return the nutritionist, if present."""
        response = (
            self.client.table("nutritionists")
            .select("id, name")
            .eq("id", str(nutritionist_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return Nutritionist(id=UUID(row["id"]), name=str(row.get("name", "")))

    def is_patient_assigned_to(self, patient_id: UUID, nutritionist_id: UUID) -> bool:
        """Check the patient's current nutritionist assignment."""
        response = (
            self.client.table("patients")
            .select("id")
            .eq("id", str(patient_id))
            .eq("nutritionist_id", str(nutritionist_id))
            .limit(1)
            .execute()
        )
        return bool(response.data)
