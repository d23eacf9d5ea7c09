"""Supabase-backed diet plan repository."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from diet_planner.adapters.serialization import parse_days, serialize_days
from diet_planner.domain.errors import BusinessRuleViolation
from diet_planner.domain.plans import DietPlan
from diet_planner.services.plans import PlanRepository

EXCLUSION_VIOLATION = "23P01"


@dataclass
class SupabasePlanRepository(PlanRepository):
    """Supabase implementation for diet plan persistence.

    PostgREST offers no client-side transactions. Overlap between a patient's
    plans is enforced by the ``diet_plans_no_overlap`` exclusion constraint,
    so a concurrent writer that slips past validation fails on ``save``.
    """

    client: Client

    def find_by_id(self, plan_id: UUID) -> DietPlan | None:
        """Return a plan by id, if present."""
        response = (
            self.client.table("diet_plans")
            .select("*")
            .eq("id", str(plan_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def find_by_patient(self, patient_id: UUID) -> list[DietPlan]:
        """Return every plan for a patient."""
        response = (
            self.client.table("diet_plans")
            .select("*")
            .eq("patient_id", str(patient_id))
            .order("start_date", desc=False)
            .execute()
        )
        return [_parse_plan(row) for row in response.data or []]

    def find_by_nutritionist(self, nutritionist_id: UUID) -> list[DietPlan]:
        """Return every plan owned by a nutritionist."""
        response = (
            self.client.table("diet_plans")
            .select("*")
            .eq("nutritionist_id", str(nutritionist_id))
            .order("start_date", desc=False)
            .execute()
        )
        return [_parse_plan(row) for row in response.data or []]

    def find_overlapping(
        self,
        patient_id: UUID,
        start: date,
        end: date,
        exclude_id: UUID | None,
    ) -> list[DietPlan]:
        """Return plans with ``start_date <= end`` and ``end_date >= start``."""
        query = (
            self.client.table("diet_plans")
            .select("*")
            .eq("patient_id", str(patient_id))
            .lte("start_date", end.isoformat())
            .gte("end_date", start.isoformat())
        )
        if exclude_id is not None:
            query = query.neq("id", str(exclude_id))
        response = query.execute()
        return [_parse_plan(row) for row in response.data or []]

    def find_active(self, patient_id: UUID, on: date) -> DietPlan | None:
        """Return the plan whose range contains the date."""
        response = (
            self.client.table("diet_plans")
            .select("*")
            .eq("patient_id", str(patient_id))
            .lte("start_date", on.isoformat())
            .gte("end_date", on.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def save(self, plan: DietPlan) -> DietPlan:
        """Upsert a plan row."""
        try:
            response = (
                self.client.table("diet_plans").upsert(_serialize_plan(plan)).execute()
            )
        except APIError as exc:
            if exc.code == EXCLUSION_VIOLATION:
                raise BusinessRuleViolation(
                    f"Plan {plan.id} overlaps another plan of patient "
                    f"{plan.patient_id}",
                    kind="overlapping_plan",
                ) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to save diet plan")
        return _parse_plan(response.data[0])

    def delete_by_id(self, plan_id: UUID) -> None:
        """Delete a plan row."""
        self.client.table("diet_plans").delete().eq("id", str(plan_id)).execute()

    @contextmanager
    def transaction(self, patient_id: UUID) -> Iterator[None]:
        """Yield without a client transaction; the constraint guards overlap."""
        yield


def _serialize_plan(plan: DietPlan) -> dict[str, object]:
    return {
        "id": str(plan.id),
        "patient_id": str(plan.patient_id),
        "nutritionist_id": str(plan.nutritionist_id),
        "start_date": plan.start_date.isoformat(),
        "end_date": plan.end_date.isoformat(),
        "calorie_min": plan.calorie_min,
        "calorie_max": plan.calorie_max,
        "daily_calories": plan.daily_calories,
        "carb_pct": plan.carb_pct,
        "fat_pct": plan.fat_pct,
        "protein_pct": plan.protein_pct,
        "meals_per_day": plan.meals_per_day,
        "visible": plan.visible,
        "interchangeable": plan.interchangeable,
        "filter_id": str(plan.filter_id) if plan.filter_id else None,
        "days": serialize_days(plan.days),
    }


def _parse_plan(row: dict[str, object]) -> DietPlan:
    filter_raw = row.get("filter_id")
    return DietPlan(
        id=UUID(str(row["id"])),
        patient_id=UUID(str(row["patient_id"])),
        nutritionist_id=UUID(str(row["nutritionist_id"])),
        start_date=date.fromisoformat(str(row["start_date"])),
        end_date=date.fromisoformat(str(row["end_date"])),
        calorie_min=float(row.get("calorie_min") or 0.0),
        calorie_max=float(row.get("calorie_max") or 0.0),
        daily_calories=float(row.get("daily_calories") or 0.0),
        carb_pct=float(row.get("carb_pct") or 0.0),
        fat_pct=float(row.get("fat_pct") or 0.0),
        protein_pct=float(row.get("protein_pct") or 0.0),
        meals_per_day=int(row.get("meals_per_day") or 0),
        visible=bool(row.get("visible", True)),
        interchangeable=bool(row.get("interchangeable", False)),
        days=parse_days(row.get("days")),
        filter_id=UUID(str(filter_raw)) if filter_raw else None,
    )
