"""Diet plan lifecycle service."""

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID, uuid4

from diet_planner.domain.errors import BusinessRuleViolation, NotFoundError
from diet_planner.domain.plans import DietPlan, DietPlanDraft
from diet_planner.services.cache import (
    PLAN_DEPENDENT_REGIONS,
    PLANS_REGION,
    Cache,
)
from diet_planner.services.people import PeopleService
from diet_planner.services.validation import PlanValidator

_logger = logging.getLogger(__name__)


class PlanRepository(Protocol):
    """Persistence interface for diet plans."""

    def find_by_id(self, plan_id: UUID) -> DietPlan | None:
        """Return a plan by id, if present."""

    def find_by_patient(self, patient_id: UUID) -> list[DietPlan]:
        """Return every plan of a patient."""

    def find_by_nutritionist(self, nutritionist_id: UUID) -> list[DietPlan]:
        """Return every plan owned by a nutritionist."""

    def find_overlapping(
        self,
        patient_id: UUID,
        start: date,
        end: date,
        exclude_id: UUID | None,
    ) -> list[DietPlan]:
        """Return the patient's plans intersecting ``[start, end]``."""

    def find_active(self, patient_id: UUID, on: date) -> DietPlan | None:
        """Return the patient's plan whose range contains ``on``."""

    def save(self, plan: DietPlan) -> DietPlan:
        """Insert or replace a plan and return the stored version."""

    def delete_by_id(self, plan_id: UUID) -> None:
        """Delete a plan."""

    def transaction(self, patient_id: UUID) -> AbstractContextManager[None]:
        """Atomic boundary for writes touching one patient's plans."""


@dataclass
class DietPlanService:
    """Create, update, delete and query diet plans."""

    repository: PlanRepository
    validator: PlanValidator
    people: PeopleService
    cache: Cache
    cache_ttl_seconds: int = 300

    def create(
        self, draft: DietPlanDraft, patient_id: UUID, nutritionist_id: UUID
    ) -> DietPlan:
        """Validate and persist a new plan."""
        with self.repository.transaction(patient_id):
            self.validator.validate(draft, patient_id, nutritionist_id)
            plan = DietPlan.from_draft(uuid4(), draft, patient_id, nutritionist_id)
            saved = self.repository.save(plan)
        self._invalidate()
        _logger.info(
            "Created diet plan %s for patient %s (%s..%s)",
            saved.id,
            patient_id,
            saved.start_date,
            saved.end_date,
        )
        return saved

    def update(
        self,
        plan_id: UUID,
        draft: DietPlanDraft,
        patient_id: UUID,
        nutritionist_id: UUID,
    ) -> DietPlan:
        """Validate and replace an existing plan, keeping its id."""
        with self.repository.transaction(patient_id):
            existing = self.get(plan_id)
            if existing.patient_id != patient_id:
                _logger.warning(
                    "Rejected reassigning plan %s to patient %s", plan_id, patient_id
                )
                raise BusinessRuleViolation(
                    f"Plan {plan_id} belongs to patient {existing.patient_id}",
                    kind="ownership_mismatch",
                )
            self.validator.validate(
                draft, patient_id, nutritionist_id, exclude_plan_id=plan_id
            )
            plan = DietPlan.from_draft(plan_id, draft, patient_id, nutritionist_id)
            saved = self.repository.save(plan)
        self._invalidate()
        _logger.info("Updated diet plan %s", plan_id)
        return saved

    def delete(self, plan_id: UUID) -> None:
        """Delete a plan outright."""
        plan = self.get(plan_id)
        with self.repository.transaction(plan.patient_id):
            self.repository.delete_by_id(plan_id)
        self._invalidate()
        _logger.info("Deleted diet plan %s", plan_id)

    def get(self, plan_id: UUID) -> DietPlan:
        plan = self.repository.find_by_id(plan_id)
        if plan is None:
            raise NotFoundError(f"Diet plan {plan_id} not found")
        return plan

    def list_by_patient(self, patient_id: UUID) -> list[DietPlan]:
        self.people.get_patient(patient_id)
        return self._cached_listing(
            f"patient:{patient_id}",
            lambda: self.repository.find_by_patient(patient_id),
        )

    def list_by_nutritionist(self, nutritionist_id: UUID) -> list[DietPlan]:
        self.people.get_nutritionist(nutritionist_id)
        return self._cached_listing(
            f"nutritionist:{nutritionist_id}",
            lambda: self.repository.find_by_nutritionist(nutritionist_id),
        )

    def current_plan(self, patient_id: UUID, on: date | None = None) -> DietPlan | None:
        """Return the plan active on ``on`` (today by default)."""
        self.people.get_patient(patient_id)
        return self.repository.find_active(patient_id, on or date.today())

    def _cached_listing(
        self, key: str, load: Callable[[], list[DietPlan]]
    ) -> list[DietPlan]:
        version = self.cache.version(PLANS_REGION)
        cached = self.cache.get(PLANS_REGION, key)
        if isinstance(cached, list):
            return cached
        plans = sorted(load(), key=lambda plan: plan.start_date)
        self.cache.set(
            PLANS_REGION,
            key,
            plans,
            ttl_seconds=self.cache_ttl_seconds,
            version=version,
        )
        return plans

    def _invalidate(self) -> None:
        self.cache.invalidate(*PLAN_DEPENDENT_REGIONS)
