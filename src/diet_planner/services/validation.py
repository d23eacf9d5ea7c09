"""Business rules checked before a diet plan is written."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, NoReturn

from diet_planner.domain.errors import BusinessRuleViolation

if TYPE_CHECKING:
    from uuid import UUID

    from diet_planner.domain.plans import DietPlanDraft
    from diet_planner.services.people import PeopleService
    from diet_planner.services.plans import PlanRepository

MAX_PLAN_DURATION_DAYS = 365

_logger = logging.getLogger(__name__)


@dataclass
class PlanValidator:
    """Checks ownership, dates and overlap for a candidate plan.

    Reads current state at call time and never writes. Callers run it inside
    the repository transaction so the check and the write stay atomic.
    """

    people: PeopleService
    plans: PlanRepository

    def validate(
        self,
        candidate: DietPlanDraft,
        patient_id: UUID,
        nutritionist_id: UUID,
        exclude_plan_id: UUID | None = None,
    ) -> None:
        """Raise NotFoundError or BusinessRuleViolation on the first failed check."""
        self.people.get_patient(patient_id)
        self.people.get_nutritionist(nutritionist_id)
        if not self.people.is_assigned(patient_id, nutritionist_id):
            self._reject(
                "ownership_mismatch",
                f"Patient {patient_id} is not assigned to nutritionist "
                f"{nutritionist_id}",
            )

        if candidate.start_date > candidate.end_date:
            self._reject(
                "end_before_start",
                f"Plan end {candidate.end_date} is before start {candidate.start_date}",
            )

        duration = (candidate.end_date - candidate.start_date).days
        if duration > MAX_PLAN_DURATION_DAYS:
            self._reject(
                "duration_exceeded",
                f"Plan lasts {duration} days, the limit is {MAX_PLAN_DURATION_DAYS}",
            )

        overlapping = self.plans.find_overlapping(
            patient_id, candidate.start_date, candidate.end_date, exclude_plan_id
        )
        if overlapping:
            clash = overlapping[0]
            self._reject(
                "overlapping_plan",
                f"Plan {candidate.start_date}..{candidate.end_date} overlaps plan "
                f"{clash.id} ({clash.start_date}..{clash.end_date})",
            )

    @staticmethod
    def _reject(kind: str, message: str) -> NoReturn:
        _logger.warning("Plan rejected (%s): %s", kind, message)
        raise BusinessRuleViolation(message, kind=kind)
