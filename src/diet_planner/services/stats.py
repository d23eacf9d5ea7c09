"""Per-nutritionist diet plan statistics."""

from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from diet_planner.domain.plans import DietPlan
from diet_planner.domain.stats import NutritionistStats
from diet_planner.services.cache import STATISTICS_REGION, Cache
from diet_planner.services.plans import PlanRepository

EXPIRY_WINDOW_DAYS = 7


@dataclass
class StatisticsAggregator:
    """Computes plan and patient counters for a nutritionist."""

    plans: PlanRepository
    cache: Cache
    # Placeholder used only when a nutritionist has no plans.
    default_average_duration: float = 30.0
    cache_ttl_seconds: int = 300

    def statistics(self, nutritionist_id: UUID, today: date) -> NutritionistStats:
        """Return counters for ``today``, recomputed on every cache miss."""
        cache_key = f"{nutritionist_id}:{today.isoformat()}"
        version = self.cache.version(STATISTICS_REGION)
        cached = self.cache.get(STATISTICS_REGION, cache_key)
        if isinstance(cached, NutritionistStats):
            return cached

        stats = summarize(
            self.plans.find_by_nutritionist(nutritionist_id),
            today,
            self.default_average_duration,
        )
        self.cache.set(
            STATISTICS_REGION,
            cache_key,
            stats,
            ttl_seconds=self.cache_ttl_seconds,
            version=version,
        )
        return stats


def summarize(
    plans: list[DietPlan], today: date, default_average_duration: float
) -> NutritionistStats:
    active = [plan for plan in plans if plan.is_active_on(today)]
    expired = [plan for plan in plans if plan.is_expired_on(today)]
    expiry_limit = today + timedelta(days=EXPIRY_WINDOW_DAYS)
    expiring = [plan for plan in active if today <= plan.end_date <= expiry_limit]
    if plans:
        average = sum(plan.duration_days for plan in plans) / len(plans)
    else:
        average = default_average_duration
    return NutritionistStats(
        total_plans=len(plans),
        active_plans=len(active),
        expired_plans=len(expired),
        average_duration=average,
        total_patients=len({plan.patient_id for plan in plans}),
        active_patients_count=len({plan.patient_id for plan in active}),
        plans_expiring_within_7_days=len(expiring),
    )
