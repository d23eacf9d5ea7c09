"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from diet_planner.adapters.supabase_catalog_repository import SupabaseCatalogRepository
from diet_planner.adapters.supabase_people_repository import SupabasePeopleRepository
from diet_planner.adapters.supabase_plan_repository import SupabasePlanRepository
from diet_planner.config import Settings
from diet_planner.services.cache import Cache, InMemoryCache
from diet_planner.services.catalog import CatalogRepository, FoodCatalogService
from diet_planner.services.ingredients import IngredientCalculator
from diet_planner.services.people import PeopleRepository, PeopleService
from diet_planner.services.plans import DietPlanService, PlanRepository
from diet_planner.services.shopping import ShoppingListGenerator
from diet_planner.services.stats import StatisticsAggregator
from diet_planner.services.substitutions import SubstitutionEngine
from diet_planner.services.validation import PlanValidator


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    cache: Cache
    people_service: PeopleService
    catalog_service: FoodCatalogService
    ingredient_calculator: IngredientCalculator
    plan_service: DietPlanService
    substitution_engine: SubstitutionEngine
    shopping_list_generator: ShoppingListGenerator
    statistics_aggregator: StatisticsAggregator


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container backed by Supabase."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    return wire_container(
        settings=resolved_settings,
        people_repository=SupabasePeopleRepository(supabase_client),
        plan_repository=SupabasePlanRepository(supabase_client),
        catalog_repository=SupabaseCatalogRepository(supabase_client),
        cache=InMemoryCache(),
    )


def wire_container(
    settings: Settings,
    people_repository: PeopleRepository,
    plan_repository: PlanRepository,
    catalog_repository: CatalogRepository,
    cache: Cache,
) -> AppContainer:
    """Build services on top of the given repositories."""
    people_service = PeopleService(people_repository)
    catalog_service = FoodCatalogService(catalog_repository)
    validator = PlanValidator(people=people_service, plans=plan_repository)
    plan_service = DietPlanService(
        repository=plan_repository,
        validator=validator,
        people=people_service,
        cache=cache,
        cache_ttl_seconds=settings.cache_ttl_seconds,
    )
    return AppContainer(
        settings=settings,
        cache=cache,
        people_service=people_service,
        catalog_service=catalog_service,
        ingredient_calculator=IngredientCalculator(catalog_service),
        plan_service=plan_service,
        substitution_engine=SubstitutionEngine(
            people=people_service,
            plans=plan_repository,
            catalog=catalog_service,
        ),
        shopping_list_generator=ShoppingListGenerator(
            plans=plan_repository,
            people=people_service,
            cache=cache,
            cache_ttl_seconds=settings.cache_ttl_seconds,
        ),
        statistics_aggregator=StatisticsAggregator(
            plans=plan_repository,
            cache=cache,
            default_average_duration=settings.default_average_plan_duration_days,
            cache_ttl_seconds=settings.cache_ttl_seconds,
        ),
    )
