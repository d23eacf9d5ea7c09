"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date, time
from uuid import uuid4

import pytest
from postgrest.exceptions import APIError

from diet_planner.adapters.supabase_catalog_repository import SupabaseCatalogRepository
from diet_planner.adapters.supabase_people_repository import SupabasePeopleRepository
from diet_planner.adapters.supabase_plan_repository import SupabasePlanRepository
from diet_planner.domain.errors import BusinessRuleViolation
from diet_planner.domain.plans import DietDay, DietPlan, Meal
from tests.conftest import InMemoryCatalogRepository, make_plan_dish


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "upsert": [],
            "update": [],
            "delete": [],
        }
    )
    errors: dict[str, Exception] = field(default_factory=dict)
    echo_writes: bool = False
    last_payload: object | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def neq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("neq", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lte", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def in_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("in", column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        if action in self.errors:
            raise self.errors[action]
        if action == "upsert" and self.echo_writes:
            return FakeResponse(data=[self.last_payload])
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _sample_plan() -> DietPlan:
    rice = InMemoryCatalogRepository().add_food("Rice", 130, carbohydrates=28)
    dish = make_plan_dish("Rice bowl", (rice, 150))
    return DietPlan(
        id=uuid4(),
        patient_id=uuid4(),
        nutritionist_id=uuid4(),
        start_date=date(2025, 1, 10),
        end_date=date(2025, 1, 20),
        daily_calories=1800,
        meals_per_day=3,
        days=(
            DietDay(
                day=date(2025, 1, 10),
                meals=(Meal(time=time(13, 0), rating=4, dishes=(dish,)),),
            ),
        ),
    )


def test_supabase_plan_repository_save_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("diet_plans")
    plan = _sample_plan()
    table.echo_writes = True
    repository = SupabasePlanRepository(client)

    saved = repository.save(plan)

    assert saved == plan
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["days"][0]["meals"][0]["time"] == "13:00:00"


def test_supabase_plan_repository_overlap_violation() -> None:
    client = FakeSupabaseClient()
    table = client.table("diet_plans")
    table.errors["upsert"] = APIError(
        {"code": "23P01", "message": "conflicting key value violates exclusion"}
    )
    repository = SupabasePlanRepository(client)

    with pytest.raises(BusinessRuleViolation) as excinfo:
        repository.save(_sample_plan())

    assert excinfo.value.kind == "overlapping_plan"


def test_supabase_plan_repository_other_errors_propagate() -> None:
    client = FakeSupabaseClient()
    client.table("diet_plans").errors["upsert"] = APIError(
        {"code": "23503", "message": "foreign key violation"}
    )

    with pytest.raises(APIError):
        SupabasePlanRepository(client).save(_sample_plan())


def test_supabase_plan_repository_empty_save_raises() -> None:
    client = FakeSupabaseClient()

    with pytest.raises(RuntimeError):
        SupabasePlanRepository(client).save(_sample_plan())


def test_supabase_plan_repository_overlap_query() -> None:
    client = FakeSupabaseClient()
    table = client.table("diet_plans")
    exclude_id = uuid4()

    result = SupabasePlanRepository(client).find_overlapping(
        uuid4(), date(2025, 1, 15), date(2025, 1, 25), exclude_id
    )

    assert result == []
    assert ("lte", "start_date", "2025-01-25") in table.last_filters
    assert ("gte", "end_date", "2025-01-15") in table.last_filters
    assert ("neq", "id", str(exclude_id)) in table.last_filters


def test_supabase_plan_repository_find_active() -> None:
    client = FakeSupabaseClient()
    table = client.table("diet_plans")
    plan_id = uuid4()
    patient_id = uuid4()
    table.queue(
        "select",
        [
            {
                "id": str(plan_id),
                "patient_id": str(patient_id),
                "nutritionist_id": str(uuid4()),
                "start_date": "2025-01-10",
                "end_date": "2025-01-20",
                "daily_calories": None,
                "days": None,
            }
        ],
    )

    plan = SupabasePlanRepository(client).find_active(patient_id, date(2025, 1, 12))

    assert plan is not None
    assert plan.id == plan_id
    assert plan.daily_calories == 0.0
    assert plan.days == ()


def test_supabase_people_repository() -> None:
    client = FakeSupabaseClient()
    patients = client.table("patients")
    patient_id = str(uuid4())
    nutritionist_id = str(uuid4())
    patients.queue(
        "select",
        [{"id": patient_id, "name": "Ana", "nutritionist_id": nutritionist_id}],
    )
    patients.queue("select", [])
    client.table("nutritionists").queue(
        "select", [{"id": nutritionist_id, "name": "Dr. Vega"}]
    )

    repository = SupabasePeopleRepository(client)
    patient = repository.find_patient(uuid4())
    nutritionist = repository.find_nutritionist(uuid4())
    assigned = repository.is_patient_assigned_to(uuid4(), uuid4())

    assert patient is not None
    assert str(patient.nutritionist_id) == nutritionist_id
    assert nutritionist is not None
    assert nutritionist.name == "Dr. Vega"
    assert assigned is False


def test_supabase_catalog_repository() -> None:
    client = FakeSupabaseClient()
    food_id = str(uuid4())
    client.table("food_items").queue(
        "select",
        [
            {
                "id": food_id,
                "name": "Rice",
                "state": "raw",
                "calories": 130,
                "iron": None,
            }
        ],
    )
    filter_id = str(uuid4())
    client.table("dietary_filters").queue(
        "select",
        [{"id": filter_id, "name": "No rice", "food_item_ids": [food_id]}],
    )
    client.table("predetermined_dishes").queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "nutritionist_id": str(uuid4()),
                "name": "Rice bowl",
                "recipe": None,
                "ingredients": [
                    {
                        "food_item_id": food_id,
                        "food_name": "Rice",
                        "quantity": 200,
                        "kcal": 260,
                        "carbohydrate": 56,
                    }
                ],
            }
        ],
    )

    repository = SupabaseCatalogRepository(client)
    food = repository.find_food_item(uuid4())
    dietary_filter = repository.find_filter(uuid4())
    dishes = repository.find_predetermined_dishes_by_nutritionist(uuid4())

    assert food is not None
    assert food.calories == 130
    assert food.iron == 0.0
    assert dietary_filter is not None
    assert food.id in dietary_filter.food_item_ids
    assert dishes[0].content.totals.kcal == 260
    assert dishes[0].content.recipe == ""
    assert repository.list_food_items([]) == []
