"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date

from nutrition_insights.adapters.supabase_key_value_store import SupabaseKeyValueStore
from nutrition_insights.adapters.supabase_nutrition_log_repository import (
    SupabaseNutritionLogRepository,
)


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "upsert": []}
    )
    last_payload: object | None = None
    last_conflict: str | None = None
    last_columns: str | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, columns: str) -> "FakeTable":
        self._action = "select"
        self.last_columns = columns
        return self

    def upsert(  # type: ignore[no-untyped-def]
        self, payload, on_conflict: str = ""
    ) -> "FakeTable":
        self._action = "upsert"
        self.last_payload = payload
        self.last_conflict = on_conflict
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lte", column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
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


def test_key_value_store_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("insight_cache")
    table.queue("select", [{"value": '{"headline": "Hi"}'}])

    store = SupabaseKeyValueStore(client, "user-1")
    store.set("weekly_insights:2025-01-19", '{"headline": "Hi"}')
    value = store.get("weekly_insights:2025-01-19")

    assert value == '{"headline": "Hi"}'
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["user_id"] == "user-1"
    assert table.last_payload["key"] == "weekly_insights:2025-01-19"
    assert table.last_conflict == "user_id,key"
    assert ("eq", "key", "weekly_insights:2025-01-19") in table.last_filters


def test_key_value_store_missing_key() -> None:
    store = SupabaseKeyValueStore(FakeSupabaseClient(), "user-1")

    assert store.get("weekly_insights:2025-01-19") is None


def test_nutrition_log_repository_parses_entries() -> None:
    client = FakeSupabaseClient()
    entries = client.table("log_entries")
    entries.queue(
        "select",
        [
            {
                "date": "2025-01-20",
                "calories": 520,
                "protein": 32.5,
                "carbs": 60,
                "fat": None,
                "fiber": 4,
                "food_item_id": "abc",
            },
            {"date": "2025-01-21", "calories": "300"},
        ],
    )

    repository = SupabaseNutritionLogRepository(client, "user-1")
    rows = repository.list_meal_entries(date(2025, 1, 19), date(2025, 1, 25))

    assert rows[0].date == date(2025, 1, 20)
    assert rows[0].protein == 32.5
    assert rows[0].fat == 0.0
    assert rows[0].food_id == "abc"
    assert rows[1].calories == 300.0
    assert rows[1].food_id is None
    assert entries.last_filters == [
        ("eq", "user_id", "user-1"),
        ("gte", "date", "2025-01-19"),
        ("lte", "date", "2025-01-25"),
    ]


def test_nutrition_log_repository_water_logs() -> None:
    client = FakeSupabaseClient()
    client.table("water_logs").queue(
        "select",
        [{"date": "2025-01-19", "glasses": 6}, {"date": "2025-01-20", "glasses": None}],
    )

    repository = SupabaseNutritionLogRepository(client, "user-1")
    rows = repository.list_water_logs(date(2025, 1, 19), date(2025, 1, 25))

    assert [(r.date.day, r.glasses) for r in rows] == [(19, 6), (20, 0)]
