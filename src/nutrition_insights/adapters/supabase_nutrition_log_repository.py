"""Supabase repository for meal entries and water logs."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from nutrition_insights.domain.weekly import MealEntryRow, WaterLogRow
from nutrition_insights.services.collector import NutritionLogRepository


@dataclass
class SupabaseNutritionLogRepository(NutritionLogRepository):
    """Supabase implementation for weekly log queries."""

    client: Client
    user_id: str

    def list_meal_entries(self, start: date, end: date) -> list[MealEntryRow]:
        """Return meal entries dated within [start, end]."""
        response = (
            self.client.table("log_entries")
            .select("date, calories, protein, carbs, fat, fiber, food_item_id")
            .eq("user_id", self.user_id)
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def list_water_logs(self, start: date, end: date) -> list[WaterLogRow]:
        """Return water logs dated within [start, end]."""
        response = (
            self.client.table("water_logs")
            .select("date, glasses")
            .eq("user_id", self.user_id)
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .execute()
        )
        return [
            WaterLogRow(
                date=date.fromisoformat(str(row["date"])),
                glasses=int(row.get("glasses") or 0),
            )
            for row in response.data or []
        ]


def _parse_entry(row: dict[str, object]) -> MealEntryRow:
    food_id = row.get("food_item_id")
    return MealEntryRow(
        date=date.fromisoformat(str(row["date"])),
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fat=float(row.get("fat") or 0.0),
        fiber=float(row.get("fiber") or 0.0),
        food_id=str(food_id) if food_id else None,
    )
