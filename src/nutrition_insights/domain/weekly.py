"""Domain models for a collected week of logging data."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DayData:
    """Totals for a single calendar day."""

    date: str
    day_of_week: int
    day_name: str
    is_logged: bool = False
    is_complete: bool = False
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    water: float = 0.0
    meal_count: int = 0
    foods: tuple[str, ...] = ()

    @property
    def is_weekend(self) -> bool:
        """Return True for Saturday and Sunday."""
        return self.day_of_week in {0, 6}


@dataclass(frozen=True)
class WeeklyCollectedData:
    """One Sunday-first week of logging data with prior-week context.

    Averages are computed over logged days only. Per-day aggregates of
    unlogged days are zero and must not be read as real intake.
    """

    week_start_date: str
    week_end_date: str
    days: tuple[DayData, ...] = ()
    logged_day_count: int = 0
    complete_day_count: int = 0
    avg_calories: float = 0.0
    avg_protein: float = 0.0
    avg_carbs: float = 0.0
    avg_fat: float = 0.0
    avg_fiber: float = 0.0
    avg_water: float = 0.0
    avg_meal_count: float = 0.0
    total_meals: int = 0
    calorie_target: float = 2000
    protein_target: float = 150
    water_target: float = 2000
    prior_week: "WeeklyCollectedData | None" = None
    two_weeks_ago: "WeeklyCollectedData | None" = None
    data_confidence: float = 0.0
    logging_streak: int = 0

    @property
    def logged_days(self) -> list[DayData]:
        """Return the logged days in calendar order."""
        return [day for day in self.days if day.is_logged]

    @property
    def water_days(self) -> list[DayData]:
        """Return days with any water recorded."""
        return [day for day in self.days if day.water > 0]


@dataclass(frozen=True)
class MealEntryRow:
    """A single logged food entry."""

    date: date
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float = 0.0
    food_id: str | None = None


@dataclass(frozen=True)
class WaterLogRow:
    """Water glasses recorded for a day."""

    date: date
    glasses: int
