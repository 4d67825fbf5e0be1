"""Builds weekly data from meal and water logs."""

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Protocol

from nutrition_insights.domain.weekly import (
    DayData,
    MealEntryRow,
    WaterLogRow,
    WeeklyCollectedData,
)
from nutrition_insights.services.statistics import mean
from nutrition_insights.services.weeks import (
    add_days,
    day_name,
    day_of_week,
    week_end,
)

_logger = logging.getLogger(__name__)

COMPLETE_DAY_MIN_MEALS = 2
STREAK_LOOKBACK_DAYS = 90


class NutritionLogRepository(Protocol):
    """Read interface for logged meals and water."""

    def list_meal_entries(self, start: date, end: date) -> list[MealEntryRow]:
        """Return meal entries dated within [start, end]."""

    def list_water_logs(self, start: date, end: date) -> list[WaterLogRow]:
        """Return water logs dated within [start, end]."""


@dataclass
class WeeklyDataCollector:
    """Collects one week of data plus two weeks of context."""

    repository: NutritionLogRepository
    clock: Callable[[], datetime]
    calorie_target: float = 2000
    protein_target: float = 150
    glass_size_ml: int = 250
    water_goal_glasses: int = 8

    @property
    def water_target(self) -> float:
        return self.water_goal_glasses * self.glass_size_ml

    async def collect(self, week_start: str) -> WeeklyCollectedData:
        """Collect full data for the week starting on ``week_start``."""
        start = date.fromisoformat(week_start)
        end = date.fromisoformat(week_end(week_start))
        entries = _group_by_date(self.repository.list_meal_entries(start, end))
        water = {
            row.date: row.glasses for row in self.repository.list_water_logs(start, end)
        }

        days = []
        for offset in range(7):
            current = start + timedelta(days=offset)
            day_entries = entries.get(current, [])
            days.append(
                _build_day(
                    current,
                    day_entries,
                    water_ml=water.get(current, 0) * self.glass_size_ml,
                    meal_count=len(day_entries),
                    is_complete=len(day_entries) >= COMPLETE_DAY_MIN_MEALS,
                )
            )

        logged = [d for d in days if d.is_logged]
        prior = await self.collect_basic(add_days(week_start, -7))
        two_weeks_ago = await self.collect_basic(add_days(week_start, -14))
        streak = self._logging_streak(end)
        _logger.info(
            "Collected week %s: %d logged days, streak %d",
            week_start,
            len(logged),
            streak,
        )

        return WeeklyCollectedData(
            week_start_date=week_start,
            week_end_date=end.isoformat(),
            days=tuple(days),
            logged_day_count=len(logged),
            complete_day_count=sum(1 for d in days if d.is_complete),
            avg_calories=mean([d.calories for d in logged]),
            avg_protein=mean([d.protein for d in logged]),
            avg_carbs=mean([d.carbs for d in logged]),
            avg_fat=mean([d.fat for d in logged]),
            avg_fiber=mean([d.fiber for d in logged]),
            avg_water=mean([d.water for d in logged]),
            avg_meal_count=mean([d.meal_count for d in logged]),
            total_meals=sum(d.meal_count for d in logged),
            calorie_target=self.calorie_target,
            protein_target=self.protein_target,
            water_target=self.water_target,
            prior_week=prior,
            two_weeks_ago=two_weeks_ago,
            data_confidence=len(logged) / 7,
            logging_streak=streak,
        )

    async def collect_basic(self, week_start: str) -> WeeklyCollectedData | None:
        """Collect meal totals only. Returns None when nothing was logged."""
        start = date.fromisoformat(week_start)
        end = date.fromisoformat(week_end(week_start))
        entries = _group_by_date(self.repository.list_meal_entries(start, end))

        days = []
        for offset in range(7):
            current = start + timedelta(days=offset)
            day_entries = entries.get(current, [])
            calories = sum(e.calories for e in day_entries)
            protein = sum(e.protein for e in day_entries)
            has_data = calories > 0 or protein > 0
            days.append(
                _build_day(
                    current,
                    day_entries if has_data else [],
                    water_ml=0,
                    meal_count=len(day_entries) if has_data else 0,
                    is_complete=has_data,
                )
            )

        logged = [d for d in days if d.is_logged]
        if not logged:
            _logger.debug("No logged days for week %s", week_start)
            return None

        return WeeklyCollectedData(
            week_start_date=week_start,
            week_end_date=end.isoformat(),
            days=tuple(days),
            logged_day_count=len(logged),
            complete_day_count=len(logged),
            avg_calories=mean([d.calories for d in logged]),
            avg_protein=mean([d.protein for d in logged]),
            avg_carbs=mean([d.carbs for d in logged]),
            avg_fat=mean([d.fat for d in logged]),
            avg_meal_count=mean([d.meal_count for d in logged]),
            total_meals=sum(d.meal_count for d in logged),
            calorie_target=self.calorie_target,
            protein_target=self.protein_target,
            water_target=self.water_target,
            data_confidence=len(logged) / 7,
        )

    def _logging_streak(self, week_end_day: date) -> int:
        today = self.clock().date()
        anchor = min(week_end_day, today)
        start = anchor - timedelta(days=STREAK_LOOKBACK_DAYS)
        logged_dates = {
            entry.date for entry in self.repository.list_meal_entries(start, anchor)
        }
        current = anchor
        # Today may still be empty without breaking the streak.
        if current == today and current not in logged_dates:
            current -= timedelta(days=1)
        streak = 0
        while current >= start and current in logged_dates:
            streak += 1
            current -= timedelta(days=1)
        return streak


def _group_by_date(rows: list[MealEntryRow]) -> dict[date, list[MealEntryRow]]:
    grouped: dict[date, list[MealEntryRow]] = defaultdict(list)
    for row in rows:
        grouped[row.date].append(row)
    return grouped


def _build_day(
    current: date,
    entries: list[MealEntryRow],
    *,
    water_ml: float,
    meal_count: int,
    is_complete: bool,
) -> DayData:
    index = day_of_week(current)
    return DayData(
        date=current.isoformat(),
        day_of_week=index,
        day_name=day_name(index),
        is_logged=meal_count > 0,
        is_complete=is_complete and meal_count > 0,
        calories=sum(e.calories for e in entries),
        protein=sum(e.protein for e in entries),
        carbs=sum(e.carbs for e in entries),
        fat=sum(e.fat for e in entries),
        fiber=sum(e.fiber for e in entries),
        water=water_ml,
        meal_count=meal_count,
        foods=tuple(e.food_id for e in entries if e.food_id),
    )
