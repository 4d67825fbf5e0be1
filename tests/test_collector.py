"""Tests for weekly data collection."""

import asyncio
from datetime import date

import pytest

from nutrition_insights.domain.weekly import MealEntryRow, WaterLogRow
from nutrition_insights.services.collector import WeeklyDataCollector
from tests.conftest import WEEK_START, InMemoryNutritionLogRepository


def _collector(repository, clock) -> WeeklyDataCollector:
    return WeeklyDataCollector(repository=repository, clock=clock)


def test_collect_builds_seven_days(clock) -> None:
    repository = InMemoryNutritionLogRepository()
    repository.add_meal(date(2025, 1, 19), 1000, 50)
    repository.add_meal(date(2025, 1, 19), 1000, 60)
    repository.add_meal(date(2025, 1, 20), 1800, 100)
    for _ in range(3):
        repository.add_meal(date(2025, 1, 22), 600, 40)
    repository.water.append(WaterLogRow(date=date(2025, 1, 19), glasses=8))

    data = asyncio.run(_collector(repository, clock).collect(WEEK_START))

    assert len(data.days) == 7
    assert [d.day_name for d in data.days][:2] == ["Sunday", "Monday"]
    sunday, monday, tuesday = data.days[0], data.days[1], data.days[2]
    assert sunday.calories == 2000
    assert sunday.protein == 110
    assert sunday.meal_count == 2
    assert sunday.is_complete
    assert sunday.water == 2000
    assert monday.is_logged
    assert not monday.is_complete
    assert not tuesday.is_logged
    assert data.logged_day_count == 3
    assert data.complete_day_count == 2
    assert data.avg_calories == pytest.approx(5600 / 3)
    assert data.total_meals == 6
    assert data.water_target == 2000
    assert data.data_confidence == pytest.approx(3 / 7)
    assert data.prior_week is None
    assert data.two_weeks_ago is None
    assert data.logging_streak == 1


def test_collect_includes_prior_weeks(clock) -> None:
    repository = InMemoryNutritionLogRepository()
    repository.add_meal(date(2025, 1, 13), 1800, 120)
    repository.add_meal(date(2025, 1, 14), 2200, 140)
    repository.add_meal(date(2025, 1, 6), 2000, 130)
    repository.add_meal(date(2025, 1, 20), 2000, 150)

    data = asyncio.run(_collector(repository, clock).collect(WEEK_START))

    assert data.prior_week is not None
    assert data.prior_week.week_start_date == "2025-01-12"
    assert data.prior_week.logged_day_count == 2
    assert data.prior_week.avg_calories == 2000
    assert data.prior_week.avg_protein == 130
    assert data.two_weeks_ago is not None
    assert data.two_weeks_ago.logged_day_count == 1


def test_collect_basic_returns_none_for_empty_week(clock) -> None:
    repository = InMemoryNutritionLogRepository()

    assert asyncio.run(_collector(repository, clock).collect_basic(WEEK_START)) is None


def test_collect_records_foods(clock) -> None:
    repository = InMemoryNutritionLogRepository()
    repository.entries.append(
        MealEntryRow(
            date=date(2025, 1, 21),
            calories=500,
            protein=30,
            carbs=50,
            fat=15,
            food_id="food-1",
        )
    )

    data = asyncio.run(_collector(repository, clock).collect(WEEK_START))

    assert data.days[2].foods == ("food-1",)


def test_streak_tolerates_empty_today(clock) -> None:
    repository = InMemoryNutritionLogRepository()
    for day in (18, 19, 20, 21):
        repository.add_meal(date(2025, 1, day), 2000, 150)

    data = asyncio.run(_collector(repository, clock).collect(WEEK_START))

    assert data.logging_streak == 4


def test_streak_for_past_week_ends_on_its_saturday(clock) -> None:
    repository = InMemoryNutritionLogRepository()
    for day in (9, 10, 11):
        repository.add_meal(date(2025, 1, day), 2000, 150)

    data = asyncio.run(_collector(repository, clock).collect("2025-01-05"))

    assert data.logging_streak == 3
    assert data.logged_day_count == 3


def test_custom_targets(clock) -> None:
    collector = WeeklyDataCollector(
        repository=InMemoryNutritionLogRepository(),
        clock=clock,
        calorie_target=1800,
        protein_target=120,
        glass_size_ml=300,
        water_goal_glasses=10,
    )

    data = asyncio.run(collector.collect(WEEK_START))

    assert data.calorie_target == 1800
    assert data.protein_target == 120
    assert data.water_target == 3000
    assert data.logged_day_count == 0
