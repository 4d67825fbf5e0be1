"""Hydration analyzer."""

from nutrition_insights.domain.analysis import HydrationAnalysis
from nutrition_insights.domain.weekly import WeeklyCollectedData
from nutrition_insights.services.statistics import (
    clamp,
    coefficient_of_variation,
    mean,
)

WEEKEND_GAP_RELATIVE_PCT = 20


def analyze_hydration(data: WeeklyCollectedData) -> HydrationAnalysis:
    """Q-HYD-01: how was my water intake this week?

    Only days with water recorded count; a day with food but no water
    entries is treated as untracked rather than dry.
    """
    water_days = data.water_days
    target = round(data.water_target)
    if len(water_days) < 3:
        return HydrationAnalysis(
            avg_water=0,
            water_target=target,
            avg_water_pct=0,
            days_met_target=0,
            logged_days=len(water_days),
            best_day="",
            best_day_amount=0,
            worst_day="",
            worst_day_amount=0,
            consistency=0,
            interestingness_score=0,
        )

    amounts = [d.water for d in water_days]
    avg_water = mean(amounts)
    avg_water_pct = (
        round(avg_water / data.water_target * 100) if data.water_target > 0 else 0
    )
    days_met = sum(1 for d in water_days if d.water >= data.water_target)
    best = max(water_days, key=lambda d: d.water)
    worst = min(water_days, key=lambda d: d.water)
    cv = coefficient_of_variation(amounts)

    score = 0.5
    if avg_water_pct < 90:
        score = 0.6
    if avg_water_pct < 70:
        score = 0.8
    if cv > 25:
        score += 0.1

    weekday = [d.water for d in water_days if not d.is_weekend]
    weekend = [d.water for d in water_days if d.is_weekend]
    if weekday and weekend:
        weekday_avg = mean(weekday)
        if weekday_avg > 0:
            gap = abs(mean(weekend) - weekday_avg) / weekday_avg * 100
            if gap > WEEKEND_GAP_RELATIVE_PCT:
                score = max(score, 0.7)
    score = clamp(score, 0.3, 0.9)

    return HydrationAnalysis(
        avg_water=round(avg_water),
        water_target=target,
        avg_water_pct=avg_water_pct,
        days_met_target=days_met,
        logged_days=len(water_days),
        best_day=best.day_name,
        best_day_amount=round(best.water),
        worst_day=worst.day_name,
        worst_day_amount=round(worst.water),
        consistency=round(cv, 1),
        interestingness_score=score,
    )
