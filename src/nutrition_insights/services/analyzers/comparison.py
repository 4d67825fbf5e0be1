"""Comparison analyzers: week over week and multi-week protein."""

from nutrition_insights.domain.analysis import (
    ChangeDirection,
    MetricComparison,
    ProteinTrendAnalysis,
    WeekComparisonAnalysis,
    WeeklyProteinAverage,
)
from nutrition_insights.domain.weekly import WeeklyCollectedData
from nutrition_insights.services.statistics import clamp, linear_regression
from nutrition_insights.services.weeks import format_week_range

CHANGE_DEADBAND_PCT = 3
PROTEIN_STEADY_G_PER_WEEK = 3


def analyze_week_comparison(data: WeeklyCollectedData) -> WeekComparisonAnalysis:
    """Q-CMP-01: how does this week compare to last week?"""
    prior = data.prior_week
    if prior is None or prior.logged_day_count < 4 or data.logged_day_count < 4:
        return WeekComparisonAnalysis(
            comparisons=[],
            biggest_improvement="",
            biggest_change="",
            interestingness_score=0,
        )

    comparisons = [
        _compare("Avg Calories", data.avg_calories, prior.avg_calories),
        _compare("Avg Protein", data.avg_protein, prior.avg_protein),
        _compare("Logged Days", data.logged_day_count, prior.logged_day_count),
        _compare("Total Meals", data.total_meals, prior.total_meals),
    ]
    if data.avg_water > 0 and prior.avg_water > 0:
        comparisons.append(_compare("Avg Water", data.avg_water, prior.avg_water))

    # Calorie direction is ambiguous without a goal; it never counts as improvement.
    improvements = [
        c for c in comparisons if c.metric != "Avg Calories" and c.direction == "up"
    ]
    biggest_improvement = _largest_change(improvements).metric if improvements else ""
    biggest_change = _largest_change(comparisons).metric

    score = 0.6
    if max(abs(c.change_pct) for c in comparisons) > 10:
        score = 0.8
    if data.logged_day_count > prior.logged_day_count:
        score += 0.1
    score = clamp(score, 0.5, 1.0)

    return WeekComparisonAnalysis(
        comparisons=comparisons,
        biggest_improvement=biggest_improvement,
        biggest_change=biggest_change,
        interestingness_score=score,
    )


def analyze_protein_trend(data: WeeklyCollectedData) -> ProteinTrendAnalysis:
    """Q-CMP-02: is my protein intake trending up or down over recent weeks?"""
    averages: list[WeeklyProteinAverage] = []
    for week in (data.two_weeks_ago, data.prior_week):
        if week is not None and week.logged_day_count >= 4:
            averages.append(
                WeeklyProteinAverage(
                    week_label=format_week_range(week.week_start_date),
                    avg_protein=round(week.avg_protein),
                )
            )
    averages.append(
        WeeklyProteinAverage(
            week_label=format_week_range(data.week_start_date),
            avg_protein=round(data.avg_protein),
        )
    )

    target = round(data.protein_target)
    if len(averages) < 2:
        return ProteinTrendAnalysis(
            weekly_averages=averages,
            trend_direction="insufficient data",
            trend_magnitude=0,
            protein_target=target,
            interestingness_score=0,
        )

    magnitude = round(linear_regression([w.avg_protein for w in averages]).slope)
    if abs(magnitude) < PROTEIN_STEADY_G_PER_WEEK:
        direction = "holding steady"
    elif magnitude > 0:
        direction = "trending up"
    else:
        direction = "trending down"

    score = 0.3
    if abs(magnitude) > 5:
        score = 0.6
    if abs(magnitude) > 10:
        score = 0.8
    if data.prior_week is not None:
        calorie_change = data.avg_calories - data.prior_week.avg_calories
        protein_change = data.avg_protein - data.prior_week.avg_protein
        if calorie_change * protein_change < 0:
            score += 0.2
    score = clamp(score, 0.2, 0.8)

    return ProteinTrendAnalysis(
        weekly_averages=averages,
        trend_direction=direction,
        trend_magnitude=magnitude,
        protein_target=target,
        interestingness_score=score,
    )


def _compare(metric: str, this_week: float, last_week: float) -> MetricComparison:
    change_pct = (
        round((this_week - last_week) / last_week * 100) if last_week > 0 else 0
    )
    direction: ChangeDirection = "same"
    if change_pct > CHANGE_DEADBAND_PCT:
        direction = "up"
    elif change_pct < -CHANGE_DEADBAND_PCT:
        direction = "down"
    return MetricComparison(
        metric=metric,
        this_week=round(this_week),
        last_week=round(last_week),
        change_pct=change_pct,
        direction=direction,
    )


def _largest_change(comparisons: list[MetricComparison]) -> MetricComparison:
    # Ties go to the later metric.
    largest = comparisons[0]
    for comparison in comparisons[1:]:
        if abs(comparison.change_pct) >= abs(largest.change_pct):
            largest = comparison
    return largest
