"""Timing analyzers: meals per day and the weekend effect."""

from nutrition_insights.domain.analysis import MealCountAnalysis, WeekdayWeekendAnalysis
from nutrition_insights.domain.weekly import WeeklyCollectedData
from nutrition_insights.services.statistics import clamp, mean

MEAL_CORRELATION_PCT = 10


def analyze_meal_count(data: WeeklyCollectedData) -> MealCountAnalysis:
    """Q-TIM-01: how many meals am I eating per day?"""
    logged = data.logged_days
    if len(logged) < 3:
        return MealCountAnalysis(
            avg_meals=0,
            min_meals=0,
            max_meals=0,
            total_meals=0,
            meal_cal_correlation=None,
            interestingness_score=0,
        )

    counts = [d.meal_count for d in logged]
    avg_meals = mean(counts)
    min_meals = min(counts)
    max_meals = max(counts)

    # Compare calories on days with more meals than usual against the rest.
    correlation = None
    more = [d.calories for d in logged if d.meal_count > avg_meals]
    fewer = [d.calories for d in logged if d.meal_count <= avg_meals]
    if more and fewer:
        fewer_avg = mean(fewer)
        if fewer_avg > 0:
            diff = (mean(more) - fewer_avg) / fewer_avg * 100
            if diff > MEAL_CORRELATION_PCT:
                correlation = "higher"
            elif diff < -MEAL_CORRELATION_PCT:
                correlation = "lower"

    score = 0.4
    if max_meals - min_meals >= 2:
        score = 0.6
    if correlation is not None:
        score = 0.7
    score = clamp(score, 0.3, 0.7)

    return MealCountAnalysis(
        avg_meals=round(avg_meals, 1),
        min_meals=min_meals,
        max_meals=max_meals,
        total_meals=sum(counts),
        meal_cal_correlation=correlation,
        interestingness_score=score,
    )


def analyze_weekday_weekend(data: WeeklyCollectedData) -> WeekdayWeekendAnalysis:
    """Q-TIM-02: are weekdays and weekends different for me?"""
    logged = data.logged_days
    weekdays = [d for d in logged if not d.is_weekend]
    weekends = [d for d in logged if d.is_weekend]
    if len(weekdays) < 3 or not weekends:
        return WeekdayWeekendAnalysis(
            weekday_avg_cal=0,
            weekend_avg_cal=0,
            weekend_effect=0,
            weekday_avg_protein=0,
            weekend_avg_protein=0,
            weekday_avg_meals=0,
            weekend_avg_meals=0,
            interestingness_score=0,
        )

    weekday_cal = mean([d.calories for d in weekdays])
    weekend_cal = mean([d.calories for d in weekends])
    effect = (
        round((weekend_cal - weekday_cal) / weekday_cal * 100) if weekday_cal else 0
    )

    score = 0.4
    if abs(effect) > 10:
        score = 0.7
    if abs(effect) > 20:
        score = 0.9

    return WeekdayWeekendAnalysis(
        weekday_avg_cal=round(weekday_cal),
        weekend_avg_cal=round(weekend_cal),
        weekend_effect=effect,
        weekday_avg_protein=round(mean([d.protein for d in weekdays])),
        weekend_avg_protein=round(mean([d.protein for d in weekends])),
        weekday_avg_meals=round(mean([d.meal_count for d in weekdays]), 1),
        weekend_avg_meals=round(mean([d.meal_count for d in weekends]), 1),
        interestingness_score=score,
    )
