"""Calorie analyzers: energy balance, multi-week trend and daily shape."""

from nutrition_insights.domain.analysis import (
    CalorieTrendAnalysis,
    DayByDayAnalysis,
    DayClassification,
    DayClassificationEntry,
    SurplusDeficitAnalysis,
)
from nutrition_insights.domain.weekly import WeeklyCollectedData
from nutrition_insights.services.analyzers.thresholds import (
    ON_TARGET_HIGH_PCT,
    ON_TARGET_LOW_PCT,
    SIGNIFICANTLY_OVER_PCT,
    SIGNIFICANTLY_UNDER_PCT,
)
from nutrition_insights.services.statistics import clamp, linear_regression

NEUTRAL_BAND_PCT = 3
STEADY_CALORIES_PER_WEEK = 50


def analyze_surplus_deficit(data: WeeklyCollectedData) -> SurplusDeficitAnalysis:
    """Q-CAL-01: am I in a caloric surplus or deficit this week?"""
    logged = data.logged_days
    if len(logged) < 3:
        return SurplusDeficitAnalysis(
            total_intake=0,
            total_target=0,
            daily_avg_intake=0,
            daily_avg_target=round(data.calorie_target),
            weekly_delta=0,
            daily_delta=0,
            delta_pct=0,
            is_deficit=False,
            is_surplus=False,
            is_neutral=True,
            aligns_with_goal=True,
            logged_days=len(logged),
            interestingness_score=0,
        )

    total_intake = sum(d.calories for d in logged)
    daily_avg = total_intake / len(logged)
    daily_delta = daily_avg - data.calorie_target
    weekly_delta = daily_delta * 7
    delta_pct = (
        round(daily_delta / data.calorie_target * 100) if data.calorie_target > 0 else 0
    )

    is_neutral = abs(delta_pct) <= NEUTRAL_BAND_PCT
    is_deficit = not is_neutral and daily_delta < 0
    is_surplus = not is_neutral and daily_delta > 0
    # No goal direction is modelled, so only a neutral week counts as aligned.
    aligns_with_goal = is_neutral

    score = 0.5
    if abs(delta_pct) > 10:
        score = 0.8
    if abs(delta_pct) > 20:
        score = 1.0
    score = clamp(score, 0.4, 1.0)

    return SurplusDeficitAnalysis(
        total_intake=round(total_intake),
        total_target=round(data.calorie_target * len(logged)),
        daily_avg_intake=round(daily_avg),
        daily_avg_target=round(data.calorie_target),
        weekly_delta=round(weekly_delta),
        daily_delta=round(daily_delta),
        delta_pct=delta_pct,
        is_deficit=is_deficit,
        is_surplus=is_surplus,
        is_neutral=is_neutral,
        aligns_with_goal=aligns_with_goal,
        logged_days=len(logged),
        interestingness_score=score,
    )


def analyze_calorie_trend(data: WeeklyCollectedData) -> CalorieTrendAnalysis:
    """Q-CAL-02: is my calorie intake trending up or down?"""
    current_avg = round(data.avg_calories)
    prior = data.prior_week
    if prior is None or prior.logged_day_count < 3:
        return CalorieTrendAnalysis(
            current_week_avg=current_avg,
            prior_week_avg=0,
            two_weeks_ago_avg=None,
            trend_direction="insufficient data",
            trend_magnitude=0,
            trend_strength="none",
            interestingness_score=0,
        )

    prior_avg = round(prior.avg_calories)
    two_weeks = data.two_weeks_ago
    two_weeks_avg = round(two_weeks.avg_calories) if two_weeks is not None else None

    weekly_avgs: list[float] = []
    if two_weeks is not None and two_weeks.logged_day_count >= 3:
        weekly_avgs.append(two_weeks.avg_calories)
    weekly_avgs.append(prior.avg_calories)
    weekly_avgs.append(data.avg_calories)

    regression = linear_regression(weekly_avgs)
    magnitude = round(regression.slope)

    if abs(magnitude) < STEADY_CALORIES_PER_WEEK:
        direction = "holding steady"
    elif magnitude > 0:
        direction = f"trending up ~{magnitude} cal/week"
    else:
        direction = f"trending down ~{abs(magnitude)} cal/week"

    if regression.r_squared > 0.7:
        strength = "strong"
    elif regression.r_squared > 0.3:
        strength = "moderate"
    else:
        strength = "weak"

    score = 0.3
    if regression.r_squared > 0.3 and abs(magnitude) > 50:
        score = 0.7
    if regression.r_squared > 0.5 and abs(magnitude) > 100:
        score = 0.9
    score = clamp(score, 0.2, 0.9)

    return CalorieTrendAnalysis(
        current_week_avg=current_avg,
        prior_week_avg=prior_avg,
        two_weeks_ago_avg=two_weeks_avg,
        trend_direction=direction,
        trend_magnitude=magnitude,
        trend_strength=strength,
        interestingness_score=score,
    )


def analyze_day_by_day(data: WeeklyCollectedData) -> DayByDayAnalysis:
    """Q-CAL-03: what does my calorie pattern look like day by day?"""
    target = data.calorie_target
    entries: list[DayClassificationEntry] = []
    for day in data.days:
        if not day.is_logged:
            entries.append(
                DayClassificationEntry(
                    day_name=day.day_name,
                    calories=0,
                    classification="no_data",
                    percent=0,
                )
            )
            continue
        percent = day.calories / target * 100 if target > 0 else 0
        entries.append(
            DayClassificationEntry(
                day_name=day.day_name,
                calories=round(day.calories),
                classification=classify_day(percent),
                percent=round(percent),
            )
        )

    logged = [entry for entry in entries if entry.classification != "no_data"]
    pattern = None
    if len(logged) >= 5:
        split = (len(logged) + 1) // 2
        first_on_target = _count_on_target(logged[:split])
        second_on_target = _count_on_target(logged[split:])
        if first_on_target > second_on_target + 1:
            pattern = "Started strong, trailed off later"
        elif second_on_target > first_on_target + 1:
            pattern = "Built momentum as the week went on"

    if len(logged) < 3:
        score = 0.0
    else:
        score = 0.8 if pattern else 0.6

    return DayByDayAnalysis(
        days=entries,
        calorie_target=round(target),
        pattern=pattern,
        interestingness_score=score,
    )


def classify_day(percent: float) -> DayClassification:
    """Bucket a logged day's percent-of-target calories."""
    if ON_TARGET_LOW_PCT <= percent <= ON_TARGET_HIGH_PCT:
        return "on_target"
    if percent > SIGNIFICANTLY_OVER_PCT:
        return "significantly_over"
    if percent > ON_TARGET_HIGH_PCT:
        return "slightly_over"
    if percent < SIGNIFICANTLY_UNDER_PCT:
        return "significantly_under"
    return "slightly_under"


def _count_on_target(entries: list[DayClassificationEntry]) -> int:
    return sum(1 for entry in entries if entry.classification == "on_target")
