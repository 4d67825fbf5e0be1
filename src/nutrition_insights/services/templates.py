"""Deterministic fallback text for every analysis result."""

from typing import assert_never

from nutrition_insights.domain.analysis import (
    AnalysisResult,
    CalorieTrendAnalysis,
    ConsistencyAnalysis,
    DayByDayAnalysis,
    FocusSuggestionAnalysis,
    HighlightsAnalysis,
    HydrationAnalysis,
    MacroBalanceAnalysis,
    MealCountAnalysis,
    OutlierAnalysis,
    ProteinAnalysis,
    ProteinTrendAnalysis,
    SurplusDeficitAnalysis,
    TargetHitAnalysis,
    WeekComparisonAnalysis,
    WeekdayWeekendAnalysis,
)

GENERIC_TEXT = "Keep logging to see more detail about this part of your week."
GENERIC_HEADLINE = "Your week at a glance"


def template_headline(result: AnalysisResult) -> str:  # noqa: PLR0911
    """Return a short headline summarising ``result``."""
    match result:
        case ConsistencyAnalysis():
            tier = result.overall_consistency.replace("_", " ")
            return f"Your macros were {tier} this week"
        case OutlierAnalysis():
            count = len(result.outlier_days)
            if count == 0:
                return "No days stood out from your average"
            return f"{count} day{'s' if count != 1 else ''} shifted your average"
        case TargetHitAnalysis():
            return (
                f"Calorie target hit {result.calorie_hit_days} of "
                f"{result.logged_days} days"
            )
        case ProteinAnalysis():
            return f"Protein averaged {result.avg_protein_pct}% of target"
        case MacroBalanceAnalysis():
            return (
                f"Macros split {result.protein_pct}/{result.carbs_pct}/"
                f"{result.fat_pct} protein/carbs/fat"
            )
        case SurplusDeficitAnalysis():
            if result.is_neutral:
                return "Calories landed close to target"
            kind = "deficit" if result.is_deficit else "surplus"
            return f"A daily {kind} of about {abs(result.daily_delta)} cal"
        case CalorieTrendAnalysis():
            return f"Calories are {result.trend_direction}"
        case DayByDayAnalysis():
            return result.pattern or "Your day-by-day calorie picture"
        case HydrationAnalysis():
            return f"Water averaged {result.avg_water_pct}% of your goal"
        case MealCountAnalysis():
            return f"About {result.avg_meals} meals a day"
        case WeekdayWeekendAnalysis():
            if abs(result.weekend_effect) <= 10:
                return "Weekdays and weekends looked similar"
            direction = "higher" if result.weekend_effect > 0 else "lower"
            return f"Weekends ran {abs(result.weekend_effect)}% {direction}"
        case WeekComparisonAnalysis():
            if result.biggest_improvement:
                return f"{result.biggest_improvement} improved from last week"
            return "How this week compares to last"
        case ProteinTrendAnalysis():
            return f"Protein is {result.trend_direction}"
        case HighlightsAnalysis():
            return result.highlights[0] if result.highlights else GENERIC_HEADLINE
        case FocusSuggestionAnalysis():
            return f"Next week: {result.focus_area.lower()}"
        case _:
            assert_never(result)


def template_text(result: AnalysisResult) -> str:
    """Return a short narrative for ``result`` without a language model."""
    text = _text(result).strip()
    return text or GENERIC_TEXT


def _text(result: AnalysisResult) -> str:  # noqa: PLR0911
    match result:
        case ConsistencyAnalysis():
            return _consistency(result)
        case OutlierAnalysis():
            return _outliers(result)
        case TargetHitAnalysis():
            return _target_hits(result)
        case ProteinAnalysis():
            return _protein(result)
        case MacroBalanceAnalysis():
            return _macro_balance(result)
        case SurplusDeficitAnalysis():
            return _surplus_deficit(result)
        case CalorieTrendAnalysis():
            return _calorie_trend(result)
        case DayByDayAnalysis():
            return _day_by_day(result)
        case HydrationAnalysis():
            return _hydration(result)
        case MealCountAnalysis():
            return _meal_count(result)
        case WeekdayWeekendAnalysis():
            return _weekday_weekend(result)
        case WeekComparisonAnalysis():
            return _week_comparison(result)
        case ProteinTrendAnalysis():
            return _protein_trend(result)
        case HighlightsAnalysis():
            return _highlights(result)
        case FocusSuggestionAnalysis():
            return _focus(result)
        case _:
            assert_never(result)


def _consistency(a: ConsistencyAnalysis) -> str:
    if a.logged_days < 3:
        return GENERIC_TEXT
    tier = a.overall_consistency.replace("_", " ")
    return (
        f"Across {a.logged_days} logged days your macros were {tier}. "
        f"{a.most_consistent_macro.capitalize()} was your steadiest, while "
        f"{a.least_consistent_macro} moved around the most."
    )


def _outliers(a: OutlierAnalysis) -> str:
    if not a.outlier_days:
        return (
            f"You averaged {a.week_mean} cal/day and no single day pulled "
            "that number far off course."
        )
    days = ", ".join(f"{d.day_name} ({d.calories} cal)" for d in a.outlier_days)
    return (
        f"You averaged {a.week_mean} cal/day. {days} stood out from the rest; "
        f"without them your average would be {a.adjusted_mean} cal/day."
    )


def _target_hits(a: TargetHitAnalysis) -> str:
    if a.logged_days == 0:
        return GENERIC_TEXT
    return (
        f"You landed in your calorie range on {a.calorie_hit_days} of "
        f"{a.logged_days} logged days and met your protein target on "
        f"{a.protein_hit_days}."
    )


def _protein(a: ProteinAnalysis) -> str:
    if a.logged_days < 3:
        return GENERIC_TEXT
    text = (
        f"You averaged {a.avg_protein}g of protein a day, "
        f"{a.avg_protein_pct}% of your {a.protein_target}g target, and reached "
        f"it on {a.days_met_target} of {a.logged_days} days."
    )
    if a.trend:
        text += f" That's {a.trend}."
    return text


def _macro_balance(a: MacroBalanceAnalysis) -> str:
    text = (
        f"Your calories came {a.protein_pct}% from protein, {a.carbs_pct}% from "
        f"carbs and {a.fat_pct}% from fat."
    )
    if a.skewed_macro:
        text += f" {a.skewed_macro.capitalize()} made up a larger share than usual."
    return text


def _surplus_deficit(a: SurplusDeficitAnalysis) -> str:
    if a.logged_days < 3:
        return GENERIC_TEXT
    if a.is_neutral:
        return (
            f"You averaged {a.daily_avg_intake} cal/day against a "
            f"{a.daily_avg_target} cal target, right about even."
        )
    kind = "under" if a.is_deficit else "over"
    return (
        f"You averaged {a.daily_avg_intake} cal/day, about {abs(a.daily_delta)} "
        f"cal {kind} your {a.daily_avg_target} cal target."
    )


def _calorie_trend(a: CalorieTrendAnalysis) -> str:
    if a.trend_strength == "none":
        return "One more week of logging will reveal your calorie trend."
    return (
        f"This week averaged {a.current_week_avg} cal/day compared with "
        f"{a.prior_week_avg} last week. Your intake is {a.trend_direction}."
    )


def _day_by_day(a: DayByDayAnalysis) -> str:
    on_target = [d.day_name for d in a.days if d.classification == "on_target"]
    if on_target:
        text = f"You were on target on {', '.join(on_target)}."
    else:
        text = f"Here's how each day compared with your {a.calorie_target} cal target."
    if a.pattern:
        text += f" {a.pattern}."
    return text


def _hydration(a: HydrationAnalysis) -> str:
    if a.logged_days < 3:
        return GENERIC_TEXT
    return (
        f"You averaged {a.avg_water}ml of water a day, {a.avg_water_pct}% of "
        f"your goal. {a.best_day} was your most hydrated day."
    )


def _meal_count(a: MealCountAnalysis) -> str:
    if a.total_meals == 0:
        return GENERIC_TEXT
    return (
        f"You logged {a.total_meals} meals, about {a.avg_meals} a day, ranging "
        f"from {a.min_meals} to {a.max_meals}."
    )


def _weekday_weekend(a: WeekdayWeekendAnalysis) -> str:
    if a.weekday_avg_cal == 0:
        return GENERIC_TEXT
    return (
        f"Weekdays averaged {a.weekday_avg_cal} cal and weekends "
        f"{a.weekend_avg_cal} cal, a difference of {a.weekend_effect}%."
    )


def _week_comparison(a: WeekComparisonAnalysis) -> str:
    if not a.comparisons:
        return GENERIC_TEXT
    if a.biggest_improvement:
        return (
            f"Compared with last week, your biggest step forward was "
            f"{a.biggest_improvement.lower()}."
        )
    return f"Compared with last week, {a.biggest_change.lower()} changed the most."


def _protein_trend(a: ProteinTrendAnalysis) -> str:
    if len(a.weekly_averages) < 2:
        return GENERIC_TEXT
    latest = a.weekly_averages[-1].avg_protein
    return (
        f"Your protein is {a.trend_direction}, now at {latest}g a day against "
        f"a {a.protein_target}g target."
    )


def _highlights(a: HighlightsAnalysis) -> str:
    return " ".join(_sentence(highlight) for highlight in a.highlights if highlight)


def _focus(a: FocusSuggestionAnalysis) -> str:
    return f"{a.focus_area}: {a.suggestion}. {a.rationale}."


def _sentence(text: str) -> str:
    return text if text.endswith(("!", ".", "?")) else f"{text}."
