"""Language model prompts built from pre-computed analysis results."""

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
from nutrition_insights.errors import PromptBuildError

BANNED_WORDS = (
    "failed",
    "cheated",
    "warning",
    "bad",
    "guilt",
    "shame",
    "terrible",
    "awful",
    "poor",
    "struggle",
)

VOICE_PREAMBLE = (
    "You are a warm, supportive nutrition companion. Use a calm voice that is "
    "warm, encouraging and never judgmental. NEVER use these words: "
    + ", ".join(f'"{word}"' for word in BANNED_WORDS)
    + ". Keep your response to 2-3 concise sentences. Use a conversational "
    "tone. Start with an observation, add an insight."
)


def build_prompt(result: AnalysisResult) -> str:
    """Return the full prompt for one analysis result.

    Raises PromptBuildError if the result cannot be rendered.
    """
    try:
        body = _body(result)
    except Exception as exc:
        raise PromptBuildError(
            f"Could not build prompt for {result.question_id}"
        ) from exc
    return f"{VOICE_PREAMBLE}\n\n{body}"


def _body(result: AnalysisResult) -> str:  # noqa: PLR0911
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


def _signed(value: int) -> str:
    return f"+{value}" if value > 0 else str(value)


def _humanize(value: str) -> str:
    return value.replace("_", " ")


def _lines(*lines: str | None) -> str:
    return "\n".join(line for line in lines if line is not None)


def _consistency(a: ConsistencyAnalysis) -> str:
    return _lines(
        f"The user tracked {a.logged_days} days this week.",
        "Macro consistency (coefficient of variation, lower is more consistent):",
        f"- Calories: {a.calorie_cv:.1f}% CV ({_humanize(a.overall_consistency)})",
        f"- Protein: {a.protein_cv:.1f}% CV",
        f"- Carbs: {a.carb_cv:.1f}% CV",
        f"- Fat: {a.fat_cv:.1f}% CV",
        f"Most consistent macro: {a.most_consistent_macro}",
        f"Most variable macro: {a.least_consistent_macro}",
        "",
        "Write a 2-3 sentence observation about their macro consistency. "
        "Highlight what was steady. If something varied, frame it neutrally "
        "as a pattern to be aware of.",
    )


def _outliers(a: OutlierAnalysis) -> str:
    if a.outlier_days:
        days = "\n".join(
            f"- {d.day_name}: {d.calories} cal ({_signed(d.deviation_pct)}% "
            f"from average, {d.direction})"
            for d in a.outlier_days
        )
        detail = (
            f"These days stood out:\n{days}\n"
            f"Without those days, the average would be {a.adjusted_mean} cal/day."
        )
    else:
        detail = "No days stood out as particularly different from the average."
    return _lines(
        f"The user's average calorie intake this week was {a.week_mean} cal/day.",
        detail,
        "",
        "Write 2-3 sentences about which days shifted their weekly picture. "
        "Be observational, not critical.",
    )


def _target_hits(a: TargetHitAnalysis) -> str:
    return _lines(
        f"This week, out of {a.logged_days} logged days:",
        f"- {a.calorie_hit_days} days were within range of their calorie target "
        f"({a.calorie_hit_pct}%)",
        f"- {a.protein_hit_days} days met their protein target ({a.protein_hit_pct}%)",
        "",
        "Write 2-3 sentences celebrating their on-target days. If fewer days "
        "hit targets, focus on the days that did work well.",
    )


def _protein(a: ProteinAnalysis) -> str:
    return _lines(
        "Protein this week:",
        f"- Average: {a.avg_protein}g/day (target: {a.protein_target}g)",
        f"- That's {a.avg_protein_pct}% of their target",
        f"- {a.days_met_target} of {a.logged_days} days met the protein target",
        f"- As % of calories: {a.protein_cal_pct}%",
        f"- Trend vs. last week: {a.trend}" if a.trend else None,
        "",
        "Write 2-3 sentences about their protein intake. Acknowledge where "
        "they are relative to their target without being preachy.",
    )


def _macro_balance(a: MacroBalanceAnalysis) -> str:
    if a.skewed_macro:
        note = (
            f"Note: {a.skewed_macro} makes up a notably {a.skew_direction} "
            "share of calories."
        )
    else:
        note = "The split is fairly balanced."
    return _lines(
        "Average macro split this week:",
        f"- Protein: {a.protein_pct}% of calories ({a.avg_protein}g)",
        f"- Carbs: {a.carbs_pct}% of calories ({a.avg_carbs}g)",
        f"- Fat: {a.fat_pct}% of calories ({a.avg_fat}g)",
        f"Most variable macro day-to-day: {a.most_variable_macro}",
        note,
        "",
        "Write 2-3 sentences about their macro balance. Note the overall "
        "pattern and any day-to-day variability.",
    )


def _surplus_deficit(a: SurplusDeficitAnalysis) -> str:
    if a.is_deficit:
        kind = "deficit"
    elif a.is_surplus:
        kind = "surplus"
    else:
        kind = "balance"
    alignment = (
        "- This aligns with their stated goal."
        if a.aligns_with_goal
        else "- This is different from their stated goal direction."
    )
    return _lines(
        "Calorie summary for the week:",
        f"- Average daily intake: {a.daily_avg_intake} cal",
        f"- Daily target: {a.daily_avg_target} cal",
        f"- Daily {kind}: ~{abs(a.daily_delta)} cal ({_signed(a.delta_pct)}%)",
        f"- {a.logged_days} days logged",
        alignment,
        "",
        "Write 2-3 sentences summarizing their energy balance for the week. "
        "Be factual. Frame any gap as information rather than a problem.",
    )


def _calorie_trend(a: CalorieTrendAnalysis) -> str:
    return _lines(
        "Calorie trend over recent weeks:",
        f"- Current week average: {a.current_week_avg} cal/day",
        f"- Prior week average: {a.prior_week_avg} cal/day",
        (
            f"- Two weeks ago average: {a.two_weeks_ago_avg} cal/day"
            if a.two_weeks_ago_avg
            else None
        ),
        f"- Trend direction: {a.trend_direction} ({a.trend_magnitude} cal/week)",
        f"- Trend strength: {a.trend_strength}",
        "",
        "Write 2-3 sentences about the direction their calorie intake is "
        "moving. Frame trends as information.",
    )


def _day_by_day(a: DayByDayAnalysis) -> str:
    days = []
    for day in a.days:
        if day.classification == "no_data":
            days.append(f"- {day.day_name}: No data")
        else:
            days.append(
                f"- {day.day_name}: {day.calories} cal ({day.percent}% of target, "
                f"{_humanize(day.classification)})"
            )
    pattern = (
        f"Pattern detected: {a.pattern}" if a.pattern else "No clear pattern detected."
    )
    return _lines(
        f"Day-by-day calorie breakdown (target: {a.calorie_target} cal):",
        *days,
        pattern,
        "",
        "Write 2-3 sentences walking through the week's calorie shape. "
        "Reference specific days. Be descriptive, not evaluative.",
    )


def _hydration(a: HydrationAnalysis) -> str:
    return _lines(
        "Water intake this week:",
        f"- Average: {a.avg_water}ml/day (target: {a.water_target}ml)",
        f"- That's {a.avg_water_pct}% of target",
        f"- {a.days_met_target} of {a.logged_days} days met the water target",
        f"- Most hydrated day: {a.best_day} ({a.best_day_amount}ml)",
        f"- Least hydrated day: {a.worst_day} ({a.worst_day_amount}ml)",
        "",
        "Write 2-3 sentences about their hydration pattern. Be encouraging "
        "about good days.",
    )


def _meal_count(a: MealCountAnalysis) -> str:
    return _lines(
        "Meal frequency this week:",
        f"- Average: {a.avg_meals} meals/day",
        f"- Range: {a.min_meals} to {a.max_meals} meals/day",
        f"- Total meals logged: {a.total_meals}",
        (
            "- Pattern: Days with more meals tended to have "
            f"{a.meal_cal_correlation} calories"
            if a.meal_cal_correlation
            else None
        ),
        "",
        "Write 2-3 sentences about their meal frequency pattern.",
    )


def _weekday_weekend(a: WeekdayWeekendAnalysis) -> str:
    return _lines(
        "Weekday vs. weekend comparison:",
        f"- Weekday avg calories: {a.weekday_avg_cal} cal",
        f"- Weekend avg calories: {a.weekend_avg_cal} cal",
        f"- Weekend effect: {_signed(a.weekend_effect)}% calories",
        f"- Weekday avg protein: {a.weekday_avg_protein}g",
        f"- Weekend avg protein: {a.weekend_avg_protein}g",
        f"- Weekday avg meals: {a.weekday_avg_meals}",
        f"- Weekend avg meals: {a.weekend_avg_meals}",
        "",
        "Write 2-3 sentences comparing their weekday and weekend eating "
        "patterns. Frame differences as observations.",
    )


_ARROWS = {"up": "up", "down": "down", "same": "steady"}


def _week_comparison(a: WeekComparisonAnalysis) -> str:
    rows = [
        f"- {c.metric}: {c.last_week} -> {c.this_week} "
        f"({_ARROWS[c.direction]}, {_signed(c.change_pct)}%)"
        for c in a.comparisons
    ]
    return _lines(
        "This week vs. last week:",
        *rows,
        f"Biggest improvement: {a.biggest_improvement or 'None standout'}",
        f"Biggest change: {a.biggest_change}",
        "",
        "Write 2-3 sentences comparing the two weeks. Lead with improvements.",
    )


def _protein_trend(a: ProteinTrendAnalysis) -> str:
    rows = [f"- {w.week_label}: {w.avg_protein}g/day" for w in a.weekly_averages]
    return _lines(
        "Protein trend over recent weeks:",
        *rows,
        f"- Trend: {a.trend_direction} ({a.trend_magnitude}g/week)",
        f"- Target: {a.protein_target}g/day",
        "",
        "Write 2-3 sentences about the protein trend direction over recent weeks.",
    )


def _highlights(a: HighlightsAnalysis) -> str:
    rows = [f"{index}. {text}" for index, text in enumerate(a.highlights, start=1)]
    return _lines(
        "Highlights from this week:",
        *rows,
        "",
        "Write 2-3 warm sentences celebrating these wins. Be specific about "
        "what went well.",
    )


def _focus(a: FocusSuggestionAnalysis) -> str:
    return _lines(
        "Based on this week's data, here's the most impactful area to focus "
        "on next week:",
        f"- Focus area: {a.focus_area}",
        f"- Current level: {a.current_level}",
        f"- Suggested direction: {a.suggestion}",
        f"- Why it matters: {a.rationale}",
        "",
        "Write 2-3 sentences offering a gentle, specific suggestion for next "
        "week. Frame it as an opportunity, not a correction.",
    )
