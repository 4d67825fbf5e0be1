"""Pinned analyzers: weekly highlights and the focus suggestion."""

from nutrition_insights.domain.analysis import (
    FocusSuggestionAnalysis,
    HighlightsAnalysis,
)
from nutrition_insights.domain.weekly import DayData, WeeklyCollectedData
from nutrition_insights.services.analyzers.thresholds import (
    is_calorie_on_target,
    is_protein_on_target,
)
from nutrition_insights.services.statistics import mean

MAX_HIGHLIGHTS = 3
PINNED_SCORE = 1.0
FOCUS_SCORE = 0.9


def analyze_highlights(data: WeeklyCollectedData) -> HighlightsAnalysis:
    """Q-HI-01: what went well this week?"""
    logged = data.logged_days
    if not logged:
        return HighlightsAnalysis(
            highlights=["Starting a new week of tracking!"],
            highlight_count=1,
            interestingness_score=PINNED_SCORE,
        )

    highlights: list[str] = []
    if len(logged) >= 6:
        highlights.append(f"Logged {len(logged)} out of 7 days - great consistency!")
    elif len(logged) >= 4:
        highlights.append(f"Logged {len(logged)} days this week")

    on_target = [
        d for d in logged if is_calorie_on_target(d.calories, data.calorie_target)
    ]
    if len(on_target) >= 5:
        highlights.append(f"Hit calorie target {len(on_target)} days - outstanding!")
    elif len(on_target) >= 3:
        highlights.append(f"Hit calorie target {len(on_target)} of {len(logged)} days")

    protein_hits = sum(
        1 for d in logged if is_protein_on_target(d.protein, data.protein_target)
    )
    if protein_hits >= 4:
        highlights.append(f"Met protein goal {protein_hits} days")

    if data.logging_streak >= 7:
        highlights.append(f"{data.logging_streak}-day logging streak maintained!")

    if data.prior_week is not None:
        if data.logged_day_count > data.prior_week.logged_day_count:
            highlights.append("Logged more days than last week")
        if data.avg_protein > data.prior_week.avg_protein + 5:
            highlights.append("Protein intake improved from last week")

    water_met = sum(1 for d in data.days if d.water >= data.water_target)
    if data.water_target > 0 and water_met >= 4:
        highlights.append(f"Met water goal {water_met} days")

    if len(logged) >= 3:
        best = min(logged, key=lambda d: _distance_from_targets(d, data))
        if best in on_target:
            highlights.append(f"{best.day_name} was a standout day")

    if not highlights:
        highlights.append("You showed up and tracked - that's the foundation")

    top = highlights[:MAX_HIGHLIGHTS]
    return HighlightsAnalysis(
        highlights=top,
        highlight_count=len(top),
        interestingness_score=PINNED_SCORE,
    )


def analyze_focus_suggestion(data: WeeklyCollectedData) -> FocusSuggestionAnalysis:
    """Q-HI-02: what's one thing I could focus on next week?

    Checks run in priority order: protein shortfall, hydration gap,
    logging consistency, then weekend eating.
    """
    logged = data.logged_days

    protein_pct = (
        data.avg_protein / data.protein_target * 100 if data.protein_target > 0 else 100
    )
    if protein_pct < 80 and len(logged) >= 3:
        return FocusSuggestionAnalysis(
            focus_area="Protein intake",
            current_level=(
                f"{round(data.avg_protein)}g avg ({round(protein_pct)}% of target)"
            ),
            suggestion="Try adding a protein-rich food to one meal each day",
            rationale="Protein was consistently below target this week",
            interestingness_score=FOCUS_SCORE,
        )

    if data.water_target > 0:
        water_days = data.water_days
        water_pct = (
            mean([d.water for d in water_days]) / data.water_target * 100
            if water_days
            else 0
        )
        if water_pct < 70 and len(water_days) >= 2:
            return FocusSuggestionAnalysis(
                focus_area="Hydration",
                current_level=f"{round(water_pct)}% of water target",
                suggestion="Try keeping a water bottle visible as a reminder",
                rationale="Water intake was below target most days",
                interestingness_score=FOCUS_SCORE,
            )

    if len(logged) < 5:
        return FocusSuggestionAnalysis(
            focus_area="Logging consistency",
            current_level=f"{len(logged)} of 7 days logged",
            suggestion="Aim to log at least one meal on off-days",
            rationale="More complete data helps surface better insights",
            interestingness_score=FOCUS_SCORE,
        )

    weekdays = [d.calories for d in logged if not d.is_weekend]
    weekends = [d.calories for d in logged if d.is_weekend]
    if weekdays and weekends and mean(weekdays) > 0:
        diff = (mean(weekends) - mean(weekdays)) / mean(weekdays) * 100
        if diff > 20:
            return FocusSuggestionAnalysis(
                focus_area="Weekend eating patterns",
                current_level=f"Weekends {round(diff)}% higher than weekdays",
                suggestion="Plan a balanced weekend meal in advance",
                rationale="Weekend calorie intake was notably higher than weekdays",
                interestingness_score=FOCUS_SCORE,
            )

    return FocusSuggestionAnalysis(
        focus_area="Maintaining momentum",
        current_level="Solid week overall",
        suggestion="Keep up your current routine - consistency is key",
        rationale="No major gaps identified this week",
        interestingness_score=FOCUS_SCORE,
    )


def _distance_from_targets(day: DayData, data: WeeklyCollectedData) -> float:
    calorie_gap = (
        abs(1 - day.calories / data.calorie_target) if data.calorie_target > 0 else 1
    )
    protein_gap = (
        abs(1 - day.protein / data.protein_target) if data.protein_target > 0 else 1
    )
    return calorie_gap + protein_gap
