"""Sentiment, key metrics and follow-ups attached to insight responses."""

import logging
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
from nutrition_insights.domain.insights import (
    InsightResponse,
    KeyMetric,
    ScoredQuestion,
    Sentiment,
)

_logger = logging.getLogger(__name__)

MAX_KEY_METRICS = 3
MOMENTUM_FOCUS_AREA = "Maintaining momentum"


def enrich_response(
    response: InsightResponse, question: ScoredQuestion
) -> InsightResponse:
    """Return ``response`` with sentiment, key metrics and follow-ups set."""
    result = question.analysis_result
    return response.model_copy(
        update={
            "sentiment": safe_sentiment(result),
            "key_metrics": safe_key_metrics(result),
            "follow_up_ids": [str(qid) for qid in question.definition.follow_up_ids],
        }
    )


def safe_sentiment(result: AnalysisResult) -> Sentiment:
    """Derive sentiment, falling back to neutral on unexpected errors."""
    try:
        return derive_sentiment(result)
    except Exception:
        _logger.exception("Sentiment derivation failed for %s", result.question_id)
        return "neutral"


def safe_key_metrics(result: AnalysisResult) -> list[KeyMetric]:
    """Extract key metrics, falling back to none on unexpected errors."""
    try:
        return extract_key_metrics(result)
    except Exception:
        _logger.exception("Key metric extraction failed for %s", result.question_id)
        return []


def derive_sentiment(result: AnalysisResult) -> Sentiment:  # noqa: PLR0911, PLR0912
    """Classify the tone of an analysis result."""
    match result:
        case ConsistencyAnalysis():
            if result.overall_consistency in {"very_consistent", "fairly_consistent"}:
                return "positive"
            if result.overall_consistency == "quite_variable":
                return "negative"
            return "neutral"
        case OutlierAnalysis():
            if not result.outlier_days:
                return "positive"
            return "negative" if len(result.outlier_days) >= 3 else "neutral"
        case TargetHitAnalysis():
            return _banded(result.calorie_hit_pct, positive_at=70, negative_below=40)
        case ProteinAnalysis():
            return _banded(result.avg_protein_pct, positive_at=90, negative_below=70)
        case MacroBalanceAnalysis():
            return "positive" if result.skewed_macro is None else "neutral"
        case SurplusDeficitAnalysis():
            if result.is_neutral:
                return "positive"
            return "negative" if abs(result.delta_pct) > 20 else "neutral"
        case CalorieTrendAnalysis():
            if result.trend_direction == "holding steady":
                return "positive"
            return "neutral"
        case DayByDayAnalysis():
            logged = [d for d in result.days if d.classification != "no_data"]
            if not logged:
                return "neutral"
            on_target = sum(1 for d in logged if d.classification == "on_target")
            significant = sum(
                1 for d in logged if d.classification.startswith("significantly")
            )
            if on_target * 2 >= len(logged):
                return "positive"
            if significant * 2 >= len(logged):
                return "negative"
            return "neutral"
        case HydrationAnalysis():
            return _banded(result.avg_water_pct, positive_at=90, negative_below=60)
        case MealCountAnalysis():
            return "positive" if result.max_meals - result.min_meals <= 1 else "neutral"
        case WeekdayWeekendAnalysis():
            if abs(result.weekend_effect) <= 10:
                return "positive"
            return "negative" if abs(result.weekend_effect) > 25 else "neutral"
        case WeekComparisonAnalysis():
            # Calorie direction has no universal good side.
            others = [c for c in result.comparisons if c.metric != "Avg Calories"]
            ups = sum(1 for c in others if c.direction == "up")
            downs = sum(1 for c in others if c.direction == "down")
            if ups > downs:
                return "positive"
            if downs > ups:
                return "negative"
            return "neutral"
        case ProteinTrendAnalysis():
            averages = result.weekly_averages
            latest = averages[-1].avg_protein if averages else 0
            if result.trend_direction == "trending up" or (
                result.protein_target > 0 and latest >= result.protein_target * 0.9
            ):
                return "positive"
            if result.trend_direction == "trending down":
                return "negative"
            return "neutral"
        case HighlightsAnalysis():
            return "positive"
        case FocusSuggestionAnalysis():
            return "positive" if result.focus_area == MOMENTUM_FOCUS_AREA else "neutral"
        case _:
            assert_never(result)


def extract_key_metrics(result: AnalysisResult) -> list[KeyMetric]:
    """Return up to three label/value pairs summarising ``result``."""
    return _metrics(result)[:MAX_KEY_METRICS]


def _metrics(result: AnalysisResult) -> list[KeyMetric]:  # noqa: PLR0911
    match result:
        case ConsistencyAnalysis():
            return [
                KeyMetric(label="Calorie CV", value=f"{result.calorie_cv:.1f}%"),
                KeyMetric(label="Steadiest", value=result.most_consistent_macro),
                KeyMetric(label="Most variable", value=result.least_consistent_macro),
            ]
        case OutlierAnalysis():
            return [
                KeyMetric(label="Average", value=f"{result.week_mean} cal"),
                KeyMetric(label="Outlier days", value=str(len(result.outlier_days))),
                KeyMetric(label="Adjusted avg", value=f"{result.adjusted_mean} cal"),
            ]
        case TargetHitAnalysis():
            return [
                KeyMetric(
                    label="Calorie hits",
                    value=f"{result.calorie_hit_days}/{result.logged_days}",
                ),
                KeyMetric(
                    label="Protein hits",
                    value=f"{result.protein_hit_days}/{result.logged_days}",
                ),
            ]
        case ProteinAnalysis():
            return [
                KeyMetric(label="Avg protein", value=f"{result.avg_protein}g"),
                KeyMetric(label="Of target", value=f"{result.avg_protein_pct}%"),
                KeyMetric(
                    label="Days met",
                    value=f"{result.days_met_target}/{result.logged_days}",
                ),
            ]
        case MacroBalanceAnalysis():
            return [
                KeyMetric(label="Protein", value=f"{result.protein_pct}%"),
                KeyMetric(label="Carbs", value=f"{result.carbs_pct}%"),
                KeyMetric(label="Fat", value=f"{result.fat_pct}%"),
            ]
        case SurplusDeficitAnalysis():
            return [
                KeyMetric(label="Daily avg", value=f"{result.daily_avg_intake} cal"),
                KeyMetric(label="Target", value=f"{result.daily_avg_target} cal"),
                KeyMetric(label="Difference", value=f"{result.delta_pct:+d}%"),
            ]
        case CalorieTrendAnalysis():
            return [
                KeyMetric(label="This week", value=f"{result.current_week_avg} cal"),
                KeyMetric(label="Last week", value=f"{result.prior_week_avg} cal"),
                KeyMetric(label="Trend", value=result.trend_direction),
            ]
        case DayByDayAnalysis():
            on_target = sum(1 for d in result.days if d.classification == "on_target")
            return [
                KeyMetric(label="On target", value=f"{on_target} days"),
                KeyMetric(label="Target", value=f"{result.calorie_target} cal"),
            ]
        case HydrationAnalysis():
            return [
                KeyMetric(label="Avg water", value=f"{result.avg_water}ml"),
                KeyMetric(label="Of goal", value=f"{result.avg_water_pct}%"),
                KeyMetric(label="Best day", value=result.best_day),
            ]
        case MealCountAnalysis():
            return [
                KeyMetric(label="Meals/day", value=f"{result.avg_meals}"),
                KeyMetric(
                    label="Range", value=f"{result.min_meals}-{result.max_meals}"
                ),
                KeyMetric(label="Total", value=str(result.total_meals)),
            ]
        case WeekdayWeekendAnalysis():
            return [
                KeyMetric(label="Weekday", value=f"{result.weekday_avg_cal} cal"),
                KeyMetric(label="Weekend", value=f"{result.weekend_avg_cal} cal"),
                KeyMetric(label="Effect", value=f"{result.weekend_effect:+d}%"),
            ]
        case WeekComparisonAnalysis():
            return [
                KeyMetric(label=c.metric, value=f"{c.change_pct:+d}%")
                for c in result.comparisons
            ]
        case ProteinTrendAnalysis():
            return [
                KeyMetric(label=w.week_label, value=f"{w.avg_protein}g")
                for w in result.weekly_averages
            ]
        case HighlightsAnalysis():
            return [KeyMetric(label="Wins", value=str(result.highlight_count))]
        case FocusSuggestionAnalysis():
            return [KeyMetric(label="Focus", value=result.focus_area)]
        case _:
            assert_never(result)


def _banded(value: int, *, positive_at: int, negative_below: int) -> Sentiment:
    if value >= positive_at:
        return "positive"
    if value < negative_below:
        return "negative"
    return "neutral"
