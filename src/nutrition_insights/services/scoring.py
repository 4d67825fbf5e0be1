"""Question gating and scoring."""

import logging
from collections.abc import Callable

from nutrition_insights.domain.analysis import AnalysisResult
from nutrition_insights.domain.insights import ScoredQuestion, UnavailableQuestion
from nutrition_insights.domain.questions import QuestionDefinition, QuestionId
from nutrition_insights.domain.weekly import WeeklyCollectedData
from nutrition_insights.question_library import QUESTION_LIBRARY
from nutrition_insights.services.analyzers.calorie_trend import (
    analyze_calorie_trend,
    analyze_day_by_day,
    analyze_surplus_deficit,
)
from nutrition_insights.services.analyzers.comparison import (
    analyze_protein_trend,
    analyze_week_comparison,
)
from nutrition_insights.services.analyzers.consistency import (
    analyze_macro_consistency,
    analyze_outliers,
    analyze_target_hits,
)
from nutrition_insights.services.analyzers.highlights import (
    analyze_focus_suggestion,
    analyze_highlights,
)
from nutrition_insights.services.analyzers.hydration import analyze_hydration
from nutrition_insights.services.analyzers.macro_balance import (
    analyze_macro_balance,
    analyze_protein,
)
from nutrition_insights.services.analyzers.timing import (
    analyze_meal_count,
    analyze_weekday_weekend,
)

_logger = logging.getLogger(__name__)

Analyzer = Callable[[WeeklyCollectedData], AnalysisResult]

PRIOR_WEEK_MIN_LOGGED_DAYS = 3
MIN_WATER_DAYS = 3
MIN_WEEKDAY_DAYS = 3
MIN_WEEKEND_DAYS = 1
TWO_WEEKS_AGO_MIN_LOGGED_DAYS = 4


def analyzer_for(question_id: QuestionId) -> Analyzer | None:
    """Return the analyzer answering a question, or None if it has none."""
    match question_id:
        case QuestionId.HIGHLIGHTS:
            return analyze_highlights
        case QuestionId.FOCUS_SUGGESTION:
            return analyze_focus_suggestion
        case QuestionId.MACRO_CONSISTENCY:
            return analyze_macro_consistency
        case QuestionId.OUTLIERS:
            return analyze_outliers
        case QuestionId.TARGET_HITS:
            return analyze_target_hits
        case QuestionId.PROTEIN:
            return analyze_protein
        case QuestionId.MACRO_BALANCE:
            return analyze_macro_balance
        case QuestionId.SURPLUS_DEFICIT:
            return analyze_surplus_deficit
        case QuestionId.CALORIE_TREND:
            return analyze_calorie_trend
        case QuestionId.DAY_BY_DAY:
            return analyze_day_by_day
        case QuestionId.HYDRATION:
            return analyze_hydration
        case QuestionId.MEAL_COUNT:
            return analyze_meal_count
        case QuestionId.WEEKDAY_WEEKEND:
            return analyze_weekday_weekend
        case QuestionId.WEEK_COMPARISON:
            return analyze_week_comparison
        case QuestionId.PROTEIN_TREND:
            return analyze_protein_trend
        case QuestionId.FIBER | QuestionId.NUTRIENT_ALERTS:
            return None


def is_question_available(
    definition: QuestionDefinition, data: WeeklyCollectedData
) -> bool:
    """Return True when the week has enough data to answer ``definition``."""
    if definition.is_permanently_gated:
        return False
    if data.logged_day_count < definition.minimum_logged_days:
        return False
    if definition.requires_prior_week and (
        data.prior_week is None
        or data.prior_week.logged_day_count < PRIOR_WEEK_MIN_LOGGED_DAYS
    ):
        return False
    if _weeks_of_data(data) < definition.minimum_weeks_needed:
        return False
    if definition.requires_water_data and len(data.water_days) < MIN_WATER_DAYS:
        return False

    if definition.id == QuestionId.WEEKDAY_WEEKEND:
        logged = data.logged_days
        weekdays = sum(1 for d in logged if not d.is_weekend)
        weekends = sum(1 for d in logged if d.is_weekend)
        if weekdays < MIN_WEEKDAY_DAYS or weekends < MIN_WEEKEND_DAYS:
            return False
    if definition.id == QuestionId.PROTEIN_TREND and (
        data.prior_week is None
        or data.two_weeks_ago is None
        or data.two_weeks_ago.logged_day_count < TWO_WEEKS_AGO_MIN_LOGGED_DAYS
    ):
        return False
    return True


def _weeks_of_data(data: WeeklyCollectedData) -> int:
    history = (data.prior_week, data.two_weeks_ago)
    return 1 + sum(1 for week in history if week is not None)


def score_all_questions(data: WeeklyCollectedData) -> list[ScoredQuestion]:
    """Analyze and score every catalog question that has an analyzer.

    Analyzers run regardless of availability so a gated question still
    carries a result. Questions without an analyzer are skipped.
    """
    scored: list[ScoredQuestion] = []
    for definition in QUESTION_LIBRARY:
        analyzer = analyzer_for(definition.id)
        if analyzer is None:
            continue
        result = analyzer(data)
        scored.append(
            ScoredQuestion(
                question_id=definition.id.value,
                definition=definition,
                score=result.interestingness_score,
                is_available=is_question_available(definition, data),
                is_pinned=definition.is_pinned,
                analysis_result=result,
            )
        )
    _logger.debug(
        "Scored %d questions for week %s (%d available)",
        len(scored),
        data.week_start_date,
        sum(1 for q in scored if q.is_available),
    )
    return scored


def days_needed(definition: QuestionDefinition, data: WeeklyCollectedData) -> int:
    """Return how many more logged days ``definition`` needs this week."""
    return max(0, definition.minimum_logged_days - data.logged_day_count)


def unavailable_questions(
    scored: list[ScoredQuestion], data: WeeklyCollectedData
) -> list[UnavailableQuestion]:
    """Return gated questions that more logging could unlock."""
    return [
        UnavailableQuestion(
            question=question,
            days_needed=days_needed(question.definition, data),
        )
        for question in scored
        if not question.is_available
        and not question.definition.is_permanently_gated
    ]
