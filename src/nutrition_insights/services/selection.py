"""Selection of the questions shown for a week."""

from collections import Counter

from nutrition_insights.domain.analysis import HighlightsAnalysis
from nutrition_insights.domain.insights import ScoredQuestion
from nutrition_insights.domain.questions import QuestionCategory, QuestionId
from nutrition_insights.question_library import catalog_position
from nutrition_insights.services.templates import template_headline

MIN_SCORE = 0.3
MAX_PER_CATEGORY = 2
DEFAULT_MAX_QUESTIONS = 6
FALLBACK_HEADLINE = "Log a few more days to unlock your weekly insights"


def select_top_questions(
    scored: list[ScoredQuestion], max_questions: int = DEFAULT_MAX_QUESTIONS
) -> list[ScoredQuestion]:
    """Pick a bounded, category-diverse set of questions.

    Available pinned questions are always taken first. The remaining
    available questions scoring at least ``MIN_SCORE`` are added by score,
    at most ``MAX_PER_CATEGORY`` per category. The result opens with
    Q-HI-01 and closes with Q-HI-02 when present.
    """
    selected: list[ScoredQuestion] = []
    per_category: Counter[QuestionCategory] = Counter()

    for question in scored:
        if question.is_pinned and question.is_available:
            selected.append(question)
            per_category[question.definition.category] += 1

    candidates = sorted(
        (
            q
            for q in scored
            if q.is_available and not q.is_pinned and q.score >= MIN_SCORE
        ),
        key=lambda q: (-q.score, catalog_position(q.question_id)),
    )
    for question in candidates:
        if len(selected) >= max_questions:
            break
        category = question.definition.category
        if per_category[category] >= MAX_PER_CATEGORY:
            continue
        selected.append(question)
        per_category[category] += 1

    return _presentation_order(selected)


def build_headline(selected: list[ScoredQuestion]) -> str:
    """Return a one-line summary for the week."""
    for question in selected:
        if question.definition.category != QuestionCategory.HIGHLIGHTS:
            return template_headline(question.analysis_result)
    for question in selected:
        result = question.analysis_result
        if isinstance(result, HighlightsAnalysis) and result.highlights:
            return result.highlights[0]
    return FALLBACK_HEADLINE


def _presentation_order(selected: list[ScoredQuestion]) -> list[ScoredQuestion]:
    first = [q for q in selected if q.question_id == QuestionId.HIGHLIGHTS]
    last = [q for q in selected if q.question_id == QuestionId.FOCUS_SUGGESTION]
    middle = sorted(
        (
            q
            for q in selected
            if q.question_id not in (QuestionId.HIGHLIGHTS, QuestionId.FOCUS_SUGGESTION)
        ),
        key=lambda q: (-q.score, catalog_position(q.question_id)),
    )
    return first + middle + last
