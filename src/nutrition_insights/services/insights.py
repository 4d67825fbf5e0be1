"""Weekly insights orchestration: collect, score, select and cache."""

import logging
from dataclasses import dataclass, field

from nutrition_insights.domain.insights import (
    ModelStatus,
    ScoredQuestion,
    UnavailableQuestion,
    WeeklyInsightsCache,
)
from nutrition_insights.domain.weekly import WeeklyCollectedData
from nutrition_insights.services.collector import WeeklyDataCollector
from nutrition_insights.services.generation import LanguageModel
from nutrition_insights.services.scoring import (
    score_all_questions,
    unavailable_questions,
)
from nutrition_insights.services.selection import (
    DEFAULT_MAX_QUESTIONS,
    build_headline,
    select_top_questions,
)
from nutrition_insights.services.session import InsightSession

_logger = logging.getLogger(__name__)


@dataclass
class WeeklyInsightsService:
    """Produces the scored question set for the selected week."""

    collector: WeeklyDataCollector
    session: InsightSession
    model: LanguageModel
    max_questions: int = DEFAULT_MAX_QUESTIONS
    _data: WeeklyCollectedData | None = field(default=None, init=False, repr=False)

    async def refresh_model_status(self) -> ModelStatus:
        """Query the language model and record its status on the session."""
        status = await self.model.get_status()
        self.session.set_llm_status(status)
        return status

    async def load_week(
        self, week_start: str | None = None, force: bool = False
    ) -> WeeklyInsightsCache:
        """Return the cache record for a week, recomputing when needed."""
        if week_start is not None:
            self.session.set_selected_week(week_start)
        week = self.session.effective_week_start()

        if self.session.cache is None or self.session.cache.week_start_date != week:
            self.session.load(week)
        if not force and not self.session.should_recompute():
            _logger.debug("Using cached insights for week %s", week)
            return self.session.cache

        data = await self.collector.collect(week)
        self._data = data
        scored = score_all_questions(data)
        headline = build_headline(select_top_questions(scored, self.max_questions))
        cache = self.session.new_cache(week, scored, headline)
        self.session.set_cache(cache)
        _logger.info(
            "Computed insights for week %s (%d logged days)",
            week,
            data.logged_day_count,
        )
        return cache

    def selected_questions(self) -> list[ScoredQuestion]:
        """Return the questions to display for the loaded week."""
        if self.session.cache is None:
            return []
        return select_top_questions(self.session.cache.questions, self.max_questions)

    async def unavailable_questions(self) -> list[UnavailableQuestion]:
        """Return gated questions with the logged days each still needs."""
        if self.session.cache is None:
            return []
        data = await self._collect(self.session.cache.week_start_date)
        return unavailable_questions(self.session.cache.questions, data)

    async def _collect(self, week: str) -> WeeklyCollectedData:
        if self._data is None or self._data.week_start_date != week:
            self._data = await self.collector.collect(week)
        return self._data
