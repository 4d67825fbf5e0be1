"""Session state for weekly insights and its persisted cache."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from pydantic import ValidationError

from nutrition_insights.domain.insights import (
    InsightResponse,
    ModelStatus,
    ScoredQuestion,
    Toast,
    WeeklyInsightsCache,
)
from nutrition_insights.domain.questions import QuestionCategory
from nutrition_insights.services.cache import KeyValueStore
from nutrition_insights.services.weeks import week_start_iso

_logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "weekly_insights:"
CACHE_VALID_DAYS = 7

Clock = Callable[[], datetime]


def cache_key(week_start: str) -> str:
    """Return the store key for a week's cache record."""
    return f"{CACHE_KEY_PREFIX}{week_start}"


class InsightSession:
    """Per-user session state.

    Only ``cache`` is persisted through the key-value store. Every other
    field lives for the lifetime of the process.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Clock,
        cache_valid_days: int = CACHE_VALID_DAYS,
    ) -> None:
        self._store = store
        self._clock = clock
        self.cache_valid_days = cache_valid_days
        self.cache: WeeklyInsightsCache | None = None
        self.selected_week_start: str | None = None
        self.selected_question_id: str | None = None
        self.selected_category: QuestionCategory | None = None
        self.is_generating = False
        self.generation_error: str | None = None
        self.llm_status: ModelStatus = "not_downloaded"
        self.download_progress = 0.0
        self.toast = Toast()
        self.per_question_errors: dict[str, str] = {}

    def now(self) -> datetime:
        """Return the current time from the injected clock."""
        return self._clock()

    def load(self, week_start: str | None = None) -> WeeklyInsightsCache | None:
        """Restore the persisted cache for a week, if any."""
        week = week_start or self.effective_week_start()
        cache = self._read(week)
        if cache is None:
            return None
        self.cache = cache
        return self.cache

    def effective_week_start(self) -> str:
        """Return the selected week, or the week containing today."""
        if self.selected_week_start:
            return self.selected_week_start
        return week_start_iso(self.now().date())

    def set_selected_week(self, week_start: str) -> None:
        """Select a week and clear the selected question."""
        self.selected_week_start = week_start
        self.selected_question_id = None

    def select_question(self, question_id: str | None) -> None:
        self.selected_question_id = question_id

    def set_selected_category(self, category: QuestionCategory | None) -> None:
        self.selected_category = category

    def new_cache(
        self, week_start: str, questions: list[ScoredQuestion], headline: str
    ) -> WeeklyInsightsCache:
        """Build an empty cache shell stamped with the current time."""
        generated_at = self.now()
        return WeeklyInsightsCache(
            week_start_date=week_start,
            questions=questions,
            headline=headline,
            generated_at=generated_at,
            valid_until=generated_at + timedelta(days=self.cache_valid_days),
        )

    def set_cache(self, cache: WeeklyInsightsCache) -> None:
        """Replace the whole cache record and persist it."""
        self.cache = cache
        self._persist()

    def set_cached_response(self, question_id: str, response: InsightResponse) -> None:
        """Add or supersede one response in the record for its week.

        A response for a week other than the current one goes into that
        week's stored record. Does nothing when the week has no record.
        """
        week = response.week_start_date
        if self.cache is not None and self.cache.week_start_date == week:
            self.cache = _with_response(self.cache, question_id, response)
            self._persist()
            return
        stored = self._read(week)
        if stored is None:
            return
        _logger.info("Storing late response for %s in week %s", question_id, week)
        self._write(_with_response(stored, question_id, response))

    def get_cached_response(self, question_id: str) -> InsightResponse | None:
        if self.cache is None:
            return None
        return self.cache.responses.get(question_id)

    def should_recompute(self) -> bool:
        """Return True when the cache is missing, for another week, or expired.

        Expiry is strict: a cache is still valid at exactly ``valid_until``.
        """
        if self.cache is None:
            return True
        if self.cache.week_start_date != self.effective_week_start():
            return True
        return self.now() > self.cache.valid_until

    def set_is_generating(self, value: bool) -> None:
        self.is_generating = value

    def set_generation_error(self, message: str | None) -> None:
        self.generation_error = message

    def set_question_error(self, question_id: str, message: str) -> None:
        self.per_question_errors[question_id] = message

    def clear_question_error(self, question_id: str) -> None:
        self.per_question_errors.pop(question_id, None)

    def set_llm_status(self, status: ModelStatus) -> None:
        self.llm_status = status

    def set_download_progress(self, progress: float) -> None:
        self.download_progress = max(0.0, min(1.0, progress))

    def show_toast(self, message: str) -> None:
        self.toast = Toast(message=message, visible=True)

    def hide_toast(self) -> None:
        self.toast = Toast(message=self.toast.message, visible=False)

    def _persist(self) -> None:
        if self.cache is not None:
            self._write(self.cache)

    def _read(self, week_start: str) -> WeeklyInsightsCache | None:
        raw = self._store.get(cache_key(week_start))
        if raw is None:
            return None
        try:
            return WeeklyInsightsCache.model_validate_json(raw)
        except ValidationError:
            _logger.warning(
                "Discarding unreadable insight cache for week %s", week_start
            )
            return None

    def _write(self, cache: WeeklyInsightsCache) -> None:
        self._store.set(cache_key(cache.week_start_date), cache.model_dump_json())


def _with_response(
    cache: WeeklyInsightsCache, question_id: str, response: InsightResponse
) -> WeeklyInsightsCache:
    responses = {**cache.responses, question_id: response}
    return cache.model_copy(update={"responses": responses})
