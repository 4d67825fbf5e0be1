"""Tests for weekly insights orchestration."""

import asyncio
from datetime import date

from nutrition_insights.services.collector import WeeklyDataCollector
from nutrition_insights.services.insights import WeeklyInsightsService
from nutrition_insights.services.selection import FALLBACK_HEADLINE
from nutrition_insights.services.session import InsightSession, cache_key
from tests.conftest import WEEK_START, InMemoryNutritionLogRepository


def _repository_with_four_days() -> InMemoryNutritionLogRepository:
    repository = InMemoryNutritionLogRepository()
    for day in (19, 20, 21, 22):
        for _ in range(3):
            repository.add_meal(date(2025, 1, day), 700, 50)
    return repository


def _service(repository, session, language_model) -> WeeklyInsightsService:
    collector = WeeklyDataCollector(repository=repository, clock=session.now)
    return WeeklyInsightsService(
        collector=collector, session=session, model=language_model
    )


def test_load_week_computes_and_persists(session, store, language_model) -> None:
    service = _service(_repository_with_four_days(), session, language_model)

    cache = asyncio.run(service.load_week())

    assert cache.week_start_date == WEEK_START
    assert len(cache.questions) == 15
    assert cache.headline
    assert cache.headline != FALLBACK_HEADLINE
    assert cache.responses == {}
    assert store.get(cache_key(WEEK_START)) is not None


def test_load_week_reuses_valid_cache(session, language_model) -> None:
    repository = _repository_with_four_days()
    service = _service(repository, session, language_model)

    async def scenario():
        first = await service.load_week()
        repository.add_meal(date(2025, 1, 21), 900, 20)
        second = await service.load_week()
        forced = await service.load_week(force=True)
        return first, second, forced

    first, second, forced = asyncio.run(scenario())

    assert second is first
    assert forced is not first


def test_load_week_recomputes_after_expiry(session, clock, language_model) -> None:
    service = _service(_repository_with_four_days(), session, language_model)

    async def scenario():
        first = await service.load_week(WEEK_START)
        clock.advance(days=8)
        return first, await service.load_week()

    first, second = asyncio.run(scenario())

    assert second is not first
    assert second.generated_at > first.generated_at


def test_new_session_restores_cache_from_store(
    session, store, clock, language_model
) -> None:
    original = asyncio.run(
        _service(_repository_with_four_days(), session, language_model).load_week()
    )
    restarted = InsightSession(store, clock)
    service = _service(InMemoryNutritionLogRepository(), restarted, language_model)

    restored = asyncio.run(service.load_week())

    assert restored.headline == original.headline
    assert restored.generated_at == original.generated_at


def test_selected_and_unavailable_questions(session, language_model) -> None:
    service = _service(_repository_with_four_days(), session, language_model)

    async def scenario():
        await service.load_week()
        return service.selected_questions(), await service.unavailable_questions()

    selected, unavailable = asyncio.run(scenario())

    assert selected[0].question_id == "Q-HI-01"
    assert selected[-1].question_id == "Q-HI-02"
    unavailable_ids = {u.question.question_id for u in unavailable}
    assert "Q-CMP-01" in unavailable_ids
    assert "Q-HI-01" not in unavailable_ids
    assert "Q-NUT-01" not in unavailable_ids


def test_nothing_selected_before_loading(session, language_model) -> None:
    service = _service(InMemoryNutritionLogRepository(), session, language_model)

    assert service.selected_questions() == []
    assert asyncio.run(service.unavailable_questions()) == []


def test_refresh_model_status(session, language_model) -> None:
    service = _service(InMemoryNutritionLogRepository(), session, language_model)
    language_model.status = "loading"

    assert asyncio.run(service.refresh_model_status()) == "loading"
    assert session.llm_status == "loading"
