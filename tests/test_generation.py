"""Tests for insight generation and the single-flight slot."""

import asyncio
from dataclasses import dataclass

import pytest

from nutrition_insights.domain.insights import GenerationResult, ScoredQuestion
from nutrition_insights.services.generation import (
    BUSY_TOAST,
    GenerationSlot,
    InsightGenerationService,
    InsightGenerator,
    clean_output,
)
from nutrition_insights.services.prompts import VOICE_PREAMBLE
from nutrition_insights.services.scoring import score_all_questions
from nutrition_insights.services.session import InsightSession
from tests.conftest import WEEK_START, FakeLanguageModel, perfect_week


@dataclass
class ExplodingLanguageModel(FakeLanguageModel):
    async def generate(self, prompt: str, max_tokens: int) -> GenerationResult:
        raise RuntimeError("model crashed")


def _prepare(session: InsightSession) -> dict[str, ScoredQuestion]:
    scored = score_all_questions(perfect_week())
    session.set_cache(session.new_cache(WEEK_START, scored, "Headline"))
    return {q.question_id: q for q in scored}


def _service(
    session: InsightSession, model: FakeLanguageModel
) -> InsightGenerationService:
    return InsightGenerationService(
        generator=InsightGenerator(model=model, clock=session.now), session=session
    )


def test_generates_and_caches_response(session, language_model) -> None:
    question = _prepare(session)["Q-HI-01"]
    service = _service(session, language_model)

    response = asyncio.run(service.generate_for_question(question))

    assert response.source == "llm"
    assert response.text == language_model.text
    assert response.week_start_date == WEEK_START
    assert response.sentiment == "positive"
    assert response.follow_up_ids == ["Q-HI-02", "Q-CON-03"]
    assert session.get_cached_response("Q-HI-01") == response
    assert not session.is_generating
    assert not service.slot.is_occupied
    assert language_model.prompts[0].startswith(VOICE_PREAMBLE)


def test_cached_response_skips_the_model(session, language_model) -> None:
    question = _prepare(session)["Q-CON-03"]
    service = _service(session, language_model)

    async def scenario():
        first = await service.generate_for_question(question)
        second = await service.generate_for_question(question)
        return first, second

    first, second = asyncio.run(scenario())

    assert first == second
    assert len(language_model.prompts) == 1


def test_response_from_another_week_is_not_reused(session, language_model) -> None:
    question = _prepare(session)["Q-CON-03"]
    stale = InsightGenerator(language_model, session.now).template_response(
        question, "2025-01-12"
    )
    session.set_cache(
        session.cache.model_copy(update={"responses": {question.question_id: stale}})
    )
    service = _service(session, language_model)

    response = asyncio.run(service.generate_for_question(question))

    assert response.source == "llm"
    assert response.week_start_date == WEEK_START


@pytest.mark.parametrize(
    ("model", "message"),
    [
        (FakeLanguageModel(status="loading"), "Language model is not ready (loading)"),
        (FakeLanguageModel(success=False), "Language model generation failed"),
        (FakeLanguageModel(text=None), "Language model generation failed"),
        (FakeLanguageModel(text="Nice week."), "Language model output was too short"),
        (ExplodingLanguageModel(), "Generation failed"),
    ],
)
def test_failures_fall_back_to_template(session, model, message) -> None:
    question = _prepare(session)["Q-CON-03"]
    service = _service(session, model)

    response = asyncio.run(service.generate_for_question(question))

    assert response.source == "template"
    assert response.text.startswith("You landed in your calorie range")
    assert response.sentiment == "positive"
    assert session.get_cached_response("Q-CON-03") is None
    assert session.generation_error == message
    assert session.per_question_errors == {"Q-CON-03": message}
    assert not session.is_generating
    assert not service.slot.is_occupied


def test_retry_clears_the_error(session, language_model) -> None:
    question = _prepare(session)["Q-CON-03"]
    service = _service(session, language_model)
    language_model.status = "loading"

    async def scenario():
        failed = await service.generate_for_question(question)
        language_model.status = "ready"
        retried = await service.retry_for_question(question)
        return failed, retried

    failed, retried = asyncio.run(scenario())

    assert failed.source == "template"
    assert retried.source == "llm"
    assert session.per_question_errors == {}
    assert session.generation_error is None


def test_request_while_busy_gets_template(session, language_model) -> None:
    questions = _prepare(session)
    service = _service(session, language_model)

    async def scenario():
        language_model.gate = asyncio.Event()
        first = asyncio.create_task(
            service.generate_for_question(questions["Q-HI-01"])
        )
        await asyncio.sleep(0)
        assert session.is_generating
        busy = await service.generate_for_question(questions["Q-CON-03"])
        language_model.gate.set()
        return await first, busy

    first, busy = asyncio.run(scenario())

    assert first.source == "llm"
    assert busy.source == "template"
    assert busy.key_metrics
    assert session.toast.visible
    assert session.toast.message == BUSY_TOAST
    assert session.get_cached_response("Q-CON-03") is None
    assert language_model.max_active_calls == 1
    assert len(language_model.prompts) == 1


def test_cancelled_caller_does_not_abort_generation(session, language_model) -> None:
    question = _prepare(session)["Q-HI-01"]
    service = _service(session, language_model)

    async def scenario():
        language_model.gate = asyncio.Event()
        caller = asyncio.create_task(service.generate_for_question(question))
        await asyncio.sleep(0)
        caller.cancel()
        with pytest.raises(asyncio.CancelledError):
            await caller
        assert service.slot.is_occupied
        language_model.gate.set()
        while service.slot.is_occupied:
            await asyncio.sleep(0)

    asyncio.run(scenario())

    cached = session.get_cached_response("Q-HI-01")
    assert cached is not None
    assert cached.source == "llm"
    assert not session.is_generating


def test_late_response_lands_in_its_own_week(session, store, clock) -> None:
    question = _prepare(session)["Q-HI-01"]
    language_model = FakeLanguageModel(gate=asyncio.Event())
    service = _service(session, language_model)
    next_week = "2025-01-26"

    async def scenario():
        caller = asyncio.create_task(service.generate_for_question(question))
        await asyncio.sleep(0)
        caller.cancel()
        with pytest.raises(asyncio.CancelledError):
            await caller
        session.set_selected_week(next_week)
        session.set_cache(session.new_cache(next_week, [], "Next week"))
        language_model.gate.set()
        while service.slot.is_occupied:
            await asyncio.sleep(0)

    asyncio.run(scenario())

    assert session.cache.week_start_date == next_week
    assert session.get_cached_response("Q-HI-01") is None
    earlier = InsightSession(store, clock).load(WEEK_START)
    assert earlier is not None
    assert earlier.responses["Q-HI-01"].source == "llm"
    assert earlier.responses["Q-HI-01"].week_start_date == WEEK_START


def test_generation_slot() -> None:
    slot = GenerationSlot()

    assert slot.try_acquire()
    assert not slot.try_acquire()
    assert slot.is_occupied
    slot.release()
    assert slot.try_acquire()


def test_clean_output() -> None:
    assert clean_output('  "A calm and steady week."  ') == "A calm and steady week."
    assert clean_output("'Quoted'") == "Quoted"
    assert clean_output("  plain text \n") == "plain text"
    assert clean_output('"') == '"'
