"""Narrative generation with a single-flight language model slot."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from nutrition_insights.domain.insights import (
    GenerationResult,
    InsightResponse,
    InsightSource,
    ModelStatus,
    ScoredQuestion,
)
from nutrition_insights.errors import InsightGenerationError, PromptBuildError
from nutrition_insights.services.enrichment import enrich_response
from nutrition_insights.services.prompts import build_prompt
from nutrition_insights.services.session import InsightSession
from nutrition_insights.services.templates import template_text

_logger = logging.getLogger(__name__)

MIN_OUTPUT_CHARS = 15
DEFAULT_MAX_TOKENS = 150
BUSY_TOAST = "AI is thinking about another question..."


class LanguageModel(Protocol):
    """Interface for a text generation model."""

    async def get_status(self) -> ModelStatus:
        """Return the model's current availability."""

    async def generate(self, prompt: str, max_tokens: int) -> GenerationResult:
        """Generate a completion for ``prompt``."""


class GenerationSlot:
    """Capacity-one slot that rejects rather than queues a second holder."""

    def __init__(self) -> None:
        self._occupied = False

    @property
    def is_occupied(self) -> bool:
        return self._occupied

    def try_acquire(self) -> bool:
        """Take the slot if it is free. Returns False when occupied."""
        if self._occupied:
            return False
        self._occupied = True
        return True

    def release(self) -> None:
        self._occupied = False


def clean_output(text: str) -> str:
    """Strip whitespace and wrapping quotes from model output."""
    cleaned = text.strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in "\"'":
        cleaned = cleaned[1:-1].strip()
    return cleaned


@dataclass
class InsightGenerator:
    """Turns one scored question into an insight response."""

    model: LanguageModel
    clock: Callable[[], datetime]
    max_tokens: int = DEFAULT_MAX_TOKENS

    async def generate_insight(
        self, question: ScoredQuestion, week_start: str
    ) -> InsightResponse:
        """Ask the language model for a narrative.

        Raises InsightGenerationError when the model is not ready, the call
        fails, or the output is too short to be useful.
        """
        status = await self.model.get_status()
        if status != "ready":
            raise InsightGenerationError(f"Language model is not ready ({status})")
        try:
            prompt = build_prompt(question.analysis_result)
        except PromptBuildError as exc:
            _logger.exception("Prompt building failed for %s", question.question_id)
            raise InsightGenerationError(str(exc)) from exc

        result = await self.model.generate(prompt, self.max_tokens)
        if not result.success or result.text is None:
            raise InsightGenerationError("Language model generation failed")
        text = clean_output(result.text)
        if len(text) <= MIN_OUTPUT_CHARS:
            raise InsightGenerationError("Language model output was too short")

        return self._response(question, week_start, text, "llm")

    def template_response(
        self, question: ScoredQuestion, week_start: str
    ) -> InsightResponse:
        """Return the deterministic narrative for ``question``."""
        text = template_text(question.analysis_result)
        return self._response(question, week_start, text, "template")

    def _response(
        self,
        question: ScoredQuestion,
        week_start: str,
        text: str,
        source: InsightSource,
    ) -> InsightResponse:
        return InsightResponse(
            question_id=question.question_id,
            text=text,
            icon=question.definition.icon,
            generated_at=self.clock(),
            source=source,
            week_start_date=week_start,
        )


@dataclass
class InsightGenerationService:
    """Cache-first generation for one session, one model call at a time."""

    generator: InsightGenerator
    session: InsightSession
    slot: GenerationSlot = field(default_factory=GenerationSlot)
    _tasks: set[asyncio.Task[InsightResponse]] = field(
        default_factory=set, init=False, repr=False
    )

    async def generate_for_question(self, question: ScoredQuestion) -> InsightResponse:
        """Return a cached, generated or template response for ``question``.

        A request arriving while another generation runs gets a template
        response straight away. If the caller is cancelled, the running
        generation still finishes and caches its result.
        """
        week_start = self.session.effective_week_start()
        cached = self.session.get_cached_response(question.question_id)
        if cached is not None and cached.week_start_date == week_start:
            _logger.debug("Cache hit for %s", question.question_id)
            return cached

        if not self.slot.try_acquire():
            _logger.info("Generation busy, using template for %s", question.question_id)
            self.session.show_toast(BUSY_TOAST)
            return self._fallback(question, week_start)

        self.session.set_is_generating(True)
        self.session.set_generation_error(None)
        self.session.clear_question_error(question.question_id)
        task = asyncio.create_task(self._generate(question, week_start))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return await asyncio.shield(task)

    async def retry_for_question(self, question: ScoredQuestion) -> InsightResponse:
        """Clear the question's error and generate again."""
        self.session.clear_question_error(question.question_id)
        return await self.generate_for_question(question)

    async def _generate(
        self, question: ScoredQuestion, week_start: str
    ) -> InsightResponse:
        try:
            response = await self.generator.generate_insight(question, week_start)
        except InsightGenerationError as exc:
            _logger.warning(
                "Generation failed for %s: %s", question.question_id, exc
            )
            message = str(exc)
        except Exception:
            _logger.exception(
                "Unexpected generation error for %s", question.question_id
            )
            message = "Generation failed"
        else:
            enriched = enrich_response(response, question)
            self.session.set_cached_response(question.question_id, enriched)
            return enriched
        finally:
            self.session.set_is_generating(False)
            self.slot.release()

        self.session.set_generation_error(message)
        self.session.set_question_error(question.question_id, message)
        return self._fallback(question, week_start)

    def _fallback(self, question: ScoredQuestion, week_start: str) -> InsightResponse:
        return enrich_response(
            self.generator.template_response(question, week_start), question
        )
