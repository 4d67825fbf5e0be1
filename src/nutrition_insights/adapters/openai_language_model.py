"""OpenAI Responses API client for insight narratives."""

import logging
from dataclasses import dataclass

import openai
from openai import AsyncOpenAI

from nutrition_insights.domain.insights import GenerationResult, ModelStatus
from nutrition_insights.services.generation import LanguageModel

_logger = logging.getLogger(__name__)


@dataclass
class OpenAILanguageModel(LanguageModel):
    """Language model backed by the OpenAI Responses API."""

    client: AsyncOpenAI
    model: str

    @classmethod
    def create(cls, api_key: str, model: str) -> "OpenAILanguageModel":
        """Create an OpenAI language model client."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model)

    async def get_status(self) -> ModelStatus:
        """Hosted models are always ready once a key is configured."""
        return "ready"

    async def generate(self, prompt: str, max_tokens: int) -> GenerationResult:
        """Call the Responses API and return its text output."""
        try:
            response = await self.client.responses.create(
                model=self.model,
                input=prompt,
                max_output_tokens=max_tokens,
                store=False,
            )
        except openai.OpenAIError as exc:
            _logger.warning("OpenAI generation failed: %s", exc)
            return GenerationResult(success=False)
        output_text = response.output_text
        if not output_text:
            return GenerationResult(success=False)
        return GenerationResult(success=True, text=output_text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
