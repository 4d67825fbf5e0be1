"""Language model placeholder for deployments without a model."""

from nutrition_insights.domain.insights import GenerationResult, ModelStatus
from nutrition_insights.services.generation import LanguageModel


class UnavailableLanguageModel(LanguageModel):
    """Reports ``unsupported`` so every narrative uses its template."""

    async def get_status(self) -> ModelStatus:
        return "unsupported"

    async def generate(self, prompt: str, max_tokens: int) -> GenerationResult:
        return GenerationResult(success=False)
