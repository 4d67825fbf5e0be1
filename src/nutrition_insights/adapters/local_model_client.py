"""HTTP client for a locally hosted llama.cpp-compatible model server."""

import logging
from dataclasses import dataclass

import httpx

from nutrition_insights.domain.insights import GenerationResult, ModelStatus
from nutrition_insights.services.generation import LanguageModel

_logger = logging.getLogger(__name__)


@dataclass
class HttpxLocalModelClient(LanguageModel):
    """HTTPX-backed client for a local model server."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 60

    @classmethod
    def create(cls, base_url: str) -> "HttpxLocalModelClient":
        """Create a local model client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    async def get_status(self) -> ModelStatus:
        """Map the server health endpoint onto a model status."""
        try:
            response = await self.http_client.get(f"{self.base_url}/health", timeout=5)
        except httpx.HTTPError as exc:
            _logger.warning("Local model health check failed: %s", exc)
            return "error"
        if response.status_code == 200:
            return "ready"
        if response.status_code == 503:
            return "loading"
        return "error"

    async def generate(self, prompt: str, max_tokens: int) -> GenerationResult:
        """Request a completion from the local server."""
        try:
            response = await self.http_client.post(
                f"{self.base_url}/completion",
                json={"prompt": prompt, "n_predict": max_tokens, "stream": False},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            _logger.warning("Local model generation failed: %s", exc)
            return GenerationResult(success=False)
        try:
            payload = response.json()
        except ValueError:
            _logger.warning("Local model returned a non-JSON completion body")
            return GenerationResult(success=False)
        content = payload.get("content") if isinstance(payload, dict) else None
        if not isinstance(content, str) or not content:
            return GenerationResult(success=False)
        return GenerationResult(success=True, text=content)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
