"""Tests for language model adapters."""

import asyncio
import json

import httpx
import openai

from nutrition_insights.adapters.local_model_client import HttpxLocalModelClient
from nutrition_insights.adapters.openai_language_model import OpenAILanguageModel
from nutrition_insights.adapters.unavailable_language_model import (
    UnavailableLanguageModel,
)


def _local_client(handler) -> HttpxLocalModelClient:  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(handler)
    return HttpxLocalModelClient(
        base_url="http://model.test", http_client=httpx.AsyncClient(transport=transport)
    )


def test_local_model_status_mapping() -> None:
    codes = iter([200, 503, 500])

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/health"
        return httpx.Response(next(codes))

    client = _local_client(handler)

    async def scenario():
        return [await client.get_status() for _ in range(3)]

    assert asyncio.run(scenario()) == ["ready", "loading", "error"]


def test_local_model_status_on_connection_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = _local_client(handler)

    assert asyncio.run(client.get_status()) == "error"
    assert not asyncio.run(client.generate("prompt", 10)).success


def test_local_model_generate() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/completion"
        seen.update(json.loads(request.content.decode()))
        return httpx.Response(200, json={"content": "A steady, balanced week."})

    client = _local_client(handler)

    result = asyncio.run(client.generate("Describe my week", 150))

    assert result.success
    assert result.text == "A steady, balanced week."
    assert seen == {"prompt": "Describe my week", "n_predict": 150, "stream": False}


def test_local_model_generate_server_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "overloaded"})

    result = asyncio.run(_local_client(handler).generate("prompt", 10))

    assert not result.success
    assert result.text is None


def test_local_model_generate_malformed_body() -> None:
    bodies = iter(
        [httpx.Response(200, text="<html>oops</html>"), httpx.Response(200, json=["x"])]
    )

    def handler(request: httpx.Request) -> httpx.Response:
        return next(bodies)

    client = _local_client(handler)

    async def scenario():
        return [await client.generate("prompt", 10) for _ in range(2)]

    assert [r.success for r in asyncio.run(scenario())] == [False, False]


class _FakeResponses:
    def __init__(self, output_text: str = "", error: Exception | None = None) -> None:
        self.output_text = output_text
        self.error = error
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        if self.error is not None:
            raise self.error
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, responses: _FakeResponses) -> None:
        self.responses = responses


def test_openai_language_model_generates_text() -> None:
    responses = _FakeResponses(output_text="Protein held steady all week.")
    model = OpenAILanguageModel(client=_FakeOpenAI(responses), model="gpt-5.2")

    result = asyncio.run(model.generate("prompt", 150))

    assert asyncio.run(model.get_status()) == "ready"
    assert result.success
    assert result.text == "Protein held steady all week."
    assert responses.last_payload == {
        "model": "gpt-5.2",
        "input": "prompt",
        "max_output_tokens": 150,
        "store": False,
    }


def test_openai_language_model_handles_api_errors() -> None:
    error = openai.APIConnectionError(
        request=httpx.Request("POST", "https://api.openai.com/v1/responses")
    )
    model = OpenAILanguageModel(
        client=_FakeOpenAI(_FakeResponses(error=error)), model="gpt-5.2"
    )

    result = asyncio.run(model.generate("prompt", 150))

    assert not result.success


def test_openai_language_model_empty_output() -> None:
    model = OpenAILanguageModel(client=_FakeOpenAI(_FakeResponses()), model="gpt-5.2")

    assert not asyncio.run(model.generate("prompt", 150)).success


def test_unavailable_language_model() -> None:
    model = UnavailableLanguageModel()

    assert asyncio.run(model.get_status()) == "unsupported"
    assert not asyncio.run(model.generate("prompt", 150)).success
