"""Unit tests for the OpenRouterClient."""

import json

import httpx
import pytest

from oda.infrastructure.openrouter.openrouter_client import OpenRouterClient
from oda.domain.entities import ChatMessage
from oda.domain.exceptions import ChatProviderError


# ── Helpers ──


def _mock_openrouter_response(
    content: str = "Hello!",
    model: str = "google/gemini-2.0-flash-001",
    cost: float | None = 0.00014,
) -> dict:
    """Build a mock OpenRouter JSON response."""
    return {
        "id": "chatcmpl-test123",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "model": model,
        "usage": {
            "prompt_tokens": 10,
            "completion_tokens": 5,
            "total_tokens": 15,
            **({"cost": cost} if cost is not None else {}),
        },
    }


def _make_mock_transport(
    response_data: dict | None = None,
    status_code: int = 200,
    captured: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Create a mock transport that returns a fixed response."""

    def handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        return httpx.Response(status_code, json=response_data or {})

    return httpx.MockTransport(handler)


def _client(transport: httpx.MockTransport) -> OpenRouterClient:
    return OpenRouterClient(
        api_key="test-key",
        base_url="https://openrouter.test/api/v1/",
        http_client=httpx.AsyncClient(transport=transport),
    )


# ── Tests ──


@pytest.mark.asyncio
async def test_complete_parses_response():
    """Non-streaming call correctly parses OpenRouter JSON response."""
    client = _client(_make_mock_transport(_mock_openrouter_response(content='{"keywords": []}')))

    result = await client.complete(
        messages=[ChatMessage(role="user", content="서울 교통")],
        model="google/gemini-2.0-flash-001",
    )

    assert result.content == '{"keywords": []}'
    assert result.model == "google/gemini-2.0-flash-001"
    assert result.usage.prompt_tokens == 10
    assert result.usage.completion_tokens == 5
    assert result.usage.total_tokens == 15
    assert result.usage.cost == 0.00014
    assert result.provider == "openrouter"


@pytest.mark.asyncio
async def test_complete_sends_headers_and_payload():
    captured: list[httpx.Request] = []
    client = _client(_make_mock_transport(_mock_openrouter_response(), captured=captured))

    await client.complete(
        messages=[
            ChatMessage(role="system", content="plan"),
            ChatMessage(role="user", content="서울 교통"),
        ],
        model="m",
        temperature=0.1,
        max_tokens=256,
    )

    request = captured[0]
    assert str(request.url) == "https://openrouter.test/api/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer test-key"
    payload = json.loads(request.content)
    assert payload["model"] == "m"
    assert payload["messages"][1] == {"role": "user", "content": "서울 교통"}
    assert payload["temperature"] == 0.1
    assert payload["max_tokens"] == 256


@pytest.mark.asyncio
async def test_complete_error_handling():
    """Non-streaming call raises ChatProviderError on 4xx/5xx."""
    error_data = {"error": {"code": 429, "message": "Rate limit exceeded"}}
    client = _client(_make_mock_transport(error_data, status_code=429))

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(messages=[ChatMessage(role="user", content="Hi")], model="m")

    assert exc_info.value.status_code == 429
    assert "Rate limit" in exc_info.value.message


@pytest.mark.asyncio
async def test_complete_error_in_successful_body():
    error_data = {"error": {"code": 400, "message": "model not found"}}
    client = _client(_make_mock_transport(error_data))

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(messages=[ChatMessage(role="user", content="Hi")], model="m")

    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_complete_without_choices():
    client = _client(_make_mock_transport({"choices": []}))

    with pytest.raises(ChatProviderError, match="No choices"):
        await client.complete(messages=[ChatMessage(role="user", content="Hi")], model="m")
