from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from address_finder.clients.geocoding import (
    GroundedInferenceClient,
    InferenceTools,
    LocationBias,
    build_grounding_body,
)
from address_finder.clients.llm import GenericLLMClient
from address_finder.config import Settings
from address_finder.errors import InferenceCallFailed

BIAS = LocationBias(lat=35.6892, lng=51.389)


class _FakeCompletions:
    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def _completion(content: Any) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _client(completions: _FakeCompletions) -> GroundedInferenceClient:
    client = GroundedInferenceClient(Settings(llm_api_key="test-key", llm_model="gemini-test"))
    client.client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return client


def test_generic_client_requires_api_key() -> None:
    with pytest.raises(ValueError, match="API key"):
        GenericLLMClient(Settings())


def test_generic_client_reads_fallback_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")
    client = GenericLLMClient(Settings(llm_api_base="http://llm.test/v1/"))

    assert client.api_key == "from-env"
    assert client.base_url == "http://llm.test/v1/"
    assert client.default_model == "gemini-2.5-flash"


def test_generic_client_prefers_explicit_arguments() -> None:
    client = GenericLLMClient(
        Settings(llm_api_key="settings-key", llm_model="settings-model"),
        api_key="override",
        default_model="override-model",
    )
    assert client.api_key == "override"
    assert client.default_model == "override-model"


def test_generate_sends_prompt_tools_and_location_bias() -> None:
    completions = _FakeCompletions(response=_completion("آدرس کامل: تهران"))
    client = _client(completions)

    reply = asyncio.run(
        client.generate("prompt text", tools=InferenceTools(), location_bias=BIAS)
    )

    assert reply.text == "آدرس کامل: تهران"
    call = completions.calls[0]
    assert call["model"] == "gemini-test"
    assert call["messages"] == [{"role": "user", "content": "prompt text"}]
    assert call["extra_body"]["tools"] == [{"google_maps": {}}, {"google_search": {}}]
    assert call["extra_body"]["tool_config"]["retrieval_config"]["lat_lng"] == {
        "latitude": 35.6892,
        "longitude": 51.389,
    }


def test_grounding_body_honours_disabled_tools() -> None:
    body = build_grounding_body(InferenceTools(geo_grounding=False, web_search=False), BIAS)

    assert "tools" not in body
    assert body["tool_config"]["retrieval_config"]["lat_lng"]["latitude"] == 35.6892


def test_generate_joins_content_parts() -> None:
    parts = [{"type": "text", "text": "شهر: تهران\n"}, SimpleNamespace(text="آدرس کامل: تهران")]
    client = _client(_FakeCompletions(response=_completion(parts)))

    reply = asyncio.run(client.generate("p", tools=InferenceTools(), location_bias=BIAS))

    assert reply.text == "شهر: تهران\nآدرس کامل: تهران"


def test_generate_wraps_transport_errors() -> None:
    client = _client(_FakeCompletions(error=ConnectionError("offline")))

    with pytest.raises(InferenceCallFailed) as excinfo:
        asyncio.run(client.generate("p", tools=InferenceTools(), location_bias=BIAS))

    assert isinstance(excinfo.value.__cause__, ConnectionError)


@pytest.mark.parametrize(
    "response",
    [_completion(None), _completion("   "), SimpleNamespace(choices=[])],
)
def test_generate_rejects_empty_replies(response: Any) -> None:
    client = _client(_FakeCompletions(response=response))

    with pytest.raises(InferenceCallFailed):
        asyncio.run(client.generate("p", tools=InferenceTools(), location_bias=BIAS))
