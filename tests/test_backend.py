from __future__ import annotations

import json
import sys
from pathlib import Path

import httpx
import pytest
import respx

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from gemini_mcp.backend import BackendError, BlockedPromptError, GeminiClient, extract_text
from gemini_mcp.content import GenerationConfig, Part, Turn

BASE = "https://gemini.test"
ENDPOINT = f"{BASE}/v1beta/models/gemini-test:generateContent"


def _client(**kwargs) -> GeminiClient:
    return GeminiClient("secret-key", model="gemini-test", base_url=BASE + "/", **kwargs)


def _answer(*texts: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": t} for t in texts]}}]}


def test_endpoint() -> None:
    assert _client().endpoint == ENDPOINT


@pytest.mark.asyncio
@respx.mock
async def test_generate_sends_contents_and_config() -> None:
    route = respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json=_answer("Hello", " world")))
    contents = [
        Turn.caller(Part.from_text("hi")),
        Turn.generator("hey"),
        Turn.caller(Part.from_text("look"), Part.from_bytes("aGk=", "image/png")),
    ]
    text = await _client().generate(contents, GenerationConfig(temperature=0.3, max_output_tokens=20))
    assert text == "Hello world"

    request = route.calls.last.request
    assert request.headers["x-goog-api-key"] == "secret-key"
    assert "secret-key" not in str(request.url)
    body = json.loads(request.content)
    assert body["contents"] == [
        {"role": "user", "parts": [{"text": "hi"}]},
        {"role": "model", "parts": [{"text": "hey"}]},
        {"role": "user", "parts": [{"text": "look"}, {"inlineData": {"mimeType": "image/png", "data": "aGk="}}]},
    ]
    assert body["generationConfig"] == {"temperature": 0.3, "maxOutputTokens": 20}


@pytest.mark.asyncio
@respx.mock
async def test_generate_omits_empty_config() -> None:
    route = respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json=_answer("ok")))
    await _client().generate([Turn.caller(Part.from_text("hi"))])
    assert "generationConfig" not in json.loads(route.calls.last.request.content)


@pytest.mark.asyncio
@respx.mock
async def test_http_error_carries_backend_message() -> None:
    respx.post(ENDPOINT).mock(
        return_value=httpx.Response(400, json={"error": {"code": 400, "message": "API key not valid"}})
    )
    with pytest.raises(BackendError, match="HTTP 400: API key not valid"):
        await _client().generate([Turn.caller(Part.from_text("hi"))])


@pytest.mark.asyncio
@respx.mock
async def test_network_error_becomes_backend_error() -> None:
    respx.post(ENDPOINT).mock(side_effect=httpx.ConnectError("refused"))
    with pytest.raises(BackendError, match="network error"):
        await _client().generate([Turn.caller(Part.from_text("hi"))])


@pytest.mark.asyncio
@respx.mock
async def test_timeout_becomes_backend_error() -> None:
    respx.post(ENDPOINT).mock(side_effect=httpx.ReadTimeout("slow"))
    with pytest.raises(BackendError, match="timed out"):
        await _client(timeout=1.0).generate([Turn.caller(Part.from_text("hi"))])


@pytest.mark.asyncio
@respx.mock
async def test_non_json_body() -> None:
    respx.post(ENDPOINT).mock(return_value=httpx.Response(200, text="<html>"))
    with pytest.raises(BackendError, match="non-JSON"):
        await _client().generate([Turn.caller(Part.from_text("hi"))])


def test_blocked_prompt() -> None:
    with pytest.raises(BlockedPromptError, match="SAFETY"):
        extract_text({"promptFeedback": {"blockReason": "SAFETY"}})


def test_no_candidates() -> None:
    with pytest.raises(BackendError, match="no candidates"):
        extract_text({})


def test_candidate_without_text_reports_finish_reason() -> None:
    with pytest.raises(BackendError, match="MAX_TOKENS"):
        extract_text({"candidates": [{"content": {"parts": []}, "finishReason": "MAX_TOKENS"}]})


def test_non_text_parts_are_skipped() -> None:
    body = {"candidates": [{"content": {"parts": [{"functionCall": {}}, {"text": "kept"}]}}]}
    assert extract_text(body) == "kept"
