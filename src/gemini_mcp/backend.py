from __future__ import annotations

import logging
from typing import Any, Protocol, Sequence

import httpx

from .content import GenerationConfig, Turn

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_API_VERSION = "v1beta"
DEFAULT_MODEL = "gemini-2.5-pro"


class BackendError(RuntimeError):
    pass


class BlockedPromptError(BackendError):
    pass


class GenerationBackend(Protocol):
    async def generate(
        self,
        contents: Sequence[Turn],
        config: GenerationConfig | None = None,
    ) -> str: ...


class GeminiClient:
    """Minimal async client for the Gemini ``generateContent`` endpoint.

    Every call is a single attempt. ``timeout=None`` waits for the backend
    indefinitely.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version.strip("/")
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/{self.api_version}/models/{self.model}:generateContent"

    async def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        headers = {"x-goog-api-key": self.api_key}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
                response.raise_for_status()
                body = response.json()
        except httpx.TimeoutException as exc:
            raise BackendError(f"Gemini request timed out ({self.model})") from exc
        except httpx.HTTPStatusError as exc:
            raise BackendError(
                f"Gemini HTTP {exc.response.status_code}: {_error_message(exc.response)}"
            ) from exc
        except httpx.HTTPError as exc:
            raise BackendError(f"Gemini network error: {exc}") from exc
        except ValueError as exc:
            raise BackendError("Gemini returned a non-JSON response") from exc
        if not isinstance(body, dict):
            raise BackendError("Malformed Gemini response")
        return body

    async def generate(
        self,
        contents: Sequence[Turn],
        config: GenerationConfig | None = None,
    ) -> str:
        payload: dict[str, Any] = {"contents": [turn.as_wire() for turn in contents]}
        if config is not None and config.as_wire():
            payload["generationConfig"] = config.as_wire()
        logger.debug("generateContent model=%s turns=%d", self.model, len(contents))
        body = await self._post(payload)
        return extract_text(body)


def extract_text(body: dict[str, Any]) -> str:
    candidates = body.get("candidates") or []
    if not candidates:
        reason = (body.get("promptFeedback") or {}).get("blockReason")
        if reason:
            raise BlockedPromptError(f"Prompt blocked by Gemini: {reason}")
        raise BackendError("Gemini returned no candidates")
    first = candidates[0]
    if not isinstance(first, dict):
        raise BackendError("Malformed Gemini response")
    parts = (first.get("content") or {}).get("parts") or []
    texts = [p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)]
    if not texts:
        finish = first.get("finishReason", "UNKNOWN")
        raise BackendError(f"Gemini response contained no text (finish reason: {finish})")
    return "".join(texts)


def _error_message(response: httpx.Response) -> str:
    try:
        error = response.json().get("error", {})
        message = error.get("message")
        if message:
            return str(message)
    except (ValueError, AttributeError):
        pass
    return response.text[:300]
