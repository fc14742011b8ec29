"""Gemini text-generation client behind a rate-limited request queue."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from attention_index.config import Settings
from attention_index.services.request_queue import RateLimitedQueue

logger = logging.getLogger(__name__)


class UpstreamError(RuntimeError):
    """An upstream API answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def raise_for_status_with_context(response: httpx.Response, service: str) -> None:
    """Raise UpstreamError with the most useful detail the body offers."""
    try:
        response.raise_for_status()
        return
    except httpx.HTTPStatusError as exc:
        detail = response.text.strip()
        try:
            body = response.json()
            if isinstance(body, dict):
                if isinstance(body.get("error"), dict):
                    detail = body["error"].get("message") or body["error"].get("code") or detail
                elif isinstance(body.get("detail"), dict):
                    detail = body["detail"].get("message") or body["detail"].get("status") or detail
                elif body.get("error"):
                    detail = str(body["error"])
                elif body.get("message"):
                    detail = str(body["message"])
        except Exception:
            pass
        if len(detail) > 400:
            detail = detail[:400]
        raise UpstreamError(
            f"{service} API request failed ({response.status_code}): {detail}",
            status_code=response.status_code,
        ) from exc


@dataclass(frozen=True)
class GenerationConfig:
    """Sampling parameters for one generateContent call."""

    temperature: float = 0.2
    max_output_tokens: int = 2048
    top_k: int | None = None
    top_p: float | None = None
    json_mode: bool = False

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "temperature": self.temperature,
            "maxOutputTokens": self.max_output_tokens,
        }
        if self.top_k is not None:
            payload["topK"] = self.top_k
        if self.top_p is not None:
            payload["topP"] = self.top_p
        if self.json_mode:
            payload["responseMimeType"] = "application/json"
        return payload


class GenerationClient:
    """Gemini ``generateContent`` client.

    Every request goes through the client's own RateLimitedQueue so all
    callers sharing one client share the quota.
    """

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = "https://generativelanguage.googleapis.com/v1beta",
        model: str = "gemini-2.0-flash",
        queue: RateLimitedQueue | None = None,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self._url = f"{api_url.rstrip('/')}/models/{model}:generateContent"
        self.queue = queue or RateLimitedQueue(4.0)
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> GenerationClient:
        return cls(
            settings.gemini_api_key,
            api_url=settings.gemini_api_url,
            model=settings.gemini_model,
            queue=RateLimitedQueue(settings.gemini_min_interval_seconds),
            timeout=settings.gemini_timeout_seconds,
            transport=transport,
        )

    async def _post(self, prompt: str, config: GenerationConfig) -> str:
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": config.to_payload(),
        }

        logger.info(
            "Generation request model=%s temperature=%s json=%s",
            self.model,
            config.temperature,
            config.json_mode,
        )
        response = await self._client.post(self._url, json=payload, headers=headers)
        raise_for_status_with_context(response, "Gemini")

        data = response.json()
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ValueError("No content in Gemini response") from exc
        if not isinstance(text, str) or not text.strip():
            raise ValueError("No content in Gemini response")

        logger.info("Generation response model=%s usage=%s", self.model, data.get("usageMetadata", {}))
        return text

    async def generate(self, prompt: str, config: GenerationConfig | None = None) -> str:
        """Generate text for ``prompt``; waits its turn in the request queue."""
        if not self.api_key:
            raise UpstreamError("GEMINI_API_KEY is not configured")
        cfg = config or GenerationConfig()
        return await self.queue.submit(lambda: self._post(prompt, cfg))

    async def generate_json(self, prompt: str, config: GenerationConfig | None = None) -> Any:
        """Generate and parse a JSON response."""
        text = await self.generate(prompt, config)
        return json.loads(strip_json_fencing(text))

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()


def strip_json_fencing(text: str) -> str:
    """Strip markdown JSON fencing if present."""
    text = text.strip()
    if text.startswith("```"):
        # Remove opening fence
        first_newline = text.find("\n")
        text = text[first_newline + 1 :] if first_newline != -1 else text[3:]
    if text.endswith("```"):
        text = text[:-3].rstrip()
    return text
