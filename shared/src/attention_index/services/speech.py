"""ElevenLabs text-to-speech adapter with retry, backoff and model fallback."""

from __future__ import annotations

import asyncio
import logging
import re
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from attention_index.config import Settings
from attention_index.schemas.audio import VoiceOption
from attention_index.services.llm_client import UpstreamError, raise_for_status_with_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Voice:
    key: str
    voice_id: str
    name: str
    desc: str


VOICES: dict[str, Voice] = {
    "bill": Voice("bill", "pqHfZKP75CvOlQylNhV4", "Bill", "Authoritative male"),
    "charlotte": Voice("charlotte", "XB0fDUnXU5powFXDhCwa", "Charlotte", "Professional female"),
    "rachel": Voice("rachel", "21m00Tcm4TlvDq8ikWAM", "Rachel", "Warm female"),
    "adam": Voice("adam", "pNInz6obpgDQGcFmaJgB", "Adam", "Deep male"),
    "josh": Voice("josh", "TxGEqnHWrfWFTfGW9XjX", "Josh", "Energetic male"),
}
DEFAULT_VOICE = "bill"

SPEECH_MODELS: dict[str, str] = {
    "flash": "eleven_flash_v2_5",
    "turbo": "eleven_turbo_v2_5",
}
DEFAULT_MODEL = "flash"
# flash is the low-latency model; turbo tolerates requests flash rejects
MODEL_FALLBACK: dict[str, str] = {"flash": "turbo"}

VOICE_SETTINGS: dict[str, Any] = {
    "stability": 0.5,
    "similarity_boost": 0.75,
    "style": 0.35,
    "use_speaker_boost": True,
}

AUDIO_CONTENT_TYPE = "audio/mpeg"

# Client errors that a different model cannot fix
_NON_FALLBACK_STATUSES = {401, 403, 429}

_FORMATTING_CHARS = re.compile(r"[{}\[\]]")
_ESCAPED_QUOTES = re.compile(r"\\+[\"']")


class SpeechSynthesisError(RuntimeError):
    """Speech synthesis failed after retries and model fallback."""

    def __init__(self, message: str, *, model: str, attempts: int) -> None:
        super().__init__(message)
        self.model = model
        self.attempts = attempts


class AttemptState(str, Enum):
    ATTEMPTING = "attempting"
    FELL_BACK = "fell_back"


@dataclass(frozen=True)
class SpeechResult:
    audio: bytes
    content_type: str
    model: str
    voice: str
    elapsed_ms: int


def voice_options() -> list[VoiceOption]:
    return [VoiceOption(id=v.key, name=v.name, desc=v.desc) for v in VOICES.values()]


def clean_script(text: str) -> str:
    """Remove leftover JSON/markdown structure from generated narration."""
    cleaned = _ESCAPED_QUOTES.sub("", text)
    cleaned = _FORMATTING_CHARS.sub("", cleaned)
    cleaned = cleaned.replace("\\n", " ").replace("\\", "")
    return re.sub(r"\s+", " ", cleaned).strip()


def is_network_error(exc: BaseException) -> bool:
    """Connection resets, aborted requests and timeouts."""
    return isinstance(exc, (httpx.TransportError, asyncio.TimeoutError, ConnectionError))


def should_fall_back(exc: BaseException, model_key: str) -> bool:
    if model_key not in MODEL_FALLBACK or not isinstance(exc, UpstreamError):
        return False
    status = exc.status_code or 0
    return 400 <= status < 500 and status not in _NON_FALLBACK_STATUSES


class SpeechSynthesizer:
    """Turns a script into audio bytes.

    States: ATTEMPTING(model, retries) -> FELL_BACK(turbo), or a raised error.
    Network errors retry the same model up to ``max_retries`` times with a
    linear ``retry * base_delay`` backoff. A client error on the flash model
    switches once to turbo without consuming a retry. Anything else fails.
    """

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = "https://api.elevenlabs.io/v1",
        timeout: float = 30.0,
        max_retries: int = 3,
        base_delay: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.api_key = api_key
        self._api_url = api_url.rstrip("/")
        self.max_retries = max_retries
        self.base_delay = base_delay
        self._sleep = sleep
        self._clock = clock
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> SpeechSynthesizer:
        return cls(
            settings.elevenlabs_api_key,
            api_url=settings.elevenlabs_api_url,
            timeout=settings.speech_timeout_seconds,
            max_retries=settings.speech_max_retries,
            base_delay=settings.speech_retry_base_delay_seconds,
            transport=transport,
        )

    async def _request(self, text: str, voice: Voice, model_key: str) -> bytes:
        headers = {
            "xi-api-key": self.api_key,
            "Content-Type": "application/json",
            "Accept": AUDIO_CONTENT_TYPE,
        }
        payload = {
            "text": text,
            "model_id": SPEECH_MODELS[model_key],
            "voice_settings": VOICE_SETTINGS,
        }
        url = f"{self._api_url}/text-to-speech/{voice.voice_id}"
        response = await self._client.post(url, json=payload, headers=headers)
        raise_for_status_with_context(response, "ElevenLabs")
        if not response.content:
            raise UpstreamError("ElevenLabs returned an empty audio body", status_code=response.status_code)
        return response.content

    async def synthesize(
        self,
        text: str,
        voice: str = DEFAULT_VOICE,
        model_preference: str = DEFAULT_MODEL,
    ) -> SpeechResult:
        if not self.api_key:
            raise SpeechSynthesisError("ELEVENLABS_API_KEY is not configured", model=model_preference, attempts=0)
        if voice not in VOICES:
            raise ValueError(f"Unknown voice '{voice}'")
        if model_preference not in SPEECH_MODELS:
            raise ValueError(f"Unknown speech model '{model_preference}'")

        script = clean_script(text)
        if not script:
            raise SpeechSynthesisError(
                "Nothing to synthesize after cleanup", model=model_preference, attempts=0
            )

        started = self._clock()
        model_key = model_preference
        state = AttemptState.ATTEMPTING
        retries = 0
        attempts = 0

        while True:
            attempts += 1
            try:
                audio = await self._request(script, VOICES[voice], model_key)
            except Exception as exc:
                if is_network_error(exc) and retries < self.max_retries:
                    retries += 1
                    delay = retries * self.base_delay
                    logger.warning(
                        "Speech network error model=%s (%s); retry %d/%d in %.1fs",
                        model_key,
                        exc,
                        retries,
                        self.max_retries,
                        delay,
                    )
                    await self._sleep(delay)
                    continue
                if state is AttemptState.ATTEMPTING and should_fall_back(exc, model_key):
                    fallback = MODEL_FALLBACK[model_key]
                    logger.warning(
                        "Speech model %s rejected request (%s); falling back to %s",
                        model_key,
                        exc,
                        fallback,
                    )
                    model_key = fallback
                    state = AttemptState.FELL_BACK
                    continue
                logger.error(
                    "Speech synthesis failed model=%s attempts=%d: %s", model_key, attempts, exc
                )
                raise SpeechSynthesisError(
                    f"Speech synthesis failed: {exc}", model=model_key, attempts=attempts
                ) from exc

            elapsed_ms = int((self._clock() - started) * 1000)
            logger.info(
                "Speech synthesized model=%s voice=%s bytes=%d in %dms",
                model_key,
                voice,
                len(audio),
                elapsed_ms,
            )
            return SpeechResult(
                audio=audio,
                content_type=AUDIO_CONTENT_TYPE,
                model=SPEECH_MODELS[model_key],
                voice=voice,
                elapsed_ms=elapsed_ms,
            )

    async def close(self) -> None:
        await self._client.aclose()
