"""Hume emotion analysis with a local keyword heuristic fallback."""

from __future__ import annotations

import logging
import math
import random
from typing import Any

import httpx

from attention_index.config import Settings
from attention_index.schemas.vibe import VibeAlert, VibeAnalysis, VibeReport
from attention_index.services.llm_client import UpstreamError, raise_for_status_with_context
from attention_index.services.outcome import Degraded, Ok, Outcome, unwrap

logger = logging.getLogger(__name__)

VOLATILITY_TRAP_THRESHOLD = 75
HYPE_TRAIN_THRESHOLD = 80

POSITIVE_KEYWORDS = (
    "moon", "pump", "bullish", "breaking", "huge", "massive", "rocket", "surge", "soar", "boom",
    "exciting", "amazing", "incredible", "ipo", "launch", "announce", "breakthrough",
    "revolutionary", "viral", "trending",
)
NEGATIVE_KEYWORDS = (
    "crash", "dump", "bearish", "warning", "risk", "fear", "concern", "drop", "fall", "decline",
    "worry", "uncertain", "volatile", "danger", "collapse", "panic", "sell", "loss", "scam",
    "fraud",
)

JOY_BASE = 30
ANXIETY_BASE = 20
KEYWORD_WEIGHT = 15
JOY_JITTER = 20
ANXIETY_JITTER = 15
SATURATION_THRESHOLD = 150
SATURATION_TARGET = 130
DOMINANCE_MARGIN = 20


def _clamp_score(value: Any, default: int = 0) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return int(max(0.0, min(100.0, round(number))))


def _dominant_emotion(joy: float, anxiety: float) -> str:
    if joy > anxiety + DOMINANCE_MARGIN:
        return "excitement"
    if anxiety > joy + DOMINANCE_MARGIN:
        return "fear"
    if joy > 60 and anxiety > 40:
        return "anticipation"
    return "neutral"


def count_keyword_hits(text: str) -> tuple[int, int]:
    lower = text.lower()
    positive = sum(1 for kw in POSITIVE_KEYWORDS if kw in lower)
    negative = sum(1 for kw in NEGATIVE_KEYWORDS if kw in lower)
    return positive, negative


def analyze_text_vibe_local(text: str, rng: random.Random | None = None) -> VibeAnalysis:
    """Keyword-scored joy/anxiety with bounded random jitter."""
    r = rng or random.Random()
    positive, negative = count_keyword_hits(text)

    base_joy = min(100.0, JOY_BASE + positive * KEYWORD_WEIGHT + r.random() * JOY_JITTER)
    base_anxiety = min(100.0, ANXIETY_BASE + negative * KEYWORD_WEIGHT + r.random() * ANXIETY_JITTER)

    # Both scores cannot be extreme at once
    total = base_joy + base_anxiety
    if total > SATURATION_THRESHOLD:
        joy = base_joy / total * SATURATION_TARGET
        anxiety = base_anxiety / total * SATURATION_TARGET
    else:
        joy, anxiety = base_joy, base_anxiety

    joy_score = _clamp_score(joy)
    anxiety_score = _clamp_score(anxiety)
    return VibeAnalysis(
        joy=joy_score,
        anxiety=anxiety_score,
        confidence=_clamp_score(60 + r.random() * 30),
        dominant_emotion=_dominant_emotion(joy, anxiety),
        all_emotions={
            "joy": joy_score,
            "anxiety": anxiety_score,
            "anticipation": _clamp_score((joy + anxiety) / 2),
            "surprise": _clamp_score(r.random() * 40 + 20),
            "neutral": _clamp_score(100 - (joy + anxiety) / 2),
        },
    )


def parse_hume_response(data: Any) -> VibeAnalysis:
    """Scale Hume's 0-1 emotion fractions to the 0-100 integer record."""
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")
    emotions = data.get("emotions") or {}
    if not isinstance(emotions, dict):
        raise ValueError("'emotions' must be an object")

    scaled = {
        str(name): _clamp_score(float(value) * 100)
        for name, value in emotions.items()
        if isinstance(value, (int, float)) and not isinstance(value, bool)
    }
    joy = scaled.get("joy", 50)
    anxiety = scaled.get("anxiety", 30)
    scaled.setdefault("joy", joy)
    scaled.setdefault("anxiety", anxiety)

    confidence = 70
    confidence_raw = data.get("confidence")
    if isinstance(confidence_raw, (int, float)) and not isinstance(confidence_raw, bool):
        confidence = _clamp_score(confidence_raw * 100, default=70)

    return VibeAnalysis(
        joy=joy,
        anxiety=anxiety,
        confidence=confidence,
        dominant_emotion=str(data.get("dominant_emotion") or _dominant_emotion(joy, anxiety)),
        all_emotions=scaled,
    )


def generate_vibe_alert(vibe: VibeAnalysis) -> VibeAlert:
    """Volatility (anxiety) outranks hype (joy); intensity is the triggering score."""
    if vibe.anxiety > VOLATILITY_TRAP_THRESHOLD:
        return VibeAlert(
            type="volatility_trap",
            intensity=vibe.anxiety,
            message=f"High volatility detected ({vibe.anxiety}% anxiety). Exercise caution.",
        )
    if vibe.joy > HYPE_TRAIN_THRESHOLD:
        return VibeAlert(
            type="hype_train",
            intensity=vibe.joy,
            message=f"Strong momentum detected ({vibe.joy}% excitement). Potential pump incoming.",
        )
    return VibeAlert(type=None, intensity=0, message="Market sentiment is neutral.")


class VibeAnalyzer:
    """Emotion analysis client; falls back to the local heuristic on any failure."""

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = "https://api.hume.ai/v0/evi/chat",
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.api_key = api_key
        self._api_url = api_url
        self._rng = rng or random.Random()
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> VibeAnalyzer:
        return cls(
            settings.hume_api_key,
            api_url=settings.hume_api_url,
            timeout=settings.hume_timeout_seconds,
            transport=transport,
        )

    async def _remote(self, text: str) -> VibeAnalysis:
        if not self.api_key:
            raise UpstreamError("HUME_API_KEY is not configured")
        headers = {
            "X-Hume-Api-Key": self.api_key,
            "Content-Type": "application/json",
        }
        payload = {
            "messages": [
                {
                    "role": "user",
                    "content": (
                        "Analyze the emotional content of this text and provide scores from 0-100 "
                        f'for joy/excitement and anxiety/fear. Text: "{text}"'
                    ),
                }
            ]
        }
        response = await self._client.post(self._api_url, json=payload, headers=headers)
        raise_for_status_with_context(response, "Hume")
        return parse_hume_response(response.json())

    async def analyze_text(self, text: str) -> VibeAnalysis:
        """Never raises; both paths return the same record shape."""
        try:
            outcome: Outcome[VibeAnalysis] = Ok(await self._remote(text))
        except Exception as e:
            outcome = Degraded(analyze_text_vibe_local(text, self._rng), str(e))
        return unwrap(outcome, logger, "Vibe analysis")

    async def analyze_market_vibe(self, hype_summary: str) -> VibeReport:
        vibe = await self.analyze_text(hype_summary)
        return VibeReport(vibe=vibe, alert=generate_vibe_alert(vibe))

    async def close(self) -> None:
        await self._client.aclose()
