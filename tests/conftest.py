"""Shared fixtures for service tests."""

import json

import httpx
import pytest
from attention_index.schemas.markets import MarketBriefingInput
from attention_index.schemas.signals import Engagement, RawSignal


@pytest.fixture
def make_signal():
    """Factory for RawSignal instances with sequential ids."""

    def _make(index: int, content: str | None = None, source: str = "twitter") -> RawSignal:
        return RawSignal(
            id=f"sig_{index:03d}",
            source=source,
            content=content or f"Signal {index}: SpaceX announces a surprise Starship launch window",
            timestamp=1_760_000_000_000 + index,
            engagement=Engagement(likes=100 + index, retweets=10),
        )

    return _make


@pytest.fixture
def sample_signals(make_signal):
    return [
        make_signal(1, "OpenAI just dropped a new reasoning model and the timeline is melting"),
        make_signal(2, "r/wallstreetbets is piling into the GameStop squeeze again", source="reddit"),
        make_signal(3, "Show HN: a Rust rewrite of the attention index scraper", source="hackernews"),
    ]


@pytest.fixture
def sample_markets():
    return [
        MarketBriefingInput(
            topic="OpenAI GPT-5",
            momentum=87.0,
            change_24h=12.4,
            volume="$2.1M",
            hype_score=94.0,
            hype_summary="Launch rumors dominate tech Twitter.",
        ),
        MarketBriefingInput(
            topic="Taylor Swift Tour",
            momentum=72.0,
            change_24h=-3.2,
            volume="$980K",
            hype_score=81.0,
        ),
        MarketBriefingInput(
            topic="Bitcoin ETF",
            momentum=64.0,
            change_24h=5.0,
            volume="$4.4M",
            hype_score=70.0,
        ),
        MarketBriefingInput(
            topic="Mars Mission",
            momentum=40.0,
            change_24h=1.0,
            volume="$120K",
            hype_score=35.0,
        ),
    ]


@pytest.fixture
def gemini_reply():
    """Build a generateContent response whose first part carries ``text``."""

    def _reply(payload, status_code: int = 200) -> httpx.Response:
        text = payload if isinstance(payload, str) else json.dumps(payload)
        return httpx.Response(
            status_code,
            json={
                "candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}],
                "usageMetadata": {"promptTokenCount": 10, "candidatesTokenCount": 20},
            },
        )

    return _reply


@pytest.fixture
def no_sleep():
    """Sleep replacement that records requested delays instead of waiting."""
    delays: list[float] = []

    async def _sleep(seconds: float) -> None:
        delays.append(seconds)

    _sleep.delays = delays
    return _sleep
