"""API test configuration."""

import json
import random

import httpx
import pytest
from api.main import create_app
from attention_index.services.ai_services import AIServices
from attention_index.services.llm_client import GenerationClient
from attention_index.services.request_queue import RateLimitedQueue
from attention_index.services.speech import SpeechSynthesizer
from attention_index.services.vibe import VibeAnalyzer
from httpx import ASGITransport, AsyncClient


class FakeUpstream:
    """Answers Gemini, Hume and ElevenLabs calls from canned state."""

    def __init__(self):
        self.gemini_text: str | None = None  # None -> 503
        self.hume_body: dict | None = None  # None -> 500
        self.speech_status = 200
        self.audio = b"ID3fake-mp3"
        self.requests: list[httpx.Request] = []

    def calls_to(self, host_fragment: str) -> list[httpx.Request]:
        return [r for r in self.requests if host_fragment in r.url.host]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        if "generativelanguage" in host:
            if self.gemini_text is None:
                return httpx.Response(503, json={"error": {"message": "model overloaded"}})
            return httpx.Response(
                200,
                json={"candidates": [{"content": {"parts": [{"text": self.gemini_text}]}}]},
            )
        if "hume" in host:
            if self.hume_body is None:
                return httpx.Response(500, text="internal error")
            return httpx.Response(200, json=self.hume_body)
        if "elevenlabs" in host:
            if self.speech_status != 200:
                return httpx.Response(self.speech_status, json={"detail": {"message": "invalid api key"}})
            return httpx.Response(200, content=self.audio, headers={"content-type": "audio/mpeg"})
        return httpx.Response(404)

    def set_gemini_json(self, payload) -> None:
        self.gemini_text = json.dumps(payload)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
async def ai_services(upstream):
    transport = httpx.MockTransport(upstream.handler)

    async def no_sleep(_seconds):
        return None

    services = AIServices(
        generator=GenerationClient("gemini-key", queue=RateLimitedQueue(0), transport=transport),
        synthesizer=SpeechSynthesizer("xi-key", transport=transport, sleep=no_sleep),
        vibe=VibeAnalyzer("hume-key", transport=transport, rng=random.Random(11)),
    )
    yield services
    await services.close()


@pytest.fixture
def app(ai_services):
    a = create_app()
    a.state.ai_services = ai_services
    return a


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def uninitialized_client():
    """Client for an app whose AI services never started."""
    a = create_app()
    transport = ASGITransport(app=a)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def market_card():
    return {
        "marketId": "mkt_gpt5",
        "topic": "OpenAI GPT-5",
        "category": "tech",
        "momentum": 94,
        "change24h": 12.4,
        "volume": "$2.1M",
        "hypeScore": 97,
    }


@pytest.fixture
def briefing_markets():
    return [
        {
            "topic": "OpenAI GPT-5",
            "momentum": 87,
            "change24h": 12.4,
            "volume": "$2.1M",
            "hypeScore": 94,
            "hypeSummary": "Launch rumors dominate tech Twitter.",
        },
        {"topic": "Taylor Swift Tour", "momentum": 72, "change24h": -3.2, "volume": "$980K", "hypeScore": 81},
    ]
