"""Tests for emotion analysis, the local heuristic, and vibe alerts."""

import json
import random

import httpx
import pytest
from attention_index.schemas.vibe import VibeAnalysis
from attention_index.services.vibe import (
    VibeAnalyzer,
    analyze_text_vibe_local,
    count_keyword_hits,
    generate_vibe_alert,
    parse_hume_response,
)


def _vibe(joy: int, anxiety: int) -> VibeAnalysis:
    return VibeAnalysis(joy=joy, anxiety=anxiety, confidence=70, dominant_emotion="neutral")


# ---------- Alerts ----------


def test_volatility_trap_above_75_anxiety():
    alert = generate_vibe_alert(_vibe(joy=10, anxiety=76))
    assert alert.type == "volatility_trap"
    assert alert.intensity == 76
    assert "76% anxiety" in alert.message


def test_volatility_trap_outranks_hype_train():
    alert = generate_vibe_alert(_vibe(joy=95, anxiety=80))
    assert alert.type == "volatility_trap"
    assert alert.intensity == 80


def test_hype_train_above_80_joy():
    alert = generate_vibe_alert(_vibe(joy=81, anxiety=75))
    assert alert.type == "hype_train"
    assert alert.intensity == 81


def test_thresholds_are_strict():
    alert = generate_vibe_alert(_vibe(joy=80, anxiety=75))
    assert alert.type is None
    assert alert.intensity == 0
    assert alert.message == "Market sentiment is neutral."


# ---------- Local heuristic ----------


def test_count_keyword_hits_is_case_insensitive():
    assert count_keyword_hits("MOON and PUMP but also a Crash") == (2, 1)


@pytest.mark.parametrize("seed", range(20))
def test_local_scores_without_keywords_stay_in_jitter_range(seed):
    vibe = analyze_text_vibe_local("the quarterly report was published", random.Random(seed))
    assert 30 <= vibe.joy <= 50
    assert 20 <= vibe.anxiety <= 35
    assert 60 <= vibe.confidence <= 90
    assert vibe.all_emotions["joy"] == vibe.joy
    assert vibe.all_emotions["anxiety"] == vibe.anxiety


@pytest.mark.parametrize("seed", range(20))
def test_local_scores_saturate_when_both_extreme(seed):
    text = "moon pump bullish rocket surge crash dump bearish panic collapse"
    vibe = analyze_text_vibe_local(text, random.Random(seed))
    assert vibe.joy + vibe.anxiety <= 131
    assert 0 <= vibe.joy <= 100
    assert 0 <= vibe.anxiety <= 100


def test_local_positive_text_reads_as_excitement():
    vibe = analyze_text_vibe_local("moon pump rocket surge", random.Random(1))
    assert vibe.joy >= 90
    assert vibe.dominant_emotion == "excitement"


def test_local_negative_text_reads_as_fear():
    vibe = analyze_text_vibe_local("crash panic collapse fraud", random.Random(1))
    assert vibe.anxiety >= 80
    assert vibe.dominant_emotion == "fear"


# ---------- Remote response parsing ----------


def test_parse_hume_response_scales_fractions():
    vibe = parse_hume_response(
        {"emotions": {"joy": 0.834, "anxiety": 0.12, "surprise": 0.5}, "confidence": 0.91}
    )
    assert vibe.joy == 83
    assert vibe.anxiety == 12
    assert vibe.confidence == 91
    assert vibe.all_emotions == {"joy": 83, "anxiety": 12, "surprise": 50}
    assert vibe.dominant_emotion == "excitement"


def test_parse_hume_response_defaults():
    vibe = parse_hume_response({})
    assert vibe.joy == 50
    assert vibe.anxiety == 30
    assert vibe.confidence == 70
    assert vibe.all_emotions == {"joy": 50, "anxiety": 30}


def test_parse_hume_response_ignores_non_finite_values():
    vibe = parse_hume_response(
        {"emotions": {"joy": float("nan"), "anxiety": float("inf")}, "confidence": float("nan")}
    )
    assert vibe.joy == 0
    assert vibe.anxiety == 0
    assert vibe.confidence == 70


def test_parse_hume_response_rejects_non_object():
    with pytest.raises(ValueError):
        parse_hume_response(["joy", 0.5])


# ---------- Analyzer ----------


async def test_analyzer_uses_remote_scores():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"emotions": {"joy": 0.2, "anxiety": 0.9}})

    analyzer = VibeAnalyzer("hume-key", transport=httpx.MockTransport(handler))
    try:
        report = await analyzer.analyze_market_vibe("Regulators warn of a crash")
    finally:
        await analyzer.close()

    assert report.vibe.joy == 20
    assert report.vibe.anxiety == 90
    assert report.alert.type == "volatility_trap"
    assert seen[0].headers["X-Hume-Api-Key"] == "hume-key"
    content = json.loads(seen[0].content)["messages"][0]["content"]
    assert 'Text: "Regulators warn of a crash"' in content


@pytest.mark.parametrize("status_code", [401, 500, 503])
async def test_analyzer_falls_back_on_http_error(status_code):
    analyzer = VibeAnalyzer(
        "hume-key",
        transport=httpx.MockTransport(lambda request: httpx.Response(status_code, text="nope")),
        rng=random.Random(3),
    )
    try:
        vibe = await analyzer.analyze_text("the quarterly report was published")
    finally:
        await analyzer.close()

    assert 30 <= vibe.joy <= 50
    assert 20 <= vibe.anxiety <= 35
    assert set(vibe.all_emotions) == {"joy", "anxiety", "anticipation", "surprise", "neutral"}


async def test_analyzer_falls_back_on_network_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    analyzer = VibeAnalyzer("hume-key", transport=httpx.MockTransport(handler), rng=random.Random(3))
    try:
        vibe = await analyzer.analyze_text("moon pump rocket surge")
    finally:
        await analyzer.close()

    assert vibe.dominant_emotion == "excitement"


async def test_analyzer_without_key_skips_remote():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={})

    analyzer = VibeAnalyzer("", transport=httpx.MockTransport(handler), rng=random.Random(3))
    try:
        vibe = await analyzer.analyze_text("nothing to see here")
    finally:
        await analyzer.close()

    assert seen == []
    assert 0 <= vibe.joy <= 100
