"""Market strategy and briefing script generation with deterministic fallbacks."""

from __future__ import annotations

import logging
from typing import Any

from attention_index.prompts.strategy import build_briefing_prompt, build_strategy_prompt
from attention_index.schemas.markets import (
    GeneratedScript,
    MarketBriefingInput,
    MarketStrategy,
    VibeScores,
)
from attention_index.schemas.signals import RawSignal
from attention_index.services.llm_client import GenerationClient, GenerationConfig
from attention_index.services.outcome import Degraded, Ok, Outcome, unwrap
from attention_index.services.speech import clean_script

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 150
BRIEFING_MARKETS = 3

VALID_MOMENTUM = {"rising", "falling", "stable"}
VALID_DURATIONS = {"30M", "1H", "3H"}
VALID_RISK = {"low", "medium", "high"}

STRATEGY_GENERATION = GenerationConfig(temperature=0.3, max_output_tokens=512, json_mode=True)
# Higher temperature for punchier narration
BRIEFING_GENERATION = GenerationConfig(temperature=0.7, max_output_tokens=400, top_k=40, top_p=0.95)

FALLBACK_STRATEGY = MarketStrategy(
    summary="Strategy analysis pending...",
    momentum="stable",
    recommended_duration="1H",
    rationale="Default recommendation while analysis loads",
    risk_level="medium",
)


def estimate_duration_seconds(word_count: int) -> int:
    """Spoken length at a professional narration pace, rounded half up."""
    return int(word_count * 60 / WORDS_PER_MINUTE + 0.5)


def make_script(text: str) -> GeneratedScript:
    script = text.strip()
    word_count = len(script.split())
    return GeneratedScript(
        script=script,
        word_count=word_count,
        estimated_duration=estimate_duration_seconds(word_count),
    )


def _pick(raw: dict[str, Any], key: str, valid: set[str], default: str, *, upper: bool = False) -> str:
    value = str(raw.get(key, default)).strip()
    value = value.upper() if upper else value.lower()
    return value if value in valid else default


def _normalize_strategy(raw: Any) -> MarketStrategy:
    if not isinstance(raw, dict):
        raise ValueError("Expected a JSON object")
    summary = str(raw.get("summary") or "").strip()
    if not summary:
        raise ValueError("Missing required key: summary")
    return MarketStrategy(
        summary=summary,
        momentum=_pick(raw, "momentum", VALID_MOMENTUM, "stable"),
        recommended_duration=_pick(raw, "recommended_duration", VALID_DURATIONS, "1H", upper=True),
        rationale=str(raw.get("rationale") or "").strip() or FALLBACK_STRATEGY.rationale,
        risk_level=_pick(raw, "risk_level", VALID_RISK, "medium"),
    )


async def generate_market_strategy(
    client: GenerationClient,
    topic: str,
    signals: list[RawSignal],
    current_momentum: float,
    vibe: VibeScores | None = None,
) -> MarketStrategy:
    """Summarize a market and recommend a trading window. Never raises."""
    prompt = build_strategy_prompt(topic, signals, current_momentum, vibe)
    try:
        outcome: Outcome[MarketStrategy] = Ok(
            _normalize_strategy(await client.generate_json(prompt, STRATEGY_GENERATION))
        )
    except Exception as e:
        outcome = Degraded(FALLBACK_STRATEGY, str(e))
    return unwrap(outcome, logger, f"Strategy for '{topic}'")


def build_fallback_briefing(markets: list[MarketBriefingInput]) -> str:
    """Templated live briefing built straight from the market numbers."""
    if not markets:
        return (
            "This is your Attention Index live briefing. Markets are currently being analyzed. "
            "Check back shortly for the latest momentum plays. Trade smart."
        )

    top = markets[0]
    direction = "up" if top.change_24h >= 0 else "down"
    parts = [
        "This is your Attention Index live briefing.",
        f"Leading the momentum board right now: {top.topic}, surging {direction} "
        f"{abs(top.change_24h):.0f} percent with a hype score of {top.hype_score:g}.",
    ]
    if len(markets) > 1:
        parts.append(f"In second position, {markets[1].topic} showing {markets[1].momentum:g} percent momentum.")
    if len(markets) > 2:
        parts.append(f"And rounding out the top three, {markets[2].topic} at {markets[2].momentum:g} percent.")
    parts.append("That's your alpha update. Position accordingly and trade smart.")
    return " ".join(parts)


async def generate_live_hype_briefing(
    client: GenerationClient,
    markets: list[MarketBriefingInput],
) -> GeneratedScript:
    """Write a ~45 second narration for the top markets. Never raises."""
    top_markets = markets[:BRIEFING_MARKETS]
    try:
        text = await client.generate(build_briefing_prompt(top_markets), BRIEFING_GENERATION)
        if not clean_script(text):
            raise ValueError("Generated script has no speakable text")
        outcome: Outcome[GeneratedScript] = Ok(make_script(text))
    except Exception as e:
        outcome = Degraded(make_script(build_fallback_briefing(top_markets)), str(e))

    script = unwrap(outcome, logger, "Live hype briefing")
    logger.info(
        "Briefing script: %d words, ~%ds", script.word_count, script.estimated_duration
    )
    return script


def build_briefing_script(markets: list[MarketBriefingInput]) -> GeneratedScript:
    """Deterministic alpha briefing used when no generated script is wanted."""
    intro = (
        "Welcome to your Live Alpha Briefing from Attention Index. "
        "Here's what's moving the attention markets right now."
    )
    positions = ("Leading the pack", "In second place", "Rounding out the top three")
    segments = []
    for position, market in zip(positions, markets[:BRIEFING_MARKETS]):
        direction = "up" if market.change_24h >= 0 else "down"
        segment = (
            f"{position}, {market.topic} with a momentum score of {market.momentum:g}. "
            f"It's {direction} {abs(market.change_24h):.1f} percent in the last 24 hours."
        )
        if market.hype_summary:
            segment += f" {market.hype_summary}"
        segments.append(segment)
    outro = "That's your alpha briefing. Trade smart, and remember: attention is the new currency."
    return make_script(" ".join([intro, *segments, outro]))
