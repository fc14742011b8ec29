"""Market strategy and live briefing prompt builders."""

from __future__ import annotations

from attention_index.schemas.markets import MarketBriefingInput, VibeScores
from attention_index.schemas.signals import RawSignal

WALL_STREET_BRIEFING_PROMPT = """You are a senior Wall Street market analyst delivering a live audio briefing for "Attention Index" - a platform that trades momentum on viral topics and cultural moments.

Write a punchy, urgent, 45-second market update script (approximately 120-140 words) in the style of a financial TV market wrap.

TONE REQUIREMENTS:
- Professional but energetic - like a trader who just spotted alpha
- Data-driven with specific numbers
- Urgent and time-sensitive language
- Use financial jargon naturally (momentum, velocity, positioning, flows)
- Short, punchy sentences for impact

STRUCTURE:
1. HOOK (5 sec): Attention-grabbing opening about the hottest market
2. TOP 3 BREAKDOWN (30 sec): Cover each market with momentum %, direction, and key insight
3. ALPHA CALL (8 sec): One specific actionable insight or pattern you're seeing
4. CLOSE (2 sec): Sign-off with urgency

Output ONLY the script text, no JSON or formatting."""


def _fmt_number(value: float) -> str:
    return f"{value:g}"


def build_strategy_prompt(
    topic: str,
    signals: list[RawSignal],
    current_momentum: float,
    vibe: VibeScores | None = None,
    *,
    max_signals: int = 5,
    content_truncation: int = 200,
) -> str:
    signal_text = "\n".join(f"- {s.content[:content_truncation]}" for s in signals[:max_signals])
    vibe_line = ""
    if vibe is not None:
        vibe_line = f"Vibe analysis: JOY={_fmt_number(vibe.joy)}%, ANX={_fmt_number(vibe.anxiety)}%"
    return f"""Analyze market "{topic}" and provide trading strategy:

Recent signals:
{signal_text}

Current momentum: {_fmt_number(current_momentum)}%
{vibe_line}

Provide:
1. summary: 2-3 sentence market overview
2. momentum: "rising", "falling", or "stable"
3. recommended_duration: "30M", "1H", or "3H"
4. rationale: Why this duration (max 40 words)
5. risk_level: "low", "medium", or "high"

JSON response only."""


def _format_market(index: int, market: MarketBriefingInput) -> str:
    sign = "+" if market.change_24h >= 0 else ""
    lines = [
        f"MARKET {index}: {market.topic}",
        f"- Momentum: {_fmt_number(market.momentum)}%",
        f"- 24h Change: {sign}{market.change_24h:.1f}%",
        f"- Volume: {market.volume}",
        f"- Hype Score: {_fmt_number(market.hype_score)}/100",
    ]
    if market.hype_summary:
        lines.append(f"- Context: {market.hype_summary}")
    return "\n".join(lines)


def build_briefing_prompt(markets: list[MarketBriefingInput]) -> str:
    markets_text = "\n\n".join(_format_market(i, m) for i, m in enumerate(markets, 1))
    return f"""{WALL_STREET_BRIEFING_PROMPT}

TOP 3 TRENDING MARKETS RIGHT NOW:

{markets_text}

Write the 45-second briefing script now:"""
