"""Batch signal analysis prompt builder."""

from __future__ import annotations

from attention_index.schemas.signals import RawSignal

BATCH_SYSTEM_PROMPT = """You are a financial signal analyst and strategist for "Attention Index" trading platform.
Analyze social signals and provide BOTH data extraction AND trading strategy recommendations.

For EACH signal in the batch, output:
1. core_event: The main event being discussed
2. main_actors: Key people/companies involved (array)
3. hype_summary: Brief sentiment summary (max 50 words)
4. is_bot_noise: Boolean - true if spam/bot content
5. confidence: 0-100 score for analysis quality
6. recommended_duration: Trading window - "30M" (high volatility), "1H" (moderate), or "3H" (stable trend)
7. rationale: Brief reason for duration recommendation (max 30 words)

STRATEGY RULES:
- 30M: Use for breaking news, viral moments, high engagement spikes
- 1H: Use for developing stories, moderate momentum
- 3H: Use for established trends, stable sentiment

To maintain accuracy:
- Ignore bot/spam content (repetitive, suspicious patterns)
- Focus on genuine engagement signals
- Be conservative with confidence scores

Respond with a JSON array, one object per signal in the same order as input."""


def _format_signal(index: int, signal: RawSignal, content_truncation: int) -> str:
    lines = [
        f"Signal {index} ({signal.source}):",
        f'Content: "{signal.content[:content_truncation]}"',
    ]
    if signal.engagement is not None:
        lines.append(
            f"Engagement: likes={signal.engagement.likes or 0}, "
            f"comments={signal.engagement.comments or 0}"
        )
    return "\n".join(lines)


def build_batch_prompt(signals: list[RawSignal], content_truncation: int = 500) -> str:
    signal_text = "\n\n".join(
        _format_signal(i, signal, content_truncation) for i, signal in enumerate(signals, 1)
    )
    return f"""{BATCH_SYSTEM_PROMPT}

Analyze these {len(signals)} signals:

{signal_text}

Respond with a JSON array of {len(signals)} analysis objects."""
