"""Batch signal analysis: N raw signals in, N analyses out, fewest API calls."""

from __future__ import annotations

import logging
import math
from typing import Any

from attention_index.prompts.signal_batch import build_batch_prompt
from attention_index.schemas.signals import RawSignal, SignalAnalysis
from attention_index.services.llm_client import GenerationClient, GenerationConfig
from attention_index.services.outcome import Degraded, Ok, Outcome

logger = logging.getLogger(__name__)

BATCH_SIZE = 10
CONTENT_TRUNCATION = 500
FALLBACK_SUMMARY_CHARS = 100
VALID_DURATIONS = {"30M", "1H", "3H"}
DEFAULT_DURATION = "1H"

BATCH_GENERATION = GenerationConfig(
    temperature=0.2,
    max_output_tokens=2048,
    top_k=40,
    top_p=0.95,
    json_mode=True,
)


def fallback_analysis(signal: RawSignal) -> SignalAnalysis:
    return SignalAnalysis(
        core_event="Analysis unavailable",
        main_actors=[],
        hype_summary=signal.content[:FALLBACK_SUMMARY_CHARS],
        is_bot_noise=False,
        confidence=0,
        recommended_duration=DEFAULT_DURATION,
        rationale="Default recommendation - analysis pending",
    )


def _to_string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    text = str(value).strip()
    return [text] if text else []


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "1"}
    return bool(value)


def _clamp_confidence(value: Any) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    # json.loads accepts NaN and Infinity
    if not math.isfinite(number):
        return 0
    return int(max(0.0, min(100.0, round(number))))


def _normalize_analysis(raw: dict[str, Any], signal: RawSignal) -> SignalAnalysis:
    duration = str(raw.get("recommended_duration", DEFAULT_DURATION)).strip().upper()
    if duration not in VALID_DURATIONS:
        duration = DEFAULT_DURATION

    core_event = str(raw.get("core_event") or "").strip() or "Analysis unavailable"
    hype_summary = str(raw.get("hype_summary") or "").strip()
    if not hype_summary:
        hype_summary = signal.content[:FALLBACK_SUMMARY_CHARS]
    rationale = str(raw.get("rationale") or "").strip() or "Default recommendation - analysis pending"

    return SignalAnalysis(
        core_event=core_event,
        main_actors=_to_string_list(raw.get("main_actors")),
        hype_summary=hype_summary,
        is_bot_noise=_to_bool(raw.get("is_bot_noise", False)),
        confidence=_clamp_confidence(raw.get("confidence", 0)),
        recommended_duration=duration,
        rationale=rationale,
    )


def _chunks(signals: list[RawSignal], size: int) -> list[list[RawSignal]]:
    return [signals[i : i + size] for i in range(0, len(signals), size)]


async def _analyze_chunk(
    client: GenerationClient,
    batch: list[RawSignal],
) -> Outcome[list[SignalAnalysis]]:
    prompt = build_batch_prompt(batch, content_truncation=CONTENT_TRUNCATION)
    try:
        data = await client.generate_json(prompt, BATCH_GENERATION)
    except Exception as e:
        return Degraded([fallback_analysis(s) for s in batch], f"batch request failed: {e}")

    # Some responses wrap the array in an object
    if isinstance(data, dict):
        data = next((v for v in data.values() if isinstance(v, list)), None)
    if not isinstance(data, list):
        return Degraded([fallback_analysis(s) for s in batch], "expected JSON array")

    analyses: list[SignalAnalysis] = []
    missing = 0
    for idx, signal in enumerate(batch):
        raw = data[idx] if idx < len(data) else None
        if isinstance(raw, dict):
            analyses.append(_normalize_analysis(raw, signal))
        else:
            missing += 1
            analyses.append(fallback_analysis(signal))

    if missing:
        return Degraded(analyses, f"{missing} of {len(batch)} entries missing from response")
    return Ok(analyses)


async def analyze_batch_signals(
    client: GenerationClient,
    signals: list[RawSignal],
) -> dict[str, SignalAnalysis]:
    """Analyze signals in chunks of 10; the result maps every input id.

    Never raises: failed chunks and missing array positions get a
    deterministic fallback analysis.
    """
    results: dict[str, SignalAnalysis] = {}
    if not signals:
        return results

    for batch in _chunks(signals, BATCH_SIZE):
        outcome = await _analyze_chunk(client, batch)
        if isinstance(outcome, Degraded):
            logger.warning("Batch analysis degraded (%d signals): %s", len(batch), outcome.reason)
        for signal, analysis in zip(batch, outcome.value):
            results[signal.id] = analysis

    return results


async def analyze_signal(client: GenerationClient, signal: RawSignal) -> SignalAnalysis:
    results = await analyze_batch_signals(client, [signal])
    return results.get(signal.id) or fallback_analysis(signal)
