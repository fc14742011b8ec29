"""Narrated briefing pipeline: script -> formatting cleanup -> speech."""

from __future__ import annotations

import base64
import logging
import time

from attention_index.schemas.audio import BriefingAudio
from attention_index.schemas.markets import GeneratedScript, MarketBriefingInput
from attention_index.services.llm_client import GenerationClient
from attention_index.services.speech import DEFAULT_VOICE, SpeechResult, SpeechSynthesizer
from attention_index.services.strategist import build_briefing_script, generate_live_hype_briefing

logger = logging.getLogger(__name__)


def to_briefing_audio(
    script: GeneratedScript,
    speech: SpeechResult,
    generation_time_ms: int,
) -> BriefingAudio:
    audio_base64 = base64.b64encode(speech.audio).decode("ascii")
    return BriefingAudio(
        script=script.script,
        word_count=script.word_count,
        estimated_duration=script.estimated_duration,
        audio_base64=audio_base64,
        audio_url=f"data:{speech.content_type};base64,{audio_base64}",
        content_type=speech.content_type,
        model=speech.model,
        voice=speech.voice,
        generation_time_ms=generation_time_ms,
    )


async def generate_live_hype_briefing_audio(
    generator: GenerationClient,
    synthesizer: SpeechSynthesizer,
    markets: list[MarketBriefingInput],
    voice: str = DEFAULT_VOICE,
) -> BriefingAudio:
    """Generated script narrated by the chosen voice.

    Script generation never fails (it degrades to a template); speech
    synthesis failures propagate as SpeechSynthesisError.
    """
    started = time.monotonic()
    script = await generate_live_hype_briefing(generator, markets)
    speech = await synthesizer.synthesize(script.script, voice)
    elapsed_ms = int((time.monotonic() - started) * 1000)
    logger.info(
        "Live hype briefing ready: %d words, voice=%s model=%s in %dms",
        script.word_count,
        speech.voice,
        speech.model,
        elapsed_ms,
    )
    return to_briefing_audio(script, speech, elapsed_ms)


async def generate_alpha_briefing_audio(
    synthesizer: SpeechSynthesizer,
    markets: list[MarketBriefingInput],
    voice: str = DEFAULT_VOICE,
) -> BriefingAudio:
    """Template script narrated without a generation call."""
    started = time.monotonic()
    script = build_briefing_script(markets)
    speech = await synthesizer.synthesize(script.script, voice)
    return to_briefing_audio(script, speech, int((time.monotonic() - started) * 1000))
