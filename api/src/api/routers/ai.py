"""AI procedures: signal analysis, strategy, vibe and narrated briefings."""

from __future__ import annotations

import logging

from attention_index.schemas.audio import BriefingAudio, VoiceOption
from attention_index.schemas.markets import MarketBriefingInput, MarketStrategy, StrategyRequest
from attention_index.schemas.signals import RawSignal, SignalAnalysis, SignalAnalysisEntry
from attention_index.schemas.vibe import VibeReport
from attention_index.services.briefing import (
    generate_alpha_briefing_audio,
    generate_live_hype_briefing_audio,
)
from attention_index.services.llm_client import GenerationClient
from attention_index.services.signal_analyzer import analyze_batch_signals, analyze_signal
from attention_index.services.speech import (
    DEFAULT_VOICE,
    VOICES,
    SpeechSynthesisError,
    SpeechSynthesizer,
    voice_options,
)
from attention_index.services.strategist import generate_market_strategy
from attention_index.services.vibe import VibeAnalyzer, generate_vibe_alert
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.dependencies import get_generator, get_synthesizer, get_vibe_analyzer

logger = logging.getLogger(__name__)
router = APIRouter()

BRIEFING_FAILED_DETAIL = "Failed to generate briefing. Please try again later."


# --- Request schemas ---


class BatchSignalsRequest(BaseModel):
    signals: list[RawSignal] = Field(default_factory=list)


class VibeRequest(BaseModel):
    text: str


class MarketVibeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    hype_summary: str = Field(alias="hypeSummary")


class BriefingRequest(BaseModel):
    markets: list[MarketBriefingInput] = Field(default_factory=list)
    voice: str = DEFAULT_VOICE

    @field_validator("voice")
    @classmethod
    def validate_voice(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in VOICES:
            raise ValueError(f"Unknown voice '{value}'")
        return normalized


# --- Procedures ---


@router.post("/ai.analyzeSignal", response_model=SignalAnalysis)
async def ai_analyze_signal(
    body: RawSignal,
    generator: GenerationClient = Depends(get_generator),
):
    return await analyze_signal(generator, body)


@router.post("/ai.analyzeBatchSignals", response_model=list[SignalAnalysisEntry])
async def ai_analyze_batch_signals(
    body: BatchSignalsRequest,
    generator: GenerationClient = Depends(get_generator),
):
    results = await analyze_batch_signals(generator, body.signals)
    return [
        SignalAnalysisEntry(signal_id=signal_id, **analysis.model_dump())
        for signal_id, analysis in results.items()
    ]


@router.post("/ai.generateMarketStrategy", response_model=MarketStrategy)
async def ai_generate_market_strategy(
    body: StrategyRequest,
    generator: GenerationClient = Depends(get_generator),
):
    return await generate_market_strategy(
        generator,
        body.topic,
        body.signals,
        body.current_momentum,
        body.vibe_data,
    )


@router.post("/ai.analyzeVibe", response_model=VibeReport)
async def ai_analyze_vibe(
    body: VibeRequest,
    analyzer: VibeAnalyzer = Depends(get_vibe_analyzer),
):
    vibe = await analyzer.analyze_text(body.text)
    return VibeReport(vibe=vibe, alert=generate_vibe_alert(vibe))


@router.post("/ai.analyzeMarketVibe", response_model=VibeReport)
async def ai_analyze_market_vibe(
    body: MarketVibeRequest,
    analyzer: VibeAnalyzer = Depends(get_vibe_analyzer),
):
    return await analyzer.analyze_market_vibe(body.hype_summary)


@router.post("/ai.generateLiveHypeBriefing", response_model=BriefingAudio)
async def ai_generate_live_hype_briefing(
    body: BriefingRequest,
    generator: GenerationClient = Depends(get_generator),
    synthesizer: SpeechSynthesizer = Depends(get_synthesizer),
):
    try:
        return await generate_live_hype_briefing_audio(
            generator, synthesizer, body.markets, body.voice
        )
    except SpeechSynthesisError as e:
        logger.error("Live hype briefing failed: %s", e)
        raise HTTPException(status_code=502, detail=BRIEFING_FAILED_DETAIL) from e


@router.post("/ai.generateAudioBriefing", response_model=BriefingAudio)
async def ai_generate_audio_briefing(
    body: BriefingRequest,
    synthesizer: SpeechSynthesizer = Depends(get_synthesizer),
):
    try:
        return await generate_alpha_briefing_audio(synthesizer, body.markets, body.voice)
    except SpeechSynthesisError as e:
        logger.error("Audio briefing failed: %s", e)
        raise HTTPException(status_code=502, detail=BRIEFING_FAILED_DETAIL) from e


@router.get("/ai.getVoiceOptions", response_model=list[VoiceOption])
async def ai_get_voice_options():
    return voice_options()
