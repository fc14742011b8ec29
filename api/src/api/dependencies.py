"""FastAPI dependency injection."""

from __future__ import annotations

from attention_index.services.ai_services import AIServices
from attention_index.services.llm_client import GenerationClient
from attention_index.services.speech import SpeechSynthesizer
from attention_index.services.vibe import VibeAnalyzer
from fastapi import HTTPException, Request, status


def get_ai_services(request: Request) -> AIServices:
    services = getattr(request.app.state, "ai_services", None)
    if services is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI services are not initialized",
        )
    return services


def get_generator(request: Request) -> GenerationClient:
    return get_ai_services(request).generator


def get_synthesizer(request: Request) -> SpeechSynthesizer:
    return get_ai_services(request).synthesizer


def get_vibe_analyzer(request: Request) -> VibeAnalyzer:
    return get_ai_services(request).vibe


def get_session_user(request: Request) -> dict | None:
    """Session check stub: there is no user store, so nobody is signed in."""
    return None
