"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from attention_index.config import get_settings
from attention_index.services.ai_services import AIServices
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routers import ai, auth, health, trading

logger = logging.getLogger(__name__)

RPC_PREFIX = "/api/trpc"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    services: AIServices | None = None
    # Tests may install their own services before startup
    if getattr(app.state, "ai_services", None) is None:
        services = AIServices.from_settings(get_settings())
        app.state.ai_services = services
    try:
        yield
    finally:
        if services is not None:
            await services.close()
            app.state.ai_services = None


def _warn_missing_keys() -> None:
    settings = get_settings()
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is empty; analysis and briefings will use fallbacks")
    if not settings.hume_api_key:
        logger.warning("HUME_API_KEY is empty; vibe analysis will use the local heuristic")
    if not settings.elevenlabs_api_key:
        logger.warning("ELEVENLABS_API_KEY is empty; audio briefings will fail")


def create_app() -> FastAPI:
    app = FastAPI(title="Attention Index API", version="0.1.0", lifespan=lifespan)
    app.state.ai_services = None
    settings = get_settings()
    _warn_missing_keys()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.site_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(health.router, tags=["health"])
    app.include_router(auth.router, prefix=RPC_PREFIX, tags=["auth"])
    app.include_router(trading.router, prefix=RPC_PREFIX, tags=["trading"])
    app.include_router(ai.router, prefix=RPC_PREFIX, tags=["ai"])
    return app


app = create_app()
