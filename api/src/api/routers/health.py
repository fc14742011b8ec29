"""Health check."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter()


@router.get("/health")
async def health_check():
    return {"status": "ok", "service": "attention-index-api"}


@router.get("/health/ready")
async def readiness_check(request: Request):
    services = getattr(request.app.state, "ai_services", None)
    if services is None:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "error": "AI services are not initialized"},
        )
    return {
        "status": "ready",
        "configured": {
            "generation": bool(services.generator.api_key),
            "emotion": bool(services.vibe.api_key),
            "speech": bool(services.synthesizer.api_key),
        },
    }
