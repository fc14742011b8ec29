"""Session stubs for the dashboard."""

from __future__ import annotations

from attention_index.config import get_settings
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_session_user

router = APIRouter()
SESSION_COOKIE_PATH = "/"


@router.get("/auth.me")
async def me(user: dict | None = Depends(get_session_user)):
    return user


@router.post("/auth.logout")
async def logout() -> JSONResponse:
    settings = get_settings()
    response = JSONResponse({"success": True})
    response.delete_cookie(
        key=settings.session_cookie_name,
        path=SESSION_COOKIE_PATH,
    )
    return response
