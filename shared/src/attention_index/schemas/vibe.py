"""Pydantic schemas for emotion analysis results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

AlertType = Literal["volatility_trap", "hype_train"]


class VibeAnalysis(BaseModel):
    """Joy/anxiety emotion scores, all integers in [0, 100]."""

    model_config = ConfigDict(frozen=True)

    joy: int = Field(ge=0, le=100)
    anxiety: int = Field(ge=0, le=100)
    confidence: int = Field(ge=0, le=100)
    dominant_emotion: str
    all_emotions: dict[str, int] = Field(default_factory=dict)


class VibeAlert(BaseModel):
    type: AlertType | None = None
    intensity: int = 0
    message: str


class VibeReport(BaseModel):
    vibe: VibeAnalysis
    alert: VibeAlert
