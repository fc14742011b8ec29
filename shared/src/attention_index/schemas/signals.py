"""Pydantic schemas for raw social signals and their analyses."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SignalSource = Literal["twitter", "reddit", "hackernews", "news"]
RecommendedDuration = Literal["30M", "1H", "3H"]


class Engagement(BaseModel):
    """Engagement counters attached to a signal by the collector."""

    model_config = ConfigDict(frozen=True)

    likes: int | None = None
    retweets: int | None = None
    comments: int | None = None


class RawSignal(BaseModel):
    """A unit of raw social/news content to be analyzed."""

    model_config = ConfigDict(frozen=True)

    id: str
    source: SignalSource
    content: str
    timestamp: int
    engagement: Engagement | None = None


class SignalAnalysis(BaseModel):
    """Combined extraction and duration recommendation for one signal."""

    model_config = ConfigDict(frozen=True)

    core_event: str
    main_actors: list[str] = Field(default_factory=list)
    hype_summary: str
    is_bot_noise: bool = False
    confidence: int = Field(ge=0, le=100)
    recommended_duration: RecommendedDuration = "1H"
    rationale: str


class SignalAnalysisEntry(SignalAnalysis):
    """A SignalAnalysis tagged with the id of the signal it was derived from."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    signal_id: str = Field(alias="signalId")
