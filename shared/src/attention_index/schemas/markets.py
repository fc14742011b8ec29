"""Pydantic schemas for market briefings, strategies and mock trades."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from attention_index.schemas.signals import RawSignal, RecommendedDuration

TradeDirection = Literal["long", "short"]
TradeDuration = Literal["30m", "1h", "3h"]
MomentumDirection = Literal["rising", "falling", "stable"]
RiskLevel = Literal["low", "medium", "high"]


class CamelModel(BaseModel):
    """Base model whose wire names are camelCase (the dashboard's convention)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MarketBriefingInput(CamelModel):
    topic: str
    momentum: float
    change_24h: float = Field(alias="change24h")
    volume: str
    hype_score: float
    hype_summary: str | None = None


class GeneratedScript(CamelModel):
    """A narration script and its estimated spoken length."""

    model_config = ConfigDict(frozen=True)

    script: str
    word_count: int
    estimated_duration: int


class VibeScores(BaseModel):
    joy: float
    anxiety: float


class MarketStrategy(BaseModel):
    summary: str
    momentum: MomentumDirection = "stable"
    recommended_duration: RecommendedDuration = "1H"
    rationale: str
    risk_level: RiskLevel = "medium"


class StrategyRequest(CamelModel):
    topic: str
    signals: list[RawSignal] = Field(default_factory=list)
    current_momentum: float
    vibe_data: VibeScores | None = None


class MarketFields(CamelModel):
    """The market card fields the dashboard submits with every trading call."""

    market_id: str
    topic: str
    category: str
    momentum: float
    change_24h: float = Field(alias="change24h")
    volume: str
    hype_score: float


class TradeRequest(MarketFields):
    direction: TradeDirection
    duration: TradeDuration
    amount: float = Field(ge=1)


class MarketSnapshot(CamelModel):
    id: str
    topic: str
    category: str
    momentum: float
    change_24h: float = Field(alias="change24h")
    volume: str
    hype_score: float


class MarketSelection(CamelModel):
    success: bool
    message: str
    market: MarketSnapshot
    timestamp: int


class TradeDetails(CamelModel):
    market_id: str
    topic: str
    direction: TradeDirection
    duration: TradeDuration
    amount: float
    estimated_return: float
    expires_at: int


class TradeConfirmation(CamelModel):
    """Acknowledgement of a mock trade; nothing is executed or stored."""

    success: bool
    trade_id: str
    message: str
    details: TradeDetails
    timestamp: int
