"""Mock trading procedures."""

from __future__ import annotations

from attention_index.schemas.markets import (
    MarketFields,
    MarketSelection,
    TradeConfirmation,
    TradeRequest,
)
from attention_index.services import trading
from fastapi import APIRouter

router = APIRouter()


@router.post("/trading.selectMarket", response_model=MarketSelection)
async def select_market(body: MarketFields):
    return trading.select_market(body)


@router.post("/trading.placeTrade", response_model=TradeConfirmation)
async def place_trade(body: TradeRequest):
    return trading.place_trade(body)
