"""Mock trading handlers: stateless, in-memory, nothing is persisted."""

from __future__ import annotations

import logging
import random
import string
import time
from decimal import ROUND_HALF_UP, Decimal

from attention_index.schemas.markets import MarketFields, TradeRequest

logger = logging.getLogger(__name__)

DURATION_MS = {
    "30m": 30 * 60 * 1000,
    "1h": 60 * 60 * 1000,
    "3h": 3 * 60 * 60 * 1000,
}
TRADE_ID_PREFIX = "TRD"
TRADE_ID_SUFFIX_LENGTH = 9
_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


def now_ms() -> int:
    return int(time.time() * 1000)


def _market_payload(market: MarketFields) -> dict:
    return {
        "id": market.market_id,
        "topic": market.topic,
        "category": market.category,
        "momentum": market.momentum,
        "change24h": market.change_24h,
        "volume": market.volume,
        "hypeScore": market.hype_score,
    }


def estimate_return(amount: float, momentum: float, direction: str) -> float:
    if direction == "long":
        base_return = momentum * 0.01
    else:
        base_return = (100 - momentum) * 0.01
    value = amount * (1 + base_return)
    # whole cents, half-cent values round up rather than to even
    cents = Decimal(value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return float(cents) / 100


def expiry_timestamp(duration: str, timestamp_ms: int) -> int:
    return timestamp_ms + DURATION_MS[duration]


def generate_trade_id(timestamp_ms: int, rng: random.Random | None = None) -> str:
    r = rng or random.SystemRandom()
    suffix = "".join(r.choice(_SUFFIX_ALPHABET) for _ in range(TRADE_ID_SUFFIX_LENGTH))
    return f"{TRADE_ID_PREFIX}-{timestamp_ms}-{suffix}"


def select_market(market: MarketFields, timestamp_ms: int | None = None) -> dict:
    ts = timestamp_ms if timestamp_ms is not None else now_ms()
    logger.info("Market selected: %s (%s)", market.topic, market.market_id)
    return {
        "success": True,
        "message": f'Market "{market.topic}" selected for trading',
        "market": _market_payload(market),
        "timestamp": ts,
    }


def place_trade(
    trade: TradeRequest,
    timestamp_ms: int | None = None,
    rng: random.Random | None = None,
) -> dict:
    ts = timestamp_ms if timestamp_ms is not None else now_ms()
    logger.info(
        "Trade placed: %s %s USDC on %s (%s)",
        trade.direction.upper(),
        trade.amount,
        trade.topic,
        trade.duration,
    )
    return {
        "success": True,
        "tradeId": generate_trade_id(ts, rng),
        "message": "Trade placed successfully",
        "details": {
            "marketId": trade.market_id,
            "topic": trade.topic,
            "direction": trade.direction,
            "duration": trade.duration,
            "amount": trade.amount,
            "estimatedReturn": estimate_return(trade.amount, trade.momentum, trade.direction),
            "expiresAt": expiry_timestamp(trade.duration, ts),
        },
        "timestamp": ts,
    }
