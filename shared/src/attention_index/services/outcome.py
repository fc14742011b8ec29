"""Ok/Degraded results for AI adapters that never raise to their callers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def degraded(self) -> bool:
        return False


@dataclass(frozen=True)
class Degraded(Generic[T]):
    """A locally built fallback value plus the reason the upstream path failed."""

    value: T
    reason: str

    @property
    def degraded(self) -> bool:
        return True


Outcome = Ok[T] | Degraded[T]


def unwrap(outcome: Outcome[T], logger: logging.Logger, operation: str) -> T:
    """Collapse an outcome to its value, logging the reason when it degraded."""
    if isinstance(outcome, Degraded):
        logger.warning("%s degraded to fallback: %s", operation, outcome.reason)
    return outcome.value
