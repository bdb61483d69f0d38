"""Trading signal enumeration."""

from __future__ import annotations

from enum import Enum


class Signal(str, Enum):
    """Discrete signal derived from an Ichimoku snapshot."""

    BUY = "BUY"
    SELL = "SELL"
    NEUTRAL = "NEUTRAL"

    @property
    def actionable(self) -> bool:
        return self is not Signal.NEUTRAL
