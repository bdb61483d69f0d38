"""Ichimoku snapshot data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class IchimokuSnapshot:
    """Ichimoku values evaluated at the latest bar.

    Attributes:
        tenkan: 9-period midpoint (conversion line).
        kijun: 26-period midpoint (base line).
        senkou_a: Leading span A as of the latest bar.
        senkou_b: Leading span B as of the latest bar.
        price: Close of the latest bar.
        date: Date of the latest bar.
    """

    tenkan: float
    kijun: float
    senkou_a: float
    senkou_b: float
    price: float
    date: date

    @property
    def cloud_top(self) -> float:
        return max(self.senkou_a, self.senkou_b)

    @property
    def cloud_bottom(self) -> float:
        return min(self.senkou_a, self.senkou_b)
