"""Signal classification from Ichimoku snapshots."""

from __future__ import annotations

from kumotracker.models.ichimoku import IchimokuSnapshot
from kumotracker.models.signal import Signal


def classify(snapshot: IchimokuSnapshot) -> Signal:
    """Map a snapshot to BUY, SELL or NEUTRAL.

    BUY needs Tenkan above Kijun and price above the top of the cloud; SELL
    needs Tenkan below Kijun and price below the bottom of the cloud. All
    comparisons are strict, so ties are NEUTRAL.
    """
    if snapshot.tenkan > snapshot.kijun and snapshot.price > snapshot.cloud_top:
        return Signal.BUY
    if snapshot.tenkan < snapshot.kijun and snapshot.price < snapshot.cloud_bottom:
        return Signal.SELL
    return Signal.NEUTRAL
