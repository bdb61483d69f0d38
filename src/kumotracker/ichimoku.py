"""Ichimoku Cloud engine.

Evaluates the classical Ichimoku lines at the latest bar of a daily series.
The leading spans are the values that were projected forward 26 bars ago,
i.e. they are computed from the window that ends 26 bars before the latest
bar.
"""

from __future__ import annotations

import logging

from kumotracker.errors import InsufficientHistory
from kumotracker.models.ichimoku import IchimokuSnapshot
from kumotracker.models.series import BarSeries

logger = logging.getLogger(__name__)

TENKAN_PERIOD = 9
KIJUN_PERIOD = 26
SENKOU_B_PERIOD = 52
DISPLACEMENT = 26

REQUIRED_BARS = SENKOU_B_PERIOD + DISPLACEMENT


def period_midpoint(window: BarSeries) -> float:
    """Return ``(highest high + lowest low) / 2`` over ``window``."""
    if not len(window):
        raise InsufficientHistory(0, 1, "midpoint")
    highest = max(b.high for b in window)
    lowest = min(b.low for b in window)
    return (highest + lowest) / 2


def _midpoint(series: BarSeries, period: int, offset: int, name: str) -> float:
    window = series.window(period, offset)
    if len(window) < period:
        raise InsufficientHistory(len(window), period, name)
    return period_midpoint(window)


def compute(series: BarSeries) -> IchimokuSnapshot:
    """Compute the Ichimoku snapshot for the latest bar of ``series``.

    Raises:
        InsufficientHistory: ``series`` holds fewer than 78 bars, or one of
            the historical windows is shorter than its period.
    """
    if len(series) < REQUIRED_BARS:
        raise InsufficientHistory(len(series), REQUIRED_BARS)

    tenkan = _midpoint(series, TENKAN_PERIOD, 0, "tenkan")
    kijun = _midpoint(series, KIJUN_PERIOD, 0, "kijun")

    past_tenkan = _midpoint(series, TENKAN_PERIOD, DISPLACEMENT, "senkou A (tenkan)")
    past_kijun = _midpoint(series, KIJUN_PERIOD, DISPLACEMENT, "senkou A (kijun)")
    senkou_a = (past_tenkan + past_kijun) / 2

    senkou_b = _midpoint(series, SENKOU_B_PERIOD, DISPLACEMENT, "senkou B")

    latest = series.latest
    snapshot = IchimokuSnapshot(
        tenkan=tenkan,
        kijun=kijun,
        senkou_a=senkou_a,
        senkou_b=senkou_b,
        price=latest.close,
        date=latest.date,
    )
    logger.debug("Ichimoku at %s: %s", latest.date, snapshot)
    return snapshot
