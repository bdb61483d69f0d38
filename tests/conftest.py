"""Shared fixtures for kumotracker tests."""

from __future__ import annotations

import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from kumotracker.models.bar import Bar
from kumotracker.models.series import BarSeries
from kumotracker.providers.mock import MockSource

START = date(2024, 1, 1)


def flat_bars(count: int, price: float, start: date = START) -> list[Bar]:
    return [
        Bar(date=start + timedelta(days=i), open=price, high=price, low=price, close=price)
        for i in range(count)
    ]


def trending_bars(base: float, step: float, count: int = 80, flat: int = 54) -> list[Bar]:
    """``flat`` bars at ``base`` followed by bars moving ``step`` per day.

    With the defaults every window 26 bars back is flat, so both leading
    spans equal ``base``.
    """
    bars = flat_bars(flat, base)
    for i in range(flat, count):
        c = base + (i - flat + 1) * step
        bars.append(Bar(
            date=START + timedelta(days=i),
            open=c - step / 2,
            high=c + 1,
            low=c - 1,
            close=c,
            volume=1000.0,
        ))
    return bars


@pytest.fixture
def flat_series() -> BarSeries:
    """80 bars with high = low = close = 190."""
    return BarSeries.of(flat_bars(80, 190.0))


@pytest.fixture
def buy_series() -> BarSeries:
    """Flat at 100 for 54 bars, then rising 2 per bar up to a close of 152."""
    return BarSeries.of(trending_bars(100.0, 2.0))


@pytest.fixture
def sell_series() -> BarSeries:
    """Flat at 200 for 54 bars, then falling 2 per bar down to a close of 148."""
    return BarSeries.of(trending_bars(200.0, -2.0))


@pytest.fixture
def mock_source() -> MockSource:
    return MockSource()
