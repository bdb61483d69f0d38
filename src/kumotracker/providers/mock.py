"""Mock provider for testing and CI, no network required."""

from __future__ import annotations

from datetime import date, timedelta

import pandas as pd

from kumotracker.models.bar import Bar
from kumotracker.providers.base import BAR_COLUMNS, BaseBarSource


class MockSource(BaseBarSource):
    """In-memory source that returns configurable static data.

    Use ``set_bars`` or ``set_rows`` to pre-load data, or leave defaults for
    auto-generated synthetic weekday bars.
    """

    name = "mock"

    def __init__(self, days: int = 120, end: date | None = None) -> None:
        self.days = days
        self.end = end or date.today()
        self._frames: dict[str, pd.DataFrame] = {}
        self.calls: list[str] = []

    # --- Pre-load helpers ---

    def set_bars(self, symbol: str, bars: list[Bar]) -> None:
        self._frames[symbol.upper()] = pd.DataFrame(
            [
                {
                    "date": b.date,
                    "open": b.open,
                    "high": b.high,
                    "low": b.low,
                    "close": b.close,
                    "volume": b.volume,
                }
                for b in bars
            ],
            columns=BAR_COLUMNS,
        )

    def set_rows(self, symbol: str, rows: list[dict]) -> None:
        """Pre-load raw rows, malformed values included."""
        self._frames[symbol.upper()] = pd.DataFrame(rows)

    # --- Provider implementation ---

    def get_daily_bars(self, symbol: str) -> pd.DataFrame:
        key = symbol.upper()
        self.calls.append(key)
        if key in self._frames:
            return self._frames[key].copy()
        return self._generate_rows()

    # --- Synthetic data generation ---

    def _generate_rows(self) -> pd.DataFrame:
        """Generate ``days`` weekday bars ending at ``end``."""
        dates: list[date] = []
        current = self.end
        while len(dates) < self.days:
            if current.weekday() < 5:
                dates.append(current)
            current -= timedelta(days=1)
        dates.reverse()

        base_price = 190.0
        rows = []
        for i, d in enumerate(dates):
            o = base_price + (i % 5) * 0.10
            rows.append({
                "date": d,
                "open": round(o, 2),
                "high": round(o + 0.25, 2),
                "low": round(o - 0.15, 2),
                "close": round(o + 0.05, 2),
                "volume": 10000.0 + i * 100,
            })
        return pd.DataFrame(rows, columns=BAR_COLUMNS)
