"""Abstract base class for daily bar sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

import pandas as pd

BAR_COLUMNS = ["date", "open", "high", "low", "close", "volume"]


class BaseBarSource(ABC):
    """Abstract base for all daily price sources.

    Sources return raw rows as received; cleaning them into a ``BarSeries``
    is done by :func:`kumotracker.quality.filter_rows`, so a source must not
    fail on individual malformed rows.
    """

    name: str = "base"

    @abstractmethod
    def get_daily_bars(self, symbol: str) -> pd.DataFrame:
        """Fetch the daily price history for ``symbol``.

        Args:
            symbol: Instrument identifier, e.g. ``"GLD"``.

        Returns:
            DataFrame with columns ``date, open, high, low, close, volume``,
            oldest row first. Values may be unparsed strings.

        Raises:
            DataSourceError: The fetch failed or returned a non-success status.
        """
        ...
