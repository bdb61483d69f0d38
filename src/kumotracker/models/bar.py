"""Daily bar data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Bar:
    """One trading day's price record.

    ``open`` and ``volume`` may be missing in degraded sources; ``high``,
    ``low`` and ``close`` are always present.

    Attributes:
        date: Trading day (no time-of-day semantics).
        high: High price.
        low: Low price.
        close: Closing price.
        open: Opening price, if the source supplied one.
        volume: Trading volume, if the source supplied one.
    """

    date: date
    high: float
    low: float
    close: float
    open: float | None = None
    volume: float | None = None
