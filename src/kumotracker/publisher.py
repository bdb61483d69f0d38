"""Dashboard snapshot document assembly and publishing."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from kumotracker.errors import PersistenceError
from kumotracker.models.alert import AlertRecord
from kumotracker.models.ichimoku import IchimokuSnapshot
from kumotracker.models.series import BarSeries
from kumotracker.models.signal import Signal
from kumotracker.storage import write_json_atomic

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_WINDOW = 30


def signal_history(records: list[AlertRecord]) -> list[dict[str, str]]:
    """Render alert records as ``[{type, date}]`` for the dashboard."""
    return [r.to_dict() for r in records]


def price_history(series: BarSeries, window: int = DEFAULT_HISTORY_WINDOW) -> list[dict[str, Any]]:
    return [
        {
            "date": b.date.isoformat(),
            "open": b.open,
            "high": b.high,
            "low": b.low,
            "close": b.close,
            "price": b.close,
        }
        for b in series.tail(window)
    ]


def build_document(
    ticker: str,
    snapshot: IchimokuSnapshot,
    signal: Signal,
    series: BarSeries,
    records: list[AlertRecord],
    history_window: int = DEFAULT_HISTORY_WINDOW,
) -> dict[str, Any]:
    """Assemble the JSON document consumed by the dashboard.

    Fields: ``ticker``, ``price``, ``date``, ``signal``, ``ichimoku``
    (tenkan/kijun/senkouA/senkouB), ``signalHistory`` and the trailing
    ``history`` window of bars.
    """
    return {
        "ticker": ticker,
        "price": snapshot.price,
        "date": snapshot.date.isoformat(),
        "signal": signal.value,
        "ichimoku": {
            "tenkan": snapshot.tenkan,
            "kijun": snapshot.kijun,
            "senkouA": snapshot.senkou_a,
            "senkouB": snapshot.senkou_b,
        },
        "signalHistory": signal_history(records),
        "history": price_history(series, history_window),
    }


class SnapshotPublisher(ABC):
    """Destination for the dashboard document."""

    @abstractmethod
    def publish(self, document: dict[str, Any]) -> None:
        ...


class MemoryPublisher(SnapshotPublisher):
    """Keeps published documents in a list."""

    def __init__(self) -> None:
        self.documents: list[dict[str, Any]] = []

    def publish(self, document: dict[str, Any]) -> None:
        self.documents.append(document)

    @property
    def last(self) -> dict[str, Any] | None:
        return self.documents[-1] if self.documents else None


class JsonFilePublisher(SnapshotPublisher):
    """Write the document as pretty-printed JSON, replacing the file atomically."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def publish(self, document: dict[str, Any]) -> None:
        try:
            write_json_atomic(self.path, document, indent=2)
        except OSError as exc:
            raise PersistenceError(f"Cannot write snapshot {self.path}: {exc}") from exc
        logger.info("Updated dashboard data at %s", self.path)
