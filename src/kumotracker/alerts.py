"""Durable alert state and per-day alert de-duplication.

The deduplicator does a plain read-modify-write against its store. Two runs
started close together on the same day can both see a key as unseen and
both notify; runs are expected to be scheduled once per invocation, so no
locking is attempted.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from pathlib import Path

from kumotracker.errors import PersistenceError
from kumotracker.models.alert import AlertRecord
from kumotracker.models.signal import Signal
from kumotracker.storage import write_json_atomic

logger = logging.getLogger(__name__)


class AlertStore(ABC):
    """Abstract key-value store of sent alerts (key -> presence flag)."""

    @abstractmethod
    def load(self) -> dict[str, bool]:
        """Return the stored mapping; an absent store reads as empty."""
        ...

    @abstractmethod
    def save(self, entries: dict[str, bool]) -> None:
        """Replace the stored mapping."""
        ...


class MemoryAlertStore(AlertStore):
    """In-process store, for tests and dry runs."""

    def __init__(self, entries: dict[str, bool] | None = None) -> None:
        self._entries: dict[str, bool] = dict(entries or {})

    def load(self) -> dict[str, bool]:
        return dict(self._entries)

    def save(self, entries: dict[str, bool]) -> None:
        self._entries = dict(entries)


class JsonFileAlertStore(AlertStore):
    """Store backed by a JSON object on disk.

    A missing file is created holding ``{}`` on first load. Writes go to a
    temporary file in the same directory which then replaces the target.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, bool]:
        if not self.path.exists():
            self.save({})
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Cannot read alert history {self.path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise PersistenceError(
                f"Alert history {self.path} must hold a JSON object, got {type(raw).__name__}"
            )
        return {str(k): bool(v) for k, v in raw.items()}

    def save(self, entries: dict[str, bool]) -> None:
        try:
            write_json_atomic(self.path, entries, indent=2, sort_keys=True)
        except OSError as exc:
            raise PersistenceError(f"Cannot write alert history {self.path}: {exc}") from exc


class AlertDeduplicator:
    """Answers "was this signal already alerted today?" and records new alerts.

    Keys are ``"{signal}-{YYYY-MM-DD}"``; each key goes from unseen to seen
    exactly once and is never updated afterwards.
    """

    def __init__(self, store: AlertStore, retention_days: int | None = None) -> None:
        self.store = store
        self.retention_days = retention_days

    def should_suppress(self, signal: Signal | str, when: date | datetime | str) -> bool:
        """Return True if already alerted; otherwise record the alert and return False."""
        if Signal(signal) is Signal.NEUTRAL:
            raise ValueError("NEUTRAL signals are not alerted")
        key = AlertRecord.create(signal, when).key
        entries = self.store.load()
        if entries.get(key):
            return True
        entries[key] = True
        self.store.save(entries)
        return False

    def records(self) -> list[AlertRecord]:
        """Return every stored alert, oldest day first."""
        records: list[AlertRecord] = []
        for key in self.store.load():
            try:
                records.append(AlertRecord.from_key(key))
            except ValueError:
                logger.warning("Ignoring malformed alert key %r", key)
        return sorted(records, key=lambda r: (r.day, r.signal))

    def prune(self, as_of: date) -> int:
        """Drop records older than ``retention_days`` before ``as_of``.

        Returns the number of removed records. Without a retention policy
        nothing is removed.
        """
        if self.retention_days is None:
            return 0
        cutoff = (as_of - timedelta(days=self.retention_days)).isoformat()
        entries = self.store.load()
        kept: dict[str, bool] = {}
        for key, value in entries.items():
            try:
                day = AlertRecord.from_key(key).day
            except ValueError:
                kept[key] = value
                continue
            if day >= cutoff:
                kept[key] = value
        removed = len(entries) - len(kept)
        if removed:
            self.store.save(kept)
            logger.info("Pruned %d alert records older than %s", removed, cutoff)
        return removed
