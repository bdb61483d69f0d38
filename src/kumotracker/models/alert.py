"""Alert record data model and its storage key format."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime

_TIME_SEPARATOR = re.compile(r"[Tt ]")


def day_string(value: date | datetime | str) -> str:
    """Return the calendar-day portion (``YYYY-MM-DD``) of a date-like value.

    Strings are cut at the first date/time separator (``T``, ``t`` or a
    space), so ``2024-01-05T00:00:00.000Z`` and ``2024-01-05 10:30:00`` both
    yield ``2024-01-05``.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return _TIME_SEPARATOR.split(str(value).strip(), maxsplit=1)[0]


@dataclass(frozen=True)
class AlertRecord:
    """A notification that was sent for ``signal`` on ``day``.

    Attributes:
        signal: Signal name, e.g. ``"BUY"``.
        day: Calendar day as ``YYYY-MM-DD``.
    """

    signal: str
    day: str

    @property
    def key(self) -> str:
        return f"{self.signal}-{self.day}"

    @classmethod
    def create(cls, signal: object, when: date | datetime | str) -> AlertRecord:
        name = getattr(signal, "value", signal)
        return cls(signal=str(name), day=day_string(when))

    @classmethod
    def from_key(cls, key: str) -> AlertRecord:
        """Parse a ``"{signal}-{YYYY-MM-DD}"`` key back into a record."""
        signal, sep, day = key.partition("-")
        if not sep or not signal or not day:
            raise ValueError(f"Malformed alert key: {key!r}")
        return cls(signal=signal, day=day)

    def to_dict(self) -> dict[str, str]:
        return {"type": self.signal, "date": self.day}
