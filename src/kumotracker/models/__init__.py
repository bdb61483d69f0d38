"""Tracker models."""

from kumotracker.models.alert import AlertRecord
from kumotracker.models.bar import Bar
from kumotracker.models.ichimoku import IchimokuSnapshot
from kumotracker.models.series import BarSeries
from kumotracker.models.signal import Signal

__all__ = [
    "AlertRecord",
    "Bar",
    "BarSeries",
    "IchimokuSnapshot",
    "Signal",
]
