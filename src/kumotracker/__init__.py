"""kumotracker: daily Ichimoku Cloud signal tracker for a single instrument.

Fetches daily bars, evaluates the Ichimoku lines at the latest bar,
classifies a BUY/SELL/NEUTRAL signal, e-mails each new signal once per day
and publishes a JSON snapshot for a dashboard.

Quick start::

    from kumotracker import create_tracker_from_env
    result = create_tracker_from_env().run()
    print(result.signal)
"""

from __future__ import annotations

import os

from kumotracker.alerts import AlertDeduplicator, AlertStore, JsonFileAlertStore, MemoryAlertStore
from kumotracker.config import DataSourceType, TrackerConfig
from kumotracker.errors import (
    DataSourceError,
    InsufficientHistory,
    NotificationError,
    PersistenceError,
    TrackerError,
    TrackerErrorCode,
)
from kumotracker.ichimoku import REQUIRED_BARS, compute
from kumotracker.models.alert import AlertRecord
from kumotracker.models.bar import Bar
from kumotracker.models.ichimoku import IchimokuSnapshot
from kumotracker.models.series import BarSeries
from kumotracker.models.signal import Signal
from kumotracker.publisher import build_document
from kumotracker.signals import classify
from kumotracker.tracker import IchimokuTracker, RunResult, RunStatus

__version__ = "0.1.0"

__all__ = [
    # Tracker
    "IchimokuTracker",
    "RunResult",
    "RunStatus",
    "config_from_env",
    "create_tracker_from_env",
    # Core
    "compute",
    "classify",
    "build_document",
    "REQUIRED_BARS",
    "AlertDeduplicator",
    "AlertStore",
    "JsonFileAlertStore",
    "MemoryAlertStore",
    # Config
    "TrackerConfig",
    "DataSourceType",
    # Errors
    "TrackerError",
    "TrackerErrorCode",
    "DataSourceError",
    "InsufficientHistory",
    "NotificationError",
    "PersistenceError",
    # Models
    "Bar",
    "BarSeries",
    "IchimokuSnapshot",
    "Signal",
    "AlertRecord",
]


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


def config_from_env() -> TrackerConfig:
    """Build a TrackerConfig from environment variables.

    Environment variables:
        TICKER: Instrument to track (default: "GLD").
        DATA_SOURCES: Comma-separated source list (default: "stooq").
        LOOKBACK_DAYS: Calendar days requested from Polygon (default: 400).
        REQUEST_TIMEOUT: HTTP/SMTP timeout in seconds (default: 30).
        POLYGON_API_KEY: Polygon.io API key.
        SMTP_HOST: SMTP host (default: "smtp.gmail.com").
        SMTP_PORT: SMTP port (default: 587).
        SMTP_USER: SMTP login and sender address.
        SMTP_PASS: SMTP password.
        RECIPIENT_EMAIL: Alert recipient (default: SMTP_USER).
        SENDER_NAME: Display name on alerts (default: "Ichimoku Tracker").
        ALERT_HISTORY_PATH: Alert history JSON (default: "alert-history.json").
        SNAPSHOT_PATH: Dashboard JSON (default: "data.json").
        HISTORY_WINDOW: Trailing bars in the dashboard JSON (default: 30).
        ALERT_RETENTION_DAYS: Prune alerts older than this (default: keep all).
    """
    source_str = os.getenv("DATA_SOURCES", "stooq")
    providers = [
        DataSourceType(name.strip().lower())
        for name in source_str.split(",")
        if name.strip()
    ]

    return TrackerConfig(
        ticker=os.getenv("TICKER", "GLD"),
        providers=providers,
        lookback_days=int(os.getenv("LOOKBACK_DAYS", "400")),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
        polygon_api_key=os.getenv("POLYGON_API_KEY"),
        smtp_host=os.getenv("SMTP_HOST", "smtp.gmail.com"),
        smtp_port=int(os.getenv("SMTP_PORT", "587")),
        smtp_user=os.getenv("SMTP_USER"),
        smtp_password=os.getenv("SMTP_PASS"),
        recipient=os.getenv("RECIPIENT_EMAIL"),
        sender_name=os.getenv("SENDER_NAME", "Ichimoku Tracker"),
        history_path=os.getenv("ALERT_HISTORY_PATH", "alert-history.json"),
        output_path=os.getenv("SNAPSHOT_PATH", "data.json"),
        history_window=int(os.getenv("HISTORY_WINDOW", "30")),
        alert_retention_days=_optional_int("ALERT_RETENTION_DAYS"),
    )


def create_tracker_from_env() -> IchimokuTracker:
    """Zero-config factory: reads every setting from environment variables."""
    return IchimokuTracker(config_from_env())
