"""Tracker configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DataSourceType(Enum):
    """Supported daily-bar sources."""

    STOOQ = "stooq"
    POLYGON = "polygon"
    MOCK = "mock"


@dataclass
class TrackerConfig:
    """Configuration for IchimokuTracker.

    Attributes:
        ticker: Instrument identifier to track.
        providers: Data sources ordered by priority.
        lookback_days: Calendar days requested from date-ranged sources.
        request_timeout: HTTP timeout in seconds.
        polygon_api_key: Polygon.io API key.
        smtp_host: SMTP server host.
        smtp_port: SMTP server port (STARTTLS).
        smtp_user: SMTP login, also used as the sender address.
        smtp_password: SMTP password.
        recipient: Alert recipient; falls back to ``smtp_user``.
        sender_name: Display name on outgoing alerts.
        history_path: JSON file holding alert records.
        output_path: JSON file the dashboard snapshot is written to.
        history_window: Number of trailing bars included in the snapshot.
        alert_retention_days: Drop alert records older than this many days.
            ``None`` keeps every record.
    """

    ticker: str = "GLD"
    providers: list[DataSourceType] = field(
        default_factory=lambda: [DataSourceType.STOOQ]
    )
    lookback_days: int = 400
    request_timeout: float = 30.0

    polygon_api_key: str | None = None

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    recipient: str | None = None
    sender_name: str = "Ichimoku Tracker"

    history_path: str = "alert-history.json"
    output_path: str = "data.json"
    history_window: int = 30
    alert_retention_days: int | None = None

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_user and self.smtp_password)
