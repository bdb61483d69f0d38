"""IchimokuTracker: one linear run from price fetch to published snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from kumotracker.alerts import AlertDeduplicator, AlertStore, JsonFileAlertStore
from kumotracker.config import DataSourceType, TrackerConfig
from kumotracker.errors import DataSourceError, InsufficientHistory, NotificationError, TrackerErrorCode
from kumotracker.ichimoku import compute
from kumotracker.models.ichimoku import IchimokuSnapshot
from kumotracker.models.series import BarSeries
from kumotracker.models.signal import Signal
from kumotracker.notify import Notifier, build_notifier, format_alert
from kumotracker.providers import create_provider
from kumotracker.providers.base import BaseBarSource
from kumotracker.publisher import JsonFilePublisher, SnapshotPublisher, build_document
from kumotracker.quality import FilterResult, filter_rows, validate_bars
from kumotracker.signals import classify

logger = logging.getLogger(__name__)


class RunStatus(Enum):
    COMPLETED = "completed"
    INSUFFICIENT_HISTORY = "insufficient_history"


@dataclass(frozen=True)
class RunResult:
    """What a single run did.

    Attributes:
        status: Whether the run completed or stopped for lack of history.
        bars: Number of usable bars.
        dropped_rows: Malformed rows discarded before computing.
        snapshot: Ichimoku values, when computed.
        signal: Classified signal, when computed.
        notified: An alert was handed to the notifier successfully.
        suppressed: The signal had already been alerted for that day.
        notification_error: Message of a failed notification, if any.
        document: The published dashboard document, if any.
    """

    status: RunStatus
    bars: int = 0
    dropped_rows: int = 0
    snapshot: IchimokuSnapshot | None = None
    signal: Signal | None = None
    notified: bool = False
    suppressed: bool = False
    notification_error: str | None = None
    document: dict[str, Any] | None = None


class IchimokuTracker:
    """Orchestrator: fetch -> filter -> compute -> classify -> dedupe -> notify -> publish.

    Collaborators not passed in are built from ``config``.

    Usage::

        from kumotracker import create_tracker_from_env
        result = create_tracker_from_env().run()
    """

    def __init__(
        self,
        config: TrackerConfig,
        sources: list[BaseBarSource] | None = None,
        store: AlertStore | None = None,
        notifier: Notifier | None = None,
        publisher: SnapshotPublisher | None = None,
    ) -> None:
        self.config = config

        if sources is None:
            sources = []
            for pt in config.providers:
                kwargs: dict[str, Any] = {}
                if pt is DataSourceType.STOOQ:
                    kwargs["timeout"] = config.request_timeout
                elif pt is DataSourceType.POLYGON:
                    kwargs["api_key"] = config.polygon_api_key
                    kwargs["lookback_days"] = config.lookback_days
                    kwargs["timeout"] = config.request_timeout
                sources.append(create_provider(pt, **kwargs))
        self.sources = sources

        self.deduplicator = AlertDeduplicator(
            store if store is not None else JsonFileAlertStore(config.history_path),
            retention_days=config.alert_retention_days,
        )
        self.notifier = notifier if notifier is not None else build_notifier(config)
        self.publisher = (
            publisher if publisher is not None else JsonFilePublisher(config.output_path)
        )

    # ------------------------------------------------------------------ run

    def run(self) -> RunResult:
        """Execute one tracking run.

        Raises:
            DataSourceError: No source delivered bars.
            PersistenceError: Alert history or snapshot could not be stored.
        """
        ticker = self.config.ticker
        logger.info("Checking %s for Ichimoku signals...", ticker)

        filtered = self.fetch_series(ticker)
        series = filtered.series

        try:
            snapshot = compute(series)
        except InsufficientHistory as exc:
            logger.info(
                "Not enough historical data yet (%d/%d days).", exc.available, exc.required,
            )
            return RunResult(
                status=RunStatus.INSUFFICIENT_HISTORY,
                bars=len(series),
                dropped_rows=filtered.dropped,
            )

        logger.info("Latest data date: %s", snapshot.date)
        logger.info("Current Price: $%.2f", snapshot.price)
        logger.info("Tenkan: %.2f | Kijun: %.2f", snapshot.tenkan, snapshot.kijun)
        logger.info("Cloud: Span A=%.2f | Span B=%.2f", snapshot.senkou_a, snapshot.senkou_b)

        signal = classify(snapshot)
        notified = False
        suppressed = False
        notification_error: str | None = None

        if signal.actionable:
            if self.deduplicator.should_suppress(signal, snapshot.date):
                suppressed = True
                logger.info("Signal %s was already alerted for %s.", signal.value, snapshot.date)
            else:
                logger.info("Generating a new %s signal!", signal.value)
                subject, body = format_alert(ticker, signal, snapshot)
                try:
                    self.notifier.send(subject, body)
                    notified = True
                except NotificationError as exc:
                    notification_error = str(exc)
                    logger.error("Notification for %s failed: %s", signal.value, exc)
        else:
            logger.info("No signal detected based on current Ichimoku parameters.")

        self.deduplicator.prune(snapshot.date)
        document = build_document(
            ticker,
            snapshot,
            signal,
            series,
            self.deduplicator.records(),
            history_window=self.config.history_window,
        )
        self.publisher.publish(document)

        return RunResult(
            status=RunStatus.COMPLETED,
            bars=len(series),
            dropped_rows=filtered.dropped,
            snapshot=snapshot,
            signal=signal,
            notified=notified,
            suppressed=suppressed,
            notification_error=notification_error,
            document=document,
        )

    # ---------------------------------------------------------------- fetch

    def fetch_series(self, ticker: str) -> FilterResult:
        """Fetch raw rows from the source chain and clean them.

        Retryable errors fall through to the next source; non-retryable
        errors are raised immediately.
        """
        last_error: DataSourceError | None = None
        for source in self.sources:
            try:
                frame = source.get_daily_bars(ticker)
            except DataSourceError as e:
                if not e.retryable:
                    raise
                logger.warning("Source %s failed: %s", source.name, e)
                last_error = e
                continue

            filtered = filter_rows(frame)
            logger.info(
                "Fetched %d rows from %s, %d usable bars",
                filtered.total_rows, source.name, len(filtered.series),
            )
            self._log_quality(filtered.series)
            return filtered

        raise last_error or DataSourceError(
            "No data source configured",
            code=TrackerErrorCode.NOT_FOUND,
        )

    @staticmethod
    def _log_quality(series: BarSeries) -> None:
        result = validate_bars(series)
        for check in result.failed_checks:
            logger.warning("Data quality check %s failed: %s", check.name, check.message)
