"""Row filtering and data quality checks for daily bars."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

import pandas as pd

from kumotracker.errors import DataSourceError, TrackerErrorCode
from kumotracker.models.bar import Bar
from kumotracker.models.series import BarSeries

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "high", "low", "close")
OPTIONAL_COLUMNS = ("open", "volume")


@dataclass(frozen=True)
class FilterResult:
    """Outcome of turning raw source rows into a ``BarSeries``.

    Attributes:
        series: Usable bars, oldest first.
        total_rows: Rows received from the source.
        dropped: Rows discarded for an unparseable date or a non-numeric
            high, low or close.
        duplicates: Rows discarded because a later row had the same date.
    """

    series: BarSeries
    total_rows: int
    dropped: int = 0
    duplicates: int = 0


def _parse_day(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def _optional(value: Any) -> float | None:
    return None if pd.isna(value) else float(value)


def filter_rows(frame: pd.DataFrame) -> FilterResult:
    """Drop malformed rows and build a chronological ``BarSeries``.

    Columns are matched case-insensitively. ``open`` and ``volume`` are
    optional; a non-numeric value there becomes ``None`` instead of dropping
    the row.
    """
    df = frame.rename(columns=lambda c: str(c).strip().lower())
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise DataSourceError(
            f"Source rows are missing columns: {missing}",
            code=TrackerErrorCode.VALIDATION_FAILED,
        )

    total = len(df)
    if total == 0:
        return FilterResult(series=BarSeries(), total_rows=0)

    df = df.copy()
    df["date"] = df["date"].map(_parse_day)
    for col in REQUIRED_COLUMNS[1:] + OPTIONAL_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
        else:
            df[col] = float("nan")

    # NaN and +/-inf both fail the comparison
    finite = df[list(REQUIRED_COLUMNS[1:])].abs().lt(float("inf")).all(axis=1)
    valid = df["date"].notna() & finite
    df = df[valid]
    dropped = total - len(df)

    df = df.sort_values("date", kind="stable")
    deduped = df.drop_duplicates(subset="date", keep="last")
    duplicates = len(df) - len(deduped)

    bars = [
        Bar(
            date=row.date,
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            open=_optional(row.open),
            volume=_optional(row.volume),
        )
        for row in deduped.itertuples(index=False)
    ]

    if dropped:
        logger.warning("Dropped %d malformed rows out of %d", dropped, total)
    if duplicates:
        logger.warning("Dropped %d rows with duplicate dates", duplicates)

    return FilterResult(
        series=BarSeries.of(bars),
        total_rows=total,
        dropped=dropped,
        duplicates=duplicates,
    )


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]


def validate_bars(series: BarSeries) -> ValidationResult:
    """Run diagnostic checks on a bar series.

    The engine computes over whatever it is given, so these checks only
    report problems.

    Checks:
        1. Not empty
        2. Positive prices
        3. OHLC consistency (low <= open, close <= high)
    """
    result = ValidationResult()

    if not len(series):
        result.checks.append(ValidationCheck("not_empty", False, "No bars provided"))
        return result
    result.checks.append(ValidationCheck("not_empty", True, f"{len(series)} bars"))

    non_positive = sum(
        1 for b in series
        if min(b.high, b.low, b.close) <= 0 or (b.open is not None and b.open <= 0)
    )
    if non_positive:
        result.checks.append(
            ValidationCheck("positive_prices", False, f"{non_positive} bars with prices <= 0")
        )
    else:
        result.checks.append(ValidationCheck("positive_prices", True))

    inconsistent = 0
    for b in series:
        inside = [b.close] if b.open is None else [b.open, b.close]
        if b.high < b.low or any(p > b.high or p < b.low for p in inside):
            inconsistent += 1
    if inconsistent:
        result.checks.append(
            ValidationCheck("ohlc_consistency", False, f"{inconsistent} bars outside their high/low range")
        )
    else:
        result.checks.append(ValidationCheck("ohlc_consistency", True))

    return result
