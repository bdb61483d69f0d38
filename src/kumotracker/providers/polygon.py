"""Polygon.io daily aggregates provider (REST).

Requires ``POLYGON_API_KEY``.
"""

from __future__ import annotations

import logging
import time
from datetime import date, datetime, timedelta, timezone
from typing import Any

import certifi
import pandas as pd
import requests

from kumotracker.errors import DataSourceError, TrackerErrorCode
from kumotracker.providers.base import BAR_COLUMNS, BaseBarSource

logger = logging.getLogger(__name__)


class PolygonSource(BaseBarSource):
    """Fetch daily bars from Polygon.io's aggregates endpoint."""

    name = "polygon"
    base_url = "https://api.polygon.io"

    def __init__(
        self,
        api_key: str | None = None,
        lookback_days: int = 400,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            raise DataSourceError(
                "Polygon API key required. Set POLYGON_API_KEY.",
                code=TrackerErrorCode.AUTH_FAILED,
            )
        self.api_key = api_key
        self.lookback_days = lookback_days
        self.timeout = timeout
        self.session = session or requests.Session()
        if session is None:
            self.session.verify = certifi.where()

    def get_daily_bars(self, symbol: str, end: date | None = None) -> pd.DataFrame:
        end = end or date.today()
        start = end - timedelta(days=self.lookback_days)
        logger.info("Fetching daily bars from Polygon for %s (%s..%s)", symbol, start, end)

        rows: list[dict[str, Any]] = []
        url: str | None = (
            f"{self.base_url}/v2/aggs/ticker/{symbol.upper()}"
            f"/range/1/day/{start}/{end}"
        )
        params: dict[str, Any] = {
            "apiKey": self.api_key,
            "adjusted": "true",
            "sort": "asc",
            "limit": 50000,
        }

        while url:
            try:
                resp = self.session.get(url, params=params, timeout=self.timeout)
            except requests.Timeout as exc:
                raise DataSourceError(
                    f"Polygon request timed out: {exc}",
                    code=TrackerErrorCode.TIMEOUT,
                    retryable=True,
                ) from exc
            except requests.RequestException as exc:
                raise DataSourceError(f"Polygon request failed: {exc}", retryable=True) from exc
            self._check_response(resp)
            data = resp.json()

            for r in data.get("results", []):
                rows.append({
                    "date": datetime.fromtimestamp(r["t"] / 1000, tz=timezone.utc).date(),
                    "open": r.get("o"),
                    "high": r.get("h"),
                    "low": r.get("l"),
                    "close": r.get("c"),
                    "volume": r.get("v"),
                })

            next_url = data.get("next_url")
            if next_url:
                url = next_url
                params = {"apiKey": self.api_key}
                time.sleep(0.25)
            else:
                url = None

        return pd.DataFrame(rows, columns=BAR_COLUMNS)

    def _check_response(self, resp: Any) -> None:
        if resp.status_code == 429:
            raise DataSourceError(
                "Polygon rate limited",
                code=TrackerErrorCode.RATE_LIMITED,
                retryable=True,
            )
        if resp.status_code in (401, 403):
            raise DataSourceError(
                "Polygon authentication failed",
                code=TrackerErrorCode.AUTH_FAILED,
            )
        if resp.status_code == 404:
            raise DataSourceError(
                "Symbol not found on Polygon",
                code=TrackerErrorCode.NOT_FOUND,
            )
        if not 200 <= resp.status_code < 300:
            raise DataSourceError(
                f"Polygon fetch failed: HTTP {resp.status_code}",
                retryable=True,
            )
