"""Stooq daily CSV provider.

Stooq serves full daily history as CSV without an API key::

    https://stooq.com/q/d/l/?s=gld.us&i=d
"""

from __future__ import annotations

import io
import logging
from typing import Any

import certifi
import pandas as pd
import requests

from kumotracker.errors import DataSourceError, TrackerErrorCode
from kumotracker.providers.base import BAR_COLUMNS, BaseBarSource

logger = logging.getLogger(__name__)


class StooqSource(BaseBarSource):
    """Fetch daily bars from Stooq's CSV download endpoint."""

    name = "stooq"
    base_url = "https://stooq.com/q/d/l/"

    def __init__(self, timeout: float = 30.0, session: requests.Session | None = None) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()
        if session is None:
            self.session.verify = certifi.where()

    @staticmethod
    def stooq_symbol(symbol: str) -> str:
        """Map a ticker to Stooq's naming: ``GLD`` -> ``gld.us``.

        Symbols that already carry an exchange suffix or are indices
        (``^spx``) are only lower-cased.
        """
        sym = symbol.strip().lower()
        if "." in sym or sym.startswith("^"):
            return sym
        return f"{sym}.us"

    def get_daily_bars(self, symbol: str) -> pd.DataFrame:
        stooq_sym = self.stooq_symbol(symbol)
        logger.info("Fetching daily bars from Stooq for %s", stooq_sym)
        try:
            resp = self.session.get(
                self.base_url,
                params={"s": stooq_sym, "i": "d"},
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            raise DataSourceError(
                f"Stooq request timed out: {exc}",
                code=TrackerErrorCode.TIMEOUT,
                retryable=True,
            ) from exc
        except requests.RequestException as exc:
            raise DataSourceError(
                f"Stooq request failed: {exc}",
                retryable=True,
            ) from exc

        self._check_response(resp)
        return self._parse_csv(resp.text, stooq_sym)

    def _check_response(self, resp: Any) -> None:
        if resp.status_code == 429:
            raise DataSourceError(
                "Stooq rate limited",
                code=TrackerErrorCode.RATE_LIMITED,
                retryable=True,
            )
        if resp.status_code == 404:
            raise DataSourceError(
                "Symbol not found on Stooq",
                code=TrackerErrorCode.NOT_FOUND,
            )
        if not 200 <= resp.status_code < 300:
            raise DataSourceError(
                f"Stooq fetch failed: HTTP {resp.status_code} {resp.reason}",
                retryable=True,
            )

    @staticmethod
    def _raise_for_body(body: str, stooq_sym: str) -> None:
        """Raise for a non-CSV reply; Stooq reports these conditions with HTTP 200."""
        lowered = body.lower()
        if "no data" in lowered:
            raise DataSourceError(
                f"Stooq returned no data for {stooq_sym}",
                code=TrackerErrorCode.NOT_FOUND,
            )
        if "limit" in lowered:
            raise DataSourceError(
                f"Stooq rate limited: {body[:80]}",
                code=TrackerErrorCode.RATE_LIMITED,
                retryable=True,
            )
        raise DataSourceError(
            f"Stooq returned an unexpected body for {stooq_sym}: {body[:80]!r}",
            retryable=True,
        )

    @staticmethod
    def _parse_csv(text: str, stooq_sym: str) -> pd.DataFrame:
        body = text.strip()
        first_line = body.splitlines()[0] if body else ""
        if "date" not in first_line.lower():
            StooqSource._raise_for_body(body, stooq_sym)
        df = pd.read_csv(io.StringIO(body), dtype=str, on_bad_lines="skip")
        df.columns = [str(c).strip().lower() for c in df.columns]
        for col in BAR_COLUMNS:
            if col not in df.columns:
                df[col] = None
        return df[BAR_COLUMNS]
