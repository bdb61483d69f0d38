"""Command-line entry point: run one tracking pass."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kumotracker",
        description="Check a ticker for daily Ichimoku Cloud signals and publish a snapshot.",
    )
    parser.add_argument("--ticker", help="Instrument to track (overrides TICKER)")
    parser.add_argument("--output", help="Dashboard JSON path (overrides SNAPSHOT_PATH)")
    parser.add_argument("--history", help="Alert history JSON path (overrides ALERT_HISTORY_PATH)")
    parser.add_argument("--env-file", default=".env", help="dotenv file to load (default: .env)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_dotenv(args.env_file)

    from kumotracker import IchimokuTracker, TrackerError, config_from_env

    try:
        config = config_from_env()
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1

    overrides = {
        "ticker": args.ticker,
        "output_path": args.output,
        "history_path": args.history,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v})

    try:
        result = IchimokuTracker(config).run()
    except TrackerError as exc:
        logger.error("Tracker run for %s failed (%s): %s", config.ticker, exc.code.value, exc)
        return 1

    if result.signal is not None:
        logger.info("Run finished: %s", result.signal.value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
