"""Entry point for printing a ticker's price summary."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from datetime import datetime, timezone
from typing import List

from . import __version__
from .data_fetcher import FetchError, fetch_quote_history
from .summary import SummaryConfig, render, summarize

logger = logging.getLogger(__name__)

_RFC3339 = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


def parse_rfc3339(text: str) -> datetime:
    """Parse an RFC3339 timestamp and return it converted to UTC.

    The offset is mandatory; local times without one are rejected.
    """

    value = text.strip()
    if not _RFC3339.match(value):
        raise ValueError(f"not an RFC3339 timestamp: {text!r}")
    if value[-1] in "Zz":
        value = value[:-1] + "+00:00"
    value = value[:10] + "T" + value[11:]
    parsed = datetime.fromisoformat(value)
    return parsed.astimezone(timezone.utc)


def _timestamp_arg(text: str) -> datetime:
    try:
        return parse_rfc3339(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _ticker_arg(text: str) -> str:
    ticker = text.strip()
    if not ticker:
        raise argparse.ArgumentTypeError("ticker symbol must not be blank")
    return ticker


def _window_arg(text: str) -> int:
    try:
        return int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid window: {text!r}") from exc


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    defaults = SummaryConfig()
    parser = argparse.ArgumentParser(
        prog="stocksum", description="Print a one-line price summary for a stock ticker"
    )
    parser.add_argument(
        "-t",
        "--ticker",
        type=_ticker_arg,
        default=defaults.ticker,
        help="Ticker symbol (default: %(default)s).",
    )
    parser.add_argument(
        "-f",
        "--from",
        dest="start",
        type=_timestamp_arg,
        default=defaults.start,
        help="RFC3339 start of the period (default: %(default)s).",
    )
    parser.add_argument(
        "-w",
        "--window",
        type=_window_arg,
        default=None,
        help="Number of quotes in the trailing moving average.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log download details to stderr.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = SummaryConfig(ticker=args.ticker)
    if args.window is not None:
        config.window = args.window

    try:
        history = fetch_quote_history(config.ticker, args.start, interval=config.interval)
    except FetchError as exc:
        print(f"{exc.kind}: {exc}", file=sys.stderr)
        return 1

    logger.debug("Summarizing %d quotes with a %d quote window", len(history), config.window)
    summary = summarize(history, args.start, config.window, symbol=config.ticker)
    print(render(summary))
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main(sys.argv[1:]))
    except KeyboardInterrupt:  # pragma: no cover - graceful shutdown for CLI
        pass
