"""Utilities for downloading a ticker's quote history from Yahoo Finance."""

from __future__ import annotations

import json
import logging
import math
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional, TYPE_CHECKING

from .data import Quote, QuoteHistory

if TYPE_CHECKING:  # pragma: no cover - import used only for type checking
    import pandas as pd

logger = logging.getLogger(__name__)

PRICE_COLUMNS = ("Open", "High", "Low", "Close", "Adj Close", "Volume")


class FetchError(RuntimeError):
    """Base class for failures while retrieving quotes."""

    kind = "FetchError"


class ConnectionFailedError(FetchError):
    kind = "ConnectionFailed"


class InvalidJsonError(FetchError):
    kind = "InvalidJson"


class FetchFailedError(FetchError):
    kind = "FetchFailed"


class DeserializeFailedError(FetchError):
    kind = "DeserializeFailed"


class EmptyDataSetError(FetchError):
    kind = "EmptyDataSet"


class DataInconsistencyError(FetchError):
    kind = "DataInconsistency"


def _normalize_ticker(ticker: str) -> str:
    """Convert tickers with dots to the Yahoo Finance compatible format."""

    return ticker.strip().upper().replace(".", "-")


def _load_yfinance():
    try:
        import yfinance as yf
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError("fetch_quote_history requires the 'yfinance' package") from exc
    return yf


@contextmanager
def _exceptions_visible(yf) -> Iterator[None]:
    # yfinance logs request failures and returns an empty frame unless told otherwise.
    previous = yf.config.debug.hide_exceptions
    yf.config.debug.hide_exceptions = False
    try:
        yield
    finally:
        yf.config.debug.hide_exceptions = previous


def _download(yf, symbol: str, start: datetime, end: datetime, interval: str) -> "pd.DataFrame":
    with _exceptions_visible(yf):
        return yf.Ticker(symbol).history(
            start=start,
            end=end,
            interval=interval,
            auto_adjust=False,
            actions=False,
        )


def _classify_failure(symbol: str, exc: Exception) -> FetchError:
    from yfinance.exceptions import YFTickerMissingError

    if isinstance(exc, json.JSONDecodeError):
        return InvalidJsonError(f"Invalid JSON in response for {symbol}: {exc}")
    if isinstance(exc, OSError):
        return ConnectionFailedError(f"Could not reach Yahoo Finance: {exc}")
    if isinstance(exc, YFTickerMissingError):
        return EmptyDataSetError(f"No quotes were returned for {symbol}: {exc}")
    if isinstance(exc, (KeyError, IndexError)):
        return DeserializeFailedError(f"Unexpected response layout for {symbol}: {exc!r}")
    return FetchFailedError(f"Download failed for {symbol}: {exc}")


def _select_symbol_columns(symbol: str, frame: "pd.DataFrame") -> "pd.DataFrame":
    import pandas as pd

    if not isinstance(frame.columns, pd.MultiIndex):
        return frame
    for level in range(frame.columns.nlevels):
        if symbol in frame.columns.get_level_values(level):
            return frame.xs(symbol, axis=1, level=level)
    raise DeserializeFailedError(f"Response does not contain columns for {symbol}")


def quotes_from_frame(symbol: str, frame: "pd.DataFrame") -> QuoteHistory:
    """Convert a downloaded price frame into a validated :class:`QuoteHistory`.

    Parameters
    ----------
    symbol:
        Yahoo Finance symbol the frame was downloaded for.
    frame:
        Frame indexed by timestamp with the columns listed in
        :data:`PRICE_COLUMNS`, either flat or grouped under ``symbol``.

    Raises
    ------
    EmptyDataSetError
        The frame holds no rows.
    DeserializeFailedError
        The frame lacks price columns or a timestamp index.
    DataInconsistencyError
        Adjusted closes are missing or non-finite, or timestamps repeat.
    """

    import pandas as pd

    if frame is None or frame.empty:
        raise EmptyDataSetError(f"No quotes were returned for {symbol}")

    prices = _select_symbol_columns(symbol, frame)
    missing = [column for column in PRICE_COLUMNS if column not in prices.columns]
    if missing:
        joined = ", ".join(missing)
        raise DeserializeFailedError(f"Response for {symbol} is missing columns: {joined}")

    try:
        index = pd.DatetimeIndex(prices.index)
    except (TypeError, ValueError) as exc:
        raise DeserializeFailedError(f"Response for {symbol} is not indexed by timestamp") from exc
    index = index.tz_localize("UTC") if index.tz is None else index.tz_convert("UTC")
    prices = prices.set_axis(index, axis=0).sort_index().dropna(how="all")
    if prices.empty:
        raise EmptyDataSetError(f"No quotes were returned for {symbol}")

    quotes: List[Quote] = []
    for timestamp, row in prices.iterrows():
        adjclose = float(row["Adj Close"])
        if not math.isfinite(adjclose):
            raise DataInconsistencyError(f"Missing adjusted close for {symbol} at {timestamp.isoformat()}")
        volume = float(row["Volume"])
        quotes.append(
            Quote(
                timestamp=timestamp.to_pydatetime(),
                open=float(row["Open"]),
                high=float(row["High"]),
                low=float(row["Low"]),
                close=float(row["Close"]),
                adjclose=adjclose,
                volume=int(volume) if math.isfinite(volume) else 0,
            )
        )

    try:
        return QuoteHistory(symbol=symbol, quotes=tuple(quotes))
    except ValueError as exc:
        raise DataInconsistencyError(str(exc)) from exc


def fetch_quote_history(
    ticker: str,
    start: datetime,
    *,
    end: Optional[datetime] = None,
    interval: str = "1d",
) -> QuoteHistory:
    """Download the quote history of ``ticker`` from ``start`` until ``end``.

    ``end`` defaults to the current time. Failures are reported as
    :class:`FetchError` subclasses so callers can tell connection problems,
    malformed responses, empty results and inconsistent data apart.
    """

    if not ticker or not ticker.strip():
        raise ValueError("A ticker symbol must be provided")
    symbol = _normalize_ticker(ticker)
    if end is None:
        end = datetime.now(timezone.utc)

    logger.debug("Requesting %s quotes for %s from %s to %s", interval, symbol, start.isoformat(), end.isoformat())
    yf = _load_yfinance()
    try:
        frame = _download(yf, symbol, start, end, interval)
    except Exception as exc:
        raise _classify_failure(symbol, exc) from exc

    history = quotes_from_frame(symbol, frame)
    logger.debug("Received %d quotes for %s (%s to %s)", len(history), symbol, history.start, history.end)
    return history


__all__ = [
    "ConnectionFailedError",
    "DataInconsistencyError",
    "DeserializeFailedError",
    "EmptyDataSetError",
    "FetchError",
    "FetchFailedError",
    "InvalidJsonError",
    "PRICE_COLUMNS",
    "fetch_quote_history",
    "quotes_from_frame",
]
