"""Price summaries for a single stock ticker."""

from .data import Quote, QuoteHistory
from .statistics import SeriesStatistics, describe_series, maximum, minimum, n_window_sma, price_difference
from .summary import HEADER, SummaryConfig, TickerSummary, format_row, render, summarize
from .data_fetcher import (
    ConnectionFailedError,
    DataInconsistencyError,
    DeserializeFailedError,
    EmptyDataSetError,
    FetchError,
    FetchFailedError,
    InvalidJsonError,
    fetch_quote_history,
    quotes_from_frame,
)

__version__ = "1.0.0"

__all__ = [
    "Quote",
    "QuoteHistory",
    "SeriesStatistics",
    "describe_series",
    "maximum",
    "minimum",
    "n_window_sma",
    "price_difference",
    "HEADER",
    "SummaryConfig",
    "TickerSummary",
    "format_row",
    "render",
    "summarize",
    "ConnectionFailedError",
    "DataInconsistencyError",
    "DeserializeFailedError",
    "EmptyDataSetError",
    "FetchError",
    "FetchFailedError",
    "InvalidJsonError",
    "fetch_quote_history",
    "quotes_from_frame",
]
