"""Building and formatting the one-line ticker summary."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from .data import QuoteHistory
from .statistics import describe_series

HEADER = "period start,symbol,price,change %,min,max,30d avg"


@dataclass
class SummaryConfig:
    ticker: str = "AAPL"
    start: str = "1985-05-16T05:50:00-06:00"
    window: int = 28
    interval: str = "1d"


@dataclass(frozen=True)
class TickerSummary:
    """Values printed for a ticker over the requested period."""

    period_start: datetime
    symbol: str
    price: float
    change: float
    minimum: float
    maximum: float
    average: Optional[float]


def summarize(history: QuoteHistory, period_start: datetime, window: int, symbol: str | None = None) -> TickerSummary:
    """Compute the summary statistics of ``history``'s adjusted closes.

    ``average`` is the last simple moving average, or ``None`` when the
    window does not produce one.
    """

    closes = history.adjusted_closes()
    stats = describe_series(closes, window)
    if stats.minimum is None or stats.maximum is None:
        raise ValueError("Price series must contain at least one observation")
    _, change = stats.price_difference or (0.0, 0.0)
    averages: List[float] = stats.moving_averages or []
    return TickerSummary(
        period_start=period_start,
        symbol=symbol or history.symbol,
        price=closes[-1],
        change=change,
        minimum=stats.minimum,
        maximum=stats.maximum,
        average=averages[-1] if averages else None,
    )


def format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    fraction = ""
    if moment.microsecond % 1000:
        fraction = f".{moment.microsecond:06d}"
    elif moment.microsecond:
        fraction = f".{moment.microsecond // 1000:03d}"
    return f"{moment:%Y-%m-%d %H:%M:%S}{fraction} UTC"


def format_row(summary: TickerSummary) -> str:
    average = summary.average if summary.average is not None else 0.0
    return (
        f"{format_timestamp(summary.period_start)},{summary.symbol},"
        f"${summary.price:.2f},{summary.change * 100:.2f}%,"
        f"${summary.minimum:.2f},${summary.maximum:.2f},${average:.2f}"
    )


def render(summary: TickerSummary) -> str:
    return f"{HEADER}\n{format_row(summary)}"


__all__ = ["HEADER", "SummaryConfig", "TickerSummary", "format_row", "format_timestamp", "render", "summarize"]
