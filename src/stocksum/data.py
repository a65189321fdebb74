"""Data structures for handling fetched quote history."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, List, Tuple


@dataclass(frozen=True)
class Quote:
    """A single daily bar as returned by the quote provider."""

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    adjclose: float
    volume: int


@dataclass(frozen=True)
class QuoteHistory:
    """Chronologically ordered quotes for one ticker.

    The class validates that at least one quote is present and that the
    timestamps are strictly increasing.
    """

    symbol: str
    quotes: Tuple[Quote, ...]

    def __post_init__(self) -> None:
        if not self.quotes:
            raise ValueError("Quote history must contain at least one observation")
        for previous, current in zip(self.quotes, self.quotes[1:]):
            if current.timestamp <= previous.timestamp:
                raise ValueError(
                    f"Quotes for {self.symbol} are not in chronological order at {current.timestamp.isoformat()}"
                )

    def __len__(self) -> int:
        return len(self.quotes)

    def __iter__(self) -> Iterator[Quote]:
        return iter(self.quotes)

    @property
    def latest(self) -> Quote:
        return self.quotes[-1]

    @property
    def start(self) -> datetime:
        return self.quotes[0].timestamp

    @property
    def end(self) -> datetime:
        return self.quotes[-1].timestamp

    def adjusted_closes(self) -> List[float]:
        return [quote.adjclose for quote in self.quotes]


__all__ = ["Quote", "QuoteHistory"]
