"""Summary statistics over a chronological series of prices.

Every function accepts a sequence of floats ordered oldest to newest and
returns ``None`` when the input falls outside its defined domain (for example
an empty series). ``None`` is a normal outcome, not an error.
"""

from __future__ import annotations

import math
from typing import List, NamedTuple, Optional, Sequence, Tuple


def minimum(series: Sequence[float]) -> Optional[float]:
    if not series:
        return None
    return min(series)


def maximum(series: Sequence[float]) -> Optional[float]:
    if not series:
        return None
    return max(series)


def n_window_sma(window: int, series: Sequence[float]) -> Optional[List[float]]:
    """Simple moving average for every ``window`` consecutive prices.

    A window of one or less is rejected rather than treated as the identity.
    A window longer than the series produces an empty list.
    """

    if not series or window <= 1:
        return None
    return [sum(series[start : start + window]) / window for start in range(len(series) - window + 1)]


def _ieee_divide(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def price_difference(series: Sequence[float]) -> Optional[Tuple[float, float]]:
    """Return ``(absolute, relative)`` change between the first and last price.

    A zero first price is not guarded: the relative change is infinite, or NaN
    when the absolute change is zero as well.
    """

    if not series:
        return None
    first = series[0]
    absolute = series[-1] - first
    return absolute, _ieee_divide(absolute, first)


class SeriesStatistics(NamedTuple):
    minimum: Optional[float]
    maximum: Optional[float]
    moving_averages: Optional[List[float]]
    price_difference: Optional[Tuple[float, float]]


def describe_series(series: Sequence[float], window: int) -> SeriesStatistics:
    return SeriesStatistics(
        minimum=minimum(series),
        maximum=maximum(series),
        moving_averages=n_window_sma(window, series),
        price_difference=price_difference(series),
    )


__all__ = [
    "SeriesStatistics",
    "describe_series",
    "maximum",
    "minimum",
    "n_window_sma",
    "price_difference",
]
