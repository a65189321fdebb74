from __future__ import annotations

import math

import pytest

from stocksum.statistics import (
    SeriesStatistics,
    describe_series,
    maximum,
    minimum,
    n_window_sma,
    price_difference,
)


def test_minimum_and_maximum_bound_every_price():
    series = [3.5, -1.0, 7.25, 7.25, 0.0, 2.0]
    low = minimum(series)
    high = maximum(series)
    assert low == -1.0
    assert high == 7.25
    assert all(low <= value <= high for value in series)


def test_minimum_and_maximum_of_empty_series_are_absent():
    assert minimum([]) is None
    assert maximum([]) is None


def test_single_price_is_both_minimum_and_maximum():
    assert minimum([42.0]) == 42.0
    assert maximum([42.0]) == 42.0


@pytest.mark.parametrize("window", [-3, 0, 1])
def test_sma_rejects_windows_of_one_or_less(window):
    assert n_window_sma(window, [1.0, 2.0, 3.0]) is None


def test_sma_of_empty_series_is_absent():
    assert n_window_sma(2, []) is None
    assert n_window_sma(30, []) is None


def test_sma_slides_one_price_at_a_time():
    assert n_window_sma(3, [1, 2, 3, 4, 5]) == [2.0, 3.0, 4.0]
    assert n_window_sma(2, [1.0, 3.0, 5.0]) == [2.0, 4.0]


def test_sma_with_window_longer_than_series_is_empty_not_absent():
    result = n_window_sma(10, [1, 2, 3])
    assert result == []
    assert result is not None


def test_sma_with_window_equal_to_series_has_single_average():
    assert n_window_sma(3, [1, 2, 3]) == [2.0]


def test_sma_length_matches_number_of_windows():
    series = [float(value) for value in range(40)]
    result = n_window_sma(28, series)
    assert len(result) == len(series) - 28 + 1
    assert result[-1] == pytest.approx(sum(series[-28:]) / 28)


def test_price_difference_of_empty_series_is_absent():
    assert price_difference([]) is None


def test_price_difference_of_single_price_is_zero():
    assert price_difference([5.0]) == (0.0, 0.0)


def test_price_difference_compares_first_and_last_in_order():
    assert price_difference([100.0, 150.0]) == (50.0, 0.5)
    assert price_difference([150.0, 999.0, 100.0]) == pytest.approx((-50.0, -1 / 3))


def test_price_difference_from_zero_price_is_unguarded():
    absolute, relative = price_difference([0.0, 5.0])
    assert absolute == 5.0
    assert relative == math.inf

    _, falling = price_difference([0.0, -2.0])
    assert falling == -math.inf

    _, flat = price_difference([0.0, 0.0])
    assert math.isnan(flat)


def test_functions_are_repeatable_on_the_same_input():
    series = [10.0, 20.0, 15.0, 25.0, 30.0]
    snapshot = list(series)
    assert minimum(series) == minimum(series)
    assert maximum(series) == maximum(series)
    assert n_window_sma(3, series) == n_window_sma(3, series)
    assert price_difference(series) == price_difference(series)
    assert series == snapshot


def test_describe_series_combines_all_statistics():
    stats = describe_series([10.0, 20.0, 15.0, 25.0, 30.0], 3)
    assert isinstance(stats, SeriesStatistics)
    assert stats.minimum == 10.0
    assert stats.maximum == 30.0
    assert stats.price_difference == (20.0, 2.0)
    assert stats.moving_averages == pytest.approx([15.0, 20.0, 70.0 / 3])


def test_describe_series_reports_absence_for_empty_input():
    assert describe_series([], 3) == SeriesStatistics(None, None, None, None)
