import math

import pytest

from aggregator import EmptyObservationsError, ZeroAverageError, aggregate, ratio_deviation
from models import RateObservation

OBSERVATIONS = [
    RateObservation("USD", 4.00, 4.10),
    RateObservation("USD", 4.20, 4.30),
]


def test_aggregate_average_max_min() -> None:
    summary = aggregate(OBSERVATIONS, "USD")

    assert summary.average.buy == pytest.approx(4.10)
    assert summary.average.sell == pytest.approx(4.20)
    assert summary.maximum.buy == 4.20
    assert summary.maximum.sell == 4.30
    assert summary.minimum.buy == 4.00
    assert summary.minimum.sell == 4.10


def test_aggregate_deviation_is_ratio_to_mean() -> None:
    """Deviation is sqrt(mean((v / avg) ** 2)), not the textbook standard deviation."""
    summary = aggregate(OBSERVATIONS, "USD")

    expected_buy = math.sqrt(((4.00 / 4.10) ** 2 + (4.20 / 4.10) ** 2) / 2)
    expected_sell = math.sqrt(((4.10 / 4.20) ** 2 + (4.30 / 4.20) ** 2) / 2)
    assert summary.deviation.buy == pytest.approx(expected_buy)
    assert summary.deviation.sell == pytest.approx(expected_sell)
    # A population standard deviation of these values would be 0.1.
    assert summary.deviation.buy != pytest.approx(0.1)


def test_aggregate_single_observation() -> None:
    summary = aggregate([RateObservation("USD", 3.9, 4.0)], "USD")

    assert summary.maximum.buy == summary.minimum.buy == 3.9
    assert summary.average.sell == pytest.approx(4.0)
    assert summary.deviation.buy == pytest.approx(1.0)


def test_aggregate_carries_requested_code() -> None:
    assert aggregate(OBSERVATIONS, "XYZ").currency_code == "XYZ"


def test_aggregate_is_order_insensitive() -> None:
    assert aggregate(OBSERVATIONS, "USD") == aggregate(list(reversed(OBSERVATIONS)), "USD")


def test_aggregate_empty_raises() -> None:
    with pytest.raises(EmptyObservationsError):
        aggregate([], "USD")


def test_ratio_deviation_constant_series_is_one() -> None:
    assert ratio_deviation([3.5, 3.5, 3.5], 3.5) == pytest.approx(1.0)


def test_aggregate_zero_average_raises_defined_error() -> None:
    with pytest.raises(ZeroAverageError):
        aggregate([RateObservation("USD", 0.0, 3.9)], "USD")


def test_zero_average_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        ratio_deviation([0.0, 0.0], 0.0)
