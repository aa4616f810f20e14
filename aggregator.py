"""Summary statistics over collected rate observations."""

from __future__ import annotations

import math
from collections.abc import Sequence
from statistics import fmean

from models import RateObservation, RatePair, RateSummary


class AggregationError(ValueError):
    """Raised when observations cannot be folded into a summary."""


class EmptyObservationsError(AggregationError):
    """Raised when there is nothing to aggregate."""


class ZeroAverageError(AggregationError):
    """Raised when a rate averages to zero, leaving the deviation undefined."""


def aggregate(observations: Sequence[RateObservation], currency_code: str) -> RateSummary:
    """Fold observations into max/min/average/deviation for buy and sell.

    Raises:
        EmptyObservationsError: ``observations`` is empty. Callers are expected
            to report "no values parsed" before getting here.
        ZeroAverageError: the buy or sell values average to zero.
    """
    if not observations:
        raise EmptyObservationsError(f"No {currency_code} observations to aggregate")

    buys = [obs.buy_value for obs in observations]
    sells = [obs.sell_value for obs in observations]
    buy_avg = fmean(buys)
    sell_avg = fmean(sells)

    return RateSummary(
        currency_code=currency_code,
        average=RatePair(buy=buy_avg, sell=sell_avg),
        deviation=RatePair(buy=ratio_deviation(buys, buy_avg), sell=ratio_deviation(sells, sell_avg)),
        maximum=RatePair(buy=max(buys), sell=max(sells)),
        minimum=RatePair(buy=min(buys), sell=min(sells)),
    )


def ratio_deviation(values: Sequence[float], average: float) -> float:
    """Return ``sqrt(mean((value / average) ** 2))``.

    NOTE: this is the root mean square of each value's ratio to the mean, not
    a textbook standard deviation of absolute values. It is always >= 1.0 and
    equals 1.0 only when every value equals the average.

    Raises:
        ZeroAverageError: ``average`` is zero.
    """
    if average == 0:
        raise ZeroAverageError("Cannot compute ratio deviation around a zero average")
    return math.sqrt(fmean((value / average) ** 2 for value in values))
