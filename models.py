"""Shared typed models for the rate pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One rate file advertised by the directory listing."""

    identifier: str
    date: date


@dataclass(frozen=True, slots=True)
class RateObservation:
    """Buy/sell rate of one currency taken from a single daily table."""

    currency_code: str
    buy_value: float
    sell_value: float


@dataclass(frozen=True, slots=True)
class RatePair:
    buy: float
    sell: float


@dataclass(frozen=True, slots=True)
class RateSummary:
    """Statistics over every observation collected in one run."""

    currency_code: str
    average: RatePair
    deviation: RatePair
    maximum: RatePair
    minimum: RatePair


@dataclass(frozen=True, slots=True)
class FileResult:
    """Outcome of fetching and parsing one rate file.

    A failed file keeps its error message and contributes no observations.
    """

    url: str
    observations: tuple[RateObservation, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
