"""Date-range selection of catalog entries."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from models import CatalogEntry


def filter_identifiers(
    entries: Iterable[CatalogEntry],
    start_date: date,
    end_date: date,
) -> list[str]:
    """Return identifiers whose date lies in ``[start_date, end_date]``.

    Both bounds are inclusive. Output keeps listing order, which is not
    necessarily chronological. An inverted range simply matches nothing.
    """
    return [entry.identifier for entry in entries if start_date <= entry.date <= end_date]
