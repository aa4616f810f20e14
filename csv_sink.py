"""CSV file sink for run summaries."""

from __future__ import annotations

import csv
import logging
import os
from datetime import UTC, date, datetime
from pathlib import Path

from models import RateSummary

SUMMARY_CSV_PATH = os.getenv("SUMMARY_CSV_PATH", "rate_summaries.csv")

LOGGER = logging.getLogger(__name__)

CSV_COLUMNS = [
    "currency_code",
    "start_date",
    "end_date",
    "buy_max",
    "buy_min",
    "buy_average",
    "buy_deviation",    # ratio-to-mean deviation, see aggregator.ratio_deviation
    "sell_max",
    "sell_min",
    "sell_average",
    "sell_deviation",
    "created_at",
]


def write_summary(
    summary: RateSummary,
    start_date: date,
    end_date: date,
    csv_path: str | None = None,
) -> None:
    """Append one summary row to the CSV (creating it with a header if needed)."""
    path = Path(csv_path or SUMMARY_CSV_PATH)
    write_header = not path.exists() or path.stat().st_size == 0

    row = {
        "currency_code": summary.currency_code,
        "start_date": start_date.isoformat(),
        "end_date": end_date.isoformat(),
        "buy_max": summary.maximum.buy,
        "buy_min": summary.minimum.buy,
        "buy_average": summary.average.buy,
        "buy_deviation": summary.deviation.buy,
        "sell_max": summary.maximum.sell,
        "sell_min": summary.minimum.sell,
        "sell_average": summary.average.sell,
        "sell_deviation": summary.deviation.sell,
        "created_at": datetime.now(UTC).isoformat(),
    }

    with path.open("a", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=CSV_COLUMNS)
        if write_header:
            writer.writeheader()
        writer.writerow(row)

    LOGGER.info("Wrote CSV summary for currency=%s to %s", summary.currency_code, path)
