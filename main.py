"""CLI entrypoint for the NBP exchange-rate statistics run."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import date

import requests
from dotenv import load_dotenv

from aggregator import AggregationError, aggregate
from catalog import NBP_LISTING_URL, CatalogUnavailableError, scan
from csv_sink import write_summary
from filters import filter_identifiers
from models import RateSummary
from rate_extractor import NBP_BASE_URL, collect_observations
from report import format_summary


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from exc


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags; defaults come from the environment."""
    parser = argparse.ArgumentParser(
        description="Compute buy/sell rate statistics from NBP table C files"
    )
    parser.add_argument(
        "--currency",
        default=os.getenv("RATES_CURRENCY", "USD"),
        help="Currency code to analyze, matched exactly (default: USD)",
    )
    parser.add_argument(
        "--start-date",
        type=_iso_date,
        default=os.getenv("RATES_START_DATE", "2015-12-28"),
        help="First publication date to include, YYYY-MM-DD",
    )
    parser.add_argument(
        "--end-date",
        type=_iso_date,
        default=os.getenv("RATES_END_DATE", "2016-01-01"),
        help="Last publication date to include, YYYY-MM-DD",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=os.getenv("RATES_FETCH_WORKERS", "1"),
        help="Number of rate files fetched concurrently (default: 1, sequential)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=bool(os.getenv("RATES_DEBUG")),
        help="Log every requested file and parsed rate",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Also append the summary to SUMMARY_CSV_PATH",
    )
    return parser.parse_args(argv)


def run(
    currency_code: str,
    start_date: date,
    end_date: date,
    *,
    listing_url: str = NBP_LISTING_URL,
    base_url: str = NBP_BASE_URL,
    max_workers: int = 1,
    csv_path: str | None = None,
    write_csv: bool = False,
) -> RateSummary | None:
    """Run one scan -> filter -> extract -> aggregate cycle and print the report.

    Returns the summary, or None when no file or no value was found.

    Raises:
        CatalogUnavailableError: the directory listing could not be fetched.
    """
    with requests.Session() as session:
        entries = scan(listing_url, session=session)
        files = filter_identifiers(entries, start_date, end_date)
        logging.info(
            "Date filter: catalog=%s selected=%s range=%s..%s",
            len(entries),
            len(files),
            start_date,
            end_date,
        )
        if not files:
            print(f"For given dates startDate={start_date}, endDate={end_date} files not found.")
            return None

        file_urls = [f"{base_url}{identifier}" for identifier in files]
        observations, failures = collect_observations(
            file_urls, currency_code, max_workers=max_workers, session=session
        )

    for failure in failures:
        logging.warning("Skipped %s: %s", failure.url, failure.error)

    if not observations:
        print("No values were parsed.")
        return None

    try:
        summary = aggregate(observations, currency_code)
    except AggregationError as exc:
        logging.warning("Aggregation failed: %s", exc)
        print(f"Values could not be aggregated: {exc}")
        return None
    print(format_summary(summary))

    if write_csv:
        write_summary(summary, start_date, end_date, csv_path=csv_path)
    return summary


def main(argv: list[str] | None = None) -> int:
    """Initialize config and execute one run."""
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        run(
            args.currency,
            args.start_date,
            args.end_date,
            listing_url=os.getenv("NBP_LISTING_URL", NBP_LISTING_URL),
            base_url=os.getenv("NBP_BASE_URL", NBP_BASE_URL),
            max_workers=args.workers,
            csv_path=os.getenv("SUMMARY_CSV_PATH"),
            write_csv=args.csv,
        )
    except CatalogUnavailableError as exc:
        logging.error("Run aborted: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
