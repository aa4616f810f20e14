from __future__ import annotations

import csv
from datetime import date
from pathlib import Path

import pytest

import csv_sink
from models import RatePair, RateSummary

SAMPLE_SUMMARY = RateSummary(
    currency_code="USD",
    average=RatePair(buy=4.1, sell=4.2),
    deviation=RatePair(buy=1.0006, sell=1.0006),
    maximum=RatePair(buy=4.2, sell=4.3),
    minimum=RatePair(buy=4.0, sell=4.1),
)


@pytest.fixture(autouse=True)
def patch_csv_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point SUMMARY_CSV_PATH at a temp file for every test."""
    monkeypatch.setattr(csv_sink, "SUMMARY_CSV_PATH", str(tmp_path / "summaries.csv"))


def _read_rows(path: str) -> list[dict]:
    with Path(path).open(newline="", encoding="utf-8") as fh:
        return list(csv.DictReader(fh))


def test_write_summary_creates_file_with_header() -> None:
    csv_sink.write_summary(SAMPLE_SUMMARY, date(2015, 12, 28), date(2016, 1, 1))

    rows = _read_rows(csv_sink.SUMMARY_CSV_PATH)
    assert len(rows) == 1
    row = rows[0]
    assert list(row.keys()) == csv_sink.CSV_COLUMNS
    assert row["currency_code"] == "USD"
    assert row["start_date"] == "2015-12-28"
    assert row["end_date"] == "2016-01-01"
    assert float(row["buy_max"]) == 4.2
    assert float(row["sell_min"]) == 4.1
    assert row["created_at"]


def test_write_summary_appends_without_repeating_header() -> None:
    csv_sink.write_summary(SAMPLE_SUMMARY, date(2015, 12, 28), date(2016, 1, 1))
    csv_sink.write_summary(SAMPLE_SUMMARY, date(2015, 12, 28), date(2015, 12, 28))

    rows = _read_rows(csv_sink.SUMMARY_CSV_PATH)
    assert len(rows) == 2
    assert rows[1]["end_date"] == "2015-12-28"


def test_write_summary_explicit_path(tmp_path: Path) -> None:
    target = tmp_path / "other.csv"

    csv_sink.write_summary(SAMPLE_SUMMARY, date(2015, 12, 28), date(2016, 1, 1), csv_path=str(target))

    assert len(_read_rows(str(target))) == 1
    assert not Path(csv_sink.SUMMARY_CSV_PATH).exists()
