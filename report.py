"""Console formatting of a rate summary."""

from __future__ import annotations

from models import RateSummary


def format_summary(summary: RateSummary) -> str:
    """Render the summary as the three-line console report."""
    return "\n".join([
        f"Currency code {summary.currency_code}",
        _format_line(
            "Selling",
            summary.maximum.sell,
            summary.minimum.sell,
            summary.average.sell,
            summary.deviation.sell,
        ),
        _format_line(
            "Buying",
            summary.maximum.buy,
            summary.minimum.buy,
            summary.average.buy,
            summary.deviation.buy,
        ),
    ])


def _format_line(label: str, maximum: float, minimum: float, average: float, deviation: float) -> str:
    return f"{label} [max={maximum}, min={minimum}, average={average}, dev={deviation}]"
