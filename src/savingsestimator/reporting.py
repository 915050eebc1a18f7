"""Reporting helpers: money formatting, text tables and CSV export."""
from __future__ import annotations

import csv
import math
import numbers
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Iterable, List, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from .finance import TrajectoryPoint

_ABBREVIATIONS = (
    (1_000_000_000_000, "T"),
    (1_000_000_000, "B"),
    (1_000_000, "M"),
)

TRAJECTORY_HEADER = ["Year", "Balance", "Contributed", "Interest"]
NOT_AVAILABLE = "n/a"


def _whole_units(value: float) -> int:
    # Half away from zero, as currency is usually rounded.
    return int(Decimal(repr(float(value))).to_integral_value(rounding=ROUND_HALF_UP))


def format_full(value: float) -> str:
    """Dollar amount rounded to whole units, e.g. ``$609,245``.

    Amounts too large to represent (overflowed projections) render as ``n/a``.
    """

    if not math.isfinite(value):
        return NOT_AVAILABLE
    rounded = _whole_units(value)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"


def format_abbreviated(value: float) -> str:
    """Abbreviate large amounts (``$1.2M``); smaller ones are shown in full."""

    if not math.isfinite(value):
        return NOT_AVAILABLE
    for threshold, suffix in _ABBREVIATIONS:
        if value >= threshold:
            return f"${value / threshold:.1f}{suffix}"
    return format_full(value)


def format_axis(value: float, _pos=None) -> str:
    """Tick label for chart axes; adds a thousands tier."""

    if not math.isfinite(value):
        return NOT_AVAILABLE
    if value >= 1_000_000:
        return format_abbreviated(value)
    if value >= 1_000:
        return f"${value / 1_000:.0f}K"
    return f"${value:.0f}"


def trajectory_rows(points: Iterable["TrajectoryPoint"]) -> List[List[float]]:
    return [
        [p.year, p.balance, p.contributed, p.balance - p.contributed] for p in points
    ]


def render_table(header: Sequence[str], rows: Iterable[Sequence], title: str) -> str:
    """Render rows as an aligned text table (first column left-aligned)."""

    def _format_cell(idx, value):
        if idx == 0:
            return f"{value}"
        if isinstance(value, numbers.Real):
            return format_full(value)
        return str(value)

    formatted_rows = []
    widths = [len(str(col)) for col in header]
    for row in rows:
        formatted_row = []
        for idx, value in enumerate(row):
            text = _format_cell(idx, value)
            formatted_row.append(text)
            widths[idx] = max(widths[idx], len(text))
        formatted_rows.append(formatted_row)

    lines = [
        title,
        " | ".join(str(col).ljust(widths[idx]) for idx, col in enumerate(header)),
        "-+-".join("-" * widths[idx] for idx in range(len(header))),
    ]
    for row in formatted_rows:
        lines.append(
            " | ".join(
                cell.ljust(widths[idx]) if idx == 0 else cell.rjust(widths[idx])
                for idx, cell in enumerate(row)
            )
        )
    return "\n".join(lines) + "\n"


def export_csv(path: str, header: Sequence[str], rows: Iterable[Sequence]):
    """Write header/row data to a CSV file."""

    def _format_cell(value: object) -> str:
        """Format cells to avoid decimal places in numeric output."""

        if isinstance(value, numbers.Real):
            return format(value, ".0f")
        return str(value)

    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([_format_cell(h) for h in header])
        for row in rows:
            writer.writerow([_format_cell(cell) for cell in row])


__all__ = [
    "NOT_AVAILABLE",
    "TRAJECTORY_HEADER",
    "export_csv",
    "format_abbreviated",
    "format_axis",
    "format_full",
    "render_table",
    "trajectory_rows",
]
