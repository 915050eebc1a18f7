"""Matplotlib rendering of the yearly growth trajectory."""
from __future__ import annotations

import math
from typing import Sequence

from matplotlib.ticker import FuncFormatter

from .finance import TrajectoryPoint
from .reporting import format_abbreviated, format_axis
from .themes import Theme


def plot_trajectory(ax, points: Sequence[TrajectoryPoint], theme: Theme, title: str = ""):
    """Draw balance and contributed areas on ``ax`` and annotate the label years."""

    ax.clear()
    ax.set_facecolor(theme.background)
    if not points or not all(math.isfinite(p.balance) for p in points):
        ax.set_axis_off()
        return ax
    ax.set_axis_on()

    years = [p.year for p in points]
    balances = [p.balance for p in points]
    contributed = [p.contributed for p in points]

    ax.fill_between(years, balances, color=theme.accent, alpha=0.25)
    ax.plot(years, balances, color=theme.accent, linewidth=2, label="Total balance")
    ax.fill_between(years, contributed, color=theme.contributed, alpha=0.35)
    ax.plot(
        years,
        contributed,
        color=theme.contributed,
        linewidth=1.5,
        linestyle="--",
        label="Total contributed",
    )

    for point in points:
        if not point.is_label_year:
            continue
        ax.plot([point.year], [point.balance], marker="o", color=theme.accent)
        ax.annotate(
            format_abbreviated(point.balance),
            xy=(point.year, point.balance),
            xytext=(0, 8),
            textcoords="offset points",
            ha="center",
            fontsize=8,
            color=theme.foreground,
        )

    ax.yaxis.set_major_formatter(FuncFormatter(format_axis))
    ax.set_xlim(years[0], max(years[-1], 1))
    ax.set_ylim(bottom=0)
    ax.set_xlabel("Year", color=theme.muted)
    ax.set_ylabel("Balance ($)", color=theme.muted)
    ax.tick_params(colors=theme.muted)
    ax.grid(True, color=theme.grid)
    for spine in ax.spines.values():
        spine.set_color(theme.grid)
    if title:
        ax.set_title(title, color=theme.foreground)
    legend = ax.legend(loc="upper left", facecolor=theme.surface, edgecolor=theme.grid)
    for text in legend.get_texts():
        text.set_color(theme.foreground)
    return ax


__all__ = ["plot_trajectory"]
