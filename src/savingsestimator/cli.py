"""Command-line interface for savings-estimator."""
from __future__ import annotations

import argparse
import sys
from typing import Optional, TextIO

import matplotlib.pyplot as plt

from .accounts import AccountCategory, descriptor
from .charting import plot_trajectory
from .computation import ProjectionOutputs, compute_outputs, resolve_use_numpy
from .config import Settings
from .finance import Frequency
from .log import get_logger, setup_logging
from .parsing import RawFields, parse_category
from .reporting import (
    TRAJECTORY_HEADER,
    export_csv,
    format_full,
    render_table,
    trajectory_rows,
)
from .themes import THEMES, get_theme

logger = get_logger(__name__)

ACCOUNT_CHOICES = [c.value for c in AccountCategory if c.value]


def build_parser(settings: Optional[Settings] = None) -> argparse.ArgumentParser:
    settings = settings or Settings()
    parser = argparse.ArgumentParser(
        description="Project compound growth of savings and the cost of waiting."
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--cli", action="store_true", help="Run in CLI mode")
    mode.add_argument("--gui", action="store_true", help="Run GUI")
    parser.add_argument("--principal", default="", help="Initial deposit ($)")
    parser.add_argument("--monthly", default="", help="Monthly contribution ($)")
    parser.add_argument("--years", default="", help="Time horizon in whole years (1-100)")
    parser.add_argument("--rate", default="", help="Annual return rate in % (0-100)")
    parser.add_argument(
        "--frequency",
        choices=[f.value for f in Frequency],
        default=settings.default_frequency.value,
        help="Compounding frequency",
    )
    parser.add_argument(
        "--account",
        choices=ACCOUNT_CHOICES,
        default="",
        help="Registered account type used for contribution-limit checks",
    )
    parser.add_argument(
        "--annual-contribution",
        default="",
        help="Annual contribution for the selected account (replaces --monthly)",
    )
    parser.add_argument("--income", default="", help="Previous-year income (RRSP limit)")
    parser.add_argument(
        "--eligible-years", default="", help="Years of TFSA eligibility (room estimate)"
    )
    parser.add_argument(
        "--engine",
        choices=["auto", "numpy", "python"],
        default=settings.engine,
        help="Trajectory engine: auto prefers NumPy",
    )
    parser.add_argument("--table", action="store_true", help="Print the year-by-year table")
    parser.add_argument("--csv", default="", help="Write the yearly trajectory to this CSV path")
    parser.add_argument("--plot", action="store_true", help="Show the growth chart")
    parser.add_argument(
        "--theme", choices=sorted(THEMES), default=settings.theme, help="Chart colour theme"
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser


def raw_fields_from_args(args: argparse.Namespace) -> RawFields:
    return RawFields(
        principal=args.principal,
        monthly_contribution=args.monthly,
        years=args.years,
        rate=args.rate,
        frequency=args.frequency,
        account=args.account,
        annual_contribution=args.annual_contribution,
        annual_income=args.income,
        eligible_years=args.eligible_years,
    )


def render_outputs(outputs: ProjectionOutputs, category: AccountCategory, table: bool = False) -> str:
    lines = []
    if category is not AccountCategory.UNSELECTED:
        info = descriptor(category)
        lines.append(f"{category.value}: {info.description}")
        lines.append(f"  Limit: {info.limit_text}")
        lines.append(f"  Tax advantage: {info.tax_advantage}")
        lines.append("")

    if outputs.advisory is not None:
        tag = "WARNING" if outputs.advisory.is_warning else "OK"
        lines.append(f"[{tag}] {outputs.advisory.message}")
        lines.append("")

    if outputs.result is None:
        lines.append(
            "No projection: enter a principal or contribution, 1-100 years and a 0-100% rate."
        )
        return "\n".join(lines) + "\n"

    result = outputs.result
    lines.append("PROJECTION")
    lines.append(f"  Final balance:     {format_full(result.final_balance)}")
    lines.append(f"  Total contributed: {format_full(result.total_contributed)}")
    lines.append(f"  Total interest:    {format_full(result.total_interest)}")
    lines.append("")

    rows = [
        [s.label, str(s.years), s.final_balance, s.opportunity_cost]
        for s in outputs.scenarios or []
    ]
    lines.append(
        render_table(["Scenario", "Years", "Balance", "Cost of waiting"], rows, "COST OF WAITING")
    )
    if table and outputs.trajectory:
        lines.append(
            render_table(TRAJECTORY_HEADER, trajectory_rows(outputs.trajectory), "YEARLY GROWTH")
        )
    return "\n".join(lines)


def run_cli(args: argparse.Namespace, out: Optional[TextIO] = None) -> ProjectionOutputs:
    out = out or sys.stdout
    setup_logging(args.log_level)
    use_numpy = resolve_use_numpy(args.engine)
    raw = raw_fields_from_args(args)
    category = parse_category(raw.account)
    outputs = compute_outputs(raw, use_numpy=use_numpy)
    if outputs.result is None:
        logger.info("Inputs did not validate; nothing projected")

    out.write(render_outputs(outputs, category, table=args.table))

    if args.csv:
        if outputs.trajectory:
            export_csv(args.csv, TRAJECTORY_HEADER, trajectory_rows(outputs.trajectory))
            out.write(f"Trajectory exported to {args.csv}\n")
        else:
            print("Note: nothing to export; CSV not written.", file=sys.stderr)

    if args.plot and outputs.trajectory:
        theme = get_theme(args.theme)
        fig, ax = plt.subplots(figsize=(10, 6), facecolor=theme.background)
        plot_trajectory(ax, outputs.trajectory, theme, title="Projected Growth")
        fig.tight_layout()
        plt.show()
    return outputs


__all__ = ["build_parser", "raw_fields_from_args", "render_outputs", "run_cli"]
