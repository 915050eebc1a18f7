"""savings-estimator package entry points."""
from __future__ import annotations

from .cli import build_parser, run_cli
from .config import load_settings

__all__ = ["build_parser", "run_cli", "run_gui", "main", "main_cli"]

CLI_FIELDS = [
    "principal",
    "monthly",
    "years",
    "rate",
    "account",
    "annual_contribution",
    "income",
    "eligible_years",
    "table",
    "csv",
    "plot",
]


def run_gui(settings=None) -> None:
    # Tk is imported lazily so the CLI works on interpreters built without it.
    from .gui.app import run

    run(settings)


def main(argv=None) -> None:
    """Console entry point supporting both CLI and GUI modes."""

    settings = load_settings()
    parser = build_parser(settings)
    default_args = parser.parse_args([])
    args = parser.parse_args(argv)

    if args.gui:
        run_gui(settings)
        return

    if args.cli:
        run_cli(args)
        return

    if any(getattr(args, field) != getattr(default_args, field) for field in CLI_FIELDS):
        parser.error("CLI options require --cli; add --cli to run command-line mode.")

    run_gui(settings)


def main_cli(argv=None) -> None:
    """Dedicated console entry point for CLI usage."""

    parser = build_parser(load_settings())
    args = parser.parse_args(argv)
    if not args.cli:
        args.cli = True
    run_cli(args)
