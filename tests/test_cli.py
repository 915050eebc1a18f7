from __future__ import annotations

import csv
import io

import pytest

from savingsestimator import main, main_cli
from savingsestimator.cli import build_parser, run_cli


def run(argv):
    out = io.StringIO()
    args = build_parser().parse_args(argv)
    outputs = run_cli(args, out=out)
    return outputs, out.getvalue()


def test_cli_prints_projection_and_waiting_cost():
    outputs, text = run(["--cli", "--monthly", "500", "--years", "30", "--rate", "7"])

    assert outputs.has_projection
    assert "Total contributed: $180,000" in text
    assert "COST OF WAITING" in text
    assert "Wait 10 Years" in text


def test_cli_invalid_input_prints_notice():
    outputs, text = run(["--cli", "--years", "10", "--rate", "5"])

    assert outputs.result is None
    assert "No projection" in text
    assert "COST OF WAITING" not in text


def test_cli_account_advisory_and_descriptor():
    _, text = run(
        ["--cli", "--years", "10", "--rate", "5", "--account", "TFSA",
         "--annual-contribution", "7500"]
    )
    assert "Tax-Free Savings Account" in text
    assert "[WARNING]" in text


def test_cli_yearly_table_and_csv(tmp_path):
    path = tmp_path / "out.csv"
    _, text = run(
        ["--cli", "--principal", "1000", "--years", "4", "--rate", "5", "--table",
         "--csv", str(path), "--engine", "python"]
    )
    assert "YEARLY GROWTH" in text
    with open(path, newline="") as f:
        assert len(list(csv.reader(f))) == 6


def test_main_cli_writes_to_stdout(capsys):
    main_cli(["--principal", "1000", "--years", "2", "--rate", "10", "--frequency", "Annually"])
    assert "Final balance:     $1,210" in capsys.readouterr().out


def test_main_rejects_cli_options_without_cli_flag():
    with pytest.raises(SystemExit) as excinfo:
        main(["--principal", "100"])
    assert excinfo.value.code == 2


def test_parser_rejects_unknown_frequency():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--frequency", "Weekly"])


@pytest.mark.parametrize("engine", ["numpy", "python"])
def test_cli_overflowing_balance_prints_not_available(engine, recwarn):
    outputs, text = run(
        ["--cli", "--principal", "1e300", "--years", "100", "--rate", "100",
         "--frequency", "Annually", "--table", "--engine", engine]
    )
    assert outputs.has_projection
    assert "Final balance:     n/a" in text
    assert "YEARLY GROWTH" in text
    assert not [w for w in recwarn if issubclass(w.category, RuntimeWarning)]


def test_cli_monthly_contribution_checked_against_tfsa_limit():
    _, text = run(
        ["--cli", "--monthly", "700", "--years", "10", "--rate", "5", "--account", "TFSA"]
    )
    assert "[WARNING]" in text
