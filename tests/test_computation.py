from __future__ import annotations

import pytest

from savingsestimator.accounts import AccountCategory, AdvisoryKind
from savingsestimator.computation import (
    compare_waiting,
    compute_outputs,
    resolve_use_numpy,
)
from savingsestimator.finance import Frequency, project
from savingsestimator.parsing import ProjectionInput, RawFields


def make_input(years: int, rate: float = 7.0) -> ProjectionInput:
    return ProjectionInput(
        initial_principal=1_000,
        periodic_contribution=300,
        annual_rate_percent=rate,
        horizon_years=years,
        frequency=Frequency.MONTHLY,
    )


def test_resolve_use_numpy():
    assert resolve_use_numpy("auto") is True
    assert resolve_use_numpy("NumPy") is True
    assert resolve_use_numpy("python") is False
    with pytest.raises(ValueError):
        resolve_use_numpy("fortran")


def test_waiting_scenarios_for_long_horizon():
    scenarios = compare_waiting(make_input(30))

    assert [s.label for s in scenarios] == ["Start Now", "Wait 5 Years", "Wait 10 Years"]
    assert [s.years for s in scenarios] == [30, 25, 20]
    assert scenarios[0].is_baseline and scenarios[0].opportunity_cost == 0
    assert not scenarios[1].is_baseline
    assert scenarios[0].final_balance >= scenarios[1].final_balance >= scenarios[2].final_balance
    for delayed in scenarios[1:]:
        assert delayed.opportunity_cost >= 0
        assert delayed.opportunity_cost == pytest.approx(
            scenarios[0].final_balance - delayed.final_balance
        )
    assert scenarios[2].final_balance == pytest.approx(
        project(1_000, 300, 7.0, 20, Frequency.MONTHLY).final_balance
    )


@pytest.mark.parametrize("years, count", [(1, 1), (4, 1), (5, 2), (9, 2), (10, 3)])
def test_waiting_scenarios_depend_on_horizon(years, count):
    assert len(compare_waiting(make_input(years))) == count


def test_wait_five_with_five_year_horizon_keeps_principal():
    scenarios = compare_waiting(make_input(5))
    assert scenarios[1].years == 0
    assert scenarios[1].final_balance == 1_000


def test_compute_outputs_full():
    outputs = compute_outputs(
        RawFields(monthly_contribution="500", years="30", rate="7", frequency="Monthly")
    )
    assert outputs.has_projection
    assert outputs.result.total_contributed == 180_000
    assert len(outputs.trajectory) == 31
    assert outputs.trajectory[-1].balance == pytest.approx(outputs.result.final_balance)
    assert len(outputs.scenarios) == 3
    assert outputs.advisory is None


def test_compute_outputs_python_engine_matches():
    raw = RawFields(principal="2500", monthly_contribution="125", years="18", rate="5.5",
                    frequency="Quarterly")
    fast = compute_outputs(raw, use_numpy=True)
    slow = compute_outputs(raw, use_numpy=False)
    for a, b in zip(fast.trajectory, slow.trajectory):
        assert a.balance == pytest.approx(b.balance)


@pytest.mark.parametrize("years, rate", [("10", "5"), ("0", "0"), ("100", "100"), ("", "")])
def test_nothing_invested_produces_nothing(years, rate):
    outputs = compute_outputs(
        RawFields(principal="0", monthly_contribution="0", years=years, rate=rate, account="TFSA")
    )
    assert outputs.result is None
    assert outputs.trajectory is None
    assert outputs.scenarios is None
    assert outputs.advisory is None


def test_advisory_is_evaluated_even_without_projection():
    outputs = compute_outputs(
        RawFields(principal="45000", years="0", rate="5", account="FHSA")
    )
    assert outputs.result is None
    assert outputs.advisory is not None
    assert outputs.advisory.kind is AdvisoryKind.WARNING


def test_resp_grant_flows_into_projection():
    outputs = compute_outputs(
        RawFields(years="1", rate="0", account="RESP", annual_contribution="2500")
    )
    assert outputs.result.final_balance == pytest.approx(3_000)
    assert outputs.advisory.grant == 500


@pytest.mark.parametrize(
    "account, monthly, extra",
    [
        ("TFSA", "700", {}),
        ("FHSA", "700", {}),
        ("RRSP", "1000", {"annual_income": "50000"}),
    ],
)
def test_monthly_contribution_is_checked_against_annual_limits(account, monthly, extra):
    outputs = compute_outputs(
        RawFields(monthly_contribution=monthly, years="10", rate="5", account=account, **extra)
    )
    assert outputs.result.total_contributed == pytest.approx(float(monthly) * 12 * 10)
    assert outputs.advisory is not None
    assert outputs.advisory.kind is AdvisoryKind.WARNING
    assert outputs.advisory.category is AccountCategory(account)


def test_monthly_contribution_within_tfsa_limit_confirms():
    outputs = compute_outputs(
        RawFields(monthly_contribution="500", years="10", rate="5", account="TFSA")
    )
    assert outputs.advisory.kind is AdvisoryKind.CONFIRMATION


def test_resp_grant_applies_to_monthly_contribution():
    outputs = compute_outputs(
        RawFields(monthly_contribution="200", years="1", rate="0", account="RESP")
    )
    assert outputs.result.final_balance == pytest.approx(2_880)
    assert outputs.advisory.kind is AdvisoryKind.CONFIRMATION
    assert outputs.advisory.grant == pytest.approx(480)


def test_resp_lifetime_limit_reached_through_monthly_contribution():
    outputs = compute_outputs(
        RawFields(monthly_contribution="200", years="25", rate="5", account="RESP")
    )
    assert outputs.advisory.kind is AdvisoryKind.WARNING
    assert outputs.advisory.limit == 50_000
    assert outputs.advisory.suggested_annual == 2_000


def test_monthly_figure_ignored_when_annual_field_is_filled():
    outputs = compute_outputs(
        RawFields(
            monthly_contribution="900",
            years="10",
            rate="5",
            account="TFSA",
            annual_contribution="6000",
        )
    )
    assert outputs.advisory.kind is AdvisoryKind.CONFIRMATION
    assert outputs.result.total_contributed == pytest.approx(60_000)
