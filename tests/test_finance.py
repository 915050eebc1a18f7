from __future__ import annotations

from math import isclose

import pytest

from savingsestimator.finance import (
    Frequency,
    label_years,
    per_period_contribution,
    periods_per_year,
    project,
    series,
    series_np,
    series_py,
)


@pytest.mark.parametrize(
    "frequency, expected",
    [
        (Frequency.ANNUALLY, 1),
        (Frequency.SEMI_ANNUALLY, 2),
        (Frequency.QUARTERLY, 4),
        (Frequency.MONTHLY, 12),
        (Frequency.DAILY, 365),
        ("Semi-Annually", 2),
        ("Fortnightly", 12),
        (None, 12),
    ],
)
def test_periods_per_year(frequency, expected):
    assert periods_per_year(frequency) == expected


def test_per_period_contribution_scales_monthly_amount():
    assert per_period_contribution(100, Frequency.ANNUALLY) == 1200
    assert per_period_contribution(100, Frequency.SEMI_ANNUALLY) == 600
    assert per_period_contribution(100, Frequency.QUARTERLY) == 300
    assert per_period_contribution(100, Frequency.MONTHLY) == 100
    assert isclose(per_period_contribution(100, Frequency.DAILY), 100 / (365 / 12))
    assert per_period_contribution(100, "unknown") == 100


def test_monthly_contributions_over_thirty_years():
    result = project(0, 500, 7, 30, Frequency.MONTHLY)

    expected = 500 * (((1 + 0.07 / 12) ** 360 - 1) / (0.07 / 12))
    assert isclose(result.final_balance, expected, rel_tol=1e-12)
    assert result.final_balance == pytest.approx(609_985, rel=1e-4)
    assert result.total_contributed == 180_000
    assert isclose(result.total_interest, result.final_balance - 180_000)


def test_principal_only_compounds_annually():
    result = project(1000, 0, 10, 2, Frequency.ANNUALLY)
    assert isclose(result.final_balance, 1210.0)
    assert isclose(result.total_interest, 210.0)


@pytest.mark.parametrize("frequency", list(Frequency))
def test_zero_rate_is_sum_of_contributions(frequency):
    result = project(2500, 300, 0, 12, frequency)
    assert isclose(result.final_balance, 2500 + 300 * 12 * 12, rel_tol=1e-9)
    assert isclose(result.total_interest, 0.0, abs_tol=1e-6)


def test_zero_years_returns_principal():
    result = project(1000, 250, 5, 0, Frequency.QUARTERLY)
    assert result.final_balance == 1000
    assert result.total_interest == 0


def test_total_contributed_ignores_compounding_frequency():
    yearly = project(0, 100, 5, 10, Frequency.ANNUALLY)
    daily = project(0, 100, 5, 10, Frequency.DAILY)
    assert yearly.total_contributed == daily.total_contributed == 12_000


def test_balance_is_non_decreasing_in_years():
    balances = [project(1000, 200, 6, t, Frequency.MONTHLY).final_balance for t in range(0, 41)]
    assert all(b2 >= b1 for b1, b2 in zip(balances, balances[1:]))


@pytest.mark.parametrize("use_numpy", [True, False])
@pytest.mark.parametrize("frequency", list(Frequency))
def test_last_trajectory_point_matches_projection(use_numpy, frequency):
    points = series(5000, 250, 6.5, 25, frequency, use_numpy=use_numpy)
    result = project(5000, 250, 6.5, 25, frequency)

    assert len(points) == 26
    assert [p.year for p in points] == list(range(26))
    assert isclose(points[-1].balance, result.final_balance, rel_tol=1e-9)
    assert isclose(points[-1].contributed, result.total_contributed)
    assert points[0].balance == 5000


def test_engines_agree():
    py_points = series_py(1200, 80, 9, 40, Frequency.DAILY)
    np_points = series_np(1200, 80, 9, 40, Frequency.DAILY)
    for a, b in zip(py_points, np_points):
        assert a.year == b.year
        assert isclose(a.balance, b.balance, rel_tol=1e-9)
        assert isclose(a.contributed, b.contributed, rel_tol=1e-12)
        assert a.is_label_year == b.is_label_year


def test_zero_rate_trajectory_is_linear():
    points = series_np(100, 10, 0, 5, Frequency.QUARTERLY)
    assert [round(p.balance, 6) for p in points] == [100, 220, 340, 460, 580, 700]


def test_label_years():
    assert label_years(30) == {0, 8, 15, 23, 30}
    assert label_years(2) == {0, 1, 2}
    assert label_years(1) == {0, 1}

    points = series_py(0, 100, 5, 30)
    assert [p.year for p in points if p.is_label_year] == [0, 8, 15, 23, 30]
