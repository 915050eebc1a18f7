"""Compound-growth projection utilities for savings-estimator."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Union

import numpy as np

logger = logging.getLogger(__name__)

# Days per month used when spreading a monthly figure over daily compounding.
DAYS_PER_MONTH = 365 / 12
DEFAULT_PERIODS = 12


class Frequency(str, Enum):
    ANNUALLY = "Annually"
    SEMI_ANNUALLY = "Semi-Annually"
    QUARTERLY = "Quarterly"
    MONTHLY = "Monthly"
    DAILY = "Daily"


FrequencyLike = Union[Frequency, str]

_PERIODS = {
    Frequency.ANNUALLY: 1,
    Frequency.SEMI_ANNUALLY: 2,
    Frequency.QUARTERLY: 4,
    Frequency.MONTHLY: 12,
    Frequency.DAILY: 365,
}

_MONTHS_PER_PERIOD = {
    Frequency.ANNUALLY: 12.0,
    Frequency.SEMI_ANNUALLY: 6.0,
    Frequency.QUARTERLY: 3.0,
    Frequency.MONTHLY: 1.0,
    Frequency.DAILY: 1.0 / DAYS_PER_MONTH,
}


@dataclass(frozen=True)
class ProjectionResult:
    final_balance: float
    total_contributed: float
    total_interest: float


@dataclass(frozen=True)
class TrajectoryPoint:
    year: int
    balance: float
    contributed: float
    is_label_year: bool = False


def _as_frequency(frequency: FrequencyLike) -> Frequency:
    """Return the matching ``Frequency`` or ``Frequency.MONTHLY`` when unknown."""

    if isinstance(frequency, Frequency):
        return frequency
    try:
        return Frequency(frequency)
    except ValueError:
        logger.debug("Unknown compounding frequency %r; using Monthly", frequency)
        return Frequency.MONTHLY


def periods_per_year(frequency: FrequencyLike) -> int:
    """Number of compounding periods per year (unknown values compound monthly)."""

    return _PERIODS.get(_as_frequency(frequency), DEFAULT_PERIODS)


def per_period_contribution(monthly: float, frequency: FrequencyLike) -> float:
    """Convert a monthly contribution into the amount added each compounding period."""

    return monthly * _MONTHS_PER_PERIOD[_as_frequency(frequency)]


def _growth_terms(
    principal: float,
    payment: float,
    r: float,
    n: int,
    years: float,
) -> tuple[float, float]:
    factor = (1 + r / n) ** (n * years)
    compounded = principal * factor
    if r > 0:
        annuity = payment * ((factor - 1) / (r / n))
    else:
        # No growth: contributions simply accumulate.
        annuity = payment * n * years
    return compounded, annuity


def project(
    principal: float,
    monthly: float,
    rate_percent: float,
    years: float,
    frequency: FrequencyLike = Frequency.MONTHLY,
) -> ProjectionResult:
    """Closed-form balance after ``years`` of compounding plus periodic contributions.

    ``total_contributed`` always counts the monthly figure twelve times a year,
    whatever the compounding frequency.
    """

    r = rate_percent / 100.0
    n = periods_per_year(frequency)
    payment = per_period_contribution(monthly, frequency)
    compounded, annuity = _growth_terms(principal, payment, r, n, years)
    final_balance = compounded + annuity
    total_contributed = principal + monthly * 12 * years
    return ProjectionResult(
        final_balance=final_balance,
        total_contributed=total_contributed,
        total_interest=final_balance - total_contributed,
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def label_years(years: int) -> set[int]:
    """Years highlighted on the chart: start, quarters and end."""

    return {
        0,
        _round_half_up(years * 0.25),
        _round_half_up(years * 0.5),
        _round_half_up(years * 0.75),
        years,
    }


def series_py(
    principal: float,
    monthly: float,
    rate_percent: float,
    years: int,
    frequency: FrequencyLike = Frequency.MONTHLY,
) -> List[TrajectoryPoint]:
    """Pure-Python yearly trajectory (one point per whole year, year 0 included)."""

    r = rate_percent / 100.0
    n = periods_per_year(frequency)
    payment = per_period_contribution(monthly, frequency)
    labels = label_years(years)
    out = []
    for t in range(0, years + 1):
        compounded, annuity = _growth_terms(principal, payment, r, n, t)
        out.append(
            TrajectoryPoint(
                year=t,
                balance=compounded + annuity,
                contributed=principal + monthly * 12 * t,
                is_label_year=t in labels,
            )
        )
    return out


def series_np(
    principal: float,
    monthly: float,
    rate_percent: float,
    years: int,
    frequency: FrequencyLike = Frequency.MONTHLY,
) -> List[TrajectoryPoint]:
    """Vectorized yearly trajectory computed with NumPy."""

    r = rate_percent / 100.0
    n = periods_per_year(frequency)
    payment = per_period_contribution(monthly, frequency)
    t = np.arange(years + 1, dtype=np.float64)
    factors = (1 + r / n) ** (n * t)
    if r > 0:
        annuity = payment * ((factors - 1) / (r / n))
    else:
        annuity = payment * n * t
    # Extreme inputs may overflow to inf; the formatters render those as n/a.
    with np.errstate(over="ignore"):
        balances = principal * factors + annuity
    contributed = principal + monthly * 12 * t

    labels = label_years(years)
    return [
        TrajectoryPoint(
            year=k,
            balance=float(balances[k]),
            contributed=float(contributed[k]),
            is_label_year=k in labels,
        )
        for k in range(years + 1)
    ]


def series(
    principal,
    monthly,
    rate_percent,
    years,
    frequency=Frequency.MONTHLY,
    use_numpy=True,
):
    if use_numpy:
        return series_np(principal, monthly, rate_percent, years, frequency)
    return series_py(principal, monthly, rate_percent, years, frequency)


__all__ = [
    "DAYS_PER_MONTH",
    "Frequency",
    "FrequencyLike",
    "ProjectionResult",
    "TrajectoryPoint",
    "label_years",
    "per_period_contribution",
    "periods_per_year",
    "project",
    "series",
    "series_np",
    "series_py",
]
