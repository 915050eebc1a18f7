"""Engine selection, comparison scenarios and the one-call projection facade."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional

from .accounts import AccountAdvisory, evaluate, normalized_annual_contribution
from .finance import ProjectionResult, TrajectoryPoint, project, series
from .parsing import (
    ProjectionInput,
    RawFields,
    account_fields,
    build_input,
    parse_amount,
    parse_category,
)

logger = logging.getLogger(__name__)

WAIT_PERIODS = (5, 10)


@dataclass(frozen=True)
class ComparisonScenario:
    label: str
    years: int
    final_balance: float
    is_baseline: bool
    opportunity_cost: float = 0.0


@dataclass(frozen=True)
class ProjectionOutputs:
    """Everything the front ends render; each member may be ``None``."""

    result: Optional[ProjectionResult] = None
    trajectory: Optional[List[TrajectoryPoint]] = None
    scenarios: Optional[List[ComparisonScenario]] = None
    advisory: Optional[AccountAdvisory] = None

    @property
    def has_projection(self) -> bool:
        return self.result is not None


def resolve_use_numpy(engine: str) -> bool:
    """Return True if the NumPy engine should be used for trajectories."""

    normalized = engine.lower()
    if normalized not in {"auto", "numpy", "python"}:
        raise ValueError(f"Unknown engine '{engine}' (expected auto/numpy/python)")
    return normalized != "python"


def compare_waiting(inputs: ProjectionInput) -> List[ComparisonScenario]:
    """Start-now baseline followed by the delayed-start scenarios that fit the horizon."""

    def run(years: int) -> float:
        return project(
            inputs.initial_principal,
            inputs.periodic_contribution,
            inputs.annual_rate_percent,
            years,
            inputs.frequency,
        ).final_balance

    baseline = run(inputs.horizon_years)
    scenarios = [
        ComparisonScenario(
            label="Start Now",
            years=inputs.horizon_years,
            final_balance=baseline,
            is_baseline=True,
        )
    ]
    for wait in WAIT_PERIODS:
        if inputs.horizon_years < wait:
            continue
        years = inputs.horizon_years - wait
        delayed = run(years)
        scenarios.append(
            ComparisonScenario(
                label=f"Wait {wait} Years",
                years=years,
                final_balance=delayed,
                is_baseline=False,
                opportunity_cost=baseline - delayed,
            )
        )
    return scenarios


def compute_outputs(raw: RawFields, use_numpy: bool = True) -> ProjectionOutputs:
    """Recompute every output from the current form state."""

    category = parse_category(raw.account)
    fields = account_fields(raw)
    annual = normalized_annual_contribution(
        category, fields, parse_amount(raw.monthly_contribution)
    )
    advisory = evaluate(
        category,
        replace(fields, annual_contribution=annual),
        horizon_years=int(parse_amount(raw.years)),
        initial_principal=parse_amount(raw.principal),
    )
    inputs = build_input(raw)
    if inputs is None:
        return ProjectionOutputs(advisory=advisory)

    result = project(
        inputs.initial_principal,
        inputs.periodic_contribution,
        inputs.annual_rate_percent,
        inputs.horizon_years,
        inputs.frequency,
    )
    trajectory = series(
        inputs.initial_principal,
        inputs.periodic_contribution,
        inputs.annual_rate_percent,
        inputs.horizon_years,
        inputs.frequency,
        use_numpy,
    )
    logger.debug(
        "Projected %s years at %s%%: %.2f",
        inputs.horizon_years,
        inputs.annual_rate_percent,
        result.final_balance,
    )
    return ProjectionOutputs(
        result=result,
        trajectory=trajectory,
        scenarios=compare_waiting(inputs),
        advisory=advisory,
    )


__all__ = [
    "ComparisonScenario",
    "ProjectionOutputs",
    "WAIT_PERIODS",
    "compare_waiting",
    "compute_outputs",
    "resolve_use_numpy",
]
