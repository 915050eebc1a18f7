"""Input parsing and validation for savings-estimator."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .accounts import AccountCategory, AccountFields, effective_monthly_contribution
from .finance import Frequency

logger = logging.getLogger(__name__)

MAX_HORIZON_YEARS = 100
MAX_RATE_PERCENT = 100.0


def parse_amount(text: Optional[str]) -> float:
    """Parse a numeric text field; blank, unparsable or non-finite text reads as 0."""

    if text is None:
        return 0.0
    cleaned = str(text).strip().replace(",", "").replace("$", "").rstrip("%")
    if not cleaned:
        return 0.0
    try:
        value = float(cleaned)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def parse_frequency(text: Optional[str]) -> Frequency:
    """Match a frequency label case-insensitively; anything else compounds monthly."""

    cleaned = (text or "").strip().lower().replace("_", "-")
    for frequency in Frequency:
        if frequency.value.lower() == cleaned or frequency.name.lower() == cleaned:
            return frequency
    if cleaned in {"semiannually", "semi annually"}:
        return Frequency.SEMI_ANNUALLY
    return Frequency.MONTHLY


def parse_category(text: Optional[str]) -> AccountCategory:
    cleaned = (text or "").strip().lower()
    for category in AccountCategory:
        if category.value and category.value.lower() == cleaned:
            return category
    return AccountCategory.UNSELECTED


@dataclass(frozen=True)
class RawFields:
    """Raw form state as typed by the user."""

    principal: str = ""
    monthly_contribution: str = ""
    years: str = ""
    rate: str = ""
    frequency: str = Frequency.MONTHLY.value
    account: str = ""
    annual_contribution: str = ""
    annual_income: str = ""
    eligible_years: str = ""


class ProjectionInput(BaseModel):
    """Validated engine input; ``periodic_contribution`` is a monthly figure."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    initial_principal: float = Field(ge=0)
    periodic_contribution: float = Field(ge=0)
    annual_rate_percent: float = Field(ge=0, le=MAX_RATE_PERCENT)
    horizon_years: int = Field(ge=1, le=MAX_HORIZON_YEARS)
    frequency: Frequency = Frequency.MONTHLY

    @model_validator(mode="after")
    def ensure_something_invested(self) -> "ProjectionInput":
        if self.initial_principal <= 0 and self.periodic_contribution <= 0:
            raise ValueError("initial principal or contribution must be positive")
        return self


def account_fields(raw: RawFields) -> AccountFields:
    return AccountFields(
        annual_contribution=parse_amount(raw.annual_contribution),
        annual_income=parse_amount(raw.annual_income),
        eligible_years=int(parse_amount(raw.eligible_years)),
    )


def build_input(raw: RawFields) -> Optional[ProjectionInput]:
    """Return a validated ``ProjectionInput`` or ``None`` when the form is incomplete."""

    category = parse_category(raw.account)
    monthly = effective_monthly_contribution(
        category, account_fields(raw), parse_amount(raw.monthly_contribution)
    )
    try:
        return ProjectionInput(
            initial_principal=parse_amount(raw.principal),
            periodic_contribution=monthly,
            annual_rate_percent=parse_amount(raw.rate),
            horizon_years=parse_amount(raw.years),
            frequency=parse_frequency(raw.frequency),
        )
    except ValidationError as exc:
        logger.debug("Input rejected: %s", exc.errors())
        return None


__all__ = [
    "MAX_HORIZON_YEARS",
    "MAX_RATE_PERCENT",
    "ProjectionInput",
    "RawFields",
    "account_fields",
    "build_input",
    "parse_amount",
    "parse_category",
    "parse_frequency",
]
