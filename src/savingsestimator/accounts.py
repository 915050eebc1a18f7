"""Registered account descriptors, contribution limits and advisories."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Optional

from .reporting import format_full

logger = logging.getLogger(__name__)

TFSA_ANNUAL_LIMIT = 7_000.0
RRSP_INCOME_SHARE = 0.18
RRSP_ANNUAL_MAX = 31_560.0
FHSA_ANNUAL_LIMIT = 8_000.0
FHSA_LIFETIME_LIMIT = 40_000.0
RESP_LIFETIME_LIMIT = 50_000.0
RESP_GRANT_RATE = 0.20
RESP_GRANT_MAX = 500.0


class AccountCategory(str, Enum):
    TFSA = "TFSA"
    RRSP = "RRSP"
    FHSA = "FHSA"
    RESP = "RESP"
    GENERAL = "General"
    UNSELECTED = ""


class AdvisoryKind(str, Enum):
    WARNING = "warning"
    CONFIRMATION = "confirmation"


@dataclass(frozen=True)
class AccountDescriptor:
    description: str
    limit_text: str
    tax_advantage: str


@dataclass(frozen=True)
class AccountFields:
    """Category-specific inputs; zero means "not supplied"."""

    annual_contribution: float = 0.0
    annual_income: float = 0.0
    eligible_years: int = 0


@dataclass(frozen=True)
class AccountAdvisory:
    kind: AdvisoryKind
    category: AccountCategory
    message: str
    limit: Optional[float] = None
    excess: float = 0.0
    suggested_annual: Optional[float] = None
    suggested_initial: Optional[float] = None
    cumulative_room: Optional[float] = None
    grant: float = 0.0

    @property
    def is_warning(self) -> bool:
        return self.kind is AdvisoryKind.WARNING

    @property
    def suggested_monthly(self) -> Optional[float]:
        if self.suggested_annual is None:
            return None
        return float(math.floor(self.suggested_annual / 12))


@dataclass(frozen=True)
class _Context:
    annual: float
    income: float
    eligible_years: int
    horizon_years: int
    initial: float


Check = Callable[[_Context], Optional[AccountAdvisory]]


@dataclass(frozen=True)
class AccountRule:
    descriptor: AccountDescriptor
    check: Optional[Check] = None


def resp_grant(annual_contribution: float) -> float:
    """Government grant matched on RESP contributions, capped per year."""

    if annual_contribution <= 0:
        return 0.0
    return min(annual_contribution * RESP_GRANT_RATE, RESP_GRANT_MAX)


def rrsp_limit(annual_income: float) -> float:
    return min(annual_income * RRSP_INCOME_SHARE, RRSP_ANNUAL_MAX)


def _annual_warning(
    category: AccountCategory,
    annual: float,
    limit: float,
    limit_label: str,
) -> AccountAdvisory:
    suggested = math.floor(limit / 12)
    message = (
        f"Your contributions of {format_full(annual)}/year exceed the "
        f"{category.value} {limit_label} of {format_full(limit)}/year. "
        f"Consider reducing your contribution to {format_full(limit)}/year "
        f"({format_full(suggested)}/month) or less."
    )
    return AccountAdvisory(
        kind=AdvisoryKind.WARNING,
        category=category,
        message=message,
        limit=limit,
        excess=annual - limit,
        suggested_annual=limit,
    )


def _initial_warning(
    category: AccountCategory, initial: float, limit: float
) -> AccountAdvisory:
    message = (
        f"Your initial investment of {format_full(initial)} exceeds the "
        f"{category.value} lifetime limit of {format_full(limit)}. "
        f"Consider reducing your initial investment to {format_full(limit)} or less."
    )
    return AccountAdvisory(
        kind=AdvisoryKind.WARNING,
        category=category,
        message=message,
        limit=limit,
        excess=initial - limit,
        suggested_initial=limit,
    )


def _lifetime_warning(
    category: AccountCategory, ctx: _Context, limit: float
) -> AccountAdvisory:
    projected = ctx.annual * ctx.horizon_years
    suggested = float(math.floor(limit / ctx.horizon_years))
    message = (
        f"Contributing {format_full(ctx.annual)}/year for {ctx.horizon_years} years "
        f"adds up to {format_full(projected)}, above the {category.value} lifetime "
        f"limit of {format_full(limit)}. Consider reducing your contribution to "
        f"{format_full(suggested)}/year or less."
    )
    return AccountAdvisory(
        kind=AdvisoryKind.WARNING,
        category=category,
        message=message,
        limit=limit,
        excess=projected - limit,
        suggested_annual=suggested,
    )


def _check_tfsa(ctx: _Context) -> Optional[AccountAdvisory]:
    if ctx.annual <= 0:
        return None
    room = TFSA_ANNUAL_LIMIT * ctx.eligible_years if ctx.eligible_years > 0 else None
    if ctx.annual > TFSA_ANNUAL_LIMIT:
        warning = _annual_warning(
            AccountCategory.TFSA, ctx.annual, TFSA_ANNUAL_LIMIT, "annual limit"
        )
        return replace(warning, cumulative_room=room)
    message = (
        f"Your contributions of {format_full(ctx.annual)}/year are within the "
        f"TFSA annual limit of {format_full(TFSA_ANNUAL_LIMIT)}/year."
    )
    if room is not None:
        message += (
            f" Total room over {ctx.eligible_years} eligible years: {format_full(room)}."
        )
    return AccountAdvisory(
        kind=AdvisoryKind.CONFIRMATION,
        category=AccountCategory.TFSA,
        message=message,
        limit=TFSA_ANNUAL_LIMIT,
        cumulative_room=room,
    )


def _check_rrsp(ctx: _Context) -> Optional[AccountAdvisory]:
    if ctx.income <= 0 or ctx.annual <= 0:
        return None
    limit = rrsp_limit(ctx.income)
    if ctx.annual > limit:
        return _annual_warning(AccountCategory.RRSP, ctx.annual, limit, "limit")
    message = (
        f"Your contributions of {format_full(ctx.annual)}/year are within your "
        f"RRSP limit of {format_full(limit)}/year "
        f"(18% of {format_full(ctx.income)} income, max {format_full(RRSP_ANNUAL_MAX)})."
    )
    return AccountAdvisory(
        kind=AdvisoryKind.CONFIRMATION,
        category=AccountCategory.RRSP,
        message=message,
        limit=limit,
    )


def _check_fhsa(ctx: _Context) -> Optional[AccountAdvisory]:
    if ctx.annual > FHSA_ANNUAL_LIMIT:
        return _annual_warning(
            AccountCategory.FHSA, ctx.annual, FHSA_ANNUAL_LIMIT, "annual limit"
        )
    if ctx.initial > FHSA_LIFETIME_LIMIT:
        return _initial_warning(AccountCategory.FHSA, ctx.initial, FHSA_LIFETIME_LIMIT)
    if ctx.annual > 0 and ctx.annual * ctx.horizon_years > FHSA_LIFETIME_LIMIT:
        full_years = math.floor(FHSA_LIFETIME_LIMIT / ctx.annual)
        warning = _lifetime_warning(AccountCategory.FHSA, ctx, FHSA_LIFETIME_LIMIT)
        message = (
            f"{warning.message} At this rate only the first {full_years} years of "
            f"contributions fit under the limit."
        )
        return replace(warning, message=message)
    if ctx.annual <= 0 and ctx.initial <= 0:
        return None
    return AccountAdvisory(
        kind=AdvisoryKind.CONFIRMATION,
        category=AccountCategory.FHSA,
        message=(
            f"Your contributions are within the FHSA limits of "
            f"{format_full(FHSA_ANNUAL_LIMIT)}/year and "
            f"{format_full(FHSA_LIFETIME_LIMIT)} lifetime."
        ),
        limit=FHSA_ANNUAL_LIMIT,
    )


def _check_resp(ctx: _Context) -> Optional[AccountAdvisory]:
    grant = resp_grant(ctx.annual)
    if ctx.annual > 0 and ctx.annual * ctx.horizon_years > RESP_LIFETIME_LIMIT:
        warning = _lifetime_warning(AccountCategory.RESP, ctx, RESP_LIFETIME_LIMIT)
        return replace(warning, grant=grant)
    if ctx.initial > RESP_LIFETIME_LIMIT:
        warning = _initial_warning(AccountCategory.RESP, ctx.initial, RESP_LIFETIME_LIMIT)
        return replace(warning, grant=grant)
    if ctx.annual <= 0 and ctx.initial <= 0:
        return None
    message = (
        f"Your contributions are within the RESP lifetime limit of "
        f"{format_full(RESP_LIFETIME_LIMIT)}."
    )
    if grant > 0:
        message += f" The government grant adds {format_full(grant)}/year."
    return AccountAdvisory(
        kind=AdvisoryKind.CONFIRMATION,
        category=AccountCategory.RESP,
        message=message,
        limit=RESP_LIFETIME_LIMIT,
        grant=grant,
    )


RULES: Dict[AccountCategory, AccountRule] = {
    AccountCategory.TFSA: AccountRule(
        AccountDescriptor(
            "Tax-Free Savings Account",
            "$7,000/year",
            "Tax-free growth and withdrawals",
        ),
        _check_tfsa,
    ),
    AccountCategory.RRSP: AccountRule(
        AccountDescriptor(
            "Registered Retirement Savings Plan",
            "18% of previous year income, max $31,560",
            "Tax-deductible contributions, tax-deferred growth",
        ),
        _check_rrsp,
    ),
    AccountCategory.FHSA: AccountRule(
        AccountDescriptor(
            "First Home Savings Account",
            "$8,000/year ($40,000 lifetime)",
            "Tax-deductible contributions, tax-free withdrawals for first home",
        ),
        _check_fhsa,
    ),
    AccountCategory.RESP: AccountRule(
        AccountDescriptor(
            "Registered Education Savings Plan",
            "$50,000 lifetime",
            "Government grants (CESG), tax-deferred growth",
        ),
        _check_resp,
    ),
    AccountCategory.GENERAL: AccountRule(
        AccountDescriptor(
            "Non-registered account",
            "No limit",
            "No special tax advantage",
        ),
    ),
    AccountCategory.UNSELECTED: AccountRule(
        AccountDescriptor("No account selected", "", ""),
    ),
}


def descriptor(category: AccountCategory) -> AccountDescriptor:
    return RULES[category].descriptor


def is_registered(category: AccountCategory) -> bool:
    """True for categories that take an annual contribution figure."""

    return RULES[category].check is not None


def evaluate(
    category: AccountCategory,
    fields: AccountFields,
    horizon_years: int = 0,
    initial_principal: float = 0.0,
) -> Optional[AccountAdvisory]:
    """Return the first advisory triggered for the category, or ``None``."""

    rule = RULES[category]
    if rule.check is None:
        return None
    ctx = _Context(
        annual=max(fields.annual_contribution, 0.0),
        income=max(fields.annual_income, 0.0),
        eligible_years=max(int(fields.eligible_years), 0),
        horizon_years=max(int(horizon_years), 0),
        initial=max(initial_principal, 0.0),
    )
    advisory = rule.check(ctx)
    if advisory is not None:
        logger.debug("%s advisory: %s", category.value, advisory.kind.value)
    return advisory


def uses_annual_contribution(category: AccountCategory, fields: AccountFields) -> bool:
    """True when the annual figure replaces the monthly contribution."""

    return is_registered(category) and fields.annual_contribution > 0


def normalized_annual_contribution(
    category: AccountCategory,
    fields: AccountFields,
    monthly_contribution: float,
) -> float:
    """Yearly contribution before any grant.

    Registered accounts take the annual figure when one is entered and fall
    back to twelve monthly contributions otherwise.
    """

    if uses_annual_contribution(category, fields):
        return fields.annual_contribution
    return max(monthly_contribution, 0.0) * 12


def effective_monthly_contribution(
    category: AccountCategory,
    fields: AccountFields,
    monthly_contribution: float,
) -> float:
    """Monthly-equivalent contribution fed to the projection engine.

    Registered accounts with an annual figure use it; RESP adds the grant
    whichever field the contribution was entered in. Everything else keeps
    the plain monthly contribution.
    """

    if not is_registered(category):
        return monthly_contribution
    annual = normalized_annual_contribution(category, fields, monthly_contribution)
    if annual <= 0:
        return monthly_contribution
    if category is AccountCategory.RESP:
        annual += resp_grant(annual)
    elif not uses_annual_contribution(category, fields):
        return monthly_contribution
    return annual / 12


__all__ = [
    "AccountAdvisory",
    "AccountCategory",
    "AccountDescriptor",
    "AccountFields",
    "AccountRule",
    "AdvisoryKind",
    "RULES",
    "descriptor",
    "effective_monthly_contribution",
    "evaluate",
    "is_registered",
    "normalized_annual_contribution",
    "resp_grant",
    "rrsp_limit",
    "uses_annual_contribution",
]
