"""Core calculation engine for the money-saver calculator.

This module implements the amortization math used to estimate how much an
offset balance saves on a loan: the equal monthly installment (EMI), the
number of periods needed to amortize a principal at a given installment, and
the interest, opportunity cost and effective rate derived from them.

None of the functions raise for degenerate inputs. A value that cannot be
computed is returned as ``None`` and every field depending on it is ``None``
as well, while independent fields keep their values.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from .data_models import OPPORTUNITY_COST_PERCENT, CalculationResult, LoanInputs

logger = logging.getLogger(__name__)


def _is_finite(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def _is_positive(value: Optional[float]) -> bool:
    return _is_finite(value) and value > 0


def _finite_or_none(value: Optional[float]) -> Optional[float]:
    return value if _is_finite(value) else None


def tenure_to_months(tenure_years: float) -> Optional[int]:
    """Convert a tenure in years to a whole number of months.

    Halves are rounded up, so ``1.0417`` years (12.5 months) becomes 13
    months rather than the even neighbour picked by :func:`round`. Returns
    ``None`` when the month count is too large to represent.
    """
    months = tenure_years * 12 + 0.5
    if not math.isfinite(months):
        return None
    return int(math.floor(months))


def calculate_emi(principal: float, rate_per_month: float, months: int) -> Optional[float]:
    """Return the equal monthly installment for a loan.

    The formula is:

        emi = i * P / (1 - (1 + i)^-n)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is zero, the
    installment simplifies to ``P / n``. The denominator is evaluated with
    ``log1p``/``expm1`` so that rates too small to change ``1 + i`` still
    give ``P / n`` instead of dividing by zero. Returns ``None`` when there
    is no whole month to spread the principal over or the installment is
    not a finite number.
    """
    if months < 1:
        return None
    if rate_per_month == 0:
        return _finite_or_none(principal / months)
    denom = -math.expm1(-months * math.log1p(rate_per_month))
    if not _is_finite(denom) or denom <= 0:
        return None
    return _finite_or_none(rate_per_month * principal / denom)


def solve_periods(
    present_value: Optional[float],
    emi: Optional[float],
    rate_per_month: Optional[float],
) -> Optional[float]:
    """Return the (fractional) number of months needed to repay ``present_value``.

    This is the inverse of :func:`calculate_emi`:

        n = -ln(1 - i * P / emi) / ln(1 + i)

    Returns ``None`` when an input is missing or not finite, when ``emi`` is
    not positive, or when the installment does not even cover the interest on
    ``present_value`` (the logarithm argument is not positive).
    """
    if not (_is_finite(present_value) and _is_finite(emi) and _is_finite(rate_per_month)):
        return None
    if emi <= 0:
        return None
    if present_value == 0:
        return 0.0
    if rate_per_month == 0:
        return _finite_or_none(present_value / emi)
    growth = math.log1p(rate_per_month)
    if growth == 0:
        return None
    covered = rate_per_month * present_value / emi
    if not _is_finite(covered) or covered >= 1:
        logger.debug(
            "Installment %.2f cannot amortize %.2f at %.6f per month", emi, present_value, rate_per_month
        )
        return None
    return _finite_or_none(-math.log1p(-covered) / growth)


def opportunity_cost(offset: float, years: Optional[float], annual_percent: float) -> Optional[float]:
    """Return the return forgone by parking ``offset`` for ``years``.

    Interest is compounded annually at ``annual_percent``. The cost is zero
    unless both the horizon and the offset are finite and positive, and
    ``None`` when the compounded amount is too large to represent.
    """
    if not (_is_positive(years) and _is_positive(offset)):
        return 0.0
    try:
        growth = (1 + annual_percent / 100) ** years
    except OverflowError:
        logger.debug("Opportunity cost overflows over %.2f years", years)
        return None
    return _finite_or_none(offset * (growth - 1))


def compute_savings(
    principal: Optional[float],
    annual_rate_percent: Optional[float],
    tenure_years: Optional[float],
    offset: Optional[float] = 0.0,
    opportunity_cost_percent: float = OPPORTUNITY_COST_PERCENT,
) -> CalculationResult:
    """Compute the savings an offset balance brings on a loan.

    Parameters
    ----------
    principal, annual_rate_percent, tenure_years: float
        Loan amount, annual rate in percent and tenure in years. Each must be
        finite and strictly positive, otherwise every field of the result is
        undefined.
    offset: float
        Balance kept against the loan. Missing or non-finite values count as
        zero.
    opportunity_cost_percent: float
        Annual return the offset funds would otherwise earn.

    Returns
    -------
    CalculationResult
        The EMI for the original tenure and the savings figures once the
        offset reduces the interest-bearing principal.
    """
    if not all(_is_positive(v) for v in (principal, annual_rate_percent, tenure_years)):
        logger.debug(
            "Rejected inputs principal=%r rate=%r tenure=%r", principal, annual_rate_percent, tenure_years
        )
        return CalculationResult.undefined()
    if not _is_finite(offset):
        offset = 0.0

    rate_per_month = annual_rate_percent / 100 / 12
    months = tenure_to_months(tenure_years)
    emi = calculate_emi(principal, rate_per_month, months) if months is not None else None

    principal_after = max(0.0, principal - offset)
    periods_original = solve_periods(principal, emi, rate_per_month)
    periods_new = solve_periods(principal_after, emi, rate_per_month)

    interest_saved = None
    if periods_original is not None and periods_new is not None:
        original_interest = _finite_or_none(emi * periods_original - principal)
        new_interest = _finite_or_none(emi * periods_new - principal_after)
        if original_interest is not None and new_interest is not None:
            interest_saved = _finite_or_none(original_interest - new_interest)

    years_new = periods_new / 12 if periods_new is not None else None

    net_savings = None
    cost = opportunity_cost(offset, years_new, opportunity_cost_percent)
    if interest_saved is not None and cost is not None:
        net_savings = _finite_or_none(interest_saved - cost)

    emis_saved = None
    if periods_original is not None and periods_new is not None:
        saved_periods = periods_original - periods_new
        if _is_finite(saved_periods):
            emis_saved = math.trunc(saved_periods)

    effective_rate = None
    if _is_positive(years_new) and net_savings is not None:
        effective_rate = _finite_or_none(
            annual_rate_percent - (net_savings / (principal * years_new)) * 100
        )

    return CalculationResult(
        emi=emi,
        payoff_years=years_new,
        interest_saved=interest_saved,
        net_savings=net_savings,
        emis_saved_months=emis_saved,
        effective_rate_percent=effective_rate,
    )


def compute_from_inputs(
    inputs: LoanInputs, opportunity_cost_percent: float = OPPORTUNITY_COST_PERCENT
) -> CalculationResult:
    """Run :func:`compute_savings` on a :class:`LoanInputs` record."""
    return compute_savings(
        inputs.principal,
        inputs.annual_rate_percent,
        inputs.tenure_years,
        inputs.offset,
        opportunity_cost_percent,
    )
