"""Data models for the money-saver calculator.

This module defines dataclasses representing the inputs of a calculation and
the record it produces, together with the calculation policy constants. Any
result field may be ``None``, which stands for "undefined": the value could not
be computed from the supplied inputs and is rendered as a dash.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Optional

# Annual return the offset funds could have earned elsewhere (approximate
# post-tax fixed-deposit return). Used to discount idle offset funds.
OPPORTUNITY_COST_PERCENT = 5.1


@dataclass(frozen=True)
class LoanInputs:
    """User inputs for a single calculation.

    Attributes
    ----------
    principal: float
        Loan amount outstanding.
    annual_rate_percent: float
        Annual nominal interest rate in percent (e.g. ``7.5``).
    tenure_years: float
        Remaining loan tenure in years. Converted to whole months.
    offset: float
        Average balance maintained against the loan (excess funds). The
        balance reduces the interest-bearing principal without being a
        prepayment.
    """

    principal: Optional[float]
    annual_rate_percent: Optional[float]
    tenure_years: Optional[float]
    offset: Optional[float] = 0.0


DEFAULT_INPUTS = LoanInputs(
    principal=10_000_000.0,
    annual_rate_percent=7.5,
    tenure_years=20.0,
    offset=100_000.0,
)


@dataclass(frozen=True)
class CalculationResult:
    """The outcome of a money-saver calculation.

    ``emi`` is the installment for the original tenure. ``payoff_years`` is the
    horizon once the offset is applied, ``interest_saved`` the reduction in
    total interest and ``net_savings`` that reduction minus the opportunity cost
    of keeping the offset funds parked. ``emis_saved_months`` drops fractional
    months. ``effective_rate_percent`` re-expresses net savings as a linear
    reduction of the annual rate.
    """

    emi: Optional[float] = None
    payoff_years: Optional[float] = None
    interest_saved: Optional[float] = None
    net_savings: Optional[float] = None
    emis_saved_months: Optional[int] = None
    effective_rate_percent: Optional[float] = None

    @classmethod
    def undefined(cls) -> "CalculationResult":
        """Return a record with every field undefined."""
        return cls()

    @property
    def is_complete(self) -> bool:
        return all(value is not None for value in asdict(self).values())

    @property
    def is_undefined(self) -> bool:
        return all(value is None for value in asdict(self).values())

    def to_dict(self) -> Dict[str, Optional[float]]:
        return asdict(self)
