"""Output helpers for the money-saver calculator.

This module renders calculation results the way the calculator displays them:
amounts use South-Asian digit grouping (``1,00,00,000.00``), percentages use
two decimals and undefined values show as a dash. It also prints results and
comparisons in a simple tabular text format for the terminal.
"""

from __future__ import annotations

import math
import re
from typing import Optional

from .data_models import OPPORTUNITY_COST_PERCENT, CalculationResult, LoanInputs

PLACEHOLDER = "—"
PROMPT = 'Click "Calculate savings" to see how much you can save.'

_PAIRS = re.compile(r"\B(?=(\d{2})+(?!\d))")


def _is_defined(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def group_indian(digits: str) -> str:
    """Group a string of digits as 12,34,56,789: three digits, then pairs."""
    if len(digits) <= 3:
        return digits
    head, last3 = digits[:-3], digits[-3:]
    return _PAIRS.sub(",", head) + "," + last3


def format_indian(value: Optional[float]) -> str:
    """Format ``value`` with two decimals and South-Asian grouping."""
    if not _is_defined(value):
        return PLACEHOLDER
    text = f"{value:.2f}"
    sign = ""
    if text.startswith("-"):
        sign, text = "-", text[1:]
    int_part, dec = text.split(".")
    return f"{sign}{group_indian(int_part)}.{dec}"


def format_input_value(value: Optional[float]) -> str:
    """Format a value for an input field: grouped, without a trailing ``.00``."""
    if not _is_defined(value):
        return ""
    text = format_indian(value)
    return text[:-3] if text.endswith(".00") else text


def format_percent(value: Optional[float]) -> str:
    if not _is_defined(value):
        return PLACEHOLDER
    return f"{value:.2f}%"


def format_months(value: Optional[int]) -> str:
    return PLACEHOLDER if value is None else str(value)


def summary_sentence(result: CalculationResult) -> str:
    """Return the one-line summary shown under the results."""
    if _is_defined(result.payoff_years) and _is_defined(result.net_savings):
        return (
            f"With Money Saver, your loan will get completed in {result.payoff_years:.2f} yrs "
            f"saving ₹ {format_indian(result.net_savings)} in interest"
        )
    return PROMPT


def result_rows(result: CalculationResult):
    """Return ``(label, formatted value)`` pairs for every result field."""
    return [
        ("EMI amount", format_indian(result.emi)),
        ("Loan completed (years)", format_indian(result.payoff_years)),
        ("Interest saved", format_indian(result.interest_saved)),
        ("Net savings", format_indian(result.net_savings)),
        ("EMIs saved (months)", format_months(result.emis_saved_months)),
        ("Effective interest rate", format_percent(result.effective_rate_percent)),
    ]


def print_result(inputs: LoanInputs, result: CalculationResult) -> None:
    """Print the inputs and result of a calculation in a human-readable format."""
    print("Money Saver")
    print("-" * 72)
    print(f"Loan value         : {format_indian(inputs.principal)}")
    print(f"Loan ROI           : {format_percent(inputs.annual_rate_percent)}")
    print(f"Tenure (years)     : {format_input_value(inputs.tenure_years) or PLACEHOLDER}")
    print(f"Excess funds       : {format_indian(inputs.offset)}")
    print("-" * 72)
    for label, text in result_rows(result):
        print(f"{label:24s}: {text}")
    print("-" * 72)
    print(summary_sentence(result))
    print(f"Assumes an opportunity cost of {OPPORTUNITY_COST_PERCENT}% p.a. on the excess funds.")


def print_comparison(r1: CalculationResult, r2: CalculationResult) -> None:
    """Print a comparison of two results side by side.

    The difference column is scenario2 - scenario1; it is a dash when either
    side is undefined.
    """
    print("Comparison")
    print("=" * 72)
    keys = [
        "emi",
        "payoff_years",
        "interest_saved",
        "net_savings",
        "emis_saved_months",
        "effective_rate_percent",
    ]
    print(f"{'Metric':24s} {'Scenario1':>15s} {'Scenario2':>15s} {'Difference':>15s}")
    d1, d2 = r1.to_dict(), r2.to_dict()
    for key in keys:
        v1 = d1.get(key)
        v2 = d2.get(key)
        diff = v2 - v1 if v1 is not None and v2 is not None else None
        print(f"{key:24s} {_cell(v1):>15s} {_cell(v2):>15s} {_cell(diff):>15s}")
    print("=" * 72)


def _cell(value: Optional[float]) -> str:
    return f"{value:.2f}" if _is_defined(value) else PLACEHOLDER
