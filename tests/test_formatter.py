import math

import pytest

from money_saver.data_models import CalculationResult, LoanInputs
from money_saver.engine import compute_savings
from money_saver.formatter import (
    PLACEHOLDER,
    PROMPT,
    format_indian,
    format_input_value,
    format_months,
    format_percent,
    group_indian,
    print_comparison,
    print_result,
    result_rows,
    summary_sentence,
)
from money_saver.utils import parse_number


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0.00"),
        (123.456, "123.46"),
        (1234, "1,234.00"),
        (100_000, "1,00,000.00"),
        (10_000_000, "1,00,00,000.00"),
        (-1_234_567.891, "-12,34,567.89"),
        (987_654_321_012.5, "9,87,65,43,21,012.50"),
    ],
)
def test_format_indian(value, expected):
    assert format_indian(value) == expected


@pytest.mark.parametrize("value", [None, math.nan, math.inf])
def test_undefined_values_render_as_dash(value):
    assert format_indian(value) == PLACEHOLDER
    assert format_percent(value) == PLACEHOLDER


def test_group_indian_short_numbers_untouched():
    assert group_indian("999") == "999"
    assert group_indian("1000") == "1,000"


def test_format_input_value_drops_trailing_zero_decimals():
    assert format_input_value(10_000_000.0) == "1,00,00,000"
    assert format_input_value(7.5) == "7.50"
    assert format_input_value(None) == ""


def test_format_percent_and_months():
    assert format_percent(7.123) == "7.12%"
    assert format_months(11) == "11"
    assert format_months(None) == PLACEHOLDER


@pytest.mark.parametrize("value", [0.0, 12.34, 1_00_000.0, 98_76_543.21, -4_500.5])
def test_display_round_trip(value):
    assert parse_number(format_indian(value)) == pytest.approx(round(value, 2))


def test_summary_sentence():
    result = CalculationResult(payoff_years=18.456, net_savings=1_234_567.0)
    assert summary_sentence(result) == (
        "With Money Saver, your loan will get completed in 18.46 yrs saving ₹ 12,34,567.00 in interest"
    )


def test_summary_sentence_prompts_when_undefined():
    assert summary_sentence(CalculationResult.undefined()) == PROMPT
    assert summary_sentence(CalculationResult(payoff_years=10.0)) == PROMPT


def test_result_rows_cover_every_field():
    rows = result_rows(CalculationResult.undefined())
    assert len(rows) == 6
    assert all(text == PLACEHOLDER for _, text in rows)


def test_print_result(capsys):
    inputs = LoanInputs(10_000_000, 7.5, 20, 100_000)
    print_result(inputs, compute_savings(10_000_000, 7.5, 20, 100_000))
    out = capsys.readouterr().out
    assert "1,00,00,000.00" in out
    assert "EMI amount" in out
    assert "With Money Saver" in out
    assert "5.1%" in out


def test_print_comparison_handles_undefined(capsys):
    print_comparison(CalculationResult.undefined(), compute_savings(1_000_000, 7.5, 20, 10_000))
    out = capsys.readouterr().out
    assert "Comparison" in out
    assert "net_savings" in out
    assert PLACEHOLDER in out
