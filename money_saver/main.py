"""Command‑line interface for the money-saver calculator.

This module uses the ``click`` library to implement a multi‑command interface.
Users can compute the savings an offset balance brings on a loan or compare
two scenarios. Results can be printed to the terminal or exported to JSON/CSV
files.
"""

from __future__ import annotations

import csv
import json
import logging
import shlex
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

import click

from .data_models import CalculationResult, LoanInputs
from .engine import compute_from_inputs
from .formatter import print_comparison, print_result, summary_sentence
from .utils import parse_amount, parse_percent


def _amount(value: str) -> float:
    try:
        return parse_amount(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc))


def _percent(value: str) -> float:
    try:
        return parse_percent(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc))


def build_inputs_from_options(
    principal: str,
    rate: str,
    tenure: str,
    offset: Optional[str] = None,
) -> LoanInputs:
    """Convert raw option strings into :class:`LoanInputs`.

    Amounts accept grouping and the ``k``/``l``/``cr``/``m`` shorthand; the
    tenure is a plain number of years.
    """
    try:
        tenure_value = float(tenure)
    except ValueError:
        raise click.BadParameter(f"Invalid tenure: {tenure}")
    return LoanInputs(
        principal=_amount(principal),
        annual_rate_percent=_percent(rate),
        tenure_years=tenure_value,
        offset=_amount(offset) if offset else 0.0,
    )


def export_to_json(path: Path, inputs: LoanInputs, result: CalculationResult) -> None:
    """Export inputs and result to a JSON file. Undefined values become ``null``."""
    data = {
        "inputs": asdict(inputs),
        "result": result.to_dict(),
        "summary": summary_sentence(result),
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def export_to_csv(path: Path, inputs: LoanInputs, result: CalculationResult) -> None:
    """Export inputs and result as a single CSV row. Undefined values are blank."""
    header = [
        "Principal",
        "Rate",
        "Tenure_Years",
        "Offset",
        "EMI",
        "Payoff_Years",
        "Interest_Saved",
        "Net_Savings",
        "EMIs_Saved_Months",
        "Effective_Rate",
    ]
    values = list(asdict(inputs).values()) + list(result.to_dict().values())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerow(["" if v is None else v for v in values])


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log calculation details")
def cli(verbose: bool) -> None:
    """A command‑line calculator for offset-balance savings on a loan."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Loan value (e.g. 1cr, 50l, 1,00,00,000)")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--tenure", "-t", "tenure", required=True, help="Loan tenure in years")
@click.option("--offset", "-o", "offset", help="Average monthly balance maintained / excess funds")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def calculate(
    principal: str,
    rate: str,
    tenure: str,
    offset: Optional[str],
    output: Optional[str],
) -> None:
    """Compute the EMI and the savings brought by the offset balance."""
    inputs = build_inputs_from_options(principal, rate, tenure, offset)
    result = compute_from_inputs(inputs)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, inputs, result)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, inputs, result)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        click.echo(f"Result exported to {path}")
    else:
        print_result(inputs, result)


def parse_scenario_opts(opts: str) -> Dict[str, Any]:
    """Parse a quoted scenario option string such as ``"-p 1cr -r 7.5 -t 20 -o 1l"``."""
    tokens = shlex.split(opts)
    params: Dict[str, Any] = {
        "principal": None,
        "rate": None,
        "tenure": None,
        "offset": None,
    }
    flags = {
        "-p": "principal",
        "--principal": "principal",
        "-r": "rate",
        "--rate": "rate",
        "-t": "tenure",
        "--tenure": "tenure",
        "-o": "offset",
        "--offset": "offset",
    }
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token not in flags:
            raise click.BadParameter(f"Unknown option in scenario: {token}")
        i += 1
        if i >= len(tokens):
            raise click.BadParameter(f"Option {token} in scenario needs a value")
        params[flags[token]] = tokens[i]
        i += 1
    for required in ("principal", "rate", "tenure"):
        if params[required] is None:
            raise click.BadParameter(f"Scenario missing required option {required}")
    return params


@cli.command()
@click.option("--scenario1", "scenario1", required=True, help="First scenario options quoted string")
@click.option("--scenario2", "scenario2", required=True, help="Second scenario options quoted string")
def compare(scenario1: str, scenario2: str) -> None:
    """Compare two loan scenarios.

    Scenarios are provided as quoted option strings, for example:

        money-saver compare --scenario1 "-p 1cr -r 7.5 -t 20 -o 1l" --scenario2 "-p 1cr -r 7.5 -t 20 -o 5l"
    """
    inputs1 = build_inputs_from_options(**parse_scenario_opts(scenario1))
    inputs2 = build_inputs_from_options(**parse_scenario_opts(scenario2))
    result1 = compute_from_inputs(inputs1)
    result2 = compute_from_inputs(inputs2)
    print_comparison(result1, result2)
    click.echo(f"Scenario1: {summary_sentence(result1)}")
    click.echo(f"Scenario2: {summary_sentence(result2)}")


if __name__ == "__main__":
    cli()
