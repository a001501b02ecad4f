"""Utility functions for the money-saver calculator.

This module provides helpers for turning user input into floats. Form fields
may carry South-Asian digit grouping (``1,00,00,000``) or stray spaces, and the
command line additionally accepts shorthand such as ``50l`` or ``1.2cr``.
"""

from __future__ import annotations

import re
from typing import Optional

_GROUPING = re.compile(r"[,\s]+")

AMOUNT_SUFFIXES = (
    ("crore", 10_000_000.0),
    ("lakh", 100_000.0),
    ("cr", 10_000_000.0),
    ("k", 1_000.0),
    ("l", 100_000.0),
    ("m", 1_000_000.0),
)


def strip_grouping(value: str) -> str:
    """Remove digit grouping commas and whitespace from ``value``."""
    return _GROUPING.sub("", value)


def parse_number(value: Optional[str]) -> Optional[float]:
    """Parse a form field into a float, returning ``None`` when it is unusable.

    Blank fields and text that is not a number (after removing grouping
    characters) both yield ``None`` so that the calculator reports the result
    as undefined instead of failing.
    """
    if value is None:
        return None
    cleaned = strip_grouping(str(value))
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_amount(value: str) -> float:
    """Parse a numeric string with optional suffixes.

    Accepts plain and grouped numbers ("1,00,00,000") and shorthand with
    ``k``, ``l``/``lakh``, ``cr``/``crore`` or ``m`` suffixes (e.g. "50l"
    meaning 5_000_000). Raises ``ValueError`` if conversion fails.
    """
    cleaned = strip_grouping(value).lower()
    factor = 1.0
    for suffix, multiplier in AMOUNT_SUFFIXES:
        if cleaned.endswith(suffix):
            factor = multiplier
            cleaned = cleaned[: -len(suffix)]
            break
    try:
        return float(cleaned) * factor
    except ValueError as exc:
        raise ValueError(f"Invalid amount: {value}") from exc


def parse_percent(value: str) -> float:
    """Parse a percentage string such as "7.5" or "7.5%"."""
    cleaned = value.strip()
    if cleaned.endswith("%"):
        cleaned = cleaned[:-1]
    try:
        return float(cleaned)
    except ValueError as exc:
        raise ValueError(f"Invalid percentage: {value}") from exc
