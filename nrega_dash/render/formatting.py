"""Number formatting for summary cards (Indian digit grouping)."""

from __future__ import annotations

import math
from typing import Any

MISSING = "—"


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567: last three digits, then pairs
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_indian(value: Any, max_fraction_digits: int = 3) -> str:
    """Format like ``Intl.NumberFormat("en-IN")``; ``None`` becomes a dash."""
    if value is None:
        return MISSING
    try:
        number = float(value)
    except (TypeError, ValueError):
        return str(value)
    if not math.isfinite(number):
        return MISSING

    sign = "-" if number < 0 else ""
    text = f"{abs(number):.{max_fraction_digits}f}"
    whole, _, fraction = text.partition(".")
    fraction = fraction.rstrip("0")
    grouped = _group_indian(whole)
    if sign and grouped == "0" and not fraction:
        sign = ""
    return f"{sign}{grouped}.{fraction}" if fraction else f"{sign}{grouped}"


def format_money(value: Any) -> str:
    if value is None:
        return MISSING
    return f"₹{format_indian(value)}"


def format_percent(value: Any) -> str:
    if value is None:
        return MISSING
    return f"{format_indian(value)}%"
