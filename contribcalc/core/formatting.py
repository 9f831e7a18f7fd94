"""Helper functions for formatting money and rates for exports."""

from __future__ import annotations
from decimal import ROUND_HALF_UP, Decimal

_CENT = Decimal("0.01")


def round_money(value: int | float | Decimal) -> Decimal:
    """Round a monetary amount half-up to two decimal places."""

    return Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)


def format_money(value: int | float | Decimal) -> str:
    """Plain two-decimal representation, e.g. ``"636.44"``."""

    return f"{round_money(value):f}"


def format_rate(rate: int | float | Decimal) -> str:
    """Render a fractional rate as a percentage, ``0.14`` -> ``"14.00%"``."""

    return f"{round_money(Decimal(str(rate)) * 100):f}%"
