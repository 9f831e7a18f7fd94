"""Helpers for the ``YYYYMM`` integer month encoding."""
from __future__ import annotations

MIN_YEAR = 2020
MAX_YEAR = 2030


def split_yearmonth(value: int) -> tuple[int, int]:
    """Return ``(year, month_of_year)`` for a ``YYYYMM`` integer."""

    return value // 100, value % 100


def is_valid_yearmonth(value: int) -> bool:
    year, month = split_yearmonth(value)
    return MIN_YEAR <= year <= MAX_YEAR and 1 <= month <= 12


def parse_yearmonth(value: int | str) -> int:
    """Coerce ``202401``, ``"202401"`` or ``"2024-01"`` to ``202401``.

    Raises ``ValueError`` when the value is not numeric after removing the
    dash. Range checks are left to the validator.
    """

    if isinstance(value, bool):
        raise ValueError(f"Not a year-month value: {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip().replace("-", "", 1)
    if not text.isdigit():
        raise ValueError(f"Not a year-month value: {value!r}")
    return int(text)


def format_month(value: int) -> str:
    year, month = split_yearmonth(value)
    return f"{year}-{month:02d}"


def month_range(start: int, end: int) -> list[int]:
    """List every month from ``start`` to ``end`` inclusive.

    December rolls into January of the next year. An inverted range yields
    an empty list.
    """

    months: list[int] = []
    current = start
    while current <= end:
        months.append(current)
        year, month = split_yearmonth(current)
        current = (year + 1) * 100 + 1 if month >= 12 else current + 1
    return months
