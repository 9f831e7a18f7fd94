"""Helpers for pagination query parameters."""
from __future__ import annotations

from typing import Sequence

DEFAULT_PAGE_SIZE_OPTIONS: tuple[int, ...] = (10, 20, 50)


def parse_positive_int(value: str | None, *, default: int) -> int:
    """Parse a positive integer from the provided string.

    Any invalid or non-positive values will fall back to ``default``.
    """

    try:
        parsed = int(value) if value is not None else default
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def normalize_page_size(
    value: str | None,
    *,
    options: Sequence[int] | None = None,
) -> int:
    """Return the smallest allowed page size that fits the requested value."""

    allowed: Sequence[int] = options or DEFAULT_PAGE_SIZE_OPTIONS
    try:
        parsed = int(value) if value is not None else allowed[1]
    except (TypeError, ValueError):
        return allowed[1]

    for option in allowed:
        if parsed <= option:
            return option
    return allowed[-1]
