"""Validation of the month range requested for a calculation."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .months import is_valid_yearmonth, split_yearmonth


class ValidationError(str, Enum):
    """Reasons a month range is rejected, in the order they are checked."""

    MALFORMED_MONTH = "malformed_month"
    RANGE_INVERTED = "range_inverted"
    CROSS_YEAR_RANGE = "cross_year_range"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    ValidationError.MALFORMED_MONTH: "Month must use the YYYYMM format with a year between 2020 and 2030",
    ValidationError.RANGE_INVERTED: "Start month cannot be after end month",
    ValidationError.CROSS_YEAR_RANGE: "Ranges spanning more than one year are not supported; choose months within a single year",
}


@dataclass(frozen=True, slots=True)
class ParamValidation:
    """Outcome of :func:`validate_calculation_params`."""

    error: ValidationError | None = None

    @property
    def is_valid(self) -> bool:
        return self.error is None


VALID = ParamValidation()


def validate_calculation_params(start_month: int, end_month: int) -> ParamValidation:
    # Format is checked first so a malformed month wins over an inverted range.
    if not is_valid_yearmonth(start_month) or not is_valid_yearmonth(end_month):
        return ParamValidation(ValidationError.MALFORMED_MONTH)

    if start_month > end_month:
        return ParamValidation(ValidationError.RANGE_INVERTED)

    start_year, _ = split_yearmonth(start_month)
    end_year, _ = split_yearmonth(end_month)
    if start_year != end_year:
        return ParamValidation(ValidationError.CROSS_YEAR_RANGE)

    return VALID
