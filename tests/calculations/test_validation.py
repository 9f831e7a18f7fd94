from __future__ import annotations

import pytest

from contribcalc.calculations import ValidationError, validate_calculation_params


def test_range_within_one_year_is_valid() -> None:
    outcome = validate_calculation_params(202401, 202403)

    assert outcome.is_valid
    assert outcome.error is None


def test_single_month_range_is_valid() -> None:
    assert validate_calculation_params(202406, 202406).is_valid


def test_malformed_month_is_reported_before_range_order() -> None:
    outcome = validate_calculation_params(202413, 202401)

    assert outcome.error is ValidationError.MALFORMED_MONTH


def test_inverted_range() -> None:
    assert validate_calculation_params(202403, 202401).error is ValidationError.RANGE_INVERTED


def test_cross_year_range() -> None:
    assert validate_calculation_params(202312, 202401).error is ValidationError.CROSS_YEAR_RANGE


@pytest.mark.parametrize(
    ("start", "end"),
    [
        (201912, 201912),
        (203101, 203101),
        (202400, 202401),
        (202401, 202413),
        (2024, 202401),
    ],
)
def test_out_of_bounds_months_are_malformed(start: int, end: int) -> None:
    assert validate_calculation_params(start, end).error is ValidationError.MALFORMED_MONTH


def test_year_bounds_are_inclusive() -> None:
    assert validate_calculation_params(202001, 202012).is_valid
    assert validate_calculation_params(203001, 203012).is_valid


def test_errors_expose_messages_and_codes() -> None:
    assert ValidationError.CROSS_YEAR_RANGE.value == "cross_year_range"
    assert "after end month" in ValidationError.RANGE_INVERTED.message
    assert "YYYYMM" in ValidationError.MALFORMED_MONTH.message
