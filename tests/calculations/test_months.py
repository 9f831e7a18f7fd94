from __future__ import annotations

import pytest

from contribcalc.calculations import format_month, month_range, parse_yearmonth


@pytest.mark.parametrize(
    ("value", "expected"),
    [(202401, 202401), ("202401", 202401), ("2024-01", 202401), (" 2024-12 ", 202412)],
)
def test_parse_yearmonth_accepts_common_shapes(value, expected) -> None:
    assert parse_yearmonth(value) == expected


@pytest.mark.parametrize("value", ["", "2024/01", "Jan 2024", True])
def test_parse_yearmonth_rejects_garbage(value) -> None:
    with pytest.raises(ValueError):
        parse_yearmonth(value)


def test_format_month() -> None:
    assert format_month(202403) == "2024-03"


def test_month_range_rolls_over_december() -> None:
    assert month_range(202311, 202402) == [202311, 202312, 202401, 202402]


def test_month_range_inverted_is_empty() -> None:
    assert month_range(202405, 202401) == []
