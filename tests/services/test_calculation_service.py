"""Tests for running and storing contribution calculations."""
from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from contribcalc.core.errors import (
    CityNotFoundError,
    InvalidCityPolicy,
    InvalidParametersError,
    NoSalaryDataError,
)
from contribcalc.models import CalculationResult
from contribcalc.services import CalculationService

from ..factories import SCENARIO_SALARIES, add_city, add_salaries


def _stored(session: Session, company_id: str = "acme-co") -> dict[str, CalculationResult]:
    rows = session.scalars(
        select(CalculationResult).where(CalculationResult.created_by == company_id)
    )
    return {row.employee_name: row for row in rows}


def test_calculate_stores_one_result_per_employee(session: Session) -> None:
    add_city(session)
    add_salaries(session, "acme-co", SCENARIO_SALARIES)

    summary = CalculationService(session).calculate("acme-co", "Foshan", 202401, 202403)

    assert summary.success is True
    assert summary.count == 3
    assert summary.months == [202401, 202402, 202403]
    stored = _stored(session)
    assert set(stored) == {"Alice", "Bob", "Carol"}
    assert stored["Alice"].company_fee == Decimal("840")
    assert stored["Bob"].contribution_base == Decimal("4546")
    assert stored["Bob"].company_fee == Decimal("636.44")
    assert stored["Carol"].company_fee == Decimal("3698.94")
    assert all(row.yearmonth_end == 202403 for row in stored.values())


def test_recalculating_replaces_previous_run(session: Session) -> None:
    add_city(session)
    add_salaries(session, "acme-co", SCENARIO_SALARIES)
    service = CalculationService(session)

    service.calculate("acme-co", "Foshan", 202401, 202403)
    first_ids = {row.id for row in _stored(session).values()}
    service.calculate("acme-co", "Foshan", 202401, 202403)

    stored = _stored(session)
    assert len(stored) == 3
    assert first_ids.isdisjoint(row.id for row in stored.values())


def test_other_ranges_are_kept(session: Session) -> None:
    add_city(session)
    add_salaries(session, "acme-co", SCENARIO_SALARIES)
    service = CalculationService(session)

    service.calculate("acme-co", "Foshan", 202401, 202403)
    service.calculate("acme-co", "Foshan", 202404, 202404)

    total = session.scalars(select(CalculationResult)).all()
    assert len(total) == 4


def test_invalid_range_is_rejected_before_any_lookup(session: Session) -> None:
    with pytest.raises(InvalidParametersError) as excinfo:
        CalculationService(session).calculate("acme-co", "Nowhere", 202312, 202401)

    assert excinfo.value.details["reason"] == "cross_year_range"
    assert excinfo.value.status_code == 400


def test_unknown_city(session: Session) -> None:
    add_salaries(session, "acme-co", SCENARIO_SALARIES)

    with pytest.raises(CityNotFoundError):
        CalculationService(session).calculate("acme-co", "Foshan", 202401, 202403)


def test_cities_of_other_companies_are_invisible(session: Session) -> None:
    add_city(session, "globex-co")
    add_salaries(session, "acme-co", SCENARIO_SALARIES)

    with pytest.raises(CityNotFoundError):
        CalculationService(session).calculate("acme-co", "Foshan", 202401, 202403)


def test_no_salaries_in_range(session: Session) -> None:
    add_city(session)
    add_salaries(session, "acme-co", SCENARIO_SALARIES)

    with pytest.raises(NoSalaryDataError):
        CalculationService(session).calculate("acme-co", "Foshan", 202406, 202409)

    assert _stored(session) == {}


def test_falls_back_to_latest_policy_year(session: Session) -> None:
    add_city(session, year=2022, rate="0.10")
    add_city(session, year=2023, rate="0.12")
    add_salaries(session, "acme-co", SCENARIO_SALARIES)

    CalculationService(session).calculate("acme-co", "Foshan", 202401, 202403)

    assert _stored(session)["Alice"].rate == Decimal("0.12")


def test_exact_year_policy_wins(session: Session) -> None:
    add_city(session, year=2024, rate="0.14")
    add_city(session, year=2025, rate="0.20")
    add_salaries(session, "acme-co", SCENARIO_SALARIES)

    CalculationService(session).calculate("acme-co", "Foshan", 202401, 202403)

    assert _stored(session)["Alice"].rate == Decimal("0.14")


def test_inconsistent_policy_stores_nothing(session: Session) -> None:
    add_city(session, base_min="9000", base_max="1000")
    add_salaries(session, "acme-co", SCENARIO_SALARIES)

    with pytest.raises(InvalidCityPolicy):
        CalculationService(session).calculate("acme-co", "Foshan", 202401, 202403)

    assert _stored(session) == {}
