"""Contribution calculation pipeline.

filter salaries to a month window -> average per employee -> clamp into the
city's contribution-base band -> multiply by the city's rate.

Every function here is pure: inputs are read, fresh values are returned, and
nothing is logged or persisted.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Sequence

from contribcalc.core.errors import InvalidCityPolicy

from .types import AverageSalary, CityPolicy, ContributionResult, SalaryRecord


def aggregate_average_salaries(
    salaries: Iterable[SalaryRecord],
    start_month: int,
    end_month: int,
) -> list[AverageSalary]:
    """Average each employee's salary rows within ``[start_month, end_month]``.

    Rows are grouped by the exact ``employee_name`` string, so two employees
    sharing a name are merged. ``month_count`` is the number of rows seen, a
    missing month is simply absent from the average. The result follows
    first-seen order, which callers should not depend on.
    """

    totals: dict[str, tuple[Decimal, int]] = {}
    for record in salaries:
        if not start_month <= record.yearmonth <= end_month:
            continue
        total, count = totals.get(record.employee_name, (Decimal(0), 0))
        totals[record.employee_name] = (total + record.salary_amount, count + 1)

    return [
        AverageSalary(employee_name=name, avg_salary=total / count, month_count=count)
        for name, (total, count) in totals.items()
    ]


def clamp_to_contribution_base(
    avg_salary: Decimal,
    base_min: Decimal,
    base_max: Decimal,
) -> Decimal:
    if avg_salary < base_min:
        return base_min
    if avg_salary > base_max:
        return base_max
    return avg_salary


def compute_company_fee(contribution_base: Decimal, rate: Decimal) -> Decimal:
    """Employer fee for one employee; rounding is left to presentation."""

    return contribution_base * rate


def generate_results(
    city: CityPolicy,
    salaries: Sequence[SalaryRecord],
    start_month: int,
    end_month: int,
) -> list[ContributionResult]:
    """Compute one :class:`ContributionResult` per employee in the window.

    Raises :class:`InvalidCityPolicy` when ``city.base_min > city.base_max``;
    clamping against such a band would silently favour one bound.
    """

    if not city.is_consistent:
        raise InvalidCityPolicy(
            f"City policy {city.city_name} ({city.year}) has base_min greater than base_max",
            city_name=city.city_name,
            year=city.year,
        )

    results: list[ContributionResult] = []
    for average in aggregate_average_salaries(salaries, start_month, end_month):
        base = clamp_to_contribution_base(average.avg_salary, city.base_min, city.base_max)
        results.append(
            ContributionResult(
                city_name=city.city_name,
                yearmonth_start=start_month,
                yearmonth_end=end_month,
                employee_name=average.employee_name,
                avg_salary=average.avg_salary,
                contribution_base=base,
                company_fee=compute_company_fee(base, city.rate),
                rate=city.rate,
            )
        )
    return results
