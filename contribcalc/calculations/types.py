"""Immutable value types consumed and produced by the calculator."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class CityPolicy:
    """One city's contribution rules for one year.

    ``rate`` is a fraction (``Decimal("0.14")``), not a percentage.
    """

    city_name: str
    year: int
    rate: Decimal
    base_min: Decimal
    base_max: Decimal

    @property
    def is_consistent(self) -> bool:
        return self.base_min <= self.base_max


@dataclass(frozen=True, slots=True)
class SalaryRecord:
    """One employee's pay for one calendar month (``yearmonth`` is YYYYMM)."""

    employee_name: str
    yearmonth: int
    salary_amount: Decimal


@dataclass(frozen=True, slots=True)
class AverageSalary:
    employee_name: str
    avg_salary: Decimal
    month_count: int


@dataclass(frozen=True, slots=True)
class ContributionResult:
    """Employer contribution for one employee over one (city, month range)."""

    city_name: str
    yearmonth_start: int
    yearmonth_end: int
    employee_name: str
    avg_salary: Decimal
    contribution_base: Decimal
    company_fee: Decimal
    rate: Decimal
