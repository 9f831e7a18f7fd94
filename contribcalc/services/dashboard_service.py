"""Aggregate stored results into dashboard figures and chart datasets."""
from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Sequence

from sqlalchemy.orm import Session

from contribcalc.calculations import format_month
from contribcalc.models import CalculationResult
from contribcalc.repositories import ResultFilters, ResultRepository
from contribcalc.schemas import (
    BarChartData,
    ChartSeries,
    Dashboard,
    DashboardTotals,
    MultiSeriesLineChartData,
    PieChartData,
)

TOP_EMPLOYEES = 10


def _build_pie_chart(title: str, items: list[tuple[str, Decimal]], hint: str | None = None) -> PieChartData:
    if not items:
        return PieChartData(title=title, labels=["No data"], values=[0], hint=hint)
    return PieChartData(
        title=title,
        labels=[label for label, _ in items],
        values=[float(value) for _, value in items],
        hint=hint,
    )


def _totals(results: Sequence[CalculationResult]) -> DashboardTotals:
    if not results:
        return DashboardTotals()
    total_fee = sum((Decimal(r.company_fee) for r in results), Decimal(0))
    total_salary = sum((Decimal(r.avg_salary) for r in results), Decimal(0))
    return DashboardTotals(
        employee_count=len({r.employee_name for r in results}),
        city_count=len({r.city_name for r in results}),
        total_company_fee=total_fee,
        average_salary=total_salary / len(results),
    )


def _fee_by(results: Sequence[CalculationResult], attribute: str) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for result in results:
        totals[getattr(result, attribute)] += Decimal(result.company_fee)
    return dict(totals)


def _monthly_trend(results: Sequence[CalculationResult]) -> MultiSeriesLineChartData:
    buckets: dict[int, list[Decimal]] = defaultdict(list)
    for result in results:
        buckets[result.yearmonth_start].append(Decimal(result.company_fee))
    months = sorted(buckets)
    totals = [sum(buckets[m], Decimal(0)) for m in months]
    averages = [total / len(buckets[m]) for total, m in zip(totals, months)]
    return MultiSeriesLineChartData(
        title="Monthly contribution trend",
        labels=[format_month(m) for m in months],
        datasets=[
            ChartSeries(label="Total company fee", values=[float(v) for v in totals]),
            ChartSeries(label="Average fee per result", values=[float(v) for v in averages]),
        ],
        hint="Grouped by the first month of each calculation range",
    )


class DashboardService:
    """Summarise a company's results, optionally narrowed to a city or year."""

    def __init__(self, session: Session) -> None:
        self._results = ResultRepository(session)

    def build(self, company_id: str, *, city: str | None = None, year: int | None = None) -> Dashboard:
        results = self._results.list(company_id, ResultFilters(city=city, year=year))
        totals = _totals(results)

        by_city = sorted(_fee_by(results, "city_name").items())
        top_employees = sorted(
            _fee_by(results, "employee_name").items(), key=lambda item: item[1], reverse=True
        )[:TOP_EMPLOYEES]
        total_salary = sum((Decimal(r.avg_salary) for r in results), Decimal(0))

        return Dashboard(
            totals=totals,
            fee_by_city=_build_pie_chart("Company fee by city", by_city),
            top_employees=BarChartData(
                title=f"Top {TOP_EMPLOYEES} employees by company fee",
                labels=[name for name, _ in top_employees] or ["No data"],
                values=[float(fee) for _, fee in top_employees] or [0],
                series_label="Company fee",
            ),
            fee_composition=_build_pie_chart(
                "Salary vs. company fee",
                [("Average salaries", total_salary), ("Company fee", totals.total_company_fee)]
                if results
                else [],
            ),
            monthly_trend=_monthly_trend(results),
            cities=self._results.cities(company_id),
            years=self._results.years(company_id),
        )
