"""Schemas for the contribution dashboard."""
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, field_serializer


class DashboardTotals(BaseModel):
    """Headline figures over the filtered results."""

    employee_count: int = 0
    city_count: int = 0
    total_company_fee: Decimal = Decimal("0")
    average_salary: Decimal = Decimal("0")

    @field_serializer("total_company_fee", "average_salary")
    def _serialize_decimal(self, value: Decimal) -> str:
        return str(value)


class PieChartData(BaseModel):
    """Simple representation for pie or doughnut charts."""

    title: str
    labels: list[str]
    values: list[float]
    hint: str | None = None


class BarChartData(BaseModel):
    """Single-series bar chart."""

    title: str
    labels: list[str]
    values: list[float]
    series_label: str
    hint: str | None = None


class ChartSeries(BaseModel):
    """One dataset in a multi-series chart."""

    label: str
    values: list[float]


class MultiSeriesLineChartData(BaseModel):
    title: str
    labels: list[str]
    datasets: list[ChartSeries]
    hint: str | None = None


class Dashboard(BaseModel):
    """Payload for the contribution dashboard."""

    totals: DashboardTotals
    fee_by_city: PieChartData
    top_employees: BarChartData
    fee_composition: PieChartData
    monthly_trend: MultiSeriesLineChartData
    cities: list[str]
    years: list[int]
