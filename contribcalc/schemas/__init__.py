"""Pydantic schemas for request and response payloads."""

from .calculation import CalculationRequest, CalculationSummary
from .cities import CityIn, CityOut
from .dashboard import (
    BarChartData,
    ChartSeries,
    Dashboard,
    DashboardTotals,
    MultiSeriesLineChartData,
    PieChartData,
)
from .results import ResultList, ResultOut
from .salaries import SalaryOut, SalaryPage
from .uploads import UploadSummary

__all__ = [
    "BarChartData",
    "CalculationRequest",
    "CalculationSummary",
    "ChartSeries",
    "CityIn",
    "CityOut",
    "Dashboard",
    "DashboardTotals",
    "MultiSeriesLineChartData",
    "PieChartData",
    "ResultList",
    "ResultOut",
    "SalaryOut",
    "SalaryPage",
    "UploadSummary",
]
