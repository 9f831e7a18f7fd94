"""Tenant-scoped data access objects."""

from .cities import CityRepository
from .results import SORTABLE_COLUMNS, ResultFilters, ResultRepository
from .salaries import SalaryRepository

__all__ = [
    "CityRepository",
    "ResultFilters",
    "ResultRepository",
    "SORTABLE_COLUMNS",
    "SalaryRepository",
]
