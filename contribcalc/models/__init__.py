"""Database models for cities, salaries and calculation results."""
from __future__ import annotations

from .base import Base
from .city import City
from .result import CalculationResult
from .salary import Salary

__all__ = [
    "Base",
    "CalculationResult",
    "City",
    "Salary",
]
