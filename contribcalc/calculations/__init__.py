"""Pure contribution calculation and parameter validation."""

from .calculator import (
    aggregate_average_salaries,
    clamp_to_contribution_base,
    compute_company_fee,
    generate_results,
)
from .months import format_month, is_valid_yearmonth, month_range, parse_yearmonth
from .types import AverageSalary, CityPolicy, ContributionResult, SalaryRecord
from .validation import ParamValidation, ValidationError, validate_calculation_params

__all__ = [
    "AverageSalary",
    "CityPolicy",
    "ContributionResult",
    "ParamValidation",
    "SalaryRecord",
    "ValidationError",
    "aggregate_average_salaries",
    "clamp_to_contribution_base",
    "compute_company_fee",
    "format_month",
    "generate_results",
    "is_valid_yearmonth",
    "month_range",
    "parse_yearmonth",
    "validate_calculation_params",
]
