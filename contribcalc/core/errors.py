"""Typed exceptions raised by the service layer.

Every error carries a machine-readable ``code`` and the HTTP status the API
answers with, so routers never have to inspect messages.
"""
from __future__ import annotations

from typing import Any


class ContribCalcError(Exception):
    """Base class for expected, user-facing failures."""

    code: str = "contribcalc_error"
    status_code: int = 500

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidParametersError(ContribCalcError):
    """The requested month range did not pass validation."""

    code = "invalid_parameters"
    status_code = 400


class UploadFormatError(ContribCalcError):
    """An uploaded workbook is unreadable or misses required columns."""

    code = "upload_format"
    status_code = 400


class CityNotFoundError(ContribCalcError):
    code = "city_not_found"
    status_code = 404


class DuplicateCityError(ContribCalcError):
    code = "duplicate_city"
    status_code = 409


class NoSalaryDataError(ContribCalcError):
    code = "no_salary_data"
    status_code = 404


class ResultNotFoundError(ContribCalcError):
    code = "result_not_found"
    status_code = 404


class InvalidCityPolicy(ContribCalcError):
    """A city policy has ``base_min`` greater than ``base_max``."""

    code = "invalid_city_policy"
    status_code = 422


__all__ = [
    "CityNotFoundError",
    "ContribCalcError",
    "DuplicateCityError",
    "InvalidCityPolicy",
    "InvalidParametersError",
    "NoSalaryDataError",
    "ResultNotFoundError",
    "UploadFormatError",
]
