"""Schemas for triggering a contribution calculation."""
from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field, field_validator

from contribcalc.calculations import parse_yearmonth


class CalculationRequest(BaseModel):
    """Calculation parameters; months accept ``202401`` or ``"2024-01"``."""

    city_name: str = Field(min_length=1, validation_alias=AliasChoices("city_name", "cityName"))
    start_month: int = Field(validation_alias=AliasChoices("start_month", "startMonth"))
    end_month: int = Field(validation_alias=AliasChoices("end_month", "endMonth"))

    @field_validator("start_month", "end_month", mode="before")
    @classmethod
    def _coerce_month(cls, value: object) -> int:
        return parse_yearmonth(value)  # type: ignore[arg-type]


class CalculationSummary(BaseModel):
    """Outcome of a calculation run."""

    success: bool = True
    count: int
    message: str
    city_name: str
    yearmonth_start: int
    yearmonth_end: int
    months: list[int]
