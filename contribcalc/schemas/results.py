"""Schemas for stored calculation results."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_serializer


class ResultOut(BaseModel):
    """One stored contribution result."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    city_name: str
    yearmonth_start: int
    yearmonth_end: int
    employee_name: str
    avg_salary: Decimal
    contribution_base: Decimal
    company_fee: Decimal
    rate: Decimal
    created_at: datetime | None = None

    @field_serializer("avg_salary", "contribution_base", "company_fee", "rate")
    def _serialize_decimal(self, value: Decimal) -> str:
        return str(value)


class ResultList(BaseModel):
    """Filtered results plus the facets available for filtering."""

    results: list[ResultOut]
    count: int
    cities: list[str]
    years: list[int]
