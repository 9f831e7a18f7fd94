"""Schemas for salary listings."""
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_serializer


class SalaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: str
    employee_name: str
    yearmonth: int
    salary_amount: Decimal

    @field_serializer("salary_amount")
    def _serialize_amount(self, value: Decimal) -> str:
        return str(value)


class SalaryPage(BaseModel):
    """One page of a tenant's salary rows."""

    items: list[SalaryOut]
    page: int
    page_size: int
    total: int
