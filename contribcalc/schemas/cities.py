"""Schemas for city policy management."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator


class CityIn(BaseModel):
    """Payload used to create or update a city policy."""

    city_name: str = Field(min_length=1, max_length=64)
    year: int = Field(ge=2000, le=2100)
    rate: Decimal = Field(gt=0, le=1)
    base_min: Decimal = Field(ge=0)
    base_max: Decimal = Field(ge=0)

    @model_validator(mode="after")
    def _check_band(self) -> "CityIn":
        if self.base_min > self.base_max:
            raise ValueError("base_min cannot be greater than base_max")
        return self


class CityOut(BaseModel):
    """City policy as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    city_name: str
    year: int
    rate: Decimal
    base_min: Decimal
    base_max: Decimal
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_serializer("rate", "base_min", "base_max")
    def _serialize_decimal(self, value: Decimal) -> str:
        return str(value)
