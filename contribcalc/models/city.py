"""ORM model for a tenant's per-city contribution policy."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Integer, Numeric, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from contribcalc.calculations import CityPolicy

from .base import ID_TYPE, Base


class City(Base):
    """Contribution rate and base band of one city for one year."""

    __tablename__ = "city"
    __table_args__ = (
        UniqueConstraint("company_id", "city_name", "year", name="uq_city_company_name_year"),
    )

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    company_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    city_name: Mapped[str] = mapped_column(String(64), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(8, 6), nullable=False)
    base_min: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False)
    base_max: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), onupdate=func.current_timestamp(), nullable=True
    )

    def to_policy(self) -> CityPolicy:
        return CityPolicy(
            city_name=self.city_name,
            year=self.year,
            rate=Decimal(self.rate),
            base_min=Decimal(self.base_min),
            base_max=Decimal(self.base_max),
        )
