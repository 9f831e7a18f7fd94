"""ORM model for persisted contribution results."""
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Index, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from contribcalc.calculations import ContributionResult

from .base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class CalculationResult(Base):
    """A stored :class:`ContributionResult` owned by the company that ran it."""

    __tablename__ = "result"
    __table_args__ = (
        Index(
            "ix_result_run_key",
            "created_by",
            "city_name",
            "yearmonth_start",
            "yearmonth_end",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    city_name: Mapped[str] = mapped_column(String(64), nullable=False)
    yearmonth_start: Mapped[int] = mapped_column(Integer, nullable=False)
    yearmonth_end: Mapped[int] = mapped_column(Integer, nullable=False)
    employee_name: Mapped[str] = mapped_column(String(128), nullable=False)
    avg_salary: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False)
    contribution_base: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False)
    company_fee: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(8, 6), nullable=False)
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False
    )

    @classmethod
    def from_contribution(cls, result: ContributionResult, *, created_by: str) -> "CalculationResult":
        return cls(
            city_name=result.city_name,
            yearmonth_start=result.yearmonth_start,
            yearmonth_end=result.yearmonth_end,
            employee_name=result.employee_name,
            avg_salary=result.avg_salary,
            contribution_base=result.contribution_base,
            company_fee=result.company_fee,
            rate=result.rate,
            created_by=created_by,
        )
