"""ORM model for uploaded monthly salaries."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from contribcalc.calculations import SalaryRecord

from .base import Base


class Salary(Base):
    """One employee's salary for one month, keyed by the uploaded row id.

    Row ids come from the uploaded workbook and are only unique within a
    company, hence the composite primary key.
    """

    __tablename__ = "salary"

    company_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    employee_id: Mapped[str] = mapped_column(String(64), nullable=False)
    employee_name: Mapped[str] = mapped_column(String(128), nullable=False)
    yearmonth: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    salary_amount: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), onupdate=func.current_timestamp(), nullable=True
    )

    def to_record(self) -> SalaryRecord:
        return SalaryRecord(
            employee_name=self.employee_name,
            yearmonth=self.yearmonth,
            salary_amount=Decimal(self.salary_amount),
        )
