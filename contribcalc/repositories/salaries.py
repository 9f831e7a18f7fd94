"""Data access for uploaded salary rows."""
from __future__ import annotations

from typing import Sequence

from sqlalchemy import delete, func, select

from contribcalc.models import Salary

from .base import BaseRepository


class SalaryRepository(BaseRepository):
    """Queries over the ``salary`` table, always filtered by company."""

    def in_range(self, company_id: str, start_month: int, end_month: int) -> list[Salary]:
        statement = (
            select(Salary)
            .where(
                Salary.company_id == company_id,
                Salary.yearmonth >= start_month,
                Salary.yearmonth <= end_month,
            )
            .order_by(Salary.yearmonth, Salary.id)
        )
        return list(self._session.scalars(statement))

    def page(
        self,
        company_id: str,
        *,
        page: int,
        page_size: int,
        start_month: int | None = None,
        end_month: int | None = None,
        employee: str | None = None,
    ) -> tuple[list[Salary], int]:
        statement = select(Salary).where(Salary.company_id == company_id)
        if start_month is not None:
            statement = statement.where(Salary.yearmonth >= start_month)
        if end_month is not None:
            statement = statement.where(Salary.yearmonth <= end_month)
        pattern = self._search_pattern(employee)
        if pattern:
            statement = statement.where(func.lower(Salary.employee_name).like(pattern))

        total = self._count(statement)
        rows = self._session.scalars(
            statement.order_by(Salary.yearmonth.desc(), Salary.employee_name, Salary.id)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return list(rows), total

    def replace(self, company_id: str, rows: Sequence[Salary]) -> int:
        """Delete rows sharing the uploaded ids, then insert ``rows``."""

        ids = [row.id for row in rows]
        if ids:
            self._session.execute(
                delete(Salary).where(Salary.company_id == company_id, Salary.id.in_(ids))
            )
        self._session.add_all(rows)
        self._session.flush()
        return len(rows)

