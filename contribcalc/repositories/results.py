"""Data access for stored calculation results."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from sqlalchemy import delete, func, or_, select

from contribcalc.models import CalculationResult

from .base import BaseRepository

SortOrder = Literal["asc", "desc"]

SORTABLE_COLUMNS = {
    "created_at": CalculationResult.created_at,
    "city_name": CalculationResult.city_name,
    "employee_name": CalculationResult.employee_name,
    "yearmonth_start": CalculationResult.yearmonth_start,
    "yearmonth_end": CalculationResult.yearmonth_end,
    "avg_salary": CalculationResult.avg_salary,
    "contribution_base": CalculationResult.contribution_base,
    "company_fee": CalculationResult.company_fee,
    "rate": CalculationResult.rate,
}


@dataclass(frozen=True)
class ResultFilters:
    """Filters applied to a tenant's result listing."""

    city: str | None = None
    start_month: int | None = None
    end_month: int | None = None
    year: int | None = None
    search: str | None = None
    sort_by: str = "created_at"
    order: SortOrder = "desc"


class ResultRepository(BaseRepository):
    """Queries over the ``result`` table, always filtered by ``created_by``."""

    def replace_run(
        self,
        created_by: str,
        *,
        city_name: str,
        start_month: int,
        end_month: int,
        rows: Sequence[CalculationResult],
    ) -> int:
        """Drop the previous result set for the run key and store ``rows``."""

        self._session.execute(
            delete(CalculationResult).where(
                CalculationResult.created_by == created_by,
                CalculationResult.city_name == city_name,
                CalculationResult.yearmonth_start == start_month,
                CalculationResult.yearmonth_end == end_month,
            )
        )
        self._session.add_all(rows)
        self._session.flush()
        return len(rows)

    def list(self, created_by: str, filters: ResultFilters | None = None) -> list[CalculationResult]:
        filters = filters or ResultFilters()
        statement = select(CalculationResult).where(CalculationResult.created_by == created_by)

        if filters.city:
            statement = statement.where(CalculationResult.city_name == filters.city)
        if filters.start_month is not None and filters.end_month is not None:
            statement = statement.where(
                CalculationResult.yearmonth_start == filters.start_month,
                CalculationResult.yearmonth_end == filters.end_month,
            )
        if filters.year is not None:
            statement = statement.where(
                CalculationResult.yearmonth_start.between(
                    filters.year * 100 + 1, filters.year * 100 + 12
                )
            )
        pattern = self._search_pattern(filters.search)
        if pattern:
            statement = statement.where(
                or_(
                    func.lower(CalculationResult.employee_name).like(pattern),
                    func.lower(CalculationResult.city_name).like(pattern),
                )
            )

        column = SORTABLE_COLUMNS.get(filters.sort_by, CalculationResult.created_at)
        primary = column.asc() if filters.order == "asc" else column.desc()
        statement = statement.order_by(primary, CalculationResult.employee_name, CalculationResult.id)
        return list(self._session.scalars(statement))

    def get(self, created_by: str, result_id: str) -> CalculationResult | None:
        return self._session.scalars(
            select(CalculationResult).where(
                CalculationResult.created_by == created_by,
                CalculationResult.id == result_id,
            )
        ).first()

    def delete(self, result: CalculationResult) -> None:
        self._session.delete(result)
        self._session.flush()

    def cities(self, created_by: str) -> list[str]:
        statement = (
            select(CalculationResult.city_name)
            .distinct()
            .where(CalculationResult.created_by == created_by)
            .order_by(CalculationResult.city_name)
        )
        return list(self._session.scalars(statement))

    def years(self, created_by: str) -> list[int]:
        starts = self._session.scalars(
            select(CalculationResult.yearmonth_start).distinct().where(
                CalculationResult.created_by == created_by
            )
        )
        return sorted({value // 100 for value in starts})
