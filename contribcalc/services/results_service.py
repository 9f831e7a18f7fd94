"""Listing, deletion and CSV export of stored results."""
from __future__ import annotations

import csv
import io

from sqlalchemy.orm import Session

from contribcalc.calculations import format_month
from contribcalc.core.errors import ResultNotFoundError
from contribcalc.core.formatting import format_money, format_rate
from contribcalc.core.log import get_logger
from contribcalc.models import CalculationResult
from contribcalc.repositories import ResultFilters, ResultRepository
from contribcalc.schemas import ResultList, ResultOut

LOGGER = get_logger(__name__)

CSV_HEADERS: tuple[str, ...] = (
    "City",
    "Employee",
    "Average salary",
    "Contribution base",
    "Company fee",
    "Rate",
    "Period",
)


def _csv_row(result: CalculationResult) -> list[str]:
    return [
        result.city_name,
        result.employee_name,
        format_money(result.avg_salary),
        format_money(result.contribution_base),
        format_money(result.company_fee),
        format_rate(result.rate),
        f"{format_month(result.yearmonth_start)} - {format_month(result.yearmonth_end)}",
    ]


class ResultsService:
    """Read and manage the results a company has calculated."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._results = ResultRepository(session)

    def list_results(self, company_id: str, filters: ResultFilters | None = None) -> ResultList:
        rows = self._results.list(company_id, filters)
        return ResultList(
            results=[ResultOut.model_validate(row) for row in rows],
            count=len(rows),
            cities=self._results.cities(company_id),
            years=self._results.years(company_id),
        )

    def delete_result(self, company_id: str, result_id: str) -> None:
        result = self._results.get(company_id, result_id)
        if result is None:
            raise ResultNotFoundError(f"Result {result_id} not found", result_id=result_id)
        self._results.delete(result)
        self._session.commit()
        LOGGER.info("Deleted result %s", result_id)

    def export_csv(self, company_id: str, filters: ResultFilters | None = None) -> str:
        """Render the filtered results as CSV with money rounded to cents."""

        rows = self._results.list(company_id, filters)
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(CSV_HEADERS)
        for row in rows:
            writer.writerow(_csv_row(row))
        LOGGER.info("Exported %d results", len(rows))
        return buffer.getvalue()
