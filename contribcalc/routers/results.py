"""Routes for browsing, deleting and exporting results."""
from __future__ import annotations

from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from contribcalc.repositories import SORTABLE_COLUMNS, ResultFilters
from contribcalc.routers.salaries import parse_month_param
from contribcalc.schemas import ResultList
from contribcalc.services import ResultsService
from contribcalc.web.dependencies import get_company_id, get_db_session

router = APIRouter(prefix="/api/results", tags=["results"])


def get_result_filters(
    city: str | None = Query(default=None),
    start: str | None = Query(default=None),
    end: str | None = Query(default=None),
    year: int | None = Query(default=None),
    search: str | None = Query(default=None),
    sort_by: str = Query(default="created_at"),
    order: Literal["asc", "desc"] = Query(default="desc"),
) -> ResultFilters:
    start_month = parse_month_param(start, "start")
    end_month = parse_month_param(end, "end")
    if (start_month is None) != (end_month is None):
        raise HTTPException(status_code=422, detail="start and end must be given together")
    return ResultFilters(
        city=city or None,
        start_month=start_month,
        end_month=end_month,
        year=year,
        search=search.strip() if search and search.strip() else None,
        sort_by=sort_by if sort_by in SORTABLE_COLUMNS else "created_at",
        order=order,
    )


@router.get("", response_model=ResultList)
def list_results(
    filters: ResultFilters = Depends(get_result_filters),
    company_id: str = Depends(get_company_id),
    session: Session = Depends(get_db_session),
) -> ResultList:
    return ResultsService(session).list_results(company_id, filters)


@router.get("/export")
def export_results(
    filters: ResultFilters = Depends(get_result_filters),
    company_id: str = Depends(get_company_id),
    session: Session = Depends(get_db_session),
) -> Response:
    content = ResultsService(session).export_csv(company_id, filters)
    filename = f"contribution_results_{date.today().isoformat()}.csv"
    return Response(
        content="\ufeff" + content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.delete("/{result_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_result(
    result_id: str,
    company_id: str = Depends(get_company_id),
    session: Session = Depends(get_db_session),
) -> Response:
    ResultsService(session).delete_result(company_id, result_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
