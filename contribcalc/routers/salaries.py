"""Routes for uploading and browsing salary rows."""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.orm import Session

from contribcalc.calculations import parse_yearmonth
from contribcalc.repositories import SalaryRepository
from contribcalc.schemas import SalaryOut, SalaryPage, UploadSummary
from contribcalc.services import UploadService
from contribcalc.web.dependencies import get_company_id, get_db_session
from contribcalc.web.pagination import normalize_page_size, parse_positive_int

router = APIRouter(prefix="/api/salaries", tags=["salaries"])


def parse_month_param(value: str | None, name: str) -> int | None:
    """Parse an optional ``YYYYMM``/``YYYY-MM`` query parameter."""

    if value is None or not value.strip():
        return None
    try:
        return parse_yearmonth(value)
    except ValueError as exc:
        raise HTTPException(
            status_code=422,
            detail=f"{name} must look like 202401 or 2024-01",
        ) from exc


@router.get("", response_model=SalaryPage)
def list_salaries(
    start: str | None = Query(default=None),
    end: str | None = Query(default=None),
    employee: str | None = Query(default=None),
    page: str | None = Query(default=None),
    page_size: str | None = Query(default=None),
    company_id: str = Depends(get_company_id),
    session: Session = Depends(get_db_session),
) -> SalaryPage:
    resolved_page = parse_positive_int(page, default=1)
    resolved_size = normalize_page_size(page_size)
    rows, total = SalaryRepository(session).page(
        company_id,
        page=resolved_page,
        page_size=resolved_size,
        start_month=parse_month_param(start, "start"),
        end_month=parse_month_param(end, "end"),
        employee=employee.strip() if employee else None,
    )
    return SalaryPage(
        items=[SalaryOut.model_validate(row) for row in rows],
        page=resolved_page,
        page_size=resolved_size,
        total=total,
    )


@router.post("/upload", response_model=UploadSummary)
async def upload_salaries(
    file: UploadFile = File(...),
    company_id: str = Depends(get_company_id),
    session: Session = Depends(get_db_session),
) -> UploadSummary:
    content = await file.read()
    return UploadService(session).upload_salaries(company_id, file.filename or "", content)


__all__ = ["parse_month_param", "router"]
