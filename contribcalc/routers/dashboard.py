"""Route serving dashboard statistics."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from contribcalc.schemas import Dashboard
from contribcalc.services import DashboardService
from contribcalc.web.dependencies import get_company_id, get_db_session

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=Dashboard)
def dashboard(
    city: str | None = Query(default=None),
    year: int | None = Query(default=None),
    company_id: str = Depends(get_company_id),
    session: Session = Depends(get_db_session),
) -> Dashboard:
    return DashboardService(session).build(company_id, city=city or None, year=year)


__all__ = ["router"]
