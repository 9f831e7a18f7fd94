"""Route running a contribution calculation."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from contribcalc.schemas import CalculationRequest, CalculationSummary
from contribcalc.services import CalculationService
from contribcalc.web.dependencies import get_company_id, get_db_session

router = APIRouter(prefix="/api", tags=["calculate"])


@router.post("/calculate", response_model=CalculationSummary)
def calculate(
    payload: CalculationRequest,
    company_id: str = Depends(get_company_id),
    session: Session = Depends(get_db_session),
) -> CalculationSummary:
    """Recalculate and replace the results for one city and month range."""

    return CalculationService(session).calculate(
        company_id,
        payload.city_name,
        payload.start_month,
        payload.end_month,
    )


__all__ = ["router"]
