"""Routes managing a company's city contribution policies."""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status
from sqlalchemy.orm import Session

from contribcalc.schemas import CityIn, CityOut, UploadSummary
from contribcalc.services import CitiesService, UploadService
from contribcalc.web.dependencies import get_company_id, get_db_session

router = APIRouter(prefix="/api/cities", tags=["cities"])


@router.get("", response_model=list[CityOut])
def list_cities(
    search: str | None = Query(default=None),
    company_id: str = Depends(get_company_id),
    session: Session = Depends(get_db_session),
) -> list[CityOut]:
    term = search.strip() if search else None
    return CitiesService(session).list_cities(company_id, search=term or None)


@router.post("", response_model=CityOut, status_code=status.HTTP_201_CREATED)
def create_city(
    payload: CityIn,
    company_id: str = Depends(get_company_id),
    session: Session = Depends(get_db_session),
) -> CityOut:
    return CitiesService(session).create_city(company_id, payload)


@router.put("/{city_id}", response_model=CityOut)
def update_city(
    city_id: int,
    payload: CityIn,
    company_id: str = Depends(get_company_id),
    session: Session = Depends(get_db_session),
) -> CityOut:
    return CitiesService(session).update_city(company_id, city_id, payload)


@router.delete("/{city_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_city(
    city_id: int,
    company_id: str = Depends(get_company_id),
    session: Session = Depends(get_db_session),
) -> Response:
    CitiesService(session).delete_city(company_id, city_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/upload", response_model=UploadSummary)
async def upload_cities(
    file: UploadFile = File(...),
    company_id: str = Depends(get_company_id),
    session: Session = Depends(get_db_session),
) -> UploadSummary:
    content = await file.read()
    return UploadService(session).upload_cities(company_id, file.filename or "", content)


__all__ = ["router"]
