"""Create, update and delete a company's city policies."""
from __future__ import annotations

from sqlalchemy.orm import Session

from contribcalc.core.errors import CityNotFoundError, DuplicateCityError
from contribcalc.core.log import get_logger
from contribcalc.models import City
from contribcalc.repositories import CityRepository
from contribcalc.schemas import CityIn, CityOut

LOGGER = get_logger(__name__)


class CitiesService:
    """Tenant-scoped management of :class:`City` rows."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._cities = CityRepository(session)

    def list_cities(self, company_id: str, *, search: str | None = None) -> list[CityOut]:
        return [CityOut.model_validate(city) for city in self._cities.list(company_id, search=search)]

    def create_city(self, company_id: str, payload: CityIn) -> CityOut:
        self._ensure_unique(company_id, payload)
        city = self._cities.add(City(company_id=company_id, **payload.model_dump()))
        self._session.commit()
        LOGGER.info("Created city policy %s (%d)", city.city_name, city.year)
        return CityOut.model_validate(city)

    def update_city(self, company_id: str, city_id: int, payload: CityIn) -> CityOut:
        city = self._get(company_id, city_id)
        self._ensure_unique(company_id, payload, exclude_id=city.id)
        for field, value in payload.model_dump().items():
            setattr(city, field, value)
        self._session.commit()
        LOGGER.info("Updated city policy %s (%d)", city.city_name, city.year)
        return CityOut.model_validate(city)

    def delete_city(self, company_id: str, city_id: int) -> None:
        city = self._get(company_id, city_id)
        self._cities.delete(city)
        self._session.commit()
        LOGGER.info("Deleted city policy %s (%d)", city.city_name, city.year)

    def _get(self, company_id: str, city_id: int) -> City:
        city = self._cities.get(company_id, city_id)
        if city is None:
            raise CityNotFoundError(f"City {city_id} not found", city_id=city_id)
        return city

    def _ensure_unique(self, company_id: str, payload: CityIn, *, exclude_id: int | None = None) -> None:
        existing = self._cities.find_by_name_and_year(company_id, payload.city_name, payload.year)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateCityError(
                f"A policy for {payload.city_name} in {payload.year} already exists",
                city_id=existing.id,
            )
