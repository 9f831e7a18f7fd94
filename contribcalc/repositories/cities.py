"""Data access for city contribution policies."""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import String, cast, func, or_, select

from contribcalc.models import City

from .base import BaseRepository


class CityRepository(BaseRepository):
    """Queries over the ``city`` table, always filtered by company."""

    def list(self, company_id: str, *, search: str | None = None) -> list[City]:
        statement = select(City).where(City.company_id == company_id)
        pattern = self._search_pattern(search)
        if pattern:
            statement = statement.where(
                or_(
                    func.lower(City.city_name).like(pattern),
                    cast(City.year, String).like(pattern),
                )
            )
        statement = statement.order_by(City.city_name, City.year)
        return list(self._session.scalars(statement))

    def get(self, company_id: str, city_id: int) -> City | None:
        return self._session.scalars(
            select(City).where(City.company_id == company_id, City.id == city_id)
        ).first()

    def find_by_name_and_year(self, company_id: str, city_name: str, year: int) -> City | None:
        return self._session.scalars(
            select(City).where(
                City.company_id == company_id,
                City.city_name == city_name,
                City.year == year,
            )
        ).first()

    def find_policy(self, company_id: str, city_name: str, year: int) -> City | None:
        """Return the policy for ``year``, else the city's most recent one."""

        exact = self.find_by_name_and_year(company_id, city_name, year)
        if exact is not None:
            return exact
        return self._session.scalars(
            select(City)
            .where(City.company_id == company_id, City.city_name == city_name)
            .order_by(City.year.desc())
            .limit(1)
        ).first()

    def add(self, city: City) -> City:
        self._session.add(city)
        self._session.flush()
        return city

    def delete(self, city: City) -> None:
        self._session.delete(city)
        self._session.flush()

    def upsert(
        self,
        company_id: str,
        *,
        city_name: str,
        year: int,
        rate: Decimal,
        base_min: Decimal,
        base_max: Decimal,
    ) -> City:
        """Insert or overwrite the policy identified by ``(city_name, year)``."""

        city = self.find_by_name_and_year(company_id, city_name, year)
        if city is None:
            city = City(company_id=company_id, city_name=city_name, year=year)
            self._session.add(city)
        city.rate = rate
        city.base_min = base_min
        city.base_max = base_max
        self._session.flush()
        return city
