"""Row builders shared by service and API tests."""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy.orm import Session

from contribcalc.models import City, Salary


def add_city(
    session: Session,
    company_id: str = "acme-co",
    *,
    city_name: str = "Foshan",
    year: int = 2024,
    rate: str = "0.14",
    base_min: str = "4546",
    base_max: str = "26421",
) -> City:
    city = City(
        company_id=company_id,
        city_name=city_name,
        year=year,
        rate=Decimal(rate),
        base_min=Decimal(base_min),
        base_max=Decimal(base_max),
    )
    session.add(city)
    session.commit()
    return city


def add_salaries(session: Session, company_id: str, rows: list[tuple[str, int, str]]) -> None:
    """Insert ``(employee_name, yearmonth, amount)`` rows with sequential ids."""

    for index, (name, yearmonth, amount) in enumerate(rows, start=1):
        session.add(
            Salary(
                company_id=company_id,
                id=index,
                employee_id=f"E{index:03d}",
                employee_name=name,
                yearmonth=yearmonth,
                salary_amount=Decimal(amount),
            )
        )
    session.commit()


SCENARIO_SALARIES = [
    ("Alice", 202401, "5000"),
    ("Alice", 202402, "6000"),
    ("Alice", 202403, "7000"),
    ("Bob", 202401, "3000"),
    ("Bob", 202402, "3000"),
    ("Bob", 202403, "3000"),
    ("Carol", 202401, "30000"),
    ("Carol", 202402, "30000"),
    ("Carol", 202403, "30000"),
    ("Alice", 202404, "99999"),
]


def bearer(client, username: str = "acme", password: str = "s3cret") -> dict[str, str]:
    response = client.post("/auth/login", data={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
