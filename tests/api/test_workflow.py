"""End-to-end API tests: upload, calculate, browse and export."""
from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from ..factories import bearer

CITIES_CSV = b"id,city_name,year,rate,base_min,base_max\n1,Foshan,2024,0.14,4546,26421\n"
SALARIES_CSV = (
    b"id,employee_id,employee_name,month,salary_amount\n"
    b"1,E001,Alice,2024-01,5000\n"
    b"2,E001,Alice,2024-02,6000\n"
    b"3,E001,Alice,2024-03,7000\n"
    b"4,E002,Bob,2024-01,3000\n"
    b"5,E002,Bob,2024-02,3000\n"
    b"6,E003,Carol,2024-01,30000\n"
    b"7,E003,Carol,2024-04,30000\n"
)


@pytest.fixture()
def uploaded(client: TestClient, auth_headers: dict[str, str]) -> dict[str, str]:
    cities = client.post(
        "/api/cities/upload",
        headers=auth_headers,
        files={"file": ("cities.csv", CITIES_CSV, "text/csv")},
    )
    salaries = client.post(
        "/api/salaries/upload",
        headers=auth_headers,
        files={"file": ("salaries.csv", SALARIES_CSV, "text/csv")},
    )
    assert cities.json() == {"type": "cities", "count": 1, "message": "Uploaded 1 city rows"}
    assert salaries.json()["count"] == 7
    return auth_headers


@pytest.fixture()
def calculated(client: TestClient, uploaded: dict[str, str]) -> dict[str, str]:
    response = client.post(
        "/api/calculate",
        headers=uploaded,
        json={"cityName": "Foshan", "startMonth": "2024-01", "endMonth": "2024-03"},
    )
    assert response.status_code == 200, response.text
    return uploaded


def test_calculate_summary(client: TestClient, uploaded: dict[str, str]) -> None:
    response = client.post(
        "/api/calculate",
        headers=uploaded,
        json={"city_name": "Foshan", "start_month": 202401, "end_month": 202403},
    )

    body = response.json()
    assert body["success"] is True
    assert body["count"] == 3
    assert body["months"] == [202401, 202402, 202403]


def test_calculate_rejects_cross_year_range(client: TestClient, uploaded: dict[str, str]) -> None:
    response = client.post(
        "/api/calculate",
        headers=uploaded,
        json={"cityName": "Foshan", "startMonth": 202312, "endMonth": 202401},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_parameters"
    assert response.json()["details"]["reason"] == "cross_year_range"


def test_calculate_rejects_unparseable_month(client: TestClient, uploaded: dict[str, str]) -> None:
    response = client.post(
        "/api/calculate",
        headers=uploaded,
        json={"cityName": "Foshan", "startMonth": "Jan", "endMonth": 202401},
    )

    assert response.status_code == 422


def test_calculate_unknown_city(client: TestClient, uploaded: dict[str, str]) -> None:
    response = client.post(
        "/api/calculate",
        headers=uploaded,
        json={"cityName": "Atlantis", "startMonth": 202401, "endMonth": 202403},
    )

    assert response.status_code == 404
    assert response.json()["code"] == "city_not_found"


def test_calculate_without_salaries(client: TestClient, uploaded: dict[str, str]) -> None:
    response = client.post(
        "/api/calculate",
        headers=uploaded,
        json={"cityName": "Foshan", "startMonth": 202406, "endMonth": 202406},
    )

    assert response.status_code == 404
    assert response.json()["code"] == "no_salary_data"


def test_results_listing(client: TestClient, calculated: dict[str, str]) -> None:
    body = client.get("/api/results", headers=calculated).json()

    assert body["count"] == 3
    assert body["cities"] == ["Foshan"]
    fees = {row["employee_name"]: Decimal(row["company_fee"]) for row in body["results"]}
    assert fees == {
        "Alice": Decimal("840"),
        "Bob": Decimal("636.44"),
        "Carol": Decimal("3698.94"),
    }


def test_results_return_figures_as_decimal_strings(client: TestClient, calculated: dict[str, str]) -> None:
    body = client.get("/api/results?sort_by=employee_name&order=asc", headers=calculated).json()

    figures = [
        (
            row["employee_name"],
            Decimal(row["avg_salary"]),
            Decimal(row["contribution_base"]),
            Decimal(row["company_fee"]),
            Decimal(row["rate"]),
        )
        for row in body["results"]
    ]
    assert figures == [
        ("Alice", Decimal("6000"), Decimal("6000"), Decimal("840"), Decimal("0.14")),
        ("Bob", Decimal("3000"), Decimal("4546"), Decimal("636.44"), Decimal("0.14")),
        ("Carol", Decimal("30000"), Decimal("26421"), Decimal("3698.94"), Decimal("0.14")),
    ]


def test_results_filter_by_range(client: TestClient, calculated: dict[str, str]) -> None:
    matching = client.get("/api/results?start=2024-01&end=2024-03", headers=calculated).json()
    other = client.get("/api/results?start=2024-02&end=2024-03", headers=calculated).json()

    assert matching["count"] == 3
    assert other["count"] == 0


def test_results_reject_bad_month_filter(client: TestClient, calculated: dict[str, str]) -> None:
    assert client.get("/api/results?start=soon", headers=calculated).status_code == 422


def test_results_reject_half_open_range(client: TestClient, calculated: dict[str, str]) -> None:
    assert client.get("/api/results?start=2024-01", headers=calculated).status_code == 422
    assert client.get("/api/results/export?end=2024-03", headers=calculated).status_code == 422


def test_results_export(client: TestClient, calculated: dict[str, str]) -> None:
    response = client.get("/api/results/export?sort_by=employee_name&order=asc", headers=calculated)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment" in response.headers["content-disposition"]
    assert response.content.startswith(b"\xef\xbb\xbf")
    lines = response.content.decode("utf-8-sig").splitlines()
    assert lines[1:] == [
        "Foshan,Alice,6000.00,6000.00,840.00,14.00%,2024-01 - 2024-03",
        "Foshan,Bob,3000.00,4546.00,636.44,14.00%,2024-01 - 2024-03",
        "Foshan,Carol,30000.00,26421.00,3698.94,14.00%,2024-01 - 2024-03",
    ]


def test_delete_result(client: TestClient, calculated: dict[str, str]) -> None:
    result_id = client.get("/api/results", headers=calculated).json()["results"][0]["id"]

    assert client.delete(f"/api/results/{result_id}", headers=calculated).status_code == 204
    second = client.delete(f"/api/results/{result_id}", headers=calculated)
    assert second.status_code == 404
    assert second.json()["code"] == "result_not_found"


def test_dashboard(client: TestClient, calculated: dict[str, str]) -> None:
    body = client.get("/api/dashboard?year=2024", headers=calculated).json()

    assert body["totals"]["employee_count"] == 3
    assert Decimal(body["totals"]["total_company_fee"]) == Decimal("5175.38")
    assert body["top_employees"]["labels"][0] == "Carol"
    assert body["years"] == [2024]


def test_other_tenant_sees_nothing(client: TestClient, calculated: dict[str, str]) -> None:
    globex = bearer(client, "globex")

    assert client.get("/api/results", headers=globex).json()["count"] == 0
    assert client.get("/api/cities", headers=globex).json() == []
    assert client.get("/api/salaries", headers=globex).json()["total"] == 0


def test_salary_listing_filters_and_pages(client: TestClient, uploaded: dict[str, str]) -> None:
    everything = client.get("/api/salaries?page_size=5", headers=uploaded).json()
    alice = client.get("/api/salaries?employee=ali", headers=uploaded).json()
    april = client.get("/api/salaries?start=2024-04&end=2024-04", headers=uploaded).json()

    assert everything["total"] == 7
    assert everything["page_size"] == 10
    assert len(everything["items"]) == 7
    assert alice["total"] == 3
    assert [row["employee_name"] for row in april["items"]] == ["Carol"]
    assert Decimal(april["items"][0]["salary_amount"]) == Decimal("30000")


def test_upload_rejects_missing_columns(client: TestClient, auth_headers: dict[str, str]) -> None:
    response = client.post(
        "/api/salaries/upload",
        headers=auth_headers,
        files={"file": ("salaries.csv", b"id,employee_name\n1,Alice\n", "text/csv")},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "upload_format"
    assert response.json()["details"]["missing"] == ["employee_id", "month", "salary_amount"]


def test_city_crud(client: TestClient, auth_headers: dict[str, str]) -> None:
    payload = {"city_name": "Foshan", "year": 2024, "rate": "0.14", "base_min": "4546", "base_max": "26421"}

    created = client.post("/api/cities", headers=auth_headers, json=payload)
    assert created.status_code == 201
    city_id = created.json()["id"]
    assert Decimal(created.json()["rate"]) == Decimal("0.14")

    duplicate = client.post("/api/cities", headers=auth_headers, json=payload)
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "duplicate_city"

    updated = client.put(
        f"/api/cities/{city_id}", headers=auth_headers, json={**payload, "rate": "0.15"}
    )
    assert Decimal(updated.json()["rate"]) == Decimal("0.15")

    listed = client.get("/api/cities?search=fosh", headers=auth_headers).json()
    assert [city["id"] for city in listed] == [city_id]
    assert Decimal(listed[0]["base_max"]) == Decimal("26421")

    assert client.delete(f"/api/cities/{city_id}", headers=auth_headers).status_code == 204
    missing = client.delete(f"/api/cities/{city_id}", headers=auth_headers)
    assert missing.status_code == 404


def test_city_band_is_validated(client: TestClient, auth_headers: dict[str, str]) -> None:
    payload = {"city_name": "Foshan", "year": 2024, "rate": "0.14", "base_min": "9000", "base_max": "100"}

    assert client.post("/api/cities", headers=auth_headers, json=payload).status_code == 422
