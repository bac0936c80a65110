"""
Integration tests for the public catalogue endpoints.
"""

from __future__ import annotations

from typing import Any, Callable
from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def catalogue(make_service: Callable[..., dict[str, Any]]) -> list[dict[str, Any]]:
    return [
        make_service(name="Sea Pearl Beach Resort", service_type="Resort", location="Cox's Bazar", price=100),
        make_service(name="Hill View Cottage", service_type="Cottage", location="Sylhet", price=350),
        make_service(name="Riverside Deluxe Room", service_type="Hotel", location="Dhaka", price=600),
        make_service(name="Closed Villa", service_type="Villa", location="Dhaka", price=50, status="unavailable"),
    ]


@pytest.mark.integration
def test_list_services_returns_available_only(client: TestClient, catalogue: list[dict[str, Any]]) -> None:
    response = client.get("/services")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["matched"] == 3
    assert "Closed Villa" not in {s["name"] for s in data["services"]}


@pytest.mark.integration
def test_list_services_with_filters(client: TestClient, catalogue: list[dict[str, Any]]) -> None:
    response = client.get(
        "/services",
        params={"search": "hill", "location": "Sylhet", "service_type": "All Types"},
    )

    data = response.json()
    assert data["matched"] == 1
    assert data["services"][0]["name"] == "Hill View Cottage"


@pytest.mark.integration
def test_list_services_by_price_range(client: TestClient, catalogue: list[dict[str, Any]]) -> None:
    response = client.get("/services", params={"price_range": "Over 500"})

    assert [s["name"] for s in response.json()["services"]] == ["Riverside Deluxe Room"]


@pytest.mark.integration
def test_filter_options(client: TestClient, catalogue: list[dict[str, Any]]) -> None:
    response = client.get("/services/filters")

    assert response.status_code == 200
    options = response.json()
    assert options["service_types"][0] == "All Types"
    assert set(options["service_types"][1:]) == {"Resort", "Cottage", "Hotel"}
    assert set(options["locations"][1:]) == {"Cox's Bazar", "Sylhet", "Dhaka"}
    assert options["price_ranges"] == [
        "All Prices",
        "Under 200",
        "100-200",
        "200-300",
        "300-400",
        "400-500",
        "Over 500",
    ]


@pytest.mark.integration
@patch("resort_booking.routes.services.get_available_services")
def test_filter_options_fall_back_on_database_error(mock_get: Mock, client: TestClient) -> None:
    mock_get.side_effect = RuntimeError("connection reset")

    response = client.get("/services/filters")

    assert response.status_code == 200
    assert response.json() == {
        "service_types": ["All Types"],
        "locations": ["All Locations"],
        "price_ranges": ["All Prices"],
    }


@pytest.mark.integration
def test_get_service(client: TestClient, catalogue: list[dict[str, Any]]) -> None:
    response = client.get(f"/services/{catalogue[0]['id']}")

    assert response.status_code == 200
    assert response.json()["name"] == "Sea Pearl Beach Resort"


@pytest.mark.integration
def test_get_missing_service_is_404(client: TestClient) -> None:
    response = client.get("/services/999")

    assert response.status_code == 404
    assert response.json()["detail"] == "Service 999 not found"


@pytest.mark.integration
def test_quote(client: TestClient, make_service: Callable[..., dict[str, Any]]) -> None:
    service = make_service(price=250)

    response = client.post(
        f"/services/{service['id']}/quote",
        json={"check_in": "2024-01-15", "check_out": "2024-01-18"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "service_id": service["id"],
        "nightly_price": 250.0,
        "nights": 3,
        "total_price": 750.0,
    }


@pytest.mark.integration
def test_quote_rejects_inverted_dates(client: TestClient, make_service: Callable[..., dict[str, Any]]) -> None:
    service = make_service()

    response = client.post(
        f"/services/{service['id']}/quote",
        json={"check_in": "2024-01-18", "check_out": "2024-01-15"},
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "Check-out date must be after check-in date"
