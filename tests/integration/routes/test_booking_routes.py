"""
Integration tests for booking submission and the customer's booking list.
"""

from __future__ import annotations

from typing import Any, Callable
from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from resort_booking.services.session import UserSession

BOOKING = {
    "customer_name": "Guest User",
    "customer_email": "guest@example.com",
    "customer_phone": "01712345678",
    "check_in_date": "2024-01-15",
    "check_out_date": "2024-01-18",
    "guest_count": 2,
}


@pytest.mark.integration
def test_create_booking(client: TestClient, make_service: Callable[..., dict[str, Any]]) -> None:
    service = make_service(price=250)

    response = client.post(f"/services/{service['id']}/bookings", json=BOOKING)

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Booking submitted successfully! We will contact you soon."
    assert data["nights"] == 3
    assert data["total_price"] == 750.0
    assert data["payment_status"] == "pending"
    assert data["payment_recorded"] is True


@pytest.mark.integration
@patch("resort_booking.services.booking.upsert_customer")
def test_invalid_form_never_reaches_database(
    mock_upsert: Mock, client: TestClient, make_service: Callable[..., dict[str, Any]]
) -> None:
    service = make_service()

    response = client.post(
        f"/services/{service['id']}/bookings",
        json={**BOOKING, "customer_name": "", "customer_email": "not-an-email"},
    )

    assert response.status_code == 422
    fields = {err["loc"][-1] for err in response.json()["detail"]}
    assert {"customer_name", "customer_email"} <= fields
    mock_upsert.assert_not_called()


@pytest.mark.integration
def test_booking_unknown_service_is_404(client: TestClient) -> None:
    response = client.post("/services/999/bookings", json=BOOKING)

    assert response.status_code == 404


@pytest.mark.integration
def test_booking_unavailable_service_is_409(
    client: TestClient, make_service: Callable[..., dict[str, Any]]
) -> None:
    service = make_service(status="unavailable")

    response = client.post(f"/services/{service['id']}/bookings", json=BOOKING)

    assert response.status_code == 409


@pytest.mark.integration
@patch("resort_booking.routes.bookings.submit_booking")
def test_database_failure_returns_generic_message(
    mock_submit: Mock, client: TestClient, make_service: Callable[..., dict[str, Any]]
) -> None:
    mock_submit.side_effect = OperationalError("INSERT", {}, Exception("server closed the connection"))

    response = client.post("/services/1/bookings", json=BOOKING)

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to process booking. Please try again."


@pytest.mark.integration
def test_my_bookings_requires_sign_in(client: TestClient) -> None:
    response = client.get("/bookings/me")

    assert response.status_code == 401


@pytest.mark.integration
def test_my_bookings_lists_own_reservations(
    client: TestClient,
    make_service: Callable[..., dict[str, Any]],
    sign_in_as: Callable[[UserSession | None], None],
    customer_session: UserSession,
) -> None:
    service = make_service()
    client.post(f"/services/{service['id']}/bookings", json=BOOKING)
    client.post(
        f"/services/{service['id']}/bookings",
        json={**BOOKING, "customer_email": "someone@example.com"},
    )

    sign_in_as(customer_session)
    response = client.get("/bookings/me")

    assert response.status_code == 200
    bookings = response.json()
    assert len(bookings) == 1
    assert bookings[0]["customer"]["email"] == "guest@example.com"
    assert bookings[0]["service"]["id"] == service["id"]


@pytest.mark.integration
def test_my_bookings_empty_for_new_user(
    client: TestClient,
    sign_in_as: Callable[[UserSession | None], None],
    customer_session: UserSession,
) -> None:
    sign_in_as(customer_session)

    assert client.get("/bookings/me").json() == []
