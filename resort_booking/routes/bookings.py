"""Booking submission and the signed-in customer's booking list."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.engine import Engine

from resort_booking.db.readers.customers import get_customer_by_email
from resort_booking.db.readers.reservations import get_reservations
from resort_booking.dependencies import get_db_engine, get_session
from resort_booking.metrics import booking_submissions
from resort_booking.routes._helpers import internal_error
from resort_booking.schemas.bookings import BookingRequest, BookingResponse, ReservationRead
from resort_booking.services.booking import (
    DoubleBookingError,
    ServiceNotFoundError,
    ServiceUnavailableError,
    submit_booking,
)
from resort_booking.services.pricing import InvalidStayError
from resort_booking.services.session import UserSession

logger = structlog.get_logger(__name__)
router = APIRouter()

BOOKING_FAILED_MESSAGE = "Failed to process booking. Please try again."


@router.post(
    "/services/{service_id}/bookings",
    status_code=status.HTTP_201_CREATED,
    response_model=BookingResponse,
)
def create_booking(
    service_id: int,
    payload: BookingRequest,
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Submit the booking form for a service.

    Field errors are rejected with 422 before this handler runs. The
    reservation is created with status "pending"; payment_recorded is False
    when the payment record could not be written.

    Args:
        service_id: Service being booked
        payload: Booking form

    Returns:
        dict: Confirmation with reservation and customer IDs and the total price
    """
    try:
        result = submit_booking(db_engine, service_id, payload)

    except ServiceNotFoundError as e:
        booking_submissions.labels(outcome="rejected").inc()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ServiceUnavailableError, DoubleBookingError) as e:
        booking_submissions.labels(outcome="rejected").inc()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except InvalidStayError as e:
        booking_submissions.labels(outcome="rejected").inc()
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except Exception as e:
        booking_submissions.labels(outcome="failed").inc()
        logger.exception("booking_failed", service_id=service_id, error=str(e))
        raise internal_error(BOOKING_FAILED_MESSAGE)

    return {
        "message": "Booking submitted successfully! We will contact you soon.",
        "reservation_id": result.reservation_id,
        "customer_id": result.customer_id,
        "nights": result.nights,
        "total_price": result.total_price,
        "payment_status": result.payment_status,
        "payment_recorded": result.payment_recorded,
    }


@router.get("/bookings/me", response_model=list[ReservationRead])
def my_bookings(
    session: UserSession = Depends(get_session),
    db_engine: Engine = Depends(get_db_engine),
) -> list[dict[str, Any]]:
    """
    Reservations of the customer whose email matches the signed-in user.

    Returns an empty list when the user has never booked.
    """
    try:
        with db_engine.connect() as conn:
            customer = get_customer_by_email(conn, session.email)
            if customer is None:
                logger.info("no_customer_for_session", user_id=session.user_id)
                return []
            return get_reservations(conn, customer_id=customer["id"])

    except Exception as e:
        logger.exception("my_bookings_failed", user_id=session.user_id, error=str(e))
        raise internal_error("Failed to load your bookings")
