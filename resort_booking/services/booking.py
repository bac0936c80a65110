"""
Reservation submission pipeline.

A validated BookingRequest becomes one database transaction:

1. resolve the service (must exist and be available)
2. upsert the customer on email
3. insert the reservation with the computed price, status "pending"
4. record the payment inside a SAVEPOINT

Steps 1-3 are all-or-nothing. A failure in step 4 rolls back only the
savepoint; the reservation still commits and the caller is told the payment
record is missing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from sqlalchemy.engine import Connection, Engine

from resort_booking.config import PREVENT_DOUBLE_BOOKING
from resort_booking.db.readers.reservations import find_overlapping_reservations
from resort_booking.db.readers.services import get_service_by_id
from resort_booking.db.writers.customers import upsert_customer
from resort_booking.db.writers.payments import insert_payment
from resort_booking.db.writers.reservations import insert_reservation
from resort_booking.metrics import booking_submissions, payment_record_failures
from resort_booking.models.reservations import PaymentStatus
from resort_booking.models.services import SERVICE_STATUS_AVAILABLE
from resort_booking.schemas.bookings import BookingRequest
from resort_booking.services.pricing import calculate_total_price, count_nights

logger = structlog.get_logger(__name__)


class BookingError(Exception):
    """Base class for booking failures the guest can act on."""


class ServiceNotFoundError(BookingError):
    pass


class ServiceUnavailableError(BookingError):
    pass


class DoubleBookingError(BookingError):
    pass


@dataclass
class BookingResult:
    reservation_id: int
    customer_id: int
    nights: int
    total_price: float
    payment_status: str
    payment_recorded: bool


def _resolve_service(conn: Connection, service_id: int) -> dict[str, Any]:
    service = get_service_by_id(conn, service_id)
    if service is None:
        raise ServiceNotFoundError(f"Service {service_id} not found")
    if service["status"] != SERVICE_STATUS_AVAILABLE:
        raise ServiceUnavailableError(f"Service {service_id} is not available for booking")
    return service


def _record_payment(
    conn: Connection, reservation_id: int, form: BookingRequest, amount: float
) -> bool:
    try:
        with conn.begin_nested():
            insert_payment(
                conn,
                reservation_id=reservation_id,
                method=form.payment_method,
                amount=amount,
                details=form.payment_details(),
            )
        return True
    except Exception as e:
        payment_record_failures.inc()
        logger.exception(
            "payment_record_failed",
            reservation_id=reservation_id,
            method=form.payment_method,
            error=str(e),
        )
        return False


def submit_booking(
    engine: Engine,
    service_id: int,
    form: BookingRequest,
    prevent_double_booking: bool = PREVENT_DOUBLE_BOOKING,
) -> BookingResult:
    """
    Create a reservation from a validated booking form.

    Args:
        engine: SQLAlchemy engine
        service_id: Service being booked
        form: Validated booking form
        prevent_double_booking: Reject stays overlapping an existing
            non-cancelled reservation of the same service

    Returns:
        BookingResult: IDs, pricing and whether the payment record was written

    Raises:
        ServiceNotFoundError: Service does not exist
        ServiceUnavailableError: Service status is not "available"
        DoubleBookingError: Overlapping stay while prevent_double_booking is on
        SQLAlchemyError: Customer or reservation write failed (nothing committed)
    """
    nights = count_nights(form.check_in_date, form.check_out_date)

    with engine.begin() as conn:
        service = _resolve_service(conn, service_id)

        if prevent_double_booking:
            overlapping = find_overlapping_reservations(
                conn, service_id, form.check_in_date, form.check_out_date
            )
            if overlapping:
                raise DoubleBookingError(
                    f"Service {service_id} is already booked for the selected dates"
                )

        total_price = calculate_total_price(
            float(service["price"]), form.check_in_date, form.check_out_date
        )

        customer_id = upsert_customer(
            conn,
            {
                "name": form.customer_name,
                "email": form.customer_email,
                "phone": form.customer_phone,
                "address": form.customer_address,
            },
        )

        reservation_id = insert_reservation(
            conn,
            {
                "service_id": service_id,
                "customer_id": customer_id,
                "check_in_date": form.check_in_date,
                "check_out_date": form.check_out_date,
                "guest_count": form.guest_count,
                "special_requests": form.special_requests,
                "price": total_price,
                "payment_status": PaymentStatus.PENDING.value,
                "service_type": service["service_type"],
                "admin_id": service.get("admin_id"),
            },
        )

        payment_recorded = _record_payment(conn, reservation_id, form, total_price)

    booking_submissions.labels(outcome="created").inc()
    logger.info(
        "booking_created",
        reservation_id=reservation_id,
        service_id=service_id,
        customer_id=customer_id,
        nights=nights,
        total_price=total_price,
        payment_recorded=payment_recorded,
    )

    return BookingResult(
        reservation_id=reservation_id,
        customer_id=customer_id,
        nights=nights,
        total_price=total_price,
        payment_status=PaymentStatus.PENDING.value,
        payment_recorded=payment_recorded,
    )
