from typing import Any, Optional

import structlog
from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Connection

from resort_booking.models.reservations import PaymentStatus, Reservation
from resort_booking.utils.datetime import utc_now

logger = structlog.get_logger(__name__)


def insert_reservation(conn: Connection, data: dict[str, Any]) -> int:
    """
    Insert a reservation row.

    Args:
        conn (Connection): SQLAlchemy DB connection (within transaction).
        data (dict): customer_id, service_id, check_in_date, check_out_date,
            price and optional guest_count, special_requests, service_type,
            admin_id, payment_status.

    Returns:
        int: Reservation ID.

    Raises:
        ValueError: If the customer/service IDs or either date is missing.
    """
    if not data.get("customer_id") or not data.get("service_id"):
        raise ValueError("Customer ID and Service ID are required")
    if not data.get("check_in_date") or not data.get("check_out_date"):
        raise ValueError("Check-in and check-out dates are required")

    now = utc_now()
    row = {
        "service_id": data["service_id"],
        "customer_id": data["customer_id"],
        "check_in_date": data["check_in_date"],
        "check_out_date": data["check_out_date"],
        "guest_count": data.get("guest_count", 1),
        "special_requests": data.get("special_requests"),
        "price": data["price"],
        "payment_status": data.get("payment_status", PaymentStatus.PENDING.value),
        "service_type": data.get("service_type"),
        "admin_id": data.get("admin_id"),
        "created_at": now,
        "updated_at": now,
    }

    reservation_id = int(
        conn.execute(insert(Reservation).values(row).returning(Reservation.id)).scalar_one()
    )

    logger.info(
        "reservation_inserted",
        reservation_id=reservation_id,
        service_id=row["service_id"],
        customer_id=row["customer_id"],
    )
    return reservation_id


def update_reservation(
    conn: Connection, reservation_id: int, data: dict[str, Any]
) -> Optional[dict[str, Any]]:
    """
    Update reservation fields (status, dates, price, guests, requests).

    Args:
        conn (Connection): SQLAlchemy DB connection.
        reservation_id (int): Reservation ID.
        data (dict): Fields to update (only non-None values)

    Returns:
        Optional[dict]: Updated row, or None if the reservation does not exist.
    """
    data["updated_at"] = utc_now()

    stmt = (
        update(Reservation)
        .where(Reservation.id == reservation_id)
        .values(**data)
        .returning(*Reservation.__table__.columns)
    )

    row = conn.execute(stmt).mappings().fetchone()
    return dict(row) if row else None


def delete_reservation(conn: Connection, reservation_id: int) -> bool:
    result = conn.execute(delete(Reservation).where(Reservation.id == reservation_id))
    return result.rowcount > 0
