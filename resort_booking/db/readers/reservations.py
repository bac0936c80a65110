from datetime import date
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Connection, RowMapping

from resort_booking.models.customers import Customer
from resort_booking.models.reservations import PaymentStatus, Reservation
from resort_booking.models.services import Service

SERVICE_PREFIX = "service__"
CUSTOMER_PREFIX = "customer__"

# Statuses counted as revenue on the dashboard
SETTLED_STATUSES = (PaymentStatus.PAID.value, PaymentStatus.COMPLETED.value)


def _prefixed_columns(model: type, prefix: str) -> list[Any]:
    return [column.label(f"{prefix}{column.name}") for column in model.__table__.columns]


def _joined_select() -> Any:
    return (
        select(
            Reservation.__table__,
            *_prefixed_columns(Service, SERVICE_PREFIX),
            *_prefixed_columns(Customer, CUSTOMER_PREFIX),
        )
        .outerjoin(Service, Service.id == Reservation.service_id)
        .outerjoin(Customer, Customer.id == Reservation.customer_id)
    )


def _nest(row: RowMapping) -> dict[str, Any]:
    """Split a joined row into the reservation with nested service and customer dicts."""
    reservation: dict[str, Any] = {}
    service: dict[str, Any] = {}
    customer: dict[str, Any] = {}

    for key, value in row.items():
        if key.startswith(SERVICE_PREFIX):
            service[key[len(SERVICE_PREFIX) :]] = value
        elif key.startswith(CUSTOMER_PREFIX):
            customer[key[len(CUSTOMER_PREFIX) :]] = value
        else:
            reservation[key] = value

    reservation["service"] = service if service.get("id") is not None else None
    reservation["customer"] = customer if customer.get("id") is not None else None
    return reservation


def get_reservations(
    conn: Connection, customer_id: Optional[int] = None
) -> list[dict[str, Any]]:
    """
    Fetch reservations joined with their service and customer, newest first.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        customer_id (Optional[int]): Restrict to one customer's reservations.

    Returns:
        list[dict[str, Any]]: Reservation dicts with "service" and "customer" keys.
    """
    stmt = _joined_select().order_by(Reservation.id.desc())
    if customer_id is not None:
        stmt = stmt.where(Reservation.customer_id == customer_id)

    result = conn.execute(stmt)
    return [_nest(row) for row in result.mappings()]


def get_reservation_by_id(conn: Connection, reservation_id: int) -> Optional[dict[str, Any]]:
    """
    Fetch one reservation with its service and customer.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        reservation_id (int): Reservation ID.

    Returns:
        Optional[dict[str, Any]]: The joined reservation or None if not found.
    """
    result = conn.execute(_joined_select().where(Reservation.id == reservation_id))
    row = result.mappings().fetchone()
    return _nest(row) if row else None


def find_overlapping_reservations(
    conn: Connection, service_id: int, check_in: date, check_out: date
) -> list[int]:
    """
    Find non-cancelled reservations of a service whose stay overlaps [check_in, check_out).

    Stays are half-open: a reservation checking out on the day another checks
    in does not overlap it.

    Returns:
        list[int]: IDs of overlapping reservations.
    """
    result = conn.execute(
        select(Reservation.id).where(
            Reservation.service_id == service_id,
            Reservation.payment_status != PaymentStatus.CANCELLED.value,
            Reservation.check_in_date < check_out,
            Reservation.check_out_date > check_in,
        )
    )
    return [row[0] for row in result]


def get_dashboard_stats(conn: Connection) -> dict[str, Any]:
    """
    Count services, customers and reservations, and sum settled revenue.

    Revenue is the sum of reservation prices whose payment_status is paid
    or completed.
    """
    total_services = conn.execute(select(func.count()).select_from(Service)).scalar_one()
    total_customers = conn.execute(select(func.count()).select_from(Customer)).scalar_one()
    total_reservations = conn.execute(select(func.count()).select_from(Reservation)).scalar_one()
    total_revenue = conn.execute(
        select(func.coalesce(func.sum(Reservation.price), 0)).where(
            Reservation.payment_status.in_(SETTLED_STATUSES)
        )
    ).scalar_one()

    return {
        "total_services": int(total_services),
        "total_customers": int(total_customers),
        "total_reservations": int(total_reservations),
        "total_revenue": float(total_revenue),
    }
