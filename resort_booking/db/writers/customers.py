from typing import Any, Optional

import structlog
from sqlalchemy import delete, update
from sqlalchemy.engine import Connection

from resort_booking.db._upsert import upsert_returning_id
from resort_booking.models.customers import Customer
from resort_booking.utils.datetime import utc_now

logger = structlog.get_logger(__name__)


def upsert_customer(conn: Connection, data: dict[str, Any]) -> int:
    """
    Insert a customer or reuse the existing row with the same email.

    A single INSERT ... ON CONFLICT (email) statement, so two concurrent
    bookings with the same email cannot create two rows. Stored name, phone
    and address of an existing customer are left unchanged.

    Args:
        conn (Connection): SQLAlchemy DB connection (within transaction).
        data (dict): name, email and optional phone/address.

    Returns:
        int: Customer ID.
    """
    now = utc_now()
    row = {
        "name": data["name"],
        "email": data["email"].strip().lower(),
        "phone": data.get("phone"),
        "address": data.get("address"),
        "created_at": now,
        "updated_at": now,
    }

    customer_id = upsert_returning_id(conn, Customer, row, conflict_column="email")
    logger.info("customer_resolved", customer_id=customer_id)
    return customer_id


def update_customer(
    conn: Connection, customer_id: int, data: dict[str, Any]
) -> Optional[dict[str, Any]]:
    """
    Update customer fields.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        customer_id (int): Customer ID.
        data (dict): Fields to update (only non-None values)

    Returns:
        Optional[dict]: Updated row, or None if the customer does not exist.
    """
    data["updated_at"] = utc_now()

    stmt = (
        update(Customer)
        .where(Customer.id == customer_id)
        .values(**data)
        .returning(*Customer.__table__.columns)
    )

    row = conn.execute(stmt).mappings().fetchone()
    return dict(row) if row else None


def delete_customer(conn: Connection, customer_id: int) -> bool:
    """
    Permanently delete a customer and, through the FK cascade, their reservations.

    Returns:
        bool: True if a row was deleted.
    """
    result = conn.execute(delete(Customer).where(Customer.id == customer_id))
    return result.rowcount > 0
