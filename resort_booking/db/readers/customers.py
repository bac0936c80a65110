from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from resort_booking.models.customers import Customer


def get_customers(conn: Connection) -> list[dict[str, Any]]:
    """Fetch every customer, newest first."""
    result = conn.execute(select(Customer.__table__).order_by(Customer.id.desc()))
    return [dict(row) for row in result.mappings()]


def get_customer_by_id(conn: Connection, customer_id: int) -> Optional[dict[str, Any]]:
    """
    Fetch a customer by primary key.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        customer_id (int): Customer ID.

    Returns:
        Optional[dict[str, Any]]: The customer row or None if not found.
    """
    result = conn.execute(select(Customer.__table__).where(Customer.id == customer_id))
    row = result.mappings().fetchone()
    return dict(row) if row else None


def get_customer_by_email(conn: Connection, email: str) -> Optional[dict[str, Any]]:
    """
    Fetch a customer by email, the natural dedup key.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        email (str): Customer email.

    Returns:
        Optional[dict[str, Any]]: The customer row or None if not found.
    """
    normalized = email.strip().lower()
    result = conn.execute(select(Customer.__table__).where(Customer.email == normalized))
    row = result.mappings().fetchone()
    return dict(row) if row else None
