from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from resort_booking.models.admins import Admin


def get_admins(conn: Connection) -> list[dict[str, Any]]:
    """Fetch every admin, newest first."""
    result = conn.execute(select(Admin.__table__).order_by(Admin.id.desc()))
    return [dict(row) for row in result.mappings()]


def get_admin_by_id(conn: Connection, admin_id: int) -> Optional[dict[str, Any]]:
    result = conn.execute(select(Admin.__table__).where(Admin.id == admin_id))
    row = result.mappings().fetchone()
    return dict(row) if row else None


def admin_exists_for_email(conn: Connection, email: str) -> bool:
    """
    Check whether an admin row exists for the given email.

    This is the server-side half of the admin role claim; it runs when a
    session is resolved, never from client code.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        email (str): Signed-in user's email.

    Returns:
        bool: True if the email belongs to an admin.
    """
    result = conn.execute(select(Admin.id).where(Admin.email == email.strip().lower()))
    return result.fetchone() is not None


def get_admin_by_email(conn: Connection, email: str) -> Optional[dict[str, Any]]:
    normalized = email.strip().lower()
    result = conn.execute(select(Admin.__table__).where(Admin.email == normalized))
    row = result.mappings().fetchone()
    return dict(row) if row else None
