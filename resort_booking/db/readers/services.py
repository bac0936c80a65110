from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from resort_booking.models.services import SERVICE_STATUS_AVAILABLE, Service


def get_services(conn: Connection) -> list[dict[str, Any]]:
    """
    Fetch every service, newest first.

    Args:
        conn (Connection): An active SQLAlchemy database connection.

    Returns:
        list[dict[str, Any]]: Service rows as dicts.
    """
    result = conn.execute(select(Service.__table__).order_by(Service.id.desc()))
    return [dict(row) for row in result.mappings()]


def get_available_services(conn: Connection) -> list[dict[str, Any]]:
    """
    Fetch services whose status is 'available', newest first.

    Args:
        conn (Connection): An active SQLAlchemy database connection.

    Returns:
        list[dict[str, Any]]: Available service rows as dicts.
    """
    result = conn.execute(
        select(Service.__table__)
        .where(Service.status == SERVICE_STATUS_AVAILABLE)
        .order_by(Service.id.desc())
    )
    return [dict(row) for row in result.mappings()]


def get_service_by_id(conn: Connection, service_id: int) -> Optional[dict[str, Any]]:
    """
    Fetch a single service.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        service_id (int): Service ID.

    Returns:
        Optional[dict[str, Any]]: The service row or None if not found.
    """
    result = conn.execute(select(Service.__table__).where(Service.id == service_id))
    row = result.mappings().fetchone()
    return dict(row) if row else None


def service_exists(conn: Connection, service_id: int) -> bool:
    result = conn.execute(select(Service.id).where(Service.id == service_id))
    return result.fetchone() is not None
