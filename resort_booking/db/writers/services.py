import json
from typing import Any, Optional

import structlog
from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Connection

from resort_booking.config import DEBUG
from resort_booking.models.services import Service
from resort_booking.utils.datetime import utc_now

logger = structlog.get_logger(__name__)


def create_service(conn: Connection, data: dict[str, Any]) -> dict[str, Any]:
    """
    Insert a new service.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        data (dict): Service columns (name, service_type, location, price, ...).

    Returns:
        dict: The inserted row.
    """
    now = utc_now()
    row = {**data, "created_at": now, "updated_at": now}

    if DEBUG:
        logger.debug("service_insert_payload", payload=json.dumps(row, default=str))

    stmt = insert(Service).values(row).returning(*Service.__table__.columns)
    created = dict(conn.execute(stmt).mappings().one())

    logger.info("service_created", service_id=created["id"], name=created["name"])
    return created


def update_service(
    conn: Connection, service_id: int, data: dict[str, Any]
) -> Optional[dict[str, Any]]:
    """
    Update service fields.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        service_id (int): Service ID.
        data (dict): Fields to update (only non-None values)

    Returns:
        Optional[dict]: Updated row, or None if the service does not exist.
    """
    data["updated_at"] = utc_now()

    stmt = (
        update(Service)
        .where(Service.id == service_id)
        .values(**data)
        .returning(*Service.__table__.columns)
    )

    row = conn.execute(stmt).mappings().fetchone()
    return dict(row) if row else None


def delete_service(conn: Connection, service_id: int) -> bool:
    """
    Permanently delete a service; its reservations go with it (FK cascade).

    Returns:
        bool: True if a row was deleted.
    """
    result = conn.execute(delete(Service).where(Service.id == service_id))
    return result.rowcount > 0
