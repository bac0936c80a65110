from typing import Any, Optional

import structlog
from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Connection

from resort_booking.models.admins import Admin
from resort_booking.utils.datetime import utc_now

logger = structlog.get_logger(__name__)


def create_admin(conn: Connection, data: dict[str, Any]) -> dict[str, Any]:
    """
    Insert a new admin.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        data (dict): name, email and optional phone.

    Returns:
        dict: The inserted row.
    """
    now = utc_now()
    stmt = (
        insert(Admin)
        .values({**data, "created_at": now, "updated_at": now})
        .returning(*Admin.__table__.columns)
    )
    created = dict(conn.execute(stmt).mappings().one())
    logger.info("admin_created", admin_id=created["id"])
    return created


def update_admin(conn: Connection, admin_id: int, data: dict[str, Any]) -> Optional[dict[str, Any]]:
    data["updated_at"] = utc_now()

    stmt = (
        update(Admin)
        .where(Admin.id == admin_id)
        .values(**data)
        .returning(*Admin.__table__.columns)
    )

    row = conn.execute(stmt).mappings().fetchone()
    return dict(row) if row else None


def delete_admin(conn: Connection, admin_id: int) -> bool:
    result = conn.execute(delete(Admin).where(Admin.id == admin_id))
    return result.rowcount > 0
