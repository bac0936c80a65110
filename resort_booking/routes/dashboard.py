"""Admin dashboard route."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.engine import Engine

from resort_booking.dependencies import get_db_engine, require_admin
from resort_booking.routes._helpers import internal_error
from resort_booking.services.dashboard import load_dashboard
from resort_booking.services.session import UserSession

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/dashboard")
def dashboard(
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Everything the dashboard shows on load: services, reservations,
    customers and headline stats.
    """
    try:
        return load_dashboard(db_engine)
    except Exception as e:
        logger.exception("dashboard_load_failed", user_id=session.user_id, error=str(e))
        raise internal_error("Failed to load dashboard data")
