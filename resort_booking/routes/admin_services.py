"""Admin management of services (listings)."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.engine import Engine

from resort_booking.db.readers.admins import get_admin_by_email
from resort_booking.db.readers.services import get_services
from resort_booking.db.writers.services import create_service, delete_service, update_service
from resort_booking.dependencies import get_db_engine, require_admin
from resort_booking.routes._helpers import changed_fields, found_or_404, internal_error
from resort_booking.schemas.services import ServiceCreatePayload, ServiceRead, ServiceUpdatePayload
from resort_booking.services.session import UserSession

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/services", response_model=list[ServiceRead])
def list_all_services(
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> list[dict[str, Any]]:
    """All services regardless of status, newest first."""
    try:
        with db_engine.connect() as conn:
            return get_services(conn)
    except Exception as e:
        logger.exception("admin_services_list_failed", error=str(e))
        raise internal_error()


@router.post("/services", status_code=status.HTTP_201_CREATED, response_model=ServiceRead)
def create_service_endpoint(
    payload: ServiceCreatePayload,
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Create a service. The calling admin owns it unless admin_id is given.
    """
    try:
        data = payload.model_dump()
        with db_engine.begin() as conn:
            if data.get("admin_id") is None:
                admin = get_admin_by_email(conn, session.email)
                data["admin_id"] = admin["id"] if admin else None
            created = create_service(conn, data)

        logger.info("service_created_by_admin", service_id=created["id"], user_id=session.user_id)
        return created

    except Exception as e:
        logger.exception("service_creation_failed", error=str(e))
        raise internal_error()


@router.patch("/services/{service_id}", response_model=ServiceRead)
def update_service_endpoint(
    service_id: int,
    payload: ServiceUpdatePayload,
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    update_data = changed_fields(payload)
    if not update_data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

    try:
        with db_engine.begin() as conn:
            updated = update_service(conn, service_id, update_data)
        found_or_404(updated, "Service", service_id)

        logger.info("service_updated", service_id=service_id, fields=sorted(update_data))
        return updated

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("service_update_failed", service_id=service_id, error=str(e))
        raise internal_error()


@router.delete("/services/{service_id}")
def delete_service_endpoint(
    service_id: int,
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, str]:
    """
    Permanently delete a service and its reservations.

    Images on Cloudinary are not removed; use /api/delete-image first.
    """
    try:
        with db_engine.begin() as conn:
            found_or_404(delete_service(conn, service_id), "Service", service_id)

        logger.info("service_deleted", service_id=service_id, user_id=session.user_id)
        return {"message": f"Service {service_id} deleted"}

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("service_deletion_failed", service_id=service_id, error=str(e))
        raise internal_error()
