"""Admin management of admin accounts."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from resort_booking.cache import session_cache
from resort_booking.db.readers.admins import get_admin_by_id, get_admins
from resort_booking.db.writers.admins import create_admin, delete_admin, update_admin
from resort_booking.dependencies import get_db_engine, require_admin
from resort_booking.routes._helpers import changed_fields, found_or_404, internal_error
from resort_booking.schemas.admins import AdminCreatePayload, AdminRead, AdminUpdatePayload
from resort_booking.services.session import UserSession

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/admins", response_model=list[AdminRead])
def list_admins(
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> list[dict[str, Any]]:
    try:
        with db_engine.connect() as conn:
            return get_admins(conn)
    except Exception as e:
        logger.exception("admins_list_failed", error=str(e))
        raise internal_error()


@router.post("/admins", status_code=status.HTTP_201_CREATED, response_model=AdminRead)
def create_admin_endpoint(
    payload: AdminCreatePayload,
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Grant the admin role to an email. Cached sessions for that email pick up
    the role on their next request.
    """
    try:
        with db_engine.begin() as conn:
            created = create_admin(conn, payload.model_dump())
        session_cache.invalidate_email(created["email"])
        return created

    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Admin {payload.email} already exists",
        )
    except Exception as e:
        logger.exception("admin_creation_failed", error=str(e))
        raise internal_error()


@router.patch("/admins/{admin_id}", response_model=AdminRead)
def update_admin_endpoint(
    admin_id: int,
    payload: AdminUpdatePayload,
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    update_data = changed_fields(payload)
    if not update_data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

    try:
        with db_engine.begin() as conn:
            previous = found_or_404(get_admin_by_id(conn, admin_id), "Admin", admin_id)
            updated = update_admin(conn, admin_id, update_data)

        session_cache.invalidate_email(previous["email"])
        if updated["email"] != previous["email"]:
            session_cache.invalidate_email(updated["email"])
        return updated

    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Admin {update_data.get('email')} already exists",
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("admin_update_failed", admin_id=admin_id, error=str(e))
        raise internal_error()


@router.delete("/admins/{admin_id}")
def delete_admin_endpoint(
    admin_id: int,
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, str]:
    """Revoke the admin role by deleting the admin row."""
    try:
        with db_engine.begin() as conn:
            admin = found_or_404(get_admin_by_id(conn, admin_id), "Admin", admin_id)
            delete_admin(conn, admin_id)

        session_cache.invalidate_email(admin["email"])
        logger.info("admin_deleted", admin_id=admin_id, user_id=session.user_id)
        return {"message": f"Admin {admin_id} deleted"}

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("admin_deletion_failed", admin_id=admin_id, error=str(e))
        raise internal_error()
