"""Admin management of customers."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from resort_booking.db.readers.customers import get_customer_by_id, get_customers
from resort_booking.db.writers.customers import delete_customer, update_customer, upsert_customer
from resort_booking.dependencies import get_db_engine, require_admin
from resort_booking.routes._helpers import changed_fields, found_or_404, internal_error
from resort_booking.schemas.customers import (
    CustomerCreatePayload,
    CustomerRead,
    CustomerUpdatePayload,
)
from resort_booking.services.session import UserSession

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/customers", response_model=list[CustomerRead])
def list_customers(
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> list[dict[str, Any]]:
    try:
        with db_engine.connect() as conn:
            return get_customers(conn)
    except Exception as e:
        logger.exception("customers_list_failed", error=str(e))
        raise internal_error()


@router.post("/customers", status_code=status.HTTP_201_CREATED, response_model=CustomerRead)
def create_customer_endpoint(
    payload: CustomerCreatePayload,
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Add a customer. If the email is already known, the existing customer is
    returned unchanged.
    """
    try:
        with db_engine.begin() as conn:
            customer_id = upsert_customer(conn, payload.model_dump())
            return get_customer_by_id(conn, customer_id)
    except Exception as e:
        logger.exception("customer_creation_failed", error=str(e))
        raise internal_error()


@router.patch("/customers/{customer_id}", response_model=CustomerRead)
def update_customer_endpoint(
    customer_id: int,
    payload: CustomerUpdatePayload,
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    update_data = changed_fields(payload)
    if not update_data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

    try:
        with db_engine.begin() as conn:
            updated = update_customer(conn, customer_id, update_data)
        return found_or_404(updated, "Customer", customer_id)

    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Another customer already uses {update_data.get('email')}",
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("customer_update_failed", customer_id=customer_id, error=str(e))
        raise internal_error()


@router.delete("/customers/{customer_id}")
def delete_customer_endpoint(
    customer_id: int,
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, str]:
    """Permanently delete a customer and their reservations."""
    try:
        with db_engine.begin() as conn:
            found_or_404(delete_customer(conn, customer_id), "Customer", customer_id)

        logger.info("customer_deleted", customer_id=customer_id, user_id=session.user_id)
        return {"message": f"Customer {customer_id} deleted"}

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("customer_deletion_failed", customer_id=customer_id, error=str(e))
        raise internal_error()
