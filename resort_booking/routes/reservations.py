"""Admin management of reservations."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.engine import Engine

from resort_booking.db.readers.reservations import get_reservation_by_id, get_reservations
from resort_booking.db.writers.reservations import delete_reservation, update_reservation
from resort_booking.dependencies import get_db_engine, require_admin
from resort_booking.routes._helpers import changed_fields, found_or_404, internal_error
from resort_booking.schemas.bookings import ReservationRead, ReservationUpdatePayload
from resort_booking.services.session import UserSession

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/reservations", response_model=list[ReservationRead])
def list_reservations(
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> list[dict[str, Any]]:
    """All reservations with their service and customer, newest first."""
    try:
        with db_engine.connect() as conn:
            return get_reservations(conn)
    except Exception as e:
        logger.exception("reservations_list_failed", error=str(e))
        raise internal_error()


@router.get("/reservations/{reservation_id}", response_model=ReservationRead)
def get_reservation(
    reservation_id: int,
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    try:
        with db_engine.connect() as conn:
            reservation = get_reservation_by_id(conn, reservation_id)
        return found_or_404(reservation, "Reservation", reservation_id)

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("reservation_fetch_failed", reservation_id=reservation_id, error=str(e))
        raise internal_error()


@router.patch("/reservations/{reservation_id}", response_model=ReservationRead)
def update_reservation_endpoint(
    reservation_id: int,
    payload: ReservationUpdatePayload,
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, Any]:
    """
    Edit a reservation. Any payment_status value may replace any other.
    """
    update_data = changed_fields(payload)
    if not update_data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

    try:
        with db_engine.begin() as conn:
            current = found_or_404(
                get_reservation_by_id(conn, reservation_id), "Reservation", reservation_id
            )
            check_in = update_data.get("check_in_date", current["check_in_date"])
            check_out = update_data.get("check_out_date", current["check_out_date"])
            if check_out <= check_in:
                raise HTTPException(
                    status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                    detail="Check-out date must be after check-in date",
                )

            update_reservation(conn, reservation_id, update_data)
            updated = get_reservation_by_id(conn, reservation_id)

        logger.info(
            "reservation_updated",
            reservation_id=reservation_id,
            payment_status=update_data.get("payment_status"),
            user_id=session.user_id,
        )
        return updated

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("reservation_update_failed", reservation_id=reservation_id, error=str(e))
        raise internal_error()


@router.delete("/reservations/{reservation_id}")
def delete_reservation_endpoint(
    reservation_id: int,
    session: UserSession = Depends(require_admin),
    db_engine: Engine = Depends(get_db_engine),
) -> dict[str, str]:
    try:
        with db_engine.begin() as conn:
            found_or_404(delete_reservation(conn, reservation_id), "Reservation", reservation_id)

        logger.info("reservation_deleted", reservation_id=reservation_id, user_id=session.user_id)
        return {"message": f"Reservation {reservation_id} deleted"}

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("reservation_deletion_failed", reservation_id=reservation_id, error=str(e))
        raise internal_error()
