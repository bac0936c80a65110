from typing import Any, Optional

from sqlalchemy import insert
from sqlalchemy.engine import Connection

from resort_booking.models.payments import Payment
from resort_booking.utils.datetime import utc_now


def insert_payment(
    conn: Connection,
    reservation_id: int,
    method: str,
    amount: float,
    details: Optional[dict[str, Any]] = None,
) -> int:
    """
    Record the payment method and amount chosen for a reservation.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        reservation_id (int): Reservation the payment belongs to.
        method (str): cash_on_delivery, bkash or bank.
        amount (float): Total price of the reservation.
        details (Optional[dict]): Method-specific fields (number, trx id, bank ref).

    Returns:
        int: Payment ID.
    """
    stmt = (
        insert(Payment)
        .values(
            reservation_id=reservation_id,
            method=method,
            amount=amount,
            details=details or None,
            created_at=utc_now(),
        )
        .returning(Payment.id)
    )
    return int(conn.execute(stmt).scalar_one())
