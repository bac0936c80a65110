from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.sql import func

from resort_booking.models.base import Base, JSONType


class Payment(Base):
    """
    ORM model for the payment record written alongside a reservation.

    This is a log of what the guest entered (method, amount, method-specific
    details such as a bKash transaction id), not a gateway transaction.
    """

    __tablename__ = "payment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    reservation_id = Column(
        Integer, ForeignKey("reservation.id", ondelete="CASCADE"), nullable=False, index=True
    )
    method = Column(String, nullable=False)
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    details = Column(JSONType, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
