# models/reservations.py

import enum

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.sql import func

from resort_booking.models.base import Base


class PaymentStatus(str, enum.Enum):
    """Values accepted for reservation.payment_status. No transition rules apply."""

    PENDING = "pending"
    PAID = "paid"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Reservation(Base):
    """
    ORM model for a customer's booking of a service over a date range.

    price is computed when the booking is submitted and stored as-is; later
    edits to the service price do not touch existing reservations.
    service_type is a snapshot of the service category at booking time.
    """

    __tablename__ = "reservation"

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_id = Column(
        Integer, ForeignKey("service.id", ondelete="CASCADE"), nullable=False, index=True
    )
    customer_id = Column(
        Integer, ForeignKey("customer.id", ondelete="CASCADE"), nullable=False, index=True
    )
    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    guest_count = Column(Integer, nullable=False, server_default="1")
    special_requests = Column(Text, nullable=True)
    price = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    payment_status = Column(String, nullable=False, server_default=PaymentStatus.PENDING.value)
    service_type = Column(String, nullable=True)
    admin_id = Column(Integer, ForeignKey("admin.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
