from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from resort_booking.models.base import Base


class Customer(Base):
    """
    ORM model for customers.

    email is the natural key: bookings upsert on it so a returning guest
    reuses the same row.
    """

    __tablename__ = "customer"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
