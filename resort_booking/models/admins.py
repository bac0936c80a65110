"""SQLAlchemy model for dashboard administrators."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from resort_booking.models.base import Base


class Admin(Base):
    """
    ORM model for admins.

    A row whose email matches the signed-in user's email grants the admin
    role. The check runs server-side when the session is resolved.
    """

    __tablename__ = "admin"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    phone = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
