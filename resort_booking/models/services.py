from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.sql import func

from resort_booking.models.base import Base, JSONType

SERVICE_STATUS_AVAILABLE = "available"


class Service(Base):
    """
    ORM model for a bookable listing (resort, hotel room class, villa, hall, vehicle).

    price is the nightly rate. check_in/check_out are the reference dates shown
    on the listing, not a reservation window. images holds the Cloudinary
    delivery URLs uploaded from the admin dashboard.
    """

    __tablename__ = "service"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    service_type = Column(String, nullable=False, index=True)
    location = Column(String, nullable=False, index=True)
    price = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    status = Column(String, nullable=False, server_default=SERVICE_STATUS_AVAILABLE, index=True)
    check_in = Column(Date, nullable=True)
    check_out = Column(Date, nullable=True)
    description = Column(Text, nullable=True)
    amenities = Column(JSONType, nullable=True)
    images = Column(JSONType, nullable=True)
    thumbnail_url = Column(String, nullable=True)
    rating = Column(Float, nullable=True)
    admin_id = Column(Integer, ForeignKey("admin.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
