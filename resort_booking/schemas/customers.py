from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from resort_booking.schemas.validators import check_email


class CustomerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CustomerCreatePayload(BaseModel):
    """
    Schema for adding a customer from the admin dashboard.
    An existing customer with the same email is returned instead of duplicated.
    """

    name: str = Field(..., min_length=1)
    email: str = Field(..., description="Unique customer email")
    phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return check_email(value)


class CustomerUpdatePayload(BaseModel):
    """
    Schema for updating a customer. All fields are optional.
    """

    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: Optional[str]) -> Optional[str]:
        return check_email(value) if value is not None else None
