"""
Request and response schemas for the booking form.

Every rule of the booking form is a field validator, so a bad submission
fails with one error per offending field (FastAPI returns them as 422 with
the field name in "loc") and never reaches the database.
"""

import re
from datetime import date
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from resort_booking.schemas.validators import check_email, check_required

PaymentMethod = Literal["cash_on_delivery", "bkash", "bank"]

BKASH_NUMBER_PATTERN = re.compile(r"^\d{11}$")
MIN_BKASH_TRX_ID_LENGTH = 6
MIN_BANK_NAME_LENGTH = 2
MIN_BANK_REF_LENGTH = 4


class BookingRequest(BaseModel):
    """
    Booking form payload submitted for a single service.
    """

    customer_name: str = Field(..., description="Guest full name")
    customer_email: str = Field(..., description="Guest email, used to find the customer")
    customer_phone: str = Field(..., description="Guest phone number")
    customer_address: Optional[str] = None
    check_in_date: date
    check_out_date: date
    guest_count: int = Field(1, description="Number of guests, at least 1")
    special_requests: Optional[str] = None
    payment_method: PaymentMethod = "cash_on_delivery"
    bkash_number: Optional[str] = Field(None, validate_default=True)
    bkash_trx_id: Optional[str] = Field(None, validate_default=True)
    bank_name: Optional[str] = Field(None, validate_default=True)
    bank_ref: Optional[str] = Field(None, validate_default=True)

    @field_validator("customer_name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return check_required(value, "Name is required")

    @field_validator("customer_email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return check_email(value)

    @field_validator("customer_phone")
    @classmethod
    def validate_phone(cls, value: str) -> str:
        return check_required(value, "Phone is required")

    @field_validator("check_out_date")
    @classmethod
    def validate_stay(cls, value: date, info: ValidationInfo) -> date:
        check_in = info.data.get("check_in_date")
        if check_in is not None and check_in >= value:
            raise ValueError("Check-out date must be after check-in date")
        return value

    @field_validator("guest_count")
    @classmethod
    def validate_guest_count(cls, value: int) -> int:
        if value < 1:
            raise ValueError("At least one guest is required")
        return value

    @field_validator("bkash_number")
    @classmethod
    def validate_bkash_number(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if info.data.get("payment_method") != "bkash":
            return value
        if not value or not BKASH_NUMBER_PATTERN.match(value):
            raise ValueError("Valid bKash number (11 digits) required")
        return value

    @field_validator("bkash_trx_id")
    @classmethod
    def validate_bkash_trx_id(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if info.data.get("payment_method") != "bkash":
            return value
        if not value or len(value.strip()) < MIN_BKASH_TRX_ID_LENGTH:
            raise ValueError("bKash transaction ID is required")
        return value.strip()

    @field_validator("bank_name")
    @classmethod
    def validate_bank_name(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if info.data.get("payment_method") != "bank":
            return value
        if not value or len(value.strip()) < MIN_BANK_NAME_LENGTH:
            raise ValueError("Bank name is required")
        return value.strip()

    @field_validator("bank_ref")
    @classmethod
    def validate_bank_ref(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if info.data.get("payment_method") != "bank":
            return value
        if not value or len(value.strip()) < MIN_BANK_REF_LENGTH:
            raise ValueError("Reference number is required")
        return value.strip()

    def payment_details(self) -> dict[str, Any]:
        """Method-specific fields stored with the payment record."""
        if self.payment_method == "bkash":
            return {"bkash_number": self.bkash_number, "bkash_trx_id": self.bkash_trx_id}
        if self.payment_method == "bank":
            return {"bank_name": self.bank_name, "bank_ref": self.bank_ref}
        return {}


class BookingResponse(BaseModel):
    message: str
    reservation_id: int
    customer_id: int
    nights: int
    total_price: float
    payment_status: str
    payment_recorded: bool


class ReservationRead(BaseModel):
    """Reservation with its joined service and customer."""

    id: int
    service_id: int
    customer_id: int
    check_in_date: date
    check_out_date: date
    guest_count: int
    special_requests: Optional[str] = None
    price: float
    payment_status: str
    service_type: Optional[str] = None
    admin_id: Optional[int] = None
    service: Optional[dict[str, Any]] = None
    customer: Optional[dict[str, Any]] = None


class ReservationUpdatePayload(BaseModel):
    """
    Schema for admin edits to a reservation. All fields are optional.
    payment_status accepts any of the known values regardless of the current one.
    """

    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    guest_count: Optional[int] = Field(None, ge=1)
    special_requests: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    payment_status: Optional[Literal["pending", "paid", "completed", "cancelled"]] = None

    @field_validator("check_out_date")
    @classmethod
    def validate_stay(cls, value: Optional[date], info: ValidationInfo) -> Optional[date]:
        check_in = info.data.get("check_in_date")
        if value is not None and check_in is not None and check_in >= value:
            raise ValueError("Check-out date must be after check-in date")
        return value
