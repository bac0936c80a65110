from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ServiceRead(BaseModel):
    """Service as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    service_type: str
    location: str
    price: float
    status: str
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    description: Optional[str] = None
    amenities: Optional[list[str]] = None
    images: Optional[list[str]] = None
    thumbnail_url: Optional[str] = None
    rating: Optional[float] = None
    admin_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ServiceCreatePayload(BaseModel):
    """
    Schema for creating a service from the admin dashboard.
    """

    name: str = Field(..., min_length=1, description="Listing name")
    service_type: str = Field(..., min_length=1, description="Category, e.g. Resort, Hotel, Villa")
    location: str = Field(..., min_length=1, description="Location label used by filters")
    price: float = Field(..., ge=0, description="Nightly rate")
    status: str = Field("available", description="available or unavailable")
    check_in: Optional[date] = Field(None, description="Reference check-in date")
    check_out: Optional[date] = Field(None, description="Reference check-out date")
    description: Optional[str] = None
    amenities: Optional[list[str]] = None
    images: Optional[list[str]] = Field(None, description="Image URLs from /api/upload-image")
    thumbnail_url: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    admin_id: Optional[int] = Field(None, description="Owning admin (defaults to caller)")


class ServiceUpdatePayload(BaseModel):
    """
    Schema for updating a service. All fields are optional.
    """

    name: Optional[str] = Field(None, min_length=1)
    service_type: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    status: Optional[str] = None
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    description: Optional[str] = None
    amenities: Optional[list[str]] = None
    images: Optional[list[str]] = None
    thumbnail_url: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)


class FilterOptions(BaseModel):
    service_types: list[str]
    locations: list[str]
    price_ranges: list[str]


class ServiceListResponse(BaseModel):
    services: list[ServiceRead]
    total: int = Field(..., description="Number of available services before filtering")
    matched: int = Field(..., description="Number of services matching the filters")


class QuoteRequest(BaseModel):
    check_in: date
    check_out: date


class QuoteResponse(BaseModel):
    service_id: int
    nightly_price: float
    nights: int
    total_price: float
