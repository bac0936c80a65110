from typing import Optional

from pydantic import BaseModel


class ImageUploadResponse(BaseModel):
    url: str
    public_id: str
    width: Optional[int] = None
    height: Optional[int] = None
    format: Optional[str] = None


class ImageDeleteRequest(BaseModel):
    """Either the public_id or the delivery URL it can be parsed from."""

    url: Optional[str] = None
    public_id: Optional[str] = None


class ImageDeleteResponse(BaseModel):
    success: bool
    public_id: str
    result: str
