from typing import Optional

from pydantic import BaseModel, Field, field_validator

from resort_booking.schemas.validators import check_email


class Credentials(BaseModel):
    email: str
    password: str = Field(..., min_length=6)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return check_email(value)


class SessionRead(BaseModel):
    user_id: str
    email: str
    role: str
    is_admin: bool


class SignInResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    session: SessionRead


class SignUpResponse(BaseModel):
    message: str
    user_id: Optional[str] = None
    email: str
    access_token: Optional[str] = None
    session: Optional[SessionRead] = None


class ProviderStatus(BaseModel):
    url_configured: bool
    anon_key_configured: bool
    ok: bool
    error: Optional[str] = None
