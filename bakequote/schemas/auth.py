"""Authentication-related request and response schemas."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Payload for baker registration."""

    email: str
    password: str = Field(min_length=6)
    business_name: str = Field(min_length=1)
    slug: str | None = None
    phone: str | None = None


class LoginRequest(BaseModel):
    """Payload for baker login."""

    email: str
    password: str


class TokenResponse(BaseModel):
    """JWT response payload."""

    access_token: str
    token_type: str = "bearer"


class BakerResponse(BaseModel):
    """Baker response for auth endpoints."""

    id: int
    email: str
    business_name: str
    slug: str
    plan: str
    currency: str
    phone: str | None = None
    address: str | None = None
    deposit_percentage: int

    model_config = ConfigDict(from_attributes=True)


class BakerUpdateRequest(BaseModel):
    """Profile fields a baker may change; omitted fields stay as they are."""

    business_name: str | None = Field(default=None, min_length=2)
    phone: str | None = None
    address: str | None = None
    deposit_percentage: int | None = Field(default=None, ge=0, le=100)


class PublicBakerResponse(BaseModel):
    """Public profile shown on the order page."""

    id: int
    business_name: str
    phone: str | None
    slug: str
    currency: str

    model_config = ConfigDict(from_attributes=True)
