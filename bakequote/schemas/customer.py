"""Customer schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field

from bakequote.schemas.catalog import CamelModel


class CustomerCreate(CamelModel):
    name: str = Field(min_length=1)
    email: str
    phone: str | None = None


class CustomerResponse(CamelModel):
    id: int
    name: str
    email: str
    phone: str | None
    quote_count: int = 0
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
