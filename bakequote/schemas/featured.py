"""Featured item schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, Field

from bakequote.schemas.catalog import CamelModel


class FeaturedItemCreate(CamelModel):
    label: str = Field(min_length=1)
    description: str | None = None
    price: Decimal = Field(ge=0)
    featured_start: datetime | None = None
    featured_end: datetime | None = None


class FeaturedItemResponse(CamelModel):
    id: int
    label: str
    description: str | None
    price: Decimal
    featured_start: datetime | None
    featured_end: datetime | None

    model_config = ConfigDict(from_attributes=True)
