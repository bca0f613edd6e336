"""Quote API schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import ConfigDict, Field

from bakequote.schemas.catalog import CamelModel


class QuoteLineItem(CamelModel):
    """Editable quote line before it is persisted."""

    name: str = Field(min_length=1)
    description: str | None = None
    quantity: Decimal = Field(default=Decimal("1"), ge=0)
    unit_price: Decimal
    category: str = "other"
    sort_order: int | None = None


class QuoteCreateRequest(CamelModel):
    lead_id: int
    tax_rate: Decimal | None = Field(default=None, ge=0, le=1)


class QuoteItemsUpdate(CamelModel):
    items: list[QuoteLineItem]
    tax_rate: Decimal | None = Field(default=None, ge=0, le=1)


class QuoteStatusUpdate(CamelModel):
    status: str


class QuoteItemResponse(CamelModel):
    id: int
    name: str
    description: str | None
    quantity: Decimal
    unit_price: Decimal
    total_price: Decimal
    category: str
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class QuoteResponse(CamelModel):
    id: int
    quote_number: str
    title: str
    customer_id: int
    lead_id: int | None
    event_date: date | None
    status: str
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal
    deposit_amount: Decimal
    balance_due: Decimal
    customer_name: str | None = None
    created_at: datetime
    items: list[QuoteItemResponse]

    model_config = ConfigDict(from_attributes=True)


class QuoteSummaryResponse(CamelModel):
    """Row of the baker's quote list."""

    id: int
    quote_number: str
    title: str
    customer_id: int
    customer_name: str | None = None
    event_date: date | None
    status: str
    total: Decimal
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
