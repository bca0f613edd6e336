"""Lead submission schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Literal

from pydantic import ConfigDict, Field

from bakequote.schemas.catalog import CamelModel
from bakequote.schemas.order_config import OrderConfiguration


class ContactInfo(CamelModel):
    """Customer contact and event details captured on the order page."""

    name: str = ""
    email: str = ""
    phone: str = ""
    event_type: str | None = None
    event_date: date | None = None
    guest_count: int | None = Field(default=None, ge=0)
    delivery_address: str | None = None
    special_requests: str | None = None


class StandardSubmission(CamelModel):
    model_config = ConfigDict(extra="forbid")

    fast_quote: Literal[False] = False
    configuration: OrderConfiguration


class FastQuoteSubmission(CamelModel):
    model_config = ConfigDict(extra="forbid")

    fast_quote: Literal[True]
    featured_item_id: int
    quantity: int = Field(default=1, ge=1)


OrderSubmission = StandardSubmission | FastQuoteSubmission


class CalculatorSubmitRequest(CamelModel):
    contact: ContactInfo
    order: OrderSubmission


class FeaturedItemSnapshot(CamelModel):
    """Frozen copy of a featured item at submission time."""

    model_config = ConfigDict(frozen=True)

    id: int
    label: str
    price: Decimal
    description: str | None = None


class LeadSubmission(CamelModel):
    """Payload persisted as a Lead; a frozen snapshot of the priced selection."""

    model_config = ConfigDict(frozen=True)

    customer_name: str
    customer_email: str
    customer_phone: str
    event_type: str | None = None
    event_date: date | None = None
    guest_count: int | None = None
    fast_quote: bool
    calculator_payload: dict[str, Any]
    estimated_total: str


class CalculatorSubmitResponse(CamelModel):
    success: bool = True
    lead_id: int


class LeadResponse(CamelModel):
    id: int
    customer_id: int | None
    customer_name: str
    customer_email: str
    customer_phone: str | None
    event_type: str | None
    event_date: date | None
    guest_count: int | None
    is_fast_quote: bool
    calculator_payload: dict[str, Any] | None
    estimated_total: Decimal
    status: str
    notes: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LeadStatusUpdate(CamelModel):
    status: str
