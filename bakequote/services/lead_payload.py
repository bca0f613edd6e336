"""Build the persisted lead payload from priced selections and contact details."""

from __future__ import annotations

import re
from typing import Any

from bakequote.schemas.lead import (
    ContactInfo,
    FastQuoteSubmission,
    FeaturedItemSnapshot,
    LeadSubmission,
    OrderSubmission,
    StandardSubmission,
)
from bakequote.schemas.catalog import TreatEntry
from bakequote.schemas.order_config import OrderConfiguration, PricedTotals, TreatOrderConfiguration
from bakequote.services.catalog_defaults import PICKUP_OPTION_ID
from bakequote.services.catalog_resolver import ResolvedCatalog, resolve_catalog
from bakequote.utils.money import format_money

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_NAME_LENGTH: int = 2
MIN_PHONE_LENGTH: int = 10


class SubmissionValidationError(ValueError):
    """User-correctable submission problem naming the offending field."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


def _validate_contact(contact: ContactInfo) -> None:
    if len(contact.name.strip()) < MIN_NAME_LENGTH:
        raise SubmissionValidationError("name", "Name is required")
    if not EMAIL_PATTERN.match(contact.email.strip()):
        raise SubmissionValidationError("email", "Please enter a valid email")
    if len(contact.phone.strip()) < MIN_PHONE_LENGTH:
        raise SubmissionValidationError("phone", "Please enter a valid phone number")


def validate_treat_selections(config: OrderConfiguration, catalog: ResolvedCatalog) -> None:
    """Reject repeated treat ids and quantities below a treat's minimum order."""
    if not isinstance(config, TreatOrderConfiguration):
        return
    seen: set[str] = set()
    for selection in config.treats:
        if selection.id in seen:
            raise SubmissionValidationError("treats", f"{selection.id} is selected more than once")
        seen.add(selection.id)
        treat = catalog.find("treats", selection.id)
        if isinstance(treat, TreatEntry) and selection.quantity < treat.min_quantity:
            raise SubmissionValidationError(
                "treats",
                f"{treat.label or treat.id} requires a minimum order of {treat.min_quantity}",
            )


def _standard_payload(order: StandardSubmission, contact: ContactInfo, catalog: ResolvedCatalog) -> dict[str, Any]:
    config = order.configuration
    validate_treat_selections(config, catalog)
    if config.delivery_option != PICKUP_OPTION_ID and not (contact.delivery_address or "").strip():
        raise SubmissionValidationError("deliveryAddress", "Delivery address is required for delivery orders")

    payload: dict[str, Any] = config.model_dump(mode="json", by_alias=True)
    payload["fastQuote"] = False
    if contact.delivery_address:
        payload["deliveryAddress"] = contact.delivery_address.strip()
    if contact.special_requests:
        payload["specialRequests"] = contact.special_requests
    return payload


def _fast_quote_payload(
    order: FastQuoteSubmission,
    contact: ContactInfo,
    featured: FeaturedItemSnapshot | None,
) -> dict[str, Any]:
    if contact.event_date is None:
        raise SubmissionValidationError("eventDate", "Event date is required for fast quotes")
    if featured is None or featured.id != order.featured_item_id:
        raise SubmissionValidationError("featuredItemId", "Featured item is not available")

    payload: dict[str, Any] = {
        "fastQuote": True,
        "featuredItemId": featured.id,
        "featuredItemLabel": featured.label,
        "unitPrice": format_money(featured.price),
        "quantity": order.quantity,
    }
    if contact.special_requests:
        payload["specialRequests"] = contact.special_requests
    return payload


def build_payload(
    order: OrderSubmission,
    contact: ContactInfo,
    totals: PricedTotals,
    featured: FeaturedItemSnapshot | None = None,
    catalog: ResolvedCatalog | None = None,
) -> LeadSubmission:
    """Validate a submission and freeze it into a LeadSubmission.

    Standard submissions carry the order configuration; fast quotes carry only
    the featured item reference. The two shapes never mix. Treat minimums are
    checked against ``catalog``, the platform defaults when none is given.
    """
    _validate_contact(contact)
    if order.fast_quote:
        payload = _fast_quote_payload(order, contact, featured)
    else:
        payload = _standard_payload(order, contact, catalog if catalog is not None else resolve_catalog())

    return LeadSubmission(
        customer_name=contact.name.strip(),
        customer_email=contact.email.strip(),
        customer_phone=contact.phone.strip(),
        event_type=contact.event_type or None,
        event_date=contact.event_date,
        guest_count=contact.guest_count,
        fast_quote=order.fast_quote,
        calculator_payload=payload,
        estimated_total=format_money(totals.total),
    )
