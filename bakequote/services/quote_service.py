"""Quote builder: pre-fill line items from a lead and total them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from pydantic import TypeAdapter, ValidationError
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bakequote.models.baker import Baker
from bakequote.models.lead import Lead
from bakequote.models.quote import QUOTE_ITEM_CATEGORIES, QUOTE_STATUSES, Quote, QuoteItem
from bakequote.schemas.catalog import AddonEntry, TreatEntry
from bakequote.schemas.order_config import CakeOrderConfiguration, OrderConfiguration, TreatOrderConfiguration
from bakequote.schemas.quote import QuoteLineItem
from bakequote.services.catalog_resolver import ResolvedCatalog, resolve_catalog
from bakequote.services.line_pricing import addon_price, decoration_price, delivery_price, tier_price, treat_line_price
from bakequote.services.order_totals import apply_tax, resolve_tax_rate
from bakequote.utils.money import ZERO, quantize_money, to_decimal

logger = logging.getLogger(__name__)

_order_configuration_adapter: TypeAdapter[OrderConfiguration] = TypeAdapter(OrderConfiguration)


class LeadWithoutCustomerError(Exception):
    """Raised when a lead has no linked customer to quote."""


class InvalidQuoteStatusError(ValueError):
    """Raised for a status outside QUOTE_STATUSES."""


@dataclass(frozen=True)
class QuoteTotals:
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal


def _label(catalog: ResolvedCatalog, category: str, entry_id: str) -> str:
    entry = catalog.find(category, entry_id)
    return entry.label if entry is not None and entry.label else entry_id


def _cake_items(config: CakeOrderConfiguration, catalog: ResolvedCatalog) -> list[QuoteLineItem]:
    items: list[QuoteLineItem] = []
    for index, tier in enumerate(config.tiers, start=1):
        details = ", ".join(
            _label(catalog, category, entry_id)
            for category, entry_id in (("shapes", tier.shape), ("flavors", tier.flavor), ("frostings", tier.frosting))
        )
        items.append(
            QuoteLineItem(
                name=f"Tier {index}: {_label(catalog, 'sizes', tier.size)}",
                description=details,
                unit_price=tier_price(tier, catalog),
                category="cake",
            )
        )

    for decoration_id in config.decorations:
        items.append(
            QuoteLineItem(
                name=_label(catalog, "decorations", decoration_id),
                unit_price=decoration_price(decoration_id, catalog),
                category="decoration",
            )
        )

    for selection in config.addons:
        addon = catalog.find("addons", selection.id)
        description = None
        if isinstance(addon, AddonEntry) and addon.pricing_type == "per-attendee":
            attendees = selection.attendees if selection.attendees is not None else addon.min_attendees
            description = f"{attendees or 0} guests"
        elif selection.quantity is not None:
            description = f"{selection.quantity} dozen"
        items.append(
            QuoteLineItem(
                name=_label(catalog, "addons", selection.id),
                description=description,
                unit_price=addon_price(selection, catalog),
                category="addon",
            )
        )
    return items


def _treat_items(config: TreatOrderConfiguration, catalog: ResolvedCatalog) -> list[QuoteLineItem]:
    items: list[QuoteLineItem] = []
    for selection in config.treats:
        treat = catalog.find("treats", selection.id)
        unit_price = treat_line_price(selection, catalog) / selection.quantity
        items.append(
            QuoteLineItem(
                name=_label(catalog, "treats", selection.id),
                description=(treat.description or None) if isinstance(treat, TreatEntry) else None,
                quantity=Decimal(selection.quantity),
                unit_price=unit_price,
                category="treat",
            )
        )
    return items


def _fast_quote_items(payload: dict[str, Any]) -> list[QuoteLineItem]:
    return [
        QuoteLineItem(
            name=str(payload.get("featuredItemLabel") or "Featured item"),
            quantity=to_decimal(payload.get("quantity") or 1),
            unit_price=to_decimal(payload.get("unitPrice")),
            category="other",
        )
    ]


def line_items_from_payload(payload: dict[str, Any] | None, catalog: ResolvedCatalog) -> list[QuoteLineItem]:
    """Rebuild editable line items from a lead's stored calculator payload.

    Prices come from the current resolved catalog, re-using the line pricer.
    An unreadable payload yields no items rather than an error.
    """
    if not payload:
        return []
    if payload.get("fastQuote"):
        items = _fast_quote_items(payload)
    else:
        try:
            config = _order_configuration_adapter.validate_python(payload)
        except ValidationError:
            logger.warning("[QUOTES] Unreadable calculator payload; starting with empty line items")
            return []

        if isinstance(config, CakeOrderConfiguration):
            items = _cake_items(config, catalog)
        else:
            items = _treat_items(config, catalog)

        delivery = delivery_price(config.delivery_option, catalog)
        if delivery > ZERO:
            items.append(
                QuoteLineItem(
                    name=_label(catalog, "deliveryOptions", config.delivery_option),
                    unit_price=delivery,
                    category="delivery",
                )
            )

    return [item.model_copy(update={"sort_order": index}) for index, item in enumerate(items)]


def quote_totals(items: list[QuoteLineItem], tax_rate: Decimal | None = None) -> QuoteTotals:
    """Subtotal of quantity x unit price, taxed at the per-quote rate."""
    rate = resolve_tax_rate(tax_rate)
    subtotal = max(sum((item.quantity * item.unit_price for item in items), ZERO), ZERO)
    tax_amount = apply_tax(subtotal, rate)
    rounded_subtotal = quantize_money(subtotal)
    return QuoteTotals(
        subtotal=rounded_subtotal,
        tax_rate=rate,
        tax_amount=tax_amount,
        total=rounded_subtotal + tax_amount,
    )


def next_quote_number(db: Session, baker_id: int, now: datetime) -> str:
    """Sequential per-baker number; skips numbers still held after a deletion."""
    sequence = (db.scalar(select(func.count(Quote.id)).where(Quote.baker_id == baker_id)) or 0) + 1
    while True:
        candidate = f"Q-{now.year}-{sequence:04d}"
        taken = db.scalar(
            select(Quote.id).where(Quote.baker_id == baker_id, Quote.quote_number == candidate).limit(1)
        )
        if taken is None:
            return candidate
        sequence += 1


def _quote_items(items: list[QuoteLineItem]) -> list[QuoteItem]:
    rows: list[QuoteItem] = []
    for index, item in enumerate(items):
        if item.category not in QUOTE_ITEM_CATEGORIES:
            raise ValueError(f"Unknown quote item category: {item.category}")
        rows.append(
            QuoteItem(
                name=item.name,
                description=item.description,
                quantity=item.quantity,
                unit_price=quantize_money(item.unit_price),
                total_price=quantize_money(item.quantity * item.unit_price),
                category=item.category,
                sort_order=item.sort_order if item.sort_order is not None else index,
            )
        )
    return rows


def _apply_totals(quote: Quote, totals: QuoteTotals) -> None:
    quote.subtotal = totals.subtotal
    quote.tax_rate = totals.tax_rate
    quote.tax_amount = totals.tax_amount
    quote.total = totals.total


def create_quote_from_lead(
    db: Session,
    baker: Baker,
    lead: Lead,
    tax_rate: Decimal | None = None,
    now: datetime | None = None,
) -> Quote:
    """Create a draft quote pre-filled from a lead and mark the lead as quoted."""
    if lead.customer_id is None:
        raise LeadWithoutCustomerError(lead.id)
    current = now or datetime.now(timezone.utc)
    items = line_items_from_payload(lead.calculator_payload, resolve_catalog(baker.calculator_config))
    totals = quote_totals(items, tax_rate)

    quote = Quote(
        baker_id=baker.id,
        customer_id=lead.customer_id,
        lead_id=lead.id,
        quote_number=next_quote_number(db, baker.id, current),
        title=f"{lead.customer_name} - {(lead.event_type or 'order').title()}",
        event_date=lead.event_date,
        status="draft",
        subtotal=totals.subtotal,
        tax_rate=totals.tax_rate,
        tax_amount=totals.tax_amount,
        total=totals.total,
        items=_quote_items(items),
    )
    lead.status = "quoted"
    db.add(quote)
    db.add(lead)
    db.commit()
    db.refresh(quote)
    logger.info("[QUOTES] Quote %s created from lead id=%s", quote.quote_number, lead.id)
    return quote


def replace_quote_items(
    db: Session,
    quote: Quote,
    items: list[QuoteLineItem],
    tax_rate: Decimal | None = None,
) -> Quote:
    """Replace all line items and recompute totals; keeps the current rate when none is given."""
    totals = quote_totals(items, quote.tax_rate if tax_rate is None else tax_rate)
    quote.items = _quote_items(items)
    _apply_totals(quote, totals)
    db.add(quote)
    db.commit()
    db.refresh(quote)
    return quote


def set_quote_status(db: Session, quote: Quote, status: str) -> Quote:
    normalized = status.strip().lower()
    if normalized not in QUOTE_STATUSES:
        raise InvalidQuoteStatusError(f"Unknown quote status: {status}")
    quote.status = normalized
    db.add(quote)
    db.commit()
    db.refresh(quote)
    return quote


def get_quote(db: Session, baker_id: int, quote_id: int) -> Quote | None:
    quote = db.get(Quote, quote_id)
    if quote is None or quote.baker_id != baker_id:
        return None
    return quote


def list_quotes(db: Session, baker_id: int, status: str | None = None) -> list[Quote]:
    query = select(Quote).where(Quote.baker_id == baker_id)
    if status is not None:
        query = query.where(Quote.status == status.strip().lower())
    return db.scalars(query.order_by(Quote.created_at.desc(), Quote.id.desc())).all()


def duplicate_quote(db: Session, baker: Baker, quote: Quote, now: datetime | None = None) -> Quote:
    """Copy a quote and its line items into a new draft with its own number."""
    current = now or datetime.now(timezone.utc)
    copy = Quote(
        baker_id=baker.id,
        customer_id=quote.customer_id,
        lead_id=quote.lead_id,
        quote_number=next_quote_number(db, baker.id, current),
        title=f"{quote.title} (Copy)",
        event_date=quote.event_date,
        status="draft",
        subtotal=quote.subtotal,
        tax_rate=quote.tax_rate,
        tax_amount=quote.tax_amount,
        total=quote.total,
        notes=quote.notes,
        items=[
            QuoteItem(
                name=item.name,
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.total_price,
                category=item.category,
                sort_order=item.sort_order,
            )
            for item in quote.items
        ],
    )
    db.add(copy)
    db.commit()
    db.refresh(copy)
    logger.info("[QUOTES] Quote %s duplicated as %s", quote.quote_number, copy.quote_number)
    return copy


def delete_quote(db: Session, quote: Quote) -> None:
    quote_number = quote.quote_number
    db.delete(quote)
    db.commit()
    logger.info("[QUOTES] Quote %s deleted", quote_number)
