"""Lead capture: public submissions, quotas and status changes."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bakequote.models.baker import Baker
from bakequote.models.customer import Customer
from bakequote.models.lead import LEAD_STATUSES, Lead
from bakequote.schemas.lead import CalculatorSubmitRequest, FeaturedItemSnapshot, LeadSubmission
from bakequote.services.catalog_resolver import resolve_catalog
from bakequote.services.customer_service import get_customer_by_email
from bakequote.services.featured_service import get_public_featured_item, snapshot
from bakequote.services.lead_payload import build_payload
from bakequote.services.order_totals import compute_total, fast_quote_totals

logger = logging.getLogger(__name__)

PLAN_MONTHLY_LEAD_LIMITS: dict[str, int | None] = {"free": 5, "basic": 25, "pro": None}


class BakerNotFoundError(Exception):
    """Raised when no baker matches the public slug."""


class LeadLimitReachedError(Exception):
    """Raised when the baker's plan quota for this month is used up."""


class InvalidLeadStatusError(ValueError):
    """Raised for a status outside LEAD_STATUSES."""


def get_baker_by_slug(db: Session, slug: str) -> Baker:
    baker = db.scalar(select(Baker).where(Baker.slug == slug).limit(1))
    if baker is None:
        raise BakerNotFoundError(slug)
    return baker


def _month_start(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def count_leads_this_month(db: Session, baker_id: int, now: datetime) -> int:
    return db.scalar(
        select(func.count(Lead.id)).where(Lead.baker_id == baker_id, Lead.created_at >= _month_start(now))
    ) or 0


def ensure_lead_quota(db: Session, baker: Baker, now: datetime) -> None:
    """Raise LeadLimitReachedError when the plan's monthly quota is exhausted."""
    limit = PLAN_MONTHLY_LEAD_LIMITS.get(baker.plan, PLAN_MONTHLY_LEAD_LIMITS["free"])
    if limit is None:
        return
    used = count_leads_this_month(db, baker.id, now)
    if used >= limit:
        logger.info("[LEADS] Monthly lead limit reached for baker_id=%s (%s/%s)", baker.id, used, limit)
        raise LeadLimitReachedError(baker.slug)


def find_or_create_customer(db: Session, baker_id: int, *, name: str, email: str, phone: str | None) -> Customer:
    customer = get_customer_by_email(db, baker_id, email)
    if customer is None:
        customer = Customer(baker_id=baker_id, name=name, email=email, phone=phone)
        db.add(customer)
        db.flush()
    return customer


def create_lead(db: Session, baker: Baker, submission: LeadSubmission) -> Lead:
    """Persist a frozen lead submission, linking or creating its customer."""
    customer = find_or_create_customer(
        db,
        baker.id,
        name=submission.customer_name,
        email=submission.customer_email,
        phone=submission.customer_phone,
    )
    lead = Lead(
        baker_id=baker.id,
        customer_id=customer.id,
        customer_name=submission.customer_name,
        customer_email=submission.customer_email,
        customer_phone=submission.customer_phone,
        event_type=submission.event_type,
        event_date=submission.event_date,
        guest_count=submission.guest_count,
        is_fast_quote=submission.fast_quote,
        calculator_payload=dict(submission.calculator_payload),
        estimated_total=Decimal(submission.estimated_total),
        status="new",
    )
    db.add(lead)
    db.commit()
    db.refresh(lead)
    logger.info("[LEADS] Lead id=%s created for baker_id=%s total=%s", lead.id, baker.id, submission.estimated_total)
    return lead


def submit_calculator(
    db: Session,
    baker: Baker,
    request: CalculatorSubmitRequest,
    now: datetime | None = None,
) -> Lead:
    """Price, validate and persist a public order-page submission."""
    current = now or datetime.now(timezone.utc)
    order = request.order
    featured: FeaturedItemSnapshot | None = None
    catalog = resolve_catalog(baker.calculator_config)

    if order.fast_quote:
        item = get_public_featured_item(db, baker.id, order.featured_item_id, current)
        if item is not None:
            featured = snapshot(item)
            totals = fast_quote_totals(item.price, order.quantity)
        else:
            totals = fast_quote_totals(Decimal("0"), order.quantity)
    else:
        totals = compute_total(order.configuration, catalog)

    submission = build_payload(order, request.contact, totals, featured, catalog)
    ensure_lead_quota(db, baker, current)
    return create_lead(db, baker, submission)


def list_leads(db: Session, baker_id: int, status: str | None = None) -> list[Lead]:
    query = select(Lead).where(Lead.baker_id == baker_id)
    if status is not None:
        query = query.where(Lead.status == status)
    return db.scalars(query.order_by(Lead.created_at.desc(), Lead.id.desc())).all()


def get_lead(db: Session, baker_id: int, lead_id: int) -> Lead | None:
    lead = db.get(Lead, lead_id)
    if lead is None or lead.baker_id != baker_id:
        return None
    return lead


def set_lead_status(db: Session, lead: Lead, status: str) -> Lead:
    normalized = status.strip().lower()
    if normalized not in LEAD_STATUSES:
        raise InvalidLeadStatusError(f"Unknown lead status: {status}")
    lead.status = normalized
    db.add(lead)
    db.commit()
    db.refresh(lead)
    return lead
