"""Baker account operations."""

import re
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from bakequote.models.baker import BAKER_PLANS, Baker

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")
_REQUIRED_PROFILE_FIELDS = ("business_name", "deposit_percentage")


class InvalidPlanError(ValueError):
    """Raised for a plan outside BAKER_PLANS."""


def slugify(value: str) -> str:
    slug = _SLUG_STRIP.sub("-", value.strip().lower()).strip("-")
    return slug or "bakery"


def get_baker_by_email(db: Session, email: str) -> Baker | None:
    return db.scalar(select(Baker).where(Baker.email == email).limit(1))


def unique_slug(db: Session, base: str) -> str:
    """Return ``base`` or ``base-N`` for the first N not taken."""
    candidate = base
    suffix = 2
    while db.scalar(select(Baker.id).where(Baker.slug == candidate).limit(1)) is not None:
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


def create_baker(
    db: Session,
    *,
    email: str,
    hashed_password: str,
    business_name: str,
    slug: str | None = None,
    phone: str | None = None,
    address: str | None = None,
    plan: str = "free",
) -> Baker:
    if plan not in BAKER_PLANS:
        raise InvalidPlanError(f"Unknown plan: {plan}")
    baker = Baker(
        email=email,
        password_hash=hashed_password,
        business_name=business_name,
        slug=unique_slug(db, slugify(slug or business_name)),
        phone=phone,
        address=address,
        plan=plan,
    )
    db.add(baker)
    db.commit()
    db.refresh(baker)
    return baker


def update_baker(db: Session, baker: Baker, changes: dict[str, Any]) -> Baker:
    """Apply profile changes; keys absent from ``changes`` are left alone."""
    for field, value in changes.items():
        if value is None and field in _REQUIRED_PROFILE_FIELDS:
            continue
        setattr(baker, field, value)
    db.add(baker)
    db.commit()
    db.refresh(baker)
    return baker
