"""Database seeding helpers."""

import logging

from sqlalchemy.orm import Session

from bakequote.core.config import settings
from bakequote.core.security import get_password_hash
from bakequote.models.baker import Baker
from bakequote.services.baker_service import create_baker, get_baker_by_email

logger = logging.getLogger(__name__)

DEMO_BUSINESS_NAME = "Sweet Dreams Bakery"
DEMO_SLUG = "sweet-dreams-bakery"


def ensure_demo_baker(session: Session) -> Baker | None:
    """Ensure the demo baker exists in development only."""
    if settings.app_env != "dev":
        return None

    existing = get_baker_by_email(db=session, email=settings.demo_baker_email)
    if existing is not None:
        return existing

    try:
        hashed_password = get_password_hash(settings.demo_baker_password)
    except ValueError as exc:
        logger.warning("Skipping demo baker seed: %s", exc)
        return None

    baker = create_baker(
        db=session,
        email=settings.demo_baker_email,
        hashed_password=hashed_password,
        business_name=DEMO_BUSINESS_NAME,
        slug=DEMO_SLUG,
        phone="(555) 123-4567",
        plan="pro",
    )
    logger.info("[BOOTSTRAP] Demo baker created slug=%s", baker.slug)
    return baker
