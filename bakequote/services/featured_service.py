"""Featured item helpers for fast quotes."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from bakequote.models.featured_item import FeaturedItem
from bakequote.schemas.lead import FeaturedItemSnapshot


def create_featured_item(
    db: Session,
    *,
    baker_id: int,
    label: str,
    price: Decimal,
    description: str | None = None,
    featured_start: datetime | None = None,
    featured_end: datetime | None = None,
) -> FeaturedItem:
    """Create and persist a featured item."""
    item = FeaturedItem(
        baker_id=baker_id,
        label=label,
        description=description,
        price=price,
        is_featured=True,
        featured_start=featured_start,
        featured_end=featured_end,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def list_featured_items(db: Session, baker_id: int) -> list[FeaturedItem]:
    """Return every featured item of a baker, newest first."""
    return db.scalars(
        select(FeaturedItem)
        .where(FeaturedItem.baker_id == baker_id, FeaturedItem.is_featured.is_(True))
        .order_by(FeaturedItem.created_at.desc(), FeaturedItem.id.desc())
    ).all()


def _public_query(baker_id: int, now: datetime):
    return select(FeaturedItem).where(
        FeaturedItem.baker_id == baker_id,
        FeaturedItem.is_featured.is_(True),
        or_(FeaturedItem.featured_start.is_(None), FeaturedItem.featured_start <= now),
        or_(FeaturedItem.featured_end.is_(None), FeaturedItem.featured_end >= now),
    )


def list_public_featured_items(db: Session, baker_id: int, now: datetime | None = None) -> list[FeaturedItem]:
    """Return featured items whose window contains ``now``."""
    current = now or datetime.now(timezone.utc)
    return db.scalars(_public_query(baker_id, current).order_by(FeaturedItem.created_at.desc(), FeaturedItem.id.desc())).all()


def get_public_featured_item(
    db: Session,
    baker_id: int,
    item_id: int,
    now: datetime | None = None,
) -> FeaturedItem | None:
    current = now or datetime.now(timezone.utc)
    return db.scalar(_public_query(baker_id, current).where(FeaturedItem.id == item_id).limit(1))


def snapshot(item: FeaturedItem) -> FeaturedItemSnapshot:
    return FeaturedItemSnapshot(id=item.id, label=item.label, price=item.price, description=item.description)
