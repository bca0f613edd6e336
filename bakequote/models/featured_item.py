"""Featured (pre-priced) item ORM model."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bakequote.db.base import Base


class FeaturedItem(Base):
    """Pre-priced item customers can order through a fast quote."""

    __tablename__ = "featured_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    baker_id: Mapped[int] = mapped_column(ForeignKey("bakers.id"), nullable=False, index=True)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    featured_start: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    featured_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    baker: Mapped["Baker"] = relationship(back_populates="featured_items")
