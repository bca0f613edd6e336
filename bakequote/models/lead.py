"""Lead ORM model."""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bakequote.db.base import Base

LEAD_STATUSES = ("new", "contacted", "quoted", "converted", "lost")


class Lead(Base):
    """Frozen snapshot of a customer's priced selection plus contact details."""

    __tablename__ = "leads"

    id: Mapped[int] = mapped_column(primary_key=True)
    baker_id: Mapped[int] = mapped_column(ForeignKey("bakers.id"), nullable=False, index=True)
    customer_id: Mapped[int | None] = mapped_column(ForeignKey("customers.id"), nullable=True)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    event_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    event_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    guest_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_fast_quote: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    calculator_payload: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    estimated_total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="new")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    baker: Mapped["Baker"] = relationship(back_populates="leads")
    customer: Mapped["Customer | None"] = relationship(back_populates="leads")
