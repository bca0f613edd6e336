"""Baker (tenant) ORM model."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bakequote.db.base import Base

BAKER_PLANS = ("free", "basic", "pro")


class Baker(Base):
    """Bakery business account; owns one catalog override document."""

    __tablename__ = "bakers"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    business_name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    plan: Mapped[str] = mapped_column(String(16), nullable=False, default="free")
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    deposit_percentage: Mapped[int] = mapped_column(Integer, nullable=False, default=50)
    calculator_config: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    customers: Mapped[list["Customer"]] = relationship(back_populates="baker")
    leads: Mapped[list["Lead"]] = relationship(back_populates="baker")
    quotes: Mapped[list["Quote"]] = relationship(back_populates="baker")
    featured_items: Mapped[list["FeaturedItem"]] = relationship(back_populates="baker")
