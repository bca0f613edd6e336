"""Customer ORM model."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bakequote.db.base import Base


class Customer(Base):
    """Customer of one baker, matched by email."""

    __tablename__ = "customers"
    __table_args__ = (UniqueConstraint("baker_id", "email", name="uq_customers_baker_email"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    baker_id: Mapped[int] = mapped_column(ForeignKey("bakers.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    baker: Mapped["Baker"] = relationship(back_populates="customers")
    leads: Mapped[list["Lead"]] = relationship(back_populates="customer")
    quotes: Mapped[list["Quote"]] = relationship(back_populates="customer")

    @property
    def quote_count(self) -> int:
        return len(self.quotes)
