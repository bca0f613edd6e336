"""bakequote schema

Revision ID: 0001_bakequote
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_bakequote"
down_revision = None
branch_labels = None
depends_on = None


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())


def upgrade() -> None:
    op.create_table(
        "bakers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("business_name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("plan", sa.String(length=16), nullable=False, server_default="free"),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default="USD"),
        sa.Column("deposit_percentage", sa.Integer(), nullable=False, server_default="50"),
        sa.Column("calculator_config", sa.JSON(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_bakers_email", "bakers", ["email"], unique=True)
    op.create_index("ix_bakers_slug", "bakers", ["slug"], unique=True)

    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("baker_id", sa.Integer(), sa.ForeignKey("bakers.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=True),
        _created_at(),
        sa.UniqueConstraint("baker_id", "email", name="uq_customers_baker_email"),
    )
    op.create_index("ix_customers_baker_id", "customers", ["baker_id"])

    op.create_table(
        "leads",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("baker_id", sa.Integer(), sa.ForeignKey("bakers.id"), nullable=False),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.id"), nullable=True),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("customer_email", sa.String(length=255), nullable=False),
        sa.Column("customer_phone", sa.String(length=64), nullable=True),
        sa.Column("event_date", sa.Date(), nullable=True),
        sa.Column("event_type", sa.String(length=64), nullable=True),
        sa.Column("guest_count", sa.Integer(), nullable=True),
        sa.Column("is_fast_quote", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("calculator_payload", sa.JSON(), nullable=True),
        sa.Column("estimated_total", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="new"),
        sa.Column("notes", sa.Text(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_leads_baker_id", "leads", ["baker_id"])

    op.create_table(
        "quotes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("baker_id", sa.Integer(), sa.ForeignKey("bakers.id"), nullable=False),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.id"), nullable=False),
        sa.Column("lead_id", sa.Integer(), sa.ForeignKey("leads.id"), nullable=True),
        sa.Column("quote_number", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="draft"),
        sa.Column("subtotal", sa.Numeric(10, 2), nullable=False),
        sa.Column("tax_rate", sa.Numeric(5, 4), nullable=False, server_default="0.08"),
        sa.Column("tax_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("total", sa.Numeric(10, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        _created_at(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_quotes_baker_id", "quotes", ["baker_id"])

    op.create_table(
        "quote_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("quote_id", sa.Integer(), sa.ForeignKey("quotes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("quantity", sa.Numeric(10, 2), nullable=False, server_default="1"),
        sa.Column("unit_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False, server_default="other"),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
    )

    op.create_table(
        "featured_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("baker_id", sa.Integer(), sa.ForeignKey("bakers.id"), nullable=False),
        sa.Column("label", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.Column("featured_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("featured_end", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
    )
    op.create_index("ix_featured_items_baker_id", "featured_items", ["baker_id"])


def downgrade() -> None:
    op.drop_index("ix_featured_items_baker_id", table_name="featured_items")
    op.drop_table("featured_items")
    op.drop_table("quote_items")
    op.drop_index("ix_quotes_baker_id", table_name="quotes")
    op.drop_table("quotes")
    op.drop_index("ix_leads_baker_id", table_name="leads")
    op.drop_table("leads")
    op.drop_index("ix_customers_baker_id", table_name="customers")
    op.drop_table("customers")
    op.drop_index("ix_bakers_slug", table_name="bakers")
    op.drop_index("ix_bakers_email", table_name="bakers")
    op.drop_table("bakers")
