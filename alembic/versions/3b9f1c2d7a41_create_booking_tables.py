"""Create admin, service, customer, reservation and payment tables

Revision ID: 3b9f1c2d7a41
Revises:
Create Date: 2026-10-19 10:12:31.418207

"""

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op  # type: ignore[attr-defined]

# revision identifiers, used by Alembic.
revision = "3b9f1c2d7a41"
down_revision = None
branch_labels = None
depends_on = None

json_type = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")
money = sa.Numeric(12, 2, asdecimal=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "admin",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_admin_email", "admin", ["email"], unique=True)

    op.create_table(
        "service",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("service_type", sa.String(), nullable=False),
        sa.Column("location", sa.String(), nullable=False),
        sa.Column("price", money, nullable=False),
        sa.Column("status", sa.String(), server_default="available", nullable=False),
        sa.Column("check_in", sa.Date(), nullable=True),
        sa.Column("check_out", sa.Date(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("amenities", json_type, nullable=True),
        sa.Column("images", json_type, nullable=True),
        sa.Column("thumbnail_url", sa.String(), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column(
            "admin_id",
            sa.Integer(),
            sa.ForeignKey("admin.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_service_service_type", "service", ["service_type"])
    op.create_index("ix_service_location", "service", ["location"])
    op.create_index("ix_service_status", "service", ["status"])

    op.create_table(
        "customer",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_customer_email", "customer", ["email"], unique=True)

    op.create_table(
        "reservation",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "service_id",
            sa.Integer(),
            sa.ForeignKey("service.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "customer_id",
            sa.Integer(),
            sa.ForeignKey("customer.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("check_in_date", sa.Date(), nullable=False),
        sa.Column("check_out_date", sa.Date(), nullable=False),
        sa.Column("guest_count", sa.Integer(), server_default="1", nullable=False),
        sa.Column("special_requests", sa.Text(), nullable=True),
        sa.Column("price", money, nullable=False),
        sa.Column("payment_status", sa.String(), server_default="pending", nullable=False),
        sa.Column("service_type", sa.String(), nullable=True),
        sa.Column(
            "admin_id",
            sa.Integer(),
            sa.ForeignKey("admin.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_reservation_service_id", "reservation", ["service_id"])
    op.create_index("ix_reservation_customer_id", "reservation", ["customer_id"])

    op.create_table(
        "payment",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "reservation_id",
            sa.Integer(),
            sa.ForeignKey("reservation.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("method", sa.String(), nullable=False),
        sa.Column("amount", money, nullable=False),
        sa.Column("details", json_type, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_payment_reservation_id", "payment", ["reservation_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("payment")
    op.drop_table("reservation")
    op.drop_table("customer")
    op.drop_table("service")
    op.drop_table("admin")
