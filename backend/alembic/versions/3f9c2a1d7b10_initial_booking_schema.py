"""initial_booking_schema

Creates accommodations, reservations and manual_blocks, plus the exclusion
constraint that makes the store the final arbiter of double bookings:
two active reservations of one accommodation may not share a night.
daterange '[)' keeps same-day turnover legal (checkout A == check-in B).

Revision ID: 3f9c2a1d7b10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2a1d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "accommodations",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("price_per_night", sa.Numeric(10, 2), nullable=False),
        sa.Column("cleaning_buffer_hours", sa.Numeric(4, 2), nullable=True),
        sa.Column("standard_check_in_time", sa.Time(), nullable=True),
        sa.Column("default_check_out_time", sa.Time(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("capacity >= 1", name="ck_accommodations_capacity"),
        sa.CheckConstraint("price_per_night >= 0", name="ck_accommodations_price"),
        sa.CheckConstraint("cleaning_buffer_hours >= 0", name="ck_accommodations_cleaning_buffer"),
    )

    op.create_table(
        "reservations",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "accommodation_id",
            sa.UUID(),
            sa.ForeignKey("accommodations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("check_in_date", sa.Date(), nullable=False),
        sa.Column("check_out_date", sa.Date(), nullable=False),
        sa.Column("check_in_time", sa.Time(), nullable=False),
        sa.Column("check_out_time", sa.Time(), nullable=False),
        sa.Column("guest_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("check_out_date > check_in_date", name="ck_reservations_dates"),
        sa.CheckConstraint("guest_count >= 1", name="ck_reservations_guest_count"),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'cancelled', 'concluded')",
            name="ck_reservations_status",
        ),
    )
    op.create_index("ix_reservations_accommodation_id", "reservations", ["accommodation_id"])
    op.create_index("ix_reservations_user_id", "reservations", ["user_id"])
    op.create_index("ix_reservations_status", "reservations", ["status"])
    op.create_index("ix_reservations_check_in_date", "reservations", ["check_in_date"])

    op.create_table(
        "manual_blocks",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "accommodation_id",
            sa.UUID(),
            sa.ForeignKey("accommodations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("end_date > start_date", name="ck_manual_blocks_dates"),
    )
    op.create_index("ix_manual_blocks_accommodation_id", "manual_blocks", ["accommodation_id"])

    # Overlap exclusion for active reservations
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")
    op.execute("""
        ALTER TABLE reservations
        ADD CONSTRAINT no_active_reservation_overlap
        EXCLUDE USING gist (
            accommodation_id WITH =,
            daterange(check_in_date, check_out_date, '[)') WITH &&
        )
        WHERE (status IN ('pending', 'confirmed'))
    """)


def downgrade() -> None:
    op.execute("ALTER TABLE reservations DROP CONSTRAINT IF EXISTS no_active_reservation_overlap")
    op.drop_index("ix_manual_blocks_accommodation_id", table_name="manual_blocks")
    op.drop_table("manual_blocks")
    op.drop_index("ix_reservations_check_in_date", table_name="reservations")
    op.drop_index("ix_reservations_status", table_name="reservations")
    op.drop_index("ix_reservations_user_id", table_name="reservations")
    op.drop_index("ix_reservations_accommodation_id", table_name="reservations")
    op.drop_table("reservations")
    op.drop_table("accommodations")
