"""initial schema: rooms, time_slots, reservations

Revision ID: 0001
Revises:
Create Date: 2024-03-01 09:00:00
"""
from alembic import op
import sqlalchemy as sa


revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "rooms",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("building", sa.String(length=255), nullable=False),
    )
    op.create_index("ix_rooms_id", "rooms", ["id"])
    op.create_index("ix_rooms_building", "rooms", ["building"])

    op.create_table(
        "time_slots",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("start", sa.String(length=5), nullable=False),
        sa.Column("end", sa.String(length=5), nullable=False),
        sa.Column("days", sa.JSON(), nullable=False),
    )
    op.create_index("ix_time_slots_id", "time_slots", ["id"])

    op.create_table(
        "reservations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("room_id", sa.Integer(),
                  sa.ForeignKey("rooms.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("time_slot_id", sa.Integer(),
                  sa.ForeignKey("time_slots.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("purpose", sa.Text(), nullable=False),
        sa.Column("groups", sa.Text(), nullable=True),
        sa.UniqueConstraint("room_id", "time_slot_id", "date", name="uq_reservations_room_slot_date"),
    )
    op.create_index("ix_reservations_id", "reservations", ["id"])
    op.create_index("ix_reservations_room_id", "reservations", ["room_id"])
    op.create_index("ix_reservations_time_slot_id", "reservations", ["time_slot_id"])
    op.create_index("ix_reservations_date", "reservations", ["date"])


def downgrade() -> None:
    op.drop_table("reservations")
    op.drop_table("time_slots")
    op.drop_table("rooms")
