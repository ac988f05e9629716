"""initial room booking schema

Revision ID: 0001
Revises:
Create Date: 2026-10-17 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
RESERVATION_STATUSES = ("pending", "confirmed", "cancelled")


def _timestamps():
    return [
        sa.Column("createdAt", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updatedAt", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Enum("ADMIN", "STAFF", name="rolename"), nullable=False, unique=True),
    )
    op.create_index("ix_roles_id", "roles", ["id"])

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("isActive", sa.Boolean(), nullable=False),
        sa.Column("roleId", sa.Integer(), sa.ForeignKey("roles.id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "refresh_tokens",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("userId", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("token", sa.Text(), nullable=False, unique=True),
        sa.Column("expiresAt", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("revoked", sa.Boolean(), nullable=False),
        sa.Column("createdAt", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_refresh_tokens_id", "refresh_tokens", ["id"])

    op.create_table(
        "rooms",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("equipment", sa.JSON(), nullable=False),
        sa.Column("color", sa.String(20), nullable=True),
        sa.Column("isActive", sa.Boolean(), nullable=False),
        sa.Column("createdById", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_rooms_id", "rooms", ["id"])
    op.create_index("ix_rooms_isActive", "rooms", ["isActive"])

    op.create_table(
        "room_availability",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("roomId", sa.Integer(), sa.ForeignKey("rooms.id"), nullable=False),
        sa.Column("dayOfWeek", sa.Enum(*WEEKDAYS, name="weekday"), nullable=False),
        sa.Column("startTime", sa.String(5), nullable=False),
        sa.Column("endTime", sa.String(5), nullable=False),
        sa.Column("createdById", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("roomId", "dayOfWeek", name="uq_room_availability_room_day"),
    )
    op.create_index("ix_room_availability_id", "room_availability", ["id"])
    op.create_index("ix_room_availability_roomId", "room_availability", ["roomId"])

    op.create_table(
        "room_unavailability",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("roomId", sa.Integer(), sa.ForeignKey("rooms.id"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("startTime", sa.String(5), nullable=False),
        sa.Column("endTime", sa.String(5), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("createdById", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_room_unavailability_id", "room_unavailability", ["id"])
    op.create_index("ix_room_unavailability_date", "room_unavailability", ["date"])
    op.create_index("ix_room_unavailability_room_date", "room_unavailability", ["roomId", "date"])

    op.create_table(
        "room_reservations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("roomId", sa.Integer(), sa.ForeignKey("rooms.id"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("startTime", sa.String(5), nullable=False),
        sa.Column("endTime", sa.String(5), nullable=False),
        sa.Column("customerName", sa.String(150), nullable=False),
        sa.Column("customerEmail", sa.String(255), nullable=True),
        sa.Column("customerPhone", sa.String(30), nullable=True),
        sa.Column("purpose", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.Enum(*RESERVATION_STATUSES, name="reservationstatus"), nullable=False),
        sa.Column("createdById", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_room_reservations_id", "room_reservations", ["id"])
    op.create_index("ix_room_reservations_date", "room_reservations", ["date"])
    op.create_index("ix_room_reservations_status", "room_reservations", ["status"])
    op.create_index("ix_room_reservations_room_date", "room_reservations", ["roomId", "date"])

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("userId", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("entityType", sa.String(100), nullable=False),
        sa.Column("entityId", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("createdAt", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_audit_logs_id", "audit_logs", ["id"])


def downgrade() -> None:
    for table in ("audit_logs", "room_reservations", "room_unavailability", "room_availability",
                  "rooms", "refresh_tokens", "users", "roles"):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_name in ("reservationstatus", "weekday", "rolename"):
        sa.Enum(name=enum_name).drop(bind, checkfirst=True)
