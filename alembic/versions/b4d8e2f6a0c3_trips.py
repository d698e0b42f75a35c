"""trips table

Revision ID: b4d8e2f6a0c3
Revises: a1f3c5e7b9d2
Create Date: 2026-10-12

Creates trips with the columns the route engine reads:
- destination text plus geocoded latitude/longitude (nullable until geocoded)
- start_date / end_date as DATE (overlap is compared by calendar day)
- status, transport_mode (FLIGHT | CAR)
- departure/arrival airport code and coordinates for flight decomposition
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "b4d8e2f6a0c3"
down_revision: Union[str, None] = "a1f3c5e7b9d2"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "trips",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("destination", sa.String(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="PLANNED"),
        sa.Column("transport_mode", sa.String(), nullable=True),
        sa.Column("departure_airport_code", sa.String(), nullable=True),
        sa.Column("departure_airport_lat", sa.Float(), nullable=True),
        sa.Column("departure_airport_lng", sa.Float(), nullable=True),
        sa.Column("arrival_airport_code", sa.String(), nullable=True),
        sa.Column("arrival_airport_lat", sa.Float(), nullable=True),
        sa.Column("arrival_airport_lng", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_trips_user_id", "trips", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_trips_user_id", table_name="trips")
    op.drop_table("trips")
