"""trip insertion sequence

Revision ID: c7e1a9d3f5b8
Revises: b4d8e2f6a0c3
Create Date: 2026-10-19

Adds trips.seq, a strictly increasing insertion key used to order trips
created within the same created_at second. Existing rows get 0 and keep
their created_at order.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "c7e1a9d3f5b8"
down_revision: Union[str, None] = "b4d8e2f6a0c3"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("trips", sa.Column("seq", sa.BigInteger(), nullable=False, server_default="0"))
    op.create_index("ix_trips_seq", "trips", ["seq"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_trips_seq", table_name="trips")
    op.drop_column("trips", "seq")
