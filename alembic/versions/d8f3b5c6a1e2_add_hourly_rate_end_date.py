"""add hourly_rate and end_date

Revision ID: d8f3b5c6a1e2
Revises: c4e1a7b2d9f0
Create Date: 2026-01-20 00:00:00.000000

조직 시급과 다일(多日) 시프트용 종료 날짜 추가.
Add organizations.hourly_rate and shifts.end_date (multi-day shifts).
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "d8f3b5c6a1e2"
down_revision: Union[str, None] = "c4e1a7b2d9f0"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column(
        "organizations",
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=False, server_default="0"),
    )
    # NULL = 시작 날짜와 같은 날 종료 (same-day shift)
    op.add_column("shifts", sa.Column("end_date", sa.Date(), nullable=True))


def downgrade() -> None:
    op.drop_column("shifts", "end_date")
    op.drop_column("organizations", "hourly_rate")
