"""initial schema

Revision ID: c4e1a7b2d9f0
Revises:
Create Date: 2026-01-12 00:00:00.000000

프로필/조직/시프트 테이블 생성.
Create profiles, organizations and shifts tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "c4e1a7b2d9f0"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # profiles — 외부 신원 ID를 기본 키로 사용 (identity key is the primary key)
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # organizations — 소유자별 근무처 (workplaces per owner)
    op.create_table(
        "organizations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("profiles.id", ondelete="CASCADE", name="organizations_user_id_fkey"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("color", sa.String(32), nullable=False, server_default="#3B82F6"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "name", name="organizations_user_id_name_key"),
    )

    # shifts — 근무 시프트 (organization_id는 아직 단일 컬럼 FK)
    op.create_table(
        "shifts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("profiles.id", ondelete="CASCADE", name="shifts_user_id_fkey"),
            nullable=False,
        ),
        sa.Column(
            "organization_id",
            sa.Uuid(),
            sa.ForeignKey("organizations.id", ondelete="CASCADE", name="shifts_organization_id_fkey"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # 인덱스 — Indexes
    op.create_index("idx_shifts_user_date", "shifts", ["user_id", "date"])
    op.create_index("idx_shifts_org", "shifts", ["organization_id"])


def downgrade() -> None:
    op.drop_index("idx_shifts_org", table_name="shifts")
    op.drop_index("idx_shifts_user_date", table_name="shifts")
    op.drop_table("shifts")
    op.drop_table("organizations")
    op.drop_table("profiles")
