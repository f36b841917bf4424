"""harden tenant integrity

Revision ID: e2a9c7d4f6b8
Revises: d8f3b5c6a1e2
Create Date: 2026-02-03 00:00:00.000000

테넌트 일관성 및 근무 시간 제약 강화.
Harden tenant consistency and shift duration rules:

    0) 사전 검사 — abort if existing rows already violate the new rules
    1) created_at / updated_at NOT NULL
    2) organizations (id, user_id) unique + shifts composite FK
    3) CHECK constraints (end date, positive duration, hourly rate)
    4) updated_at triggers (PostgreSQL)
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from app.services.integrity_service import integrity_service


# revision identifiers, used by Alembic.
revision: str = "e2a9c7d4f6b8"
down_revision: Union[str, None] = "d8f3b5c6a1e2"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_TABLES: tuple[str, ...] = ("profiles", "organizations", "shifts")

_DURATION_POSITIVE: dict[str, str] = {
    "postgresql": "(COALESCE(end_date, date) + end_time) > (date + start_time)",
    "sqlite": "(COALESCE(end_date, date) || ' ' || end_time) > (date || ' ' || start_time)",
}


def upgrade() -> None:
    bind = op.get_bind()

    # 0) 사전 검사 — 위반 행이 있으면 MigrationBlockedError로 중단 (nothing applied)
    integrity_service.assert_migration_safe_sync(bind)

    # 1) 타임스탬프 NOT NULL — backfill then tighten
    for table in _TABLES:
        op.execute(f"UPDATE {table} SET created_at = CURRENT_TIMESTAMP WHERE created_at IS NULL")
        op.execute(f"UPDATE {table} SET updated_at = CURRENT_TIMESTAMP WHERE updated_at IS NULL")
        with op.batch_alter_table(table) as batch_op:
            batch_op.alter_column("created_at", existing_type=sa.DateTime(timezone=True), nullable=False)
            batch_op.alter_column("updated_at", existing_type=sa.DateTime(timezone=True), nullable=False)

    # 2) 조직 복합 고유 키 + 시프트 복합 FK
    with op.batch_alter_table("organizations") as batch_op:
        batch_op.create_unique_constraint("organizations_id_user_id_key", ["id", "user_id"])
        batch_op.create_check_constraint("organizations_hourly_rate_non_negative", "hourly_rate >= 0")
    op.create_index("idx_organizations_user", "organizations", ["user_id"])

    # 3) 시프트 제약 — composite FK and duration checks
    with op.batch_alter_table("shifts") as batch_op:
        batch_op.drop_constraint("shifts_organization_id_fkey", type_="foreignkey")
        batch_op.create_foreign_key(
            "shifts_organization_user_fkey",
            "organizations",
            ["organization_id", "user_id"],
            ["id", "user_id"],
            ondelete="CASCADE",
        )
        batch_op.create_check_constraint(
            "shifts_end_not_before_start_date", "COALESCE(end_date, date) >= date"
        )
        batch_op.create_check_constraint(
            "shifts_duration_positive", _DURATION_POSITIVE[bind.dialect.name]
        )
    op.drop_index("idx_shifts_org", table_name="shifts")
    op.create_index("idx_shifts_org_date", "shifts", ["organization_id", "date"])

    # 4) updated_at 트리거 — PostgreSQL only; the ORM listener covers other dialects
    if bind.dialect.name == "postgresql":
        op.execute("""
            CREATE OR REPLACE FUNCTION set_updated_at()
            RETURNS TRIGGER AS $$
            BEGIN
                NEW.updated_at = GREATEST(now(), OLD.updated_at + interval '1 microsecond');
                RETURN NEW;
            END;
            $$ LANGUAGE plpgsql;
        """)
        for table in _TABLES:
            op.execute(f"""
                CREATE TRIGGER set_{table}_updated_at
                    BEFORE UPDATE ON {table}
                    FOR EACH ROW
                    EXECUTE FUNCTION set_updated_at();
            """)


def downgrade() -> None:
    bind = op.get_bind()

    if bind.dialect.name == "postgresql":
        for table in _TABLES:
            op.execute(f"DROP TRIGGER IF EXISTS set_{table}_updated_at ON {table}")
        op.execute("DROP FUNCTION IF EXISTS set_updated_at()")

    op.drop_index("idx_shifts_org_date", table_name="shifts")
    op.create_index("idx_shifts_org", "shifts", ["organization_id"])
    with op.batch_alter_table("shifts") as batch_op:
        batch_op.drop_constraint("shifts_duration_positive", type_="check")
        batch_op.drop_constraint("shifts_end_not_before_start_date", type_="check")
        batch_op.drop_constraint("shifts_organization_user_fkey", type_="foreignkey")
        batch_op.create_foreign_key(
            "shifts_organization_id_fkey",
            "organizations",
            ["organization_id"],
            ["id"],
            ondelete="CASCADE",
        )

    op.drop_index("idx_organizations_user", table_name="organizations")
    with op.batch_alter_table("organizations") as batch_op:
        batch_op.drop_constraint("organizations_hourly_rate_non_negative", type_="check")
        batch_op.drop_constraint("organizations_id_user_id_key", type_="unique")

    for table in _TABLES:
        with op.batch_alter_table(table) as batch_op:
            batch_op.alter_column("created_at", existing_type=sa.DateTime(timezone=True), nullable=True)
            batch_op.alter_column("updated_at", existing_type=sa.DateTime(timezone=True), nullable=True)
