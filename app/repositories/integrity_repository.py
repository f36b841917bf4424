"""무결성 검사 레포지토리 — 마이그레이션 사전 검사용 위반 행 집계.

Integrity Repository — counts rows that would violate the hardened
tenant and duration constraints. The statements are plain ``Select``
objects so the same checks run on an async session (service, CLI) and on
Alembic's synchronous migration connection.
"""

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.organization import Organization
from app.models.shift import Shift
from app.repositories.expressions import shift_duration_seconds


def cross_tenant_shifts_query() -> Select:
    """다른 소유자의 조직을 참조하는 시프트 수."""
    return (
        select(func.count())
        .select_from(Shift)
        .join(Organization, Organization.id == Shift.organization_id)
        .where(Shift.user_id != Organization.user_id)
    )


def invalid_duration_shifts_query() -> Select:
    """종료 날짜가 시작 날짜보다 앞서거나 근무 시간이 0 이하인 시프트 수."""
    return (
        select(func.count())
        .select_from(Shift)
        .where(
            or_(
                func.coalesce(Shift.end_date, Shift.date) < Shift.date,
                shift_duration_seconds() <= 0,
            )
        )
    )


class IntegrityRepository:
    """위반 행 집계 (async)."""

    async def count_cross_tenant_shifts(self, db: AsyncSession) -> int:
        return (await db.execute(cross_tenant_shifts_query())).scalar() or 0

    async def count_invalid_duration_shifts(self, db: AsyncSession) -> int:
        return (await db.execute(invalid_duration_shifts_query())).scalar() or 0


# 싱글턴 인스턴스 — Singleton instance
integrity_repository: IntegrityRepository = IntegrityRepository()
