"""무결성 서비스 — 마이그레이션 사전 검사 게이트.

Integrity Service — the precheck gate run before the hardening migration
adds the tenant-consistency foreign key and the duration checks.

If existing rows already violate a rule, the gate raises
``MigrationBlockedError`` with the violation count and a remediation hint,
and the migration applies nothing.
"""

from dataclasses import dataclass

from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.integrity_repository import (
    cross_tenant_shifts_query,
    integrity_repository,
    invalid_duration_shifts_query,
)
from app.utils.exceptions import MigrationBlockedError
from app.utils.logger import get_logger

logger = get_logger(__name__)

CROSS_TENANT_HINT: str = (
    "Reassign or delete shifts whose organization belongs to a different user "
    "before applying the migration."
)
INVALID_DURATION_HINT: str = (
    "Fix shifts whose end is not after their start (set end_date for overnight "
    "shifts) or delete them before applying the migration."
)


@dataclass(frozen=True)
class IntegrityReport:
    """위반 행 집계 결과."""

    cross_tenant_shifts: int
    invalid_duration_shifts: int

    @property
    def is_clean(self) -> bool:
        return self.cross_tenant_shifts == 0 and self.invalid_duration_shifts == 0


def raise_for_report(report: IntegrityReport) -> None:
    """위반이 있으면 MigrationBlockedError를 발생시킵니다.

    Cross-tenant references are reported first.

    Raises:
        MigrationBlockedError: 위반 행 존재 (Violating rows exist)
    """
    if report.cross_tenant_shifts:
        logger.error("migration blocked", extra={"rule": "cross_tenant", "count": report.cross_tenant_shifts})
        raise MigrationBlockedError(
            f"Found {report.cross_tenant_shifts} shift(s) whose organization belongs to another user.",
            count=report.cross_tenant_shifts,
            hint=CROSS_TENANT_HINT,
        )
    if report.invalid_duration_shifts:
        logger.error(
            "migration blocked",
            extra={"rule": "invalid_duration", "count": report.invalid_duration_shifts},
        )
        raise MigrationBlockedError(
            f"Found {report.invalid_duration_shifts} shift(s) that do not end after they start.",
            count=report.invalid_duration_shifts,
            hint=INVALID_DURATION_HINT,
        )


class IntegrityService:
    """무결성 사전 검사 서비스."""

    async def collect_violations(self, db: AsyncSession) -> IntegrityReport:
        """현재 데이터의 위반 행 수를 집계합니다."""
        return IntegrityReport(
            cross_tenant_shifts=await integrity_repository.count_cross_tenant_shifts(db),
            invalid_duration_shifts=await integrity_repository.count_invalid_duration_shifts(db),
        )

    async def assert_migration_safe(self, db: AsyncSession) -> IntegrityReport:
        """위반이 없으면 보고서를 반환하고, 있으면 중단합니다.

        Raises:
            MigrationBlockedError: 위반 행 존재 (Violating rows exist)
        """
        report: IntegrityReport = await self.collect_violations(db)
        raise_for_report(report)
        return report

    def assert_migration_safe_sync(self, connection: Connection) -> IntegrityReport:
        """Alembic 마이그레이션 연결(동기)에서 같은 검사를 실행합니다.

        Raises:
            MigrationBlockedError: 위반 행 존재 (Violating rows exist)
        """
        report = IntegrityReport(
            cross_tenant_shifts=connection.execute(cross_tenant_shifts_query()).scalar() or 0,
            invalid_duration_shifts=connection.execute(invalid_duration_shifts_query()).scalar() or 0,
        )
        raise_for_report(report)
        return report


# 싱글턴 인스턴스 — Singleton instance
integrity_service: IntegrityService = IntegrityService()
