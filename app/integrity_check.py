"""무결성 사전 검사 스크립트 — 마이그레이션 전에 기존 데이터 위반을 확인.

Integrity precheck script. Runs the same gate as the hardening migration
against the configured database, without changing anything.

Usage:
    python -m app.integrity_check

Exit code 0 when the data is clean, 1 when the migration would be blocked.
"""

import asyncio
import sys

from app.database import async_session, engine
from app.services.integrity_service import integrity_service
from app.utils.exceptions import MigrationBlockedError


async def check() -> int:
    """위반 여부를 출력하고 종료 코드를 반환합니다."""
    try:
        async with async_session() as db:
            report = await integrity_service.assert_migration_safe(db)
    except MigrationBlockedError as exc:
        print(f"Blocked: {exc}")
        return 1
    finally:
        await engine.dispose()

    print(
        "Clean: "
        f"cross_tenant_shifts={report.cross_tenant_shifts}, "
        f"invalid_duration_shifts={report.invalid_duration_shifts}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(check()))
