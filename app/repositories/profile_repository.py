"""프로필 레포지토리 — 프로필 CRUD 및 신원 프로비저닝 쿼리.

Profile Repository — CRUD queries for profiles.
Tenants have no DELETE policy on profiles; only the service caller
removes them, following identity deletion.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.profile import Profile
from app.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """프로필 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    allow_delete = False

    def __init__(self) -> None:
        super().__init__(Profile)

    async def get_for_provisioning(
        self,
        db: AsyncSession,
        identity_id: UUID,
    ) -> Profile | None:
        """프로비저닝용 조회 — 정책 없이 기본 키로 조회합니다.

        Unscoped primary key lookup used only by the identity hook, which
        runs with service privileges.
        """
        return await db.get(Profile, identity_id, populate_existing=True)


# 싱글턴 인스턴스 — Singleton instance
profile_repository: ProfileRepository = ProfileRepository()
