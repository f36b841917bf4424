"""조직 레포지토리 — 조직 CRUD 쿼리.

Organization Repository — CRUD queries for organizations.
Inherits tenant-scoped CRUD from BaseRepository.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.organization import Organization
from app.policies import Caller
from app.repositories.base import BaseRepository


class OrganizationRepository(BaseRepository[Organization]):
    """조직 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the organizations table.
    """

    def __init__(self) -> None:
        super().__init__(Organization)

    async def list_for_owner(
        self,
        db: AsyncSession,
        caller: Caller,
        user_id: UUID | None = None,
    ) -> Sequence[Organization]:
        """호출자에게 보이는 조직을 이름순으로 조회합니다.

        List visible organizations ordered by name, optionally narrowed to
        one owner (meaningful for the service caller).
        """
        return await self.get_all(
            db,
            caller,
            filters={"user_id": user_id},
            order_by=Organization.name,
        )


# 싱글턴 인스턴스 — Singleton instance
organization_repository: OrganizationRepository = OrganizationRepository()
