"""조직 서비스 — 조직 CRUD 비즈니스 로직.

Organization Service — Business logic for organization CRUD.
Every operation is scoped by the caller; rows of other tenants behave as
if they did not exist.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.organization import Organization
from app.policies import Caller, owner_for_insert
from app.repositories.organization_repository import organization_repository
from app.schemas.organization import (
    OrganizationCreate,
    OrganizationResponse,
    OrganizationUpdate,
)
from app.utils.exceptions import ForbiddenError, NotFoundError
from app.utils.ids import parse_uuid


class OrganizationService:
    """조직 관련 비즈니스 로직을 처리하는 서비스.

    Service handling organization business logic.
    """

    def _to_response(self, org: Organization) -> OrganizationResponse:
        """조직 모델을 응답 스키마로 변환합니다."""
        return OrganizationResponse(
            id=str(org.id),
            user_id=str(org.user_id),
            name=org.name,
            color=org.color,
            hourly_rate=float(org.hourly_rate),
            created_at=org.created_at,
            updated_at=org.updated_at,
        )

    async def list_organizations(
        self,
        db: AsyncSession,
        caller: Caller,
        user_id: str | None = None,
    ) -> list[OrganizationResponse]:
        """호출자에게 보이는 조직 목록을 이름순으로 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            caller: 요청 호출자 (Request caller)
            user_id: 소유자 필터 — 서비스 호출자용 (Owner filter, service caller)

        Returns:
            list[OrganizationResponse]: 조직 목록 (Organizations ordered by name)
        """
        owner: UUID | None = parse_uuid(user_id, "user_id") if user_id else None
        orgs = await organization_repository.list_for_owner(db, caller, owner)
        return [self._to_response(org) for org in orgs]

    async def get_organization(
        self,
        db: AsyncSession,
        caller: Caller,
        organization_id: UUID,
    ) -> OrganizationResponse:
        """조직을 조회합니다.

        Raises:
            NotFoundError: 없거나 다른 사용자의 조직 (Absent or not the caller's)
        """
        org: Organization | None = await organization_repository.get_by_id(db, caller, organization_id)
        if org is None:
            raise NotFoundError("Organization not found")
        return self._to_response(org)

    async def create_organization(
        self,
        db: AsyncSession,
        caller: Caller,
        data: OrganizationCreate,
    ) -> OrganizationResponse:
        """조직을 생성합니다.

        Create an organization owned by the caller (or, for the service
        caller, by ``data.user_id``).

        Raises:
            ForbiddenError: 다른 사용자 소유로 생성 시도 (Insert for another owner)
            DuplicateError: 같은 이름의 조직 존재 (Name already used by this owner)
        """
        requested: UUID | None = parse_uuid(data.user_id, "user_id") if data.user_id else None
        owner: UUID = owner_for_insert(caller, requested)

        obj_data: dict[str, Any] = data.model_dump(exclude={"user_id"})
        obj_data["user_id"] = owner
        org: Organization | None = await organization_repository.create(db, caller, obj_data)
        if org is None:
            raise ForbiddenError("Cannot create an organization for another user")
        return self._to_response(org)

    async def update_organization(
        self,
        db: AsyncSession,
        caller: Caller,
        organization_id: UUID,
        data: OrganizationUpdate,
    ) -> OrganizationResponse:
        """조직을 수정합니다 (부분 업데이트).

        Raises:
            NotFoundError: 없거나 다른 사용자의 조직 (Absent or not the caller's)
            DuplicateError: 같은 이름의 조직 존재 (Name already used by this owner)
        """
        update_data: dict[str, Any] = {
            key: value for key, value in data.model_dump(exclude_unset=True).items() if value is not None
        }
        org: Organization | None = await organization_repository.update(
            db, caller, organization_id, update_data
        )
        if org is None:
            raise NotFoundError("Organization not found")
        return self._to_response(org)

    async def delete_organization(
        self,
        db: AsyncSession,
        caller: Caller,
        organization_id: UUID,
    ) -> None:
        """조직을 삭제합니다. 소속 시프트도 함께 삭제됩니다.

        Raises:
            NotFoundError: 없거나 다른 사용자의 조직 (Absent or not the caller's)
        """
        deleted: bool = await organization_repository.delete(db, caller, organization_id)
        if not deleted:
            raise NotFoundError("Organization not found")


# 싱글턴 인스턴스 — Singleton instance
organization_service: OrganizationService = OrganizationService()
