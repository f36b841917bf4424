"""조직 라우터 — 조직 CRUD 엔드포인트.

Organization Router — CRUD endpoints for organizations.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import CurrentCaller
from app.database import get_db
from app.schemas.organization import (
    OrganizationCreate,
    OrganizationResponse,
    OrganizationUpdate,
)
from app.services.organization_service import organization_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[OrganizationResponse])
async def list_organizations(
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: CurrentCaller,
    user_id: Annotated[str | None, Query()] = None,
) -> list[OrganizationResponse]:
    """조직 목록을 이름순으로 조회합니다.

    List the caller's organizations ordered by name. The service caller
    may narrow the list to one owner with ``user_id``.
    """
    return await organization_service.list_organizations(db, caller, user_id)


@router.post("", response_model=OrganizationResponse, status_code=status.HTTP_201_CREATED)
async def create_organization(
    data: OrganizationCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: CurrentCaller,
) -> OrganizationResponse:
    """조직을 생성합니다."""
    result: OrganizationResponse = await organization_service.create_organization(db, caller, data)
    await db.commit()
    return result


@router.get("/{organization_id}", response_model=OrganizationResponse)
async def get_organization(
    organization_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: CurrentCaller,
) -> OrganizationResponse:
    """조직을 조회합니다."""
    return await organization_service.get_organization(db, caller, organization_id)


@router.patch("/{organization_id}", response_model=OrganizationResponse)
async def update_organization(
    organization_id: UUID,
    data: OrganizationUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: CurrentCaller,
) -> OrganizationResponse:
    """조직을 수정합니다."""
    result: OrganizationResponse = await organization_service.update_organization(
        db, caller, organization_id, data
    )
    await db.commit()
    return result


@router.delete("/{organization_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_organization(
    organization_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: CurrentCaller,
) -> None:
    """조직을 삭제합니다. 소속 시프트도 함께 삭제됩니다.

    Delete an organization and, by cascade, its shifts.
    """
    await organization_service.delete_organization(db, caller, organization_id)
    await db.commit()
