"""신원 이벤트 웹훅 라우터 — 서비스 역할 전용.

Identity hook router — called by the identity provider's backend with a
service_role token when an identity is created or removed.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import ServiceOnly
from app.database import get_db
from app.schemas.profile import IdentityEvent, ProfileResponse
from app.services.profile_service import profile_service

router: APIRouter = APIRouter()


@router.post("/identities", response_model=ProfileResponse)
async def identity_created(
    event: IdentityEvent,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: ServiceOnly,
) -> ProfileResponse:
    """신원 생성 이벤트 — 프로필을 생성하거나 갱신합니다.

    Safe to deliver more than once.
    """
    result: ProfileResponse = await profile_service.provision_identity(db, event)
    await db.commit()
    return result


@router.delete("/identities/{identity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def identity_deleted(
    identity_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: ServiceOnly,
) -> None:
    """신원 삭제 이벤트 — 프로필과 그 조직/시프트를 삭제합니다."""
    await profile_service.delete_identity(db, caller, identity_id)
    await db.commit()
