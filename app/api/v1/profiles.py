"""프로필 라우터 — 프로필 조회 및 수정.

Profile Router — Retrieve and update a profile.
A tenant can only reach its own profile; other ids respond 404.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import CurrentCaller
from app.database import get_db
from app.schemas.profile import ProfileResponse, ProfileUpdate
from app.services.profile_service import profile_service

router: APIRouter = APIRouter()


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(
    profile_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: CurrentCaller,
) -> ProfileResponse:
    """프로필을 조회합니다."""
    return await profile_service.get_profile(db, caller, profile_id)


@router.patch("/{profile_id}", response_model=ProfileResponse)
async def update_profile(
    profile_id: UUID,
    data: ProfileUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: CurrentCaller,
) -> ProfileResponse:
    """프로필을 수정합니다.

    Update email and/or display name.
    """
    result: ProfileResponse = await profile_service.update_profile(db, caller, profile_id, data)
    await db.commit()
    return result
