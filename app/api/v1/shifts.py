"""시프트 라우터 — 시프트 CRUD 엔드포인트.

Shift Router — CRUD endpoints for shifts, with date-range listing.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import CurrentCaller
from app.database import get_db
from app.schemas.shift import ShiftCreate, ShiftResponse, ShiftUpdate
from app.services.shift_service import shift_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ShiftResponse])
async def list_shifts(
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: CurrentCaller,
    date_from: Annotated[date | None, Query()] = None,
    date_to: Annotated[date | None, Query()] = None,
    organization_id: Annotated[str | None, Query()] = None,
    user_id: Annotated[str | None, Query()] = None,
) -> list[ShiftResponse]:
    """시프트 목록을 조회합니다.

    List shifts with ``date_from <= date <= date_to``, ordered by date and
    start time.
    """
    return await shift_service.list_shifts(
        db,
        caller,
        date_from=date_from,
        date_to=date_to,
        organization_id=organization_id,
        user_id=user_id,
    )


@router.post("", response_model=ShiftResponse, status_code=status.HTTP_201_CREATED)
async def create_shift(
    data: ShiftCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: CurrentCaller,
) -> ShiftResponse:
    """시프트를 생성합니다."""
    result: ShiftResponse = await shift_service.create_shift(db, caller, data)
    await db.commit()
    return result


@router.get("/{shift_id}", response_model=ShiftResponse)
async def get_shift(
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: CurrentCaller,
) -> ShiftResponse:
    """시프트를 조회합니다."""
    return await shift_service.get_shift(db, caller, shift_id)


@router.patch("/{shift_id}", response_model=ShiftResponse)
async def update_shift(
    shift_id: UUID,
    data: ShiftUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: CurrentCaller,
) -> ShiftResponse:
    """시프트를 수정합니다."""
    result: ShiftResponse = await shift_service.update_shift(db, caller, shift_id, data)
    await db.commit()
    return result


@router.delete("/{shift_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shift(
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: CurrentCaller,
) -> None:
    """시프트를 삭제합니다."""
    await shift_service.delete_shift(db, caller, shift_id)
    await db.commit()
