"""시프트 서비스 — 시프트 CRUD 및 근무 시간 검증 비즈니스 로직.

Shift Service — Business logic for shift CRUD.

A shift must end strictly after it starts, measured on full date+time
instants (``end_date`` defaults to ``date``), and must reference an
organization with the same owner. Both rules are checked here before the
write and enforced again by database constraints.
"""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.organization import Organization
from app.models.shift import Shift
from app.policies import Caller, may_own, owner_for_insert
from app.repositories.organization_repository import organization_repository
from app.repositories.shift_repository import shift_repository
from app.schemas.shift import ShiftCreate, ShiftResponse, ShiftUpdate
from app.utils.exceptions import ForbiddenError, IntegrityViolationError, NotFoundError
from app.utils.ids import parse_uuid
from app.utils.shift_time import is_valid_shift_range, shift_hours


class ShiftService:
    """시프트 관련 비즈니스 로직을 처리하는 서비스.

    Service handling shift business logic.
    """

    def _to_response(self, shift: Shift) -> ShiftResponse:
        """시프트 모델을 응답 스키마로 변환합니다 (근무 시간 포함)."""
        return ShiftResponse(
            id=str(shift.id),
            user_id=str(shift.user_id),
            organization_id=str(shift.organization_id),
            title=shift.title,
            date=shift.date,
            end_date=shift.end_date,
            start_time=shift.start_time,
            end_time=shift.end_time,
            notes=shift.notes,
            hours=shift_hours(shift.date, shift.end_date, shift.start_time, shift.end_time),
            created_at=shift.created_at,
            updated_at=shift.updated_at,
        )

    def _validate_range(self, values: dict[str, Any]) -> None:
        """시작/종료 시각 검증.

        Raises:
            IntegrityViolationError: 종료 날짜가 앞서거나 근무 시간이 0 이하
        """
        end_date: date | None = values.get("end_date")
        if end_date is not None and end_date < values["date"]:
            raise IntegrityViolationError("Shift end date cannot precede its start date")
        if not is_valid_shift_range(values["date"], end_date, values["start_time"], values["end_time"]):
            raise IntegrityViolationError("Shift must end after it starts")

    async def _check_organization(
        self,
        db: AsyncSession,
        caller: Caller,
        organization_id: UUID,
        owner_id: UUID,
    ) -> None:
        """조직이 호출자에게 보이고 시프트 소유자와 같은 소유자인지 확인합니다.

        Raises:
            NotFoundError: 조직이 없거나 보이지 않음 (Organization absent or hidden)
            IntegrityViolationError: 조직 소유자가 시프트 소유자와 다름
        """
        org: Organization | None = await organization_repository.get_by_id(db, caller, organization_id)
        if org is None:
            raise NotFoundError("Organization not found")
        if org.user_id != owner_id:
            raise IntegrityViolationError("Organization does not belong to the shift owner")

    async def list_shifts(
        self,
        db: AsyncSession,
        caller: Caller,
        date_from: date | None = None,
        date_to: date | None = None,
        organization_id: str | None = None,
        user_id: str | None = None,
    ) -> list[ShiftResponse]:
        """기간/조직 조건으로 시프트 목록을 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            caller: 요청 호출자 (Request caller)
            date_from: 시작 날짜 하한, 포함 (Inclusive lower bound)
            date_to: 시작 날짜 상한, 포함 (Inclusive upper bound)
            organization_id: 조직 필터 (Organization filter)
            user_id: 소유자 필터 — 서비스 호출자용 (Owner filter, service caller)

        Returns:
            list[ShiftResponse]: 날짜, 시작 시간 순 목록 (Chronological shifts)
        """
        shifts: list[Shift] = await shift_repository.list_in_range(
            db,
            caller,
            date_from=date_from,
            date_to=date_to,
            organization_id=parse_uuid(organization_id, "organization_id") if organization_id else None,
            user_id=parse_uuid(user_id, "user_id") if user_id else None,
        )
        return [self._to_response(s) for s in shifts]

    async def get_shift(
        self,
        db: AsyncSession,
        caller: Caller,
        shift_id: UUID,
    ) -> ShiftResponse:
        """시프트를 조회합니다.

        Raises:
            NotFoundError: 없거나 다른 사용자의 시프트 (Absent or not the caller's)
        """
        shift: Shift | None = await shift_repository.get_by_id(db, caller, shift_id)
        if shift is None:
            raise NotFoundError("Shift not found")
        return self._to_response(shift)

    async def create_shift(
        self,
        db: AsyncSession,
        caller: Caller,
        data: ShiftCreate,
    ) -> ShiftResponse:
        """시프트를 생성합니다.

        Create a shift after validating its time range and its organization.

        Raises:
            ForbiddenError: 다른 사용자 소유로 생성 시도 (Insert for another owner)
            NotFoundError: 조직이 없거나 보이지 않음 (Organization absent or hidden)
            IntegrityViolationError: 근무 시간 또는 조직 소유자 위반
        """
        requested: UUID | None = parse_uuid(data.user_id, "user_id") if data.user_id else None
        owner: UUID = owner_for_insert(caller, requested)
        if not may_own(caller, owner):
            raise ForbiddenError("Cannot create a shift for another user")

        obj_data: dict[str, Any] = data.model_dump(exclude={"user_id"})
        obj_data["user_id"] = owner
        obj_data["organization_id"] = parse_uuid(data.organization_id, "organization_id")
        self._validate_range(obj_data)
        await self._check_organization(db, caller, obj_data["organization_id"], owner)

        shift: Shift | None = await shift_repository.create(db, caller, obj_data)
        if shift is None:
            raise ForbiddenError("Cannot create a shift for another user")
        return self._to_response(shift)

    async def update_shift(
        self,
        db: AsyncSession,
        caller: Caller,
        shift_id: UUID,
        data: ShiftUpdate,
    ) -> ShiftResponse:
        """시프트를 수정합니다 (부분 업데이트).

        The duration rule is checked on the merged row: an update that only
        moves ``end_time`` is validated against the stored start.
        ``end_date`` may be cleared by sending ``null``.

        Raises:
            NotFoundError: 없거나 다른 사용자의 시프트/조직 (Absent or hidden)
            IntegrityViolationError: 근무 시간 또는 조직 소유자 위반
        """
        shift: Shift | None = await shift_repository.get_by_id(db, caller, shift_id)
        if shift is None:
            raise NotFoundError("Shift not found")

        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)
        # end_date와 notes만 null로 지울 수 있음 — Only end_date and notes are nullable
        update_data = {
            key: value
            for key, value in update_data.items()
            if value is not None or key in ("end_date", "notes")
        }
        if "organization_id" in update_data:
            update_data["organization_id"] = parse_uuid(update_data["organization_id"], "organization_id")

        merged: dict[str, Any] = {
            "date": update_data.get("date", shift.date),
            "end_date": update_data.get("end_date", shift.end_date),
            "start_time": update_data.get("start_time", shift.start_time),
            "end_time": update_data.get("end_time", shift.end_time),
        }
        self._validate_range(merged)
        if "organization_id" in update_data and update_data["organization_id"] != shift.organization_id:
            await self._check_organization(db, caller, update_data["organization_id"], shift.user_id)

        updated: Shift | None = await shift_repository.update(db, caller, shift_id, update_data)
        if updated is None:
            raise NotFoundError("Shift not found")
        return self._to_response(updated)

    async def delete_shift(
        self,
        db: AsyncSession,
        caller: Caller,
        shift_id: UUID,
    ) -> None:
        """시프트를 삭제합니다.

        Raises:
            NotFoundError: 없거나 다른 사용자의 시프트 (Absent or not the caller's)
        """
        deleted: bool = await shift_repository.delete(db, caller, shift_id)
        if not deleted:
            raise NotFoundError("Shift not found")


# 싱글턴 인스턴스 — Singleton instance
shift_service: ShiftService = ShiftService()
