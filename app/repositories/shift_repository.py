"""시프트 레포지토리 — 시프트 CRUD 및 기간 조회 쿼리.

Shift Repository — CRUD queries for shifts.
Extends BaseRepository with date-range listing for calendar views.
"""

from datetime import date
from uuid import UUID

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.shift import Shift
from app.policies import Caller
from app.repositories.base import BaseRepository


class ShiftRepository(BaseRepository[Shift]):
    """시프트 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the shifts table.
    """

    def __init__(self) -> None:
        super().__init__(Shift)

    async def list_in_range(
        self,
        db: AsyncSession,
        caller: Caller,
        date_from: date | None = None,
        date_to: date | None = None,
        organization_id: UUID | None = None,
        user_id: UUID | None = None,
    ) -> list[Shift]:
        """기간 내 시프트를 시간순으로 조회합니다.

        List visible shifts whose start date falls in ``[date_from, date_to]``
        (both bounds inclusive, either optional), ordered by date then
        start time.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            caller: 요청 호출자 (Request caller)
            date_from: 시작 날짜 하한 (Inclusive lower bound on date)
            date_to: 시작 날짜 상한 (Inclusive upper bound on date)
            organization_id: 조직 필터 (Organization filter)
            user_id: 소유자 필터 (Owner filter, for the service caller)

        Returns:
            list[Shift]: 시프트 목록 (Chronological list of shifts)
        """
        query: Select = self.scoped_query(caller)
        if date_from is not None:
            query = query.where(Shift.date >= date_from)
        if date_to is not None:
            query = query.where(Shift.date <= date_to)
        if organization_id is not None:
            query = query.where(Shift.organization_id == organization_id)
        if user_id is not None:
            query = query.where(Shift.user_id == user_id)

        result = await db.execute(query.order_by(Shift.date, Shift.start_time))
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
shift_repository: ShiftRepository = ShiftRepository()
