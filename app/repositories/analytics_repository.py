"""분석 레포지토리 — 기간별 근무 시간 집계 쿼리.

Analytics Repository — aggregation queries over a half-open date window.

These queries run for an owner that the analytics service has already
authorized; they filter on that owner explicitly instead of on the
caller's row policy, so the service caller can aggregate any tenant.
"""

from datetime import date
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Row, Select, and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.organization import Organization
from app.models.shift import Shift
from app.repositories.expressions import shift_duration_seconds


class AnalyticsRepository:
    """근무 시간 집계 쿼리 모음."""

    async def summarize_by_organization(
        self,
        db: AsyncSession,
        owner_id: UUID,
        window_start: date,
        window_end: date,
    ) -> Sequence[Row[Any]]:
        """조직별 시프트 수와 총 근무 시간(초)을 집계합니다.

        Aggregate shift count and total seconds per organization of
        ``owner_id`` for shifts with ``window_start <= date < window_end``.
        Organizations without shifts in the window are kept (LEFT JOIN) with
        zero count and zero seconds. Ordered by total time descending, then
        organization name.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            owner_id: 인가된 대상 소유자 (Already-authorized target owner)
            window_start: 구간 시작, 포함 (Inclusive window start)
            window_end: 구간 끝, 제외 (Exclusive window end)

        Returns:
            Sequence[Row]: organization_id, organization_name, organization_color,
                           hourly_rate, shift_count, total_seconds
        """
        total_seconds = func.coalesce(func.sum(shift_duration_seconds()), 0).label("total_seconds")
        query: Select = (
            select(
                Organization.id.label("organization_id"),
                Organization.name.label("organization_name"),
                Organization.color.label("organization_color"),
                Organization.hourly_rate.label("hourly_rate"),
                func.count(Shift.id).label("shift_count"),
                total_seconds,
            )
            .select_from(Organization)
            .outerjoin(
                Shift,
                and_(
                    Shift.organization_id == Organization.id,
                    Shift.user_id == Organization.user_id,
                    Shift.date >= window_start,
                    Shift.date < window_end,
                ),
            )
            .where(Organization.user_id == owner_id)
            .group_by(
                Organization.id,
                Organization.name,
                Organization.color,
                Organization.hourly_rate,
            )
            .order_by(total_seconds.desc(), Organization.name)
        )
        result = await db.execute(query)
        return result.all()

    async def list_shifts_in_window(
        self,
        db: AsyncSession,
        owner_id: UUID,
        window_start: date,
        window_end: date,
    ) -> Sequence[Row[Any]]:
        """구간 내 시프트를 조직 정보와 근무 시간(초)과 함께 시간순으로 조회합니다.

        Returns:
            Sequence[Row]: shift columns plus organization_name,
                           organization_color and duration_seconds
        """
        query: Select = (
            select(
                Shift.id,
                Shift.organization_id,
                Organization.name.label("organization_name"),
                Organization.color.label("organization_color"),
                Shift.title,
                Shift.date,
                Shift.end_date,
                Shift.start_time,
                Shift.end_time,
                shift_duration_seconds().label("duration_seconds"),
            )
            .join(
                Organization,
                and_(
                    Organization.id == Shift.organization_id,
                    Organization.user_id == Shift.user_id,
                ),
            )
            .where(
                Shift.user_id == owner_id,
                Shift.date >= window_start,
                Shift.date < window_end,
            )
            .order_by(Shift.date, Shift.start_time)
        )
        result = await db.execute(query)
        return result.all()


# 싱글턴 인스턴스 — Singleton instance
analytics_repository: AnalyticsRepository = AnalyticsRepository()
