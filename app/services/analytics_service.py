"""분석 서비스 — 월간/회계연도 근무 시간 요약.

Analytics Service — monthly and financial-year work summaries.

Each operation first resolves whose data it may read
(``resolve_target_owner``) and validates its arguments, then runs a single
read-only aggregation for that owner. Windows are half-open date ranges
over a shift's start date.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Row
from sqlalchemy.ext.asyncio import AsyncSession

from app.policies import Caller, resolve_target_owner
from app.repositories.analytics_repository import analytics_repository
from app.schemas.analytics import FinancialYearInfo, FinancialYearShift, OrganizationSummary
from app.utils.shift_time import financial_year_of, financial_year_window, month_window

# 초 → 시간 — Seconds per hour
_SECONDS_PER_HOUR: int = 3600


def _hours(seconds: Any) -> float:
    return float(seconds or 0) / _SECONDS_PER_HOUR


class AnalyticsService:
    """근무 시간 집계 비즈니스 로직을 처리하는 서비스."""

    def _to_summaries(self, rows: Sequence[Row[Any]]) -> list[OrganizationSummary]:
        summaries: list[OrganizationSummary] = []
        for row in rows:
            total_hours: float = _hours(row.total_seconds)
            hourly_rate: Decimal = Decimal(row.hourly_rate or 0)
            summaries.append(
                OrganizationSummary(
                    organization_id=str(row.organization_id),
                    organization_name=row.organization_name,
                    organization_color=row.organization_color,
                    hourly_rate=float(hourly_rate),
                    shift_count=int(row.shift_count),
                    total_hours=total_hours,
                    estimated_earnings=round(total_hours * float(hourly_rate), 2),
                )
            )
        return summaries

    async def monthly_summary(
        self,
        db: AsyncSession,
        caller: Caller,
        owner_id: UUID | None,
        year: int,
        month: int,
    ) -> list[OrganizationSummary]:
        """월간 조직별 요약.

        Per-organization shift count and hours for one calendar month.
        Every organization of the owner appears, including ones with no
        shifts that month.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            caller: 요청 호출자 (Request caller)
            owner_id: 대상 소유자 (Target owner)
            year: 연도 (Calendar year)
            month: 월, 1~12 (Month, 1-12)

        Returns:
            list[OrganizationSummary]: total_hours 내림차순, 이름순

        Raises:
            UnauthorizedError / ForbiddenError / BadRequestError: 대상 소유자 검증 실패
            BadRequestError: month가 1~12 범위 밖 (Month out of range)
        """
        target: UUID = resolve_target_owner(caller, owner_id)
        start, end = month_window(year, month)
        rows = await analytics_repository.summarize_by_organization(db, target, start, end)
        return self._to_summaries(rows)

    async def financial_year_summary(
        self,
        db: AsyncSession,
        caller: Caller,
        owner_id: UUID | None,
        fy_start_year: int,
    ) -> list[OrganizationSummary]:
        """회계연도 조직별 요약 — [fy년 7월 1일, fy+1년 7월 1일)."""
        target: UUID = resolve_target_owner(caller, owner_id)
        start, end = financial_year_window(fy_start_year)
        rows = await analytics_repository.summarize_by_organization(db, target, start, end)
        return self._to_summaries(rows)

    async def shifts_by_financial_year(
        self,
        db: AsyncSession,
        caller: Caller,
        owner_id: UUID | None,
        fy_start_year: int,
    ) -> list[FinancialYearShift]:
        """회계연도 시프트 목록 — 날짜, 시작 시간 순."""
        target: UUID = resolve_target_owner(caller, owner_id)
        start, end = financial_year_window(fy_start_year)
        rows = await analytics_repository.list_shifts_in_window(db, target, start, end)
        return [
            FinancialYearShift(
                id=str(row.id),
                organization_id=str(row.organization_id),
                organization_name=row.organization_name,
                organization_color=row.organization_color,
                title=row.title,
                date=row.date,
                end_date=row.end_date,
                start_time=row.start_time,
                end_time=row.end_time,
                hours_worked=_hours(row.duration_seconds),
            )
            for row in rows
        ]

    def financial_year_info(self, fy_start_year: int) -> FinancialYearInfo:
        """회계연도 정보."""
        start, end = financial_year_window(fy_start_year)
        return FinancialYearInfo(
            fy_start_year=fy_start_year,
            start=start,
            end=end,
            label=f"FY {fy_start_year}-{fy_start_year + 1}",
        )

    def current_financial_year(self, today: date | None = None) -> FinancialYearInfo:
        """오늘이 속한 회계연도."""
        return self.financial_year_info(financial_year_of(today or date.today()))


# 싱글턴 인스턴스 — Singleton instance
analytics_service: AnalyticsService = AnalyticsService()
