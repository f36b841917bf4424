"""분석 라우터 — 월간/회계연도 근무 요약.

Analytics Router — read-only monthly and financial-year summaries.
Anonymous callers are rejected by the route guard; the service then
checks that ``owner_id`` is the caller, or requires it from the service
role (400 when omitted).
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import CurrentCaller
from app.database import get_db
from app.schemas.analytics import FinancialYearInfo, FinancialYearShift, OrganizationSummary
from app.services.analytics_service import analytics_service

router: APIRouter = APIRouter()


@router.get("/monthly-summary", response_model=list[OrganizationSummary])
async def monthly_summary(
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: CurrentCaller,
    year: Annotated[int, Query()],
    month: Annotated[int, Query()],
    owner_id: Annotated[UUID | None, Query()] = None,
) -> list[OrganizationSummary]:
    """월간 조직별 근무 요약.

    Per-organization shift count, hours and estimated earnings for one
    month. ``month`` outside 1-12 responds 400.
    """
    return await analytics_service.monthly_summary(db, caller, owner_id, year, month)


@router.get("/financial-years/current", response_model=FinancialYearInfo)
async def current_financial_year(caller: CurrentCaller) -> FinancialYearInfo:
    """오늘이 속한 회계연도 (7월 1일 시작)."""
    return analytics_service.current_financial_year()


@router.get("/financial-years/{fy_start_year}/summary", response_model=list[OrganizationSummary])
async def financial_year_summary(
    fy_start_year: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: CurrentCaller,
    owner_id: Annotated[UUID | None, Query()] = None,
) -> list[OrganizationSummary]:
    """회계연도 조직별 근무 요약."""
    return await analytics_service.financial_year_summary(db, caller, owner_id, fy_start_year)


@router.get("/financial-years/{fy_start_year}/shifts", response_model=list[FinancialYearShift])
async def shifts_by_financial_year(
    fy_start_year: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    caller: CurrentCaller,
    owner_id: Annotated[UUID | None, Query()] = None,
) -> list[FinancialYearShift]:
    """회계연도 시프트 목록 — 날짜, 시작 시간 순."""
    return await analytics_service.shifts_by_financial_year(db, caller, owner_id, fy_start_year)
