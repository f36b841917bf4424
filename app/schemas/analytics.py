"""분석 관련 Pydantic 응답 스키마 정의.

Analytics Pydantic response schema definitions.
"""

from datetime import date, time

from pydantic import BaseModel


class OrganizationSummary(BaseModel):
    """조직별 기간 요약 — 월간/회계연도 요약의 행.

    Attributes:
        organization_id: 조직 UUID
        organization_name: 조직 이름
        organization_color: 조직 색상
        hourly_rate: 시급
        shift_count: 기간 내 시프트 수 (0 포함)
        total_hours: 총 근무 시간
        estimated_earnings: 예상 수입 = total_hours × hourly_rate
    """

    organization_id: str
    organization_name: str
    organization_color: str
    hourly_rate: float
    shift_count: int
    total_hours: float
    estimated_earnings: float


class FinancialYearShift(BaseModel):
    """회계연도 시프트 목록의 행."""

    id: str
    organization_id: str
    organization_name: str
    organization_color: str
    title: str
    date: date
    end_date: date | None
    start_time: time
    end_time: time
    hours_worked: float


class FinancialYearInfo(BaseModel):
    """회계연도 정보 — 시작 연도와 반개구간 [start, end)."""

    fy_start_year: int
    start: date
    end: date
    label: str  # 예: "FY 2024-2025"
