"""시프트 시간 계산 유틸리티.

Shift time arithmetic shared by validation, responses and analytics.

Hours are always computed from full date+time instants:

    hours = ((COALESCE(end_date, date) + end_time) - (date + start_time)) / 3600 s

Reporting windows are half-open ``[start, end)`` date ranges. A financial
year starts on July 1 and is identified by its start year, so FY 2024 is
``[2024-07-01, 2025-07-01)``.
"""

from datetime import date, datetime, time

from app.utils.exceptions import BadRequestError

# 회계연도 시작 월 — Financial year starts on July 1
FINANCIAL_YEAR_START_MONTH: int = 7


def shift_bounds(
    start_date: date,
    end_date: date | None,
    start_time: time,
    end_time: time,
) -> tuple[datetime, datetime]:
    """시프트 시작/종료 시각을 반환합니다. end_date가 없으면 시작 날짜를 사용."""
    return (
        datetime.combine(start_date, start_time),
        datetime.combine(end_date or start_date, end_time),
    )


def is_valid_shift_range(
    start_date: date,
    end_date: date | None,
    start_time: time,
    end_time: time,
) -> bool:
    """종료 날짜가 시작 날짜 이후이고 종료 시각이 시작 시각보다 엄격히 늦은지 확인합니다.

    No implicit overnight interpretation: 22:00 → 06:00 on the same date
    is invalid; it needs ``end_date`` set to the next day.
    """
    if end_date is not None and end_date < start_date:
        return False
    start, end = shift_bounds(start_date, end_date, start_time, end_time)
    return end > start


def shift_hours(
    start_date: date,
    end_date: date | None,
    start_time: time,
    end_time: time,
) -> float:
    """시프트 근무 시간(시간 단위)."""
    start, end = shift_bounds(start_date, end_date, start_time, end_time)
    return (end - start).total_seconds() / 3600


def month_window(year: int, month: int) -> tuple[date, date]:
    """월 구간 [해당 월 1일, 다음 달 1일).

    Raises:
        BadRequestError: month가 1~12 범위 밖이거나 연도가 달력 범위 밖일 때
    """
    if month < 1 or month > 12:
        raise BadRequestError("month must be between 1 and 12")
    try:
        start = date(year, month, 1)
        end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    except ValueError:
        raise BadRequestError("year is out of range")
    return start, end


def financial_year_window(fy_start_year: int) -> tuple[date, date]:
    """회계연도 구간 [fy년 7월 1일, fy+1년 7월 1일).

    Raises:
        BadRequestError: 연도가 달력 범위 밖일 때 (year out of calendar range)
    """
    try:
        return (
            date(fy_start_year, FINANCIAL_YEAR_START_MONTH, 1),
            date(fy_start_year + 1, FINANCIAL_YEAR_START_MONTH, 1),
        )
    except ValueError:
        raise BadRequestError("fy_start_year is out of range")


def financial_year_of(day: date) -> int:
    """날짜가 속한 회계연도의 시작 연도. 6월 30일은 전년도 FY, 7월 1일은 해당 연도 FY."""
    if day.month >= FINANCIAL_YEAR_START_MONTH:
        return day.year
    return day.year - 1
