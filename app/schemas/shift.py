"""시프트 관련 Pydantic 요청/응답 스키마 정의.

Shift Pydantic request/response schema definitions.
The duration rule itself is enforced by the shift service and by the
database; these schemas only describe shapes.
"""

import datetime

from pydantic import BaseModel, Field


class ShiftCreate(BaseModel):
    """시프트 생성 요청 스키마.

    Attributes:
        organization_id: 근무 조직 UUID (Organization, must share the owner)
        title: 제목 (Title)
        date: 시작 날짜 (Start date)
        end_date: 종료 날짜, 생략 시 시작 날짜 (End date; omitted means same day)
        start_time: 시작 시간 (Start time)
        end_time: 종료 시간 (End time)
        notes: 메모 (Notes)
        user_id: 소유자 — 서비스 호출자만 지정 (Owner; service caller only)
    """

    organization_id: str
    title: str = Field(min_length=1, max_length=255)
    date: datetime.date
    end_date: datetime.date | None = None
    start_time: datetime.time
    end_time: datetime.time
    notes: str | None = None
    user_id: str | None = None


class ShiftUpdate(BaseModel):
    """시프트 수정 요청 스키마 (부분 업데이트)."""

    organization_id: str | None = None
    title: str | None = Field(default=None, min_length=1, max_length=255)
    date: datetime.date | None = None
    end_date: datetime.date | None = None
    start_time: datetime.time | None = None
    end_time: datetime.time | None = None
    notes: str | None = None


class ShiftResponse(BaseModel):
    """시프트 응답 스키마 — 계산된 근무 시간 포함."""

    id: str
    user_id: str
    organization_id: str
    title: str
    date: datetime.date
    end_date: datetime.date | None
    start_time: datetime.time
    end_time: datetime.time
    notes: str | None
    hours: float  # 근무 시간 (Computed duration in hours)
    created_at: datetime.datetime
    updated_at: datetime.datetime
