"""시프트 SQLAlchemy ORM 모델 정의.

Shift ORM model — a scheduled work interval.

A shift spans ``(date, start_time)`` to ``(COALESCE(end_date, date), end_time)``.
The date component is authoritative: there is no implicit overnight
interpretation, so a shift ending the next morning must carry the next
day in ``end_date``.

Constraints:
    shifts_organization_user_fkey: (organization_id, user_id) → organizations(id, user_id)
    shifts_end_not_before_start_date: COALESCE(end_date, date) >= date
    shifts_duration_positive: 종료 시각 > 시작 시각 (end instant strictly after start instant)
"""

import datetime
import uuid

from sqlalchemy import (
    CheckConstraint,
    Date,
    ForeignKey,
    ForeignKeyConstraint,
    Index,
    String,
    Text,
    Time,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.mixins import TimestampMixin

# 종료 시각 > 시작 시각 검사 — 방언별 DDL (Dialect-specific DDL, identical meaning)
# SQLite는 DATE/TIME을 고정 폭 ISO 문자열로 저장하므로 문자열 비교가 시각 비교와 같다
_DURATION_POSITIVE_PG: str = "(COALESCE(end_date, date) + end_time) > (date + start_time)"
_DURATION_POSITIVE_SQLITE: str = "(COALESCE(end_date, date) || ' ' || end_time) > (date || ' ' || start_time)"


class Shift(TimestampMixin, Base):
    """근무 시프트 모델.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 소유 프로필 FK (Owning profile)
        organization_id: 근무 조직 (Organization, must share the owner)
        title: 제목 (Title)
        date: 시작 날짜 (Start date)
        end_date: 종료 날짜, NULL이면 시작 날짜와 동일 (End date; NULL means same day)
        start_time: 시작 시간 (Start time of day)
        end_time: 종료 시간 (End time of day)
        notes: 메모 (Free-text notes)
    """

    __tablename__ = "shifts"
    __owner_column__ = "user_id"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    start_time: Mapped[datetime.time] = mapped_column(Time, nullable=False)
    end_time: Mapped[datetime.time] = mapped_column(Time, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        ForeignKeyConstraint(
            ["organization_id", "user_id"],
            ["organizations.id", "organizations.user_id"],
            ondelete="CASCADE",
            name="shifts_organization_user_fkey",
        ),
        CheckConstraint(
            "COALESCE(end_date, date) >= date",
            name="shifts_end_not_before_start_date",
        ),
        CheckConstraint(
            _DURATION_POSITIVE_PG, name="shifts_duration_positive"
        ).ddl_if(dialect="postgresql"),
        CheckConstraint(
            _DURATION_POSITIVE_SQLITE, name="shifts_duration_positive"
        ).ddl_if(dialect="sqlite"),
        Index("idx_shifts_user_date", "user_id", "date"),
        Index("idx_shifts_org_date", "organization_id", "date"),
    )
