"""공통 모델 믹스인 — 생성/수정 일시 컬럼과 updated_at 자동 갱신.

Shared model mixin — created_at/updated_at columns plus the ``before_update``
listener that restamps ``updated_at`` on every UPDATE.

The listener ignores whatever value the caller assigned to ``updated_at``
and always writes a value strictly greater than the previously stored one,
so the column reflects the real last write even on clocks with coarse
resolution.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import DateTime, event, func, inspect
from sqlalchemy.orm import Mapped, mapped_column


def utc_now() -> datetime:
    """현재 UTC 시각 (timezone-aware)."""
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite는 tzinfo 없이 저장 — naive values read back from SQLite are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TimestampMixin:
    """생성/수정 일시 믹스인.

    Attributes:
        created_at: 생성 일시 UTC (Creation timestamp, never rewritten)
        updated_at: 수정 일시 UTC (Last write timestamp, stamped on every UPDATE)
    """

    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, server_default=func.now()
    )
    # 수정 일시 — Last modification timestamp (UTC, see stamp_updated_at)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, server_default=func.now()
    )


def _stored_updated_at(target: TimestampMixin) -> datetime | None:
    """DB에 저장되어 있던 updated_at 값 (호출자가 덮어쓴 값은 무시)."""
    history = inspect(target).attrs.updated_at.history
    if history.deleted:
        return history.deleted[0]
    if history.unchanged:
        return history.unchanged[0]
    return None


@event.listens_for(TimestampMixin, "before_update", propagate=True)
def stamp_updated_at(mapper: Any, connection: Any, target: TimestampMixin) -> None:
    """UPDATE 직전에 updated_at을 현재 시각으로 강제 설정합니다.

    Overwrite ``updated_at`` right before the UPDATE is emitted.
    """
    stamp: datetime = utc_now()
    previous: datetime | None = _stored_updated_at(target)
    if previous is not None and stamp <= _as_utc(previous):
        stamp = _as_utc(previous) + timedelta(microseconds=1)
    target.updated_at = stamp
