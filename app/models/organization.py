"""조직 SQLAlchemy ORM 모델 정의.

Organization ORM model — a workplace owned by exactly one profile.

The ``(id, user_id)`` unique key is the anchor for the shifts table's
composite foreign key: a shift can only point at an organization owned by
the same profile as the shift.
"""

import uuid
from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Index, Numeric, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.mixins import TimestampMixin

# 기본 표시 색상 — Default calendar display color
DEFAULT_ORGANIZATION_COLOR: str = "#3B82F6"


class Organization(TimestampMixin, Base):
    """조직(근무처) 모델.

    Organization (workplace) model.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 소유 프로필 FK (Owning profile)
        name: 조직 이름, 소유자 내 고유 (Name, unique per owner)
        color: 캘린더 표시 색상 (Display color, hex)
        hourly_rate: 시급, 0 이상 (Hourly pay rate, non-negative)

    Constraints:
        organizations_user_id_name_key: 소유자별 이름 고유 (Unique name per owner)
        organizations_id_user_id_key: (id, user_id) 복합 고유 — 시프트 복합 FK의 대상
                                      (Composite key referenced by shifts)
        organizations_hourly_rate_non_negative: 시급 >= 0
    """

    __tablename__ = "organizations"
    __owner_column__ = "user_id"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소유 프로필 FK — CASCADE: 프로필 삭제 시 조직도 삭제
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    color: Mapped[str] = mapped_column(
        String(32), nullable=False, default=DEFAULT_ORGANIZATION_COLOR, server_default=DEFAULT_ORGANIZATION_COLOR
    )
    hourly_rate: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0"), server_default="0"
    )

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="organizations_user_id_name_key"),
        UniqueConstraint("id", "user_id", name="organizations_id_user_id_key"),
        CheckConstraint("hourly_rate >= 0", name="organizations_hourly_rate_non_negative"),
        Index("idx_organizations_user", "user_id"),
    )
