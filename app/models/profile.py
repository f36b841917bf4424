"""프로필 SQLAlchemy ORM 모델 정의.

Profile ORM model — one row per external identity.
The primary key is the identity key issued by the external identity
provider; rows are provisioned by the identity-created hook and removed
only by the identity-deleted hook.
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.mixins import TimestampMixin


class Profile(TimestampMixin, Base):
    """사용자 프로필 모델 — 테넌트(데이터 격리 단위) 자체.

    Profile model — the tenant itself.

    Attributes:
        id: 외부 인증 시스템의 사용자 UUID (Identity key from the identity provider)
        email: 이메일 (Email as delivered by the identity provider)
        full_name: 표시 이름 (Display name, may be empty)
    """

    __tablename__ = "profiles"
    # 소유자 컬럼 — 행 수준 정책에서 비교할 컬럼 (Owner column compared by row policies)
    __owner_column__ = "id"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
