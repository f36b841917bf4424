"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    profile: 사용자 프로필, 테넌트 단위 (Profile, the tenant)
    organization: 근무 조직 (Organization / workplace)
    shift: 근무 시프트 (Shift)
    mixins: 생성/수정 일시와 updated_at 자동 갱신 (Timestamps and updated_at stamping)
"""

from app.models.profile import Profile
from app.models.organization import Organization
from app.models.shift import Shift

__all__ = [
    "Profile",
    "Organization",
    "Shift",
]
