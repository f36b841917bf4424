"""조직 관련 Pydantic 요청/응답 스키마 정의.

Organization Pydantic request/response schema definitions.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from app.models.organization import DEFAULT_ORGANIZATION_COLOR

# 색상 형식 — #RGB 또는 #RRGGBB (Hex color)
_COLOR_PATTERN: str = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


class OrganizationCreate(BaseModel):
    """조직 생성 요청 스키마.

    Attributes:
        name: 조직 이름 (Organization name, unique per owner)
        color: 표시 색상 (Display color, default #3B82F6)
        hourly_rate: 시급 (Hourly pay rate, >= 0)
        user_id: 소유자 — 서비스 호출자만 지정 (Owner; service caller only)
    """

    name: str = Field(min_length=1, max_length=255)
    color: str = Field(default=DEFAULT_ORGANIZATION_COLOR, pattern=_COLOR_PATTERN)
    hourly_rate: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    user_id: str | None = None


class OrganizationUpdate(BaseModel):
    """조직 수정 요청 스키마 (부분 업데이트)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    color: str | None = Field(default=None, pattern=_COLOR_PATTERN)
    hourly_rate: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class OrganizationResponse(BaseModel):
    """조직 응답 스키마."""

    id: str  # 조직 UUID 문자열 (Organization UUID as string)
    user_id: str  # 소유자 UUID 문자열 (Owner UUID as string)
    name: str
    color: str
    hourly_rate: float
    created_at: datetime
    updated_at: datetime
