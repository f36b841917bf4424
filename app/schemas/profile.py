"""프로필 및 신원 이벤트 관련 Pydantic 요청/응답 스키마 정의.

Profile and identity-event Pydantic request/response schema definitions.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ProfileUpdate(BaseModel):
    """프로필 수정 요청 스키마 (부분 업데이트).

    Attributes:
        email: 이메일 (New email, optional)
        full_name: 표시 이름 (New display name, optional)
    """

    email: str | None = Field(default=None, min_length=3, max_length=320)
    full_name: str | None = Field(default=None, max_length=255)


class ProfileResponse(BaseModel):
    """프로필 응답 스키마."""

    id: str  # 신원 UUID 문자열 (Identity UUID as string)
    email: str
    full_name: str | None
    created_at: datetime
    updated_at: datetime


class IdentityMetadata(BaseModel):
    """신원 메타데이터 — 인증 서버가 전달하는 사용자 메타데이터 중 사용하는 부분."""

    full_name: str | None = None


class IdentityEvent(BaseModel):
    """신원 생성 이벤트 스키마 (identity-created webhook payload).

    The identity provider may deliver the same event more than once.

    Attributes:
        id: 신원 UUID (Identity key)
        email: 이메일 (Email)
        user_metadata: 사용자 메타데이터 (Metadata carrying full_name)
    """

    id: str
    email: str = Field(min_length=3, max_length=320)
    user_metadata: IdentityMetadata = Field(default_factory=IdentityMetadata)
