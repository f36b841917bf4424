"""JWT 토큰 검증 및 (개발/테스트용) 생성 유틸리티 모듈.

JWT verification utility module.
Tokens are issued by the external identity provider; this service only
verifies them and maps their claims to a caller. ``create_access_token``
exists for local tooling and tests.

JWT Payload Structure:
    {
        "sub": "user_uuid",              # 외부 신원 ID (Identity key, absent for service tokens)
        "role": "authenticated",         # authenticated | service_role | anon
        "aud": "authenticated",          # 선택 (Optional audience)
        "exp": 1234567890                # 만료 시간 UNIX timestamp (Expiration)
    }
"""

from datetime import datetime, timedelta, timezone
from typing import Any
import jwt

from app.config import settings


def create_access_token(data: dict[str, Any]) -> str:
    """JWT 액세스 토큰을 생성합니다.

    Mint a token signed with the shared secret.
    Token expires after JWT_ACCESS_TOKEN_EXPIRE_MINUTES.

    Args:
        data: JWT 페이로드 데이터, 예: {"sub": user_id, "role": "authenticated"}

    Returns:
        str: 인코딩된 JWT 문자열 (Encoded JWT token string)
    """
    to_encode: dict[str, Any] = data.copy()
    expire: datetime = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode["exp"] = expire
    if settings.JWT_AUDIENCE and "aud" not in to_encode:
        to_encode["aud"] = settings.JWT_AUDIENCE
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """JWT 토큰을 디코딩하고 검증합니다.

    Decode and verify a JWT token string. The audience is checked only when
    JWT_AUDIENCE is configured.

    Raises:
        jwt.ExpiredSignatureError: 토큰 만료 시 (When token has expired)
        jwt.InvalidTokenError: 유효하지 않은 토큰 (When token is invalid)
    """
    if settings.JWT_AUDIENCE:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
        )
    return jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        options={"verify_aud": False},
    )
