"""FastAPI 의존성 주입 모듈 — 호출자 식별 및 실행 권한 검사.

FastAPI dependency injection module — caller identification and
execution grants.

Caller Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. HTTPBearer가 토큰을 추출, 없으면 익명 호출자
       (HTTPBearer extracts the token; no header means anonymous)
    3. decode_token()이 서명과 만료를 검증 (Signature and expiry are verified)
    4. role 클레임으로 Caller 유형 결정 (The role claim selects the Caller variant)

Execution grants:
    - require_caller: authenticated 또는 service_role만 허용 (anon → 401)
    - require_service: service_role만 허용 (others → 403)
"""

from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.policies import (
    AnonymousCaller,
    AuthenticatedCaller,
    Caller,
    ServiceCaller,
    caller_from_claims,
)
from app.utils.exceptions import ForbiddenError, UnauthorizedError
from app.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기 — auto_error=False: 헤더가 없으면 익명으로 처리
# (Missing header yields an anonymous caller instead of an automatic 403)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Caller:
    """Bearer 토큰에서 호출자를 결정합니다.

    Resolve the request's caller. A present but invalid or expired token is
    rejected with 401 rather than downgraded to anonymous.

    Raises:
        UnauthorizedError: 토큰이 유효하지 않거나 만료됨 (Invalid or expired token)
    """
    if credentials is None:
        return AnonymousCaller()
    try:
        claims: dict = decode_token(credentials.credentials)
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid or expired token")
    return caller_from_claims(claims)


async def require_caller(
    caller: Annotated[Caller, Depends(get_caller)],
) -> AuthenticatedCaller | ServiceCaller:
    """인증된 사용자 또는 서비스 역할만 통과시킵니다."""
    if isinstance(caller, AnonymousCaller):
        raise UnauthorizedError("Not authenticated")
    return caller


async def require_service(
    caller: Annotated[Caller, Depends(require_caller)],
) -> ServiceCaller:
    """서비스 역할 전용 엔드포인트 가드 (identity hooks)."""
    if not isinstance(caller, ServiceCaller):
        raise ForbiddenError("service_role required")
    return caller


# 편의 타입 별칭 — Annotated aliases used by routers
CurrentCaller = Annotated[AuthenticatedCaller | ServiceCaller, Depends(require_caller)]
ServiceOnly = Annotated[ServiceCaller, Depends(require_service)]
