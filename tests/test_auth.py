"""인증/호출자 식별 테스트.

Caller identification tests — bearer token handling and execution grants.
"""

from datetime import datetime, timedelta, timezone

import jwt
from httpx import AsyncClient

from app.config import settings
from app.policies import (
    AnonymousCaller,
    AuthenticatedCaller,
    ServiceCaller,
    caller_from_claims,
)
from tests.conftest import anon_token, auth_header, service_token

URL = "/api/v1/organizations"


class TestHealth:
    """헬스 체크."""

    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}


class TestBearerToken:
    """Bearer 토큰 처리 테스트."""

    async def test_missing_token_is_unauthorized(self, client: AsyncClient):
        """토큰 없이 요청 시 401."""
        res = await client.get(URL)
        assert res.status_code == 401

    async def test_anon_role_is_unauthorized(self, client: AsyncClient):
        """anon 역할 토큰은 익명으로 처리되어 401."""
        res = await client.get(URL, headers=auth_header(anon_token()))
        assert res.status_code == 401

    async def test_garbage_token(self, client: AsyncClient):
        """형식이 잘못된 토큰은 401."""
        res = await client.get(URL, headers=auth_header("not-a-jwt"))
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid or expired token"

    async def test_expired_token(self, client: AsyncClient, alice):
        """만료된 토큰은 401."""
        token = jwt.encode(
            {
                "sub": str(alice.id),
                "role": "authenticated",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        res = await client.get(URL, headers=auth_header(token))
        assert res.status_code == 401

    async def test_wrong_secret(self, client: AsyncClient, alice):
        """다른 비밀키로 서명된 토큰은 401."""
        token = jwt.encode(
            {"sub": str(alice.id), "role": "authenticated"},
            "some-other-secret-that-is-long-enough-for-hs256",
            algorithm="HS256",
        )
        res = await client.get(URL, headers=auth_header(token))
        assert res.status_code == 401

    async def test_service_only_route_rejects_tenant(self, client: AsyncClient, alice_token):
        """서비스 전용 엔드포인트에 일반 사용자 접근 시 403."""
        res = await client.post(
            "/api/v1/hooks/identities",
            json={"id": "8d7c8f0e-4e9f-4a59-9d0e-8f0c2b7e1a11", "email": "x@example.com"},
            headers=auth_header(alice_token),
        )
        assert res.status_code == 403

    async def test_service_token_accepted(self, client: AsyncClient):
        res = await client.get(URL, headers=auth_header(service_token()))
        assert res.status_code == 200


class TestCallerFromClaims:
    """JWT 클레임 → 호출자 매핑."""

    def test_authenticated(self):
        caller = caller_from_claims(
            {"sub": "8d7c8f0e-4e9f-4a59-9d0e-8f0c2b7e1a11", "role": "authenticated"}
        )
        assert isinstance(caller, AuthenticatedCaller)
        assert str(caller.user_id) == "8d7c8f0e-4e9f-4a59-9d0e-8f0c2b7e1a11"

    def test_service_role(self):
        assert isinstance(caller_from_claims({"role": "service_role"}), ServiceCaller)

    def test_authenticated_without_valid_sub(self):
        assert isinstance(caller_from_claims({"sub": "nope", "role": "authenticated"}), AnonymousCaller)

    def test_unknown_role(self):
        assert isinstance(caller_from_claims({"sub": "x", "role": "admin"}), AnonymousCaller)

    def test_empty_claims(self):
        assert isinstance(caller_from_claims(None), AnonymousCaller)
