"""테넌트 권한 정책 — 호출자 유형과 행 수준 접근 조건.

Tenant authorization policies — caller variants and row-level predicates.

Every request carries exactly one ``Caller``:

    AuthenticatedCaller(user_id)  일반 사용자 (regular signed-in tenant)
    ServiceCaller()               신뢰된 백엔드 호출자 (trusted backend, bypasses owner checks)
    AnonymousCaller()             토큰 없음 또는 anon 역할 (no identity)

Repositories never trust a row's owner implicitly; they compose
``visible_to(model, caller)`` into every SELECT/UPDATE/DELETE statement so
the check runs in the same transaction as the data access.
"""

from dataclasses import dataclass
from typing import Any, Union
from uuid import UUID

from sqlalchemy import ColumnElement, false, true

from app.utils.exceptions import BadRequestError, ForbiddenError, UnauthorizedError
from app.utils.logger import get_logger

logger = get_logger(__name__)

# 토큰 role 클레임 값 — JWT "role" claim values issued by the identity provider
ROLE_AUTHENTICATED: str = "authenticated"
ROLE_SERVICE: str = "service_role"
ROLE_ANON: str = "anon"


@dataclass(frozen=True)
class AuthenticatedCaller:
    """인증된 테넌트 호출자."""

    user_id: UUID


@dataclass(frozen=True)
class ServiceCaller:
    """서비스 역할 호출자 — 소유자 제한 없음 (Exempt from owner-must-equal-self)."""


@dataclass(frozen=True)
class AnonymousCaller:
    """익명 호출자 — 어떤 행도 볼 수 없음."""


Caller = Union[AuthenticatedCaller, ServiceCaller, AnonymousCaller]


def caller_from_claims(claims: dict[str, Any] | None) -> Caller:
    """JWT 페이로드에서 호출자를 결정합니다.

    Map decoded token claims to a caller variant.
    ``role == service_role`` → ServiceCaller; ``authenticated`` with a
    parseable ``sub`` → AuthenticatedCaller; anything else is anonymous.
    """
    if not claims:
        return AnonymousCaller()

    role: str | None = claims.get("role")
    if role == ROLE_SERVICE:
        return ServiceCaller()
    if role == ROLE_AUTHENTICATED:
        try:
            return AuthenticatedCaller(user_id=UUID(str(claims.get("sub"))))
        except ValueError:
            return AnonymousCaller()
    return AnonymousCaller()


def owner_column(model: type) -> Any:
    """모델의 소유자 컬럼 (profiles.id / organizations.user_id / shifts.user_id)."""
    return getattr(model, model.__owner_column__)


def visible_to(model: type, caller: Caller) -> ColumnElement[bool]:
    """행 가시성 조건 — USING 절에 해당.

    Row visibility predicate for SELECT, UPDATE and DELETE.
    """
    if isinstance(caller, ServiceCaller):
        return true()
    if isinstance(caller, AuthenticatedCaller):
        return owner_column(model) == caller.user_id
    if isinstance(caller, AnonymousCaller):
        return false()
    raise TypeError(f"Unknown caller type: {type(caller).__name__}")


def may_own(caller: Caller, owner_id: UUID | None) -> bool:
    """행의 (새) 소유자가 호출자에게 허용되는지 — WITH CHECK 절에 해당.

    Write check for INSERT rows and post-UPDATE rows.
    """
    if isinstance(caller, ServiceCaller):
        return owner_id is not None
    if isinstance(caller, AuthenticatedCaller):
        return owner_id == caller.user_id
    if isinstance(caller, AnonymousCaller):
        return False
    raise TypeError(f"Unknown caller type: {type(caller).__name__}")


def resolve_target_owner(caller: Caller, target_owner: UUID | None) -> UUID:
    """분석 함수용 대상 소유자 확정.

    Decide whose data an analytics call may aggregate.

    - ServiceCaller: ``target_owner`` is required and used as-is.
    - AuthenticatedCaller: ``target_owner`` must equal the caller's id.
    - AnonymousCaller: always rejected.

    A mismatch is rejected outright; the caller's own id is never
    substituted for the requested one.

    Raises:
        BadRequestError: 서비스 호출자가 대상 소유자를 생략 (service caller without owner)
        UnauthorizedError: 인증되지 않은 호출자 (not authenticated)
        ForbiddenError: 대상 소유자가 호출자와 다름 (owner mismatch)
    """
    if isinstance(caller, ServiceCaller):
        if target_owner is None:
            raise BadRequestError("owner_id is required for service_role")
        return target_owner

    if isinstance(caller, AuthenticatedCaller):
        if target_owner != caller.user_id:
            logger.warning(
                "analytics owner mismatch",
                extra={"caller_id": str(caller.user_id), "target_owner": str(target_owner)},
            )
            raise ForbiddenError("owner_id must match the authenticated caller")
        return caller.user_id

    if isinstance(caller, AnonymousCaller):
        raise UnauthorizedError("Not authenticated")

    raise TypeError(f"Unknown caller type: {type(caller).__name__}")


def owner_for_insert(caller: Caller, requested_owner: UUID | None) -> UUID:
    """INSERT 대상 소유자 결정.

    Authenticated callers default to themselves; a different requested
    owner is passed through so the write check refuses it. The service
    caller must name the owner explicitly.

    Raises:
        BadRequestError: 서비스 호출자가 소유자를 생략 (service caller without owner)
        UnauthorizedError: 익명 호출자 (anonymous caller)
    """
    if isinstance(caller, ServiceCaller):
        if requested_owner is None:
            raise BadRequestError("user_id is required for service_role")
        return requested_owner
    if isinstance(caller, AuthenticatedCaller):
        return requested_owner or caller.user_id
    raise UnauthorizedError("Not authenticated")
