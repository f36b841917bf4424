"""커스텀 예외 클래스 모듈.

Custom exception classes module.
Provides pre-configured HTTPException subclasses for the failure classes of
the service (authorization denial, integrity violation, invalid argument)
plus the non-HTTP ``MigrationBlockedError`` raised by the migration gate.

Usage:
    from app.utils.exceptions import NotFoundError, IntegrityViolationError
    raise NotFoundError("Shift not found")
    raise IntegrityViolationError("Shift must end after it starts")
"""

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 행이 없거나 호출자에게 보이지 않을 때 사용.

    404 Not Found exception.
    Raised both for rows that do not exist and for rows hidden by the
    ownership policy; the two cases are deliberately indistinguishable.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 고유 제약 위반 시 사용.

    409 Conflict exception.
    Raised when a write violates a uniqueness constraint
    (e.g. two organizations with the same name for one owner).

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 다른 테넌트 대상 작업 시 사용.

    403 Forbidden exception.
    Raised when a caller tries to act on another tenant's behalf
    (analytics owner mismatch, inserting a row for another owner).

    Args:
        detail: 오류 메시지 (Error message, default: "Insufficient permissions")
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    401 Unauthorized exception.
    Raised when the bearer token is missing, invalid, expired, or anonymous.

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 인자 (e.g. month 범위 밖).

    400 Bad Request exception for invalid arguments detected before any
    query runs.

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class IntegrityViolationError(HTTPException):
    """422 Unprocessable Entity 예외 — 무결성 제약 위반.

    422 exception for writes rejected by an integrity rule
    (non-positive shift duration, cross-tenant organization reference).
    The write has no partial effect.
    """

    def __init__(self, detail: str = "Write violates a data integrity constraint") -> None:
        super().__init__(status_code=422, detail=detail)


class MigrationBlockedError(Exception):
    """마이그레이션 사전 검사 실패 — 기존 데이터가 새 제약을 위반.

    Raised by the migration gate when pre-existing rows already violate a
    constraint that is about to be introduced.

    Attributes:
        count: 위반 행 수 (Number of violating rows)
        hint: 조치 안내 (Remediation hint)
    """

    def __init__(self, message: str, count: int, hint: str) -> None:
        super().__init__(f"{message} HINT: {hint}")
        self.count: int = count
        self.hint: str = hint


# 제약 이름 → 응답 매핑 — Constraint name to (exception class, message)
_CONSTRAINT_ERRORS: dict[str, tuple[type[HTTPException], str]] = {
    "shifts_duration_positive": (IntegrityViolationError, "Shift must end after it starts"),
    "shifts_end_not_before_start_date": (IntegrityViolationError, "Shift end date cannot precede its start date"),
    "shifts_organization_user_fkey": (IntegrityViolationError, "Organization does not belong to the shift owner"),
    "organizations_user_id_fkey": (IntegrityViolationError, "Owner profile does not exist"),
    "shifts_user_id_fkey": (IntegrityViolationError, "Owner profile does not exist"),
    "organizations_hourly_rate_non_negative": (IntegrityViolationError, "Hourly rate cannot be negative"),
    "organizations_user_id_name_key": (DuplicateError, "An organization with this name already exists"),
    # SQLite reports the column list instead of the constraint name
    "organizations.user_id, organizations.name": (DuplicateError, "An organization with this name already exists"),
}


def translate_integrity_error(exc: IntegrityError) -> HTTPException:
    """DB 무결성 오류를 HTTP 예외로 변환합니다.

    Map a driver IntegrityError to the matching HTTP failure using the
    constraint name in the driver message. SQLite does not name foreign
    keys, so a bare FOREIGN KEY failure maps to the tenant-consistency rule.
    """
    message: str = str(exc.orig)
    for name, (error_cls, detail) in _CONSTRAINT_ERRORS.items():
        if name in message:
            return error_cls(detail)
    if "FOREIGN KEY" in message.upper():
        return IntegrityViolationError("Organization does not belong to the shift owner")
    if "UNIQUE" in message.upper():
        return DuplicateError()
    return IntegrityViolationError()
