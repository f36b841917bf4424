"""UUID 문자열 파싱 유틸리티.

Request schemas carry ids as strings; services convert them here so a
malformed id becomes a 400 instead of an unhandled ValueError.
"""

from uuid import UUID

from app.utils.exceptions import BadRequestError


def parse_uuid(value: str, field: str = "id") -> UUID:
    """문자열을 UUID로 변환합니다.

    Raises:
        BadRequestError: 유효한 UUID가 아닐 때 (Not a valid UUID)
    """
    try:
        return UUID(str(value))
    except ValueError:
        raise BadRequestError(f"{field} is not a valid UUID")
