"""무결성 오류 변환 테스트."""

from sqlalchemy.exc import IntegrityError

from app.utils.exceptions import DuplicateError, IntegrityViolationError, translate_integrity_error


def _integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, Exception(message))


class TestTranslateIntegrityError:
    """드라이버 메시지 → HTTP 예외 매핑."""

    def test_named_organization_unique(self):
        err = translate_integrity_error(_integrity_error(
            'duplicate key value violates unique constraint "organizations_user_id_name_key"'
        ))
        assert isinstance(err, DuplicateError)
        assert err.detail == "An organization with this name already exists"

    def test_sqlite_organization_unique(self):
        err = translate_integrity_error(_integrity_error(
            "UNIQUE constraint failed: organizations.user_id, organizations.name"
        ))
        assert isinstance(err, DuplicateError)
        assert err.detail == "An organization with this name already exists"

    def test_other_unique_is_generic(self):
        """조직 이름 외의 고유 제약 위반은 일반 메시지."""
        err = translate_integrity_error(_integrity_error("UNIQUE constraint failed: profiles.id"))
        assert isinstance(err, DuplicateError)
        assert err.status_code == 409
        assert err.detail == "Resource already exists"

    def test_check_constraint(self):
        err = translate_integrity_error(_integrity_error(
            "CHECK constraint failed: shifts_duration_positive"
        ))
        assert isinstance(err, IntegrityViolationError)
        assert err.status_code == 422
        assert err.detail == "Shift must end after it starts"
