"""프로필 서비스 — 프로필 조회/수정 및 신원 이벤트 처리.

Profile Service — profile read/update plus the identity lifecycle hooks.

Provisioning is idempotent: the identity provider may redeliver the same
"identity created" event, and two deliveries may race. The insert runs in
a savepoint; a primary key conflict falls back to the update path.
"""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.mixins import utc_now
from app.models.profile import Profile
from app.policies import Caller, ServiceCaller
from app.repositories.profile_repository import profile_repository
from app.schemas.profile import IdentityEvent, ProfileResponse, ProfileUpdate
from app.utils.exceptions import NotFoundError
from app.utils.ids import parse_uuid
from app.utils.logger import get_logger

logger = get_logger(__name__)


class ProfileService:
    """프로필 관련 비즈니스 로직을 처리하는 서비스."""

    def _to_response(self, profile: Profile) -> ProfileResponse:
        return ProfileResponse(
            id=str(profile.id),
            email=profile.email,
            full_name=profile.full_name,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )

    async def get_profile(
        self,
        db: AsyncSession,
        caller: Caller,
        profile_id: UUID,
    ) -> ProfileResponse:
        """프로필을 조회합니다.

        Raises:
            NotFoundError: 없거나 다른 사용자의 프로필 (Absent or not the caller's)
        """
        profile: Profile | None = await profile_repository.get_by_id(db, caller, profile_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return self._to_response(profile)

    async def update_profile(
        self,
        db: AsyncSession,
        caller: Caller,
        profile_id: UUID,
        data: ProfileUpdate,
    ) -> ProfileResponse:
        """프로필을 수정합니다 (이메일, 이름).

        Raises:
            NotFoundError: 없거나 다른 사용자의 프로필 (Absent or not the caller's)
        """
        update_data: dict = data.model_dump(exclude_unset=True)
        if update_data.get("email") is None:
            update_data.pop("email", None)
        profile: Profile | None = await profile_repository.update(db, caller, profile_id, update_data)
        if profile is None:
            raise NotFoundError("Profile not found")
        return self._to_response(profile)

    async def provision_identity(
        self,
        db: AsyncSession,
        event: IdentityEvent,
    ) -> ProfileResponse:
        """신원 생성 이벤트를 처리합니다 (upsert).

        Create the profile for a new identity, or reconcile an existing one:
        ``email`` always takes the delivered value, ``full_name`` is filled
        only when the stored one is empty, and ``updated_at`` is refreshed.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            event: 신원 이벤트 페이로드 (Identity event payload)

        Returns:
            ProfileResponse: 생성 또는 갱신된 프로필 (Created or reconciled profile)
        """
        identity_id: UUID = parse_uuid(event.id, "id")
        full_name: str | None = event.user_metadata.full_name

        profile: Profile | None = await profile_repository.get_for_provisioning(db, identity_id)
        if profile is None:
            try:
                async with db.begin_nested():
                    profile = Profile(id=identity_id, email=event.email, full_name=full_name)
                    db.add(profile)
                await db.refresh(profile)
                logger.info("profile provisioned", extra={"profile_id": str(identity_id)})
                return self._to_response(profile)
            except IntegrityError:
                # 동시 전달로 먼저 생성됨 — A concurrent delivery inserted it first
                logger.info("profile provisioning race", extra={"profile_id": str(identity_id)})
                profile = await profile_repository.get_for_provisioning(db, identity_id)
                if profile is None:
                    raise

        profile.email = event.email
        if not profile.full_name:
            profile.full_name = full_name
        profile.updated_at = utc_now()
        await db.flush()
        await db.refresh(profile)
        return self._to_response(profile)

    async def delete_identity(
        self,
        db: AsyncSession,
        caller: ServiceCaller,
        identity_id: UUID,
    ) -> None:
        """신원 삭제 이벤트 — 프로필과 소유 조직/시프트를 삭제합니다.

        Raises:
            NotFoundError: 프로필 없음 (Profile not found)
        """
        deleted: bool = await profile_repository.delete(db, caller, identity_id)
        if not deleted:
            raise NotFoundError("Profile not found")
        logger.info("profile removed", extra={"profile_id": str(identity_id)})


# 싱글턴 인스턴스 — Singleton instance
profile_service: ProfileService = ProfileService()
