"""프로필 및 신원 이벤트 테스트.

Profile and identity hook tests — idempotent provisioning, reconciliation
of existing profiles, and identity removal cascades.
"""

import uuid
from datetime import date, datetime, time

from httpx import AsyncClient
from sqlalchemy import func, select

from app.models.organization import Organization
from app.models.profile import Profile
from app.models.shift import Shift
from tests.conftest import auth_header, create_shift, make_token, service_token

HOOK_URL = "/api/v1/hooks/identities"


class TestProvisioning:
    """신원 생성 이벤트 처리."""

    async def test_creates_profile(self, client: AsyncClient):
        identity_id = str(uuid.uuid4())
        res = await client.post(HOOK_URL, json={
            "id": identity_id,
            "email": "carol@example.com",
            "user_metadata": {"full_name": "Carol"},
        }, headers=auth_header(service_token()))
        assert res.status_code == 200
        data = res.json()
        assert data["id"] == identity_id
        assert data["email"] == "carol@example.com"
        assert data["full_name"] == "Carol"

    async def test_redelivery_is_idempotent(self, client: AsyncClient, db):
        """같은 이벤트를 두 번 전달해도 프로필은 하나."""
        identity_id = str(uuid.uuid4())
        payload = {"id": identity_id, "email": "dave@example.com", "user_metadata": {"full_name": "Dave"}}
        first = await client.post(HOOK_URL, json=payload, headers=auth_header(service_token()))
        second = await client.post(HOOK_URL, json=payload, headers=auth_header(service_token()))
        assert first.status_code == 200
        assert second.status_code == 200

        count = (await db.execute(
            select(func.count()).select_from(Profile).where(Profile.id == uuid.UUID(identity_id))
        )).scalar()
        assert count == 1
        assert datetime.fromisoformat(second.json()["updated_at"]) > datetime.fromisoformat(
            first.json()["updated_at"]
        )

    async def test_existing_profile_email_updated_name_kept(self, client: AsyncClient, alice):
        """기존 프로필: 이메일은 갱신, 이름은 비어 있지 않으면 유지."""
        res = await client.post(HOOK_URL, json={
            "id": str(alice.id),
            "email": "alice@new.example.com",
            "user_metadata": {"full_name": "Someone Else"},
        }, headers=auth_header(service_token()))
        assert res.status_code == 200
        data = res.json()
        assert data["email"] == "alice@new.example.com"
        assert data["full_name"] == "Alice"

    async def test_existing_profile_empty_name_filled(self, client: AsyncClient, db):
        profile = Profile(id=uuid.uuid4(), email="erin@example.com", full_name="")
        db.add(profile)
        await db.commit()

        res = await client.post(HOOK_URL, json={
            "id": str(profile.id),
            "email": "erin@example.com",
            "user_metadata": {"full_name": "Erin"},
        }, headers=auth_header(service_token()))
        assert res.json()["full_name"] == "Erin"

    async def test_empty_name_redelivery_keeps_name(self, client: AsyncClient, db):
        """이름 없이 재전달되어도 기존 full_name 유지, 이메일은 갱신."""
        identity_id = str(uuid.uuid4())
        await client.post(HOOK_URL, json={
            "id": identity_id,
            "email": "dave@example.com",
            "user_metadata": {"full_name": "Dave"},
        }, headers=auth_header(service_token()))

        for metadata in ({}, {"full_name": ""}, None):
            payload = {"id": identity_id, "email": "dave@new.example.com"}
            if metadata is not None:
                payload["user_metadata"] = metadata
            res = await client.post(HOOK_URL, json=payload, headers=auth_header(service_token()))
            assert res.status_code == 200
            assert res.json()["email"] == "dave@new.example.com"
            assert res.json()["full_name"] == "Dave"

        count = (await db.execute(
            select(func.count()).select_from(Profile).where(Profile.id == uuid.UUID(identity_id))
        )).scalar()
        assert count == 1

    async def test_missing_metadata(self, client: AsyncClient):
        res = await client.post(HOOK_URL, json={
            "id": str(uuid.uuid4()),
            "email": "frank@example.com",
        }, headers=auth_header(service_token()))
        assert res.status_code == 200
        assert res.json()["full_name"] is None

    async def test_malformed_identity_id(self, client: AsyncClient):
        res = await client.post(HOOK_URL, json={
            "id": "not-a-uuid",
            "email": "x@example.com",
        }, headers=auth_header(service_token()))
        assert res.status_code == 400

    async def test_requires_service_role(self, client: AsyncClient, alice_token):
        res = await client.post(HOOK_URL, json={
            "id": str(uuid.uuid4()),
            "email": "x@example.com",
        }, headers=auth_header(alice_token))
        assert res.status_code == 403

        res = await client.post(HOOK_URL, json={"id": str(uuid.uuid4()), "email": "x@example.com"})
        assert res.status_code == 401


class TestIdentityRemoval:
    """신원 삭제 이벤트 — 프로필, 조직, 시프트 연쇄 삭제."""

    async def test_cascade(self, client: AsyncClient, db, alice, cafe):
        await create_shift(db, cafe, date(2024, 3, 4), time(9), time(17))

        res = await client.delete(f"{HOOK_URL}/{alice.id}", headers=auth_header(service_token()))
        assert res.status_code == 204

        for model, column in ((Profile, Profile.id), (Organization, Organization.user_id), (Shift, Shift.user_id)):
            count = (await db.execute(select(func.count()).select_from(model).where(column == alice.id))).scalar()
            assert count == 0

    async def test_unknown_identity(self, client: AsyncClient):
        res = await client.delete(f"{HOOK_URL}/{uuid.uuid4()}", headers=auth_header(service_token()))
        assert res.status_code == 404


class TestProfileEndpoints:
    """프로필 조회/수정."""

    async def test_get_own_profile(self, client: AsyncClient, alice, alice_token):
        res = await client.get(f"/api/v1/profiles/{alice.id}", headers=auth_header(alice_token))
        assert res.status_code == 200
        assert res.json()["email"] == "alice@example.com"

    async def test_update_own_profile(self, client: AsyncClient, alice):
        res = await client.patch(
            f"/api/v1/profiles/{alice.id}",
            json={"full_name": "Alice Liddell"},
            headers=auth_header(make_token(alice)),
        )
        assert res.status_code == 200
        assert res.json()["full_name"] == "Alice Liddell"
        assert res.json()["email"] == "alice@example.com"
