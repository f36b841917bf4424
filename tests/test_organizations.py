"""조직 CRUD API 테스트.

Organization CRUD API tests — create, read, update, delete, cascades and
validation.
"""

from datetime import date, time

from httpx import AsyncClient

from tests.conftest import auth_header, create_organization, create_shift, service_token

URL = "/api/v1/organizations"


class TestOrganizationCreate:
    """조직 생성 테스트."""

    async def test_create_organization(self, client: AsyncClient, alice, alice_token):
        """조직 생성 성공 — 소유자는 호출자."""
        res = await client.post(URL, json={
            "name": "Library",
            "color": "#8B5CF6",
            "hourly_rate": 31.5,
        }, headers=auth_header(alice_token))
        assert res.status_code == 201
        data = res.json()
        assert data["name"] == "Library"
        assert data["color"] == "#8B5CF6"
        assert data["hourly_rate"] == 31.5
        assert data["user_id"] == str(alice.id)

    async def test_create_with_defaults(self, client: AsyncClient, alice_token):
        """색상/시급 생략 시 기본값."""
        res = await client.post(URL, json={"name": "Gym"}, headers=auth_header(alice_token))
        assert res.status_code == 201
        data = res.json()
        assert data["color"] == "#3B82F6"
        assert data["hourly_rate"] == 0

    async def test_duplicate_name_conflict(self, client: AsyncClient, cafe, alice_token):
        """같은 소유자의 중복 이름은 409."""
        res = await client.post(URL, json={"name": "Cafe"}, headers=auth_header(alice_token))
        assert res.status_code == 409

    async def test_same_name_other_owner(self, client: AsyncClient, cafe, bob_token):
        """다른 소유자는 같은 이름 사용 가능."""
        res = await client.post(URL, json={"name": "Cafe"}, headers=auth_header(bob_token))
        assert res.status_code == 201

    async def test_negative_hourly_rate(self, client: AsyncClient, alice_token):
        """음수 시급은 422."""
        res = await client.post(URL, json={
            "name": "Bad Rate",
            "hourly_rate": -1,
        }, headers=auth_header(alice_token))
        assert res.status_code == 422

    async def test_invalid_color(self, client: AsyncClient, alice_token):
        res = await client.post(URL, json={
            "name": "Bad Color",
            "color": "blue",
        }, headers=auth_header(alice_token))
        assert res.status_code == 422

    async def test_service_requires_user_id(self, client: AsyncClient):
        """서비스 호출자가 user_id 없이 생성 시 400."""
        res = await client.post(URL, json={"name": "Orphan"}, headers=auth_header(service_token()))
        assert res.status_code == 400

    async def test_service_creates_for_user(self, client: AsyncClient, bob):
        """서비스 호출자는 임의 소유자로 생성 가능."""
        res = await client.post(URL, json={
            "name": "Warehouse",
            "user_id": str(bob.id),
        }, headers=auth_header(service_token()))
        assert res.status_code == 201
        assert res.json()["user_id"] == str(bob.id)


class TestOrganizationRead:
    """조직 조회 테스트."""

    async def test_list_ordered_by_name(self, client: AsyncClient, db, alice, alice_token):
        """목록은 이름순."""
        for name in ["Zoo", "Bar", "Museum"]:
            await create_organization(db, alice, name)
        res = await client.get(URL, headers=auth_header(alice_token))
        assert res.status_code == 200
        assert [o["name"] for o in res.json()] == ["Bar", "Museum", "Zoo"]

    async def test_get_organization(self, client: AsyncClient, cafe, alice_token):
        res = await client.get(f"{URL}/{cafe.id}", headers=auth_header(alice_token))
        assert res.status_code == 200
        assert res.json()["name"] == "Cafe"
        assert res.json()["hourly_rate"] == 25.0

    async def test_get_missing(self, client: AsyncClient, alice_token):
        res = await client.get(
            f"{URL}/00000000-0000-0000-0000-000000000000", headers=auth_header(alice_token)
        )
        assert res.status_code == 404

    async def test_service_filters_by_user(self, client: AsyncClient, cafe, bakery, bob):
        """서비스 호출자는 user_id로 소유자 필터."""
        res = await client.get(
            URL, params={"user_id": str(bob.id)}, headers=auth_header(service_token())
        )
        assert res.status_code == 200
        assert [o["name"] for o in res.json()] == ["Bakery"]


class TestOrganizationUpdate:
    """조직 수정 테스트."""

    async def test_update_organization(self, client: AsyncClient, cafe, alice_token):
        res = await client.patch(f"{URL}/{cafe.id}", json={
            "name": "Corner Cafe",
            "hourly_rate": 27.25,
        }, headers=auth_header(alice_token))
        assert res.status_code == 200
        data = res.json()
        assert data["name"] == "Corner Cafe"
        assert data["hourly_rate"] == 27.25
        assert data["color"] == "#F97316"

    async def test_rename_to_existing_conflict(self, client: AsyncClient, db, alice, cafe, alice_token):
        """기존 이름으로 변경 시 409, 원래 이름 유지."""
        # 실패한 SAVEPOINT 롤백은 cafe를 만료시키므로 ID를 미리 보관
        cafe_id = cafe.id
        await create_organization(db, alice, "Diner")
        res = await client.patch(f"{URL}/{cafe_id}", json={"name": "Diner"}, headers=auth_header(alice_token))
        assert res.status_code == 409
        assert res.json()["detail"] == "An organization with this name already exists"

        res = await client.get(f"{URL}/{cafe_id}", headers=auth_header(alice_token))
        assert res.json()["name"] == "Cafe"


class TestOrganizationDelete:
    """조직 삭제 테스트."""

    async def test_delete_cascades_shifts(self, client: AsyncClient, db, cafe, alice_token):
        """조직 삭제 시 소속 시프트도 삭제."""
        shift = await create_shift(db, cafe, date(2024, 3, 4), time(9), time(17))

        res = await client.delete(f"{URL}/{cafe.id}", headers=auth_header(alice_token))
        assert res.status_code == 204

        res = await client.get(f"{URL}/{cafe.id}", headers=auth_header(alice_token))
        assert res.status_code == 404
        res = await client.get(f"/api/v1/shifts/{shift.id}", headers=auth_header(alice_token))
        assert res.status_code == 404

    async def test_delete_missing(self, client: AsyncClient, alice_token):
        res = await client.delete(
            f"{URL}/00000000-0000-0000-0000-000000000000", headers=auth_header(alice_token)
        )
        assert res.status_code == 404
