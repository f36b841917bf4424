"""updated_at 자동 갱신 테스트.

Every UPDATE restamps updated_at with a strictly greater value, whatever
the caller assigned.
"""

from datetime import datetime, timedelta, timezone

from httpx import AsyncClient
from sqlalchemy import update

from app.models.profile import Profile
from tests.conftest import auth_header


def _parse(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


class TestUpdatedAtStamp:
    """updated_at 갱신."""

    async def test_successive_updates_increase(self, client: AsyncClient, cafe, alice_token):
        url = f"/api/v1/organizations/{cafe.id}"
        before = await client.get(url, headers=auth_header(alice_token))
        first = await client.patch(url, json={"color": "#000000"}, headers=auth_header(alice_token))
        second = await client.patch(url, json={"color": "#FFFFFF"}, headers=auth_header(alice_token))

        t0 = _parse(before.json()["updated_at"])
        t1 = _parse(first.json()["updated_at"])
        t2 = _parse(second.json()["updated_at"])
        assert t0 < t1 < t2
        assert second.json()["created_at"] == before.json()["created_at"]

    async def test_caller_value_ignored(self, db, cafe):
        """호출자가 과거 값을 지정해도 이전 값보다 큰 값으로 덮어쓴다."""
        previous = cafe.updated_at
        previous = previous if previous.tzinfo else previous.replace(tzinfo=timezone.utc)

        cafe.updated_at = datetime(2000, 1, 1, tzinfo=timezone.utc)
        cafe.name = "Cafe Renamed"
        await db.flush()
        await db.refresh(cafe)

        stamped = cafe.updated_at if cafe.updated_at.tzinfo else cafe.updated_at.replace(tzinfo=timezone.utc)
        assert stamped > previous

    async def test_future_previous_value_still_increases(self, db, alice):
        """저장된 값이 현재 시각보다 미래여도 더 큰 값이 기록된다."""
        future = datetime.now(timezone.utc) + timedelta(days=1)
        # ORM 일괄 UPDATE는 매퍼 이벤트를 거치지 않음 — bypasses the mapper listener
        await db.execute(update(Profile).where(Profile.id == alice.id).values(updated_at=future))
        await db.refresh(alice)

        alice.full_name = "Alice B."
        await db.flush()
        await db.refresh(alice)

        stamped = alice.updated_at if alice.updated_at.tzinfo else alice.updated_at.replace(tzinfo=timezone.utc)
        assert stamped > future
