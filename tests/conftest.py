"""테스트 인프라 — 임시 DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — temporary database, session, and httpx client fixtures.
Runs against a throwaway SQLite file by default; set TEST_DATABASE_URL to a
postgresql+asyncpg URL to run the same suite against PostgreSQL.
Schema is applied once per session, data is removed after each test.
"""

import os
import uuid
from collections.abc import AsyncGenerator
from datetime import date, time
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.database import Base, configure_sqlite, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.models.organization import Organization
from app.models.profile import Profile
from app.models.shift import Shift
from app.policies import ROLE_ANON, ROLE_AUTHENTICATED, ROLE_SERVICE
from app.utils.jwt import create_access_token

_schema_created = False


# ---------------------------------------------------------------------------
# Session-scoped: 테스트 DB URL
# ---------------------------------------------------------------------------
@pytest.fixture(scope="session")
def database_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """테스트 DB URL — TEST_DATABASE_URL 또는 임시 SQLite 파일."""
    configured: str | None = os.environ.get("TEST_DATABASE_URL")
    if configured:
        return configured
    db_file = tmp_path_factory.mktemp("db") / "test_shiftflow.sqlite3"
    return f"sqlite+aiosqlite:///{db_file}"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 첫 호출 시 스키마를 생성합니다."""
    global _schema_created
    eng = create_async_engine(database_url, echo=False)
    configure_sqlite(eng)

    if not _schema_created:
        async with eng.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        _schema_created = True

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session
        # 커밋되지 않은 변경 처리
        try:
            await session.commit()
        except Exception:
            await session.rollback()

    # 테스트 후 모든 데이터 정리
    async with factory() as cleanup:
        tables = [t.name for t in reversed(Base.metadata.sorted_tables)]
        if make_url(str(engine.url)).get_backend_name() == "postgresql":
            await cleanup.execute(text(f"TRUNCATE {', '.join(tables)} CASCADE"))
        else:
            for table in tables:
                await cleanup.execute(text(f"DELETE FROM {table}"))
        await cleanup.commit()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def create_profile(db: AsyncSession, email: str, full_name: str | None = None) -> Profile:
    """프로필을 생성하고 커밋합니다."""
    profile = Profile(id=uuid.uuid4(), email=email, full_name=full_name)
    db.add(profile)
    await db.commit()
    await db.refresh(profile)
    return profile


async def create_organization(
    db: AsyncSession,
    owner: Profile,
    name: str,
    color: str = "#3B82F6",
    hourly_rate: str = "0",
) -> Organization:
    """조직을 생성하고 커밋합니다."""
    org = Organization(user_id=owner.id, name=name, color=color, hourly_rate=Decimal(hourly_rate))
    db.add(org)
    await db.commit()
    await db.refresh(org)
    return org


async def create_shift(
    db: AsyncSession,
    org: Organization,
    day: date,
    start: time,
    end: time,
    end_date: date | None = None,
    title: str = "Shift",
) -> Shift:
    """시프트를 생성하고 커밋합니다 (조직 소유자 소유)."""
    shift = Shift(
        user_id=org.user_id,
        organization_id=org.id,
        title=title,
        date=day,
        end_date=end_date,
        start_time=start,
        end_time=end,
    )
    db.add(shift)
    await db.commit()
    await db.refresh(shift)
    return shift


@pytest_asyncio.fixture
async def alice(db: AsyncSession) -> Profile:
    """테넌트 A."""
    return await create_profile(db, "alice@example.com", "Alice")


@pytest_asyncio.fixture
async def bob(db: AsyncSession) -> Profile:
    """테넌트 B."""
    return await create_profile(db, "bob@example.com", "Bob")


@pytest_asyncio.fixture
async def cafe(db: AsyncSession, alice: Profile) -> Organization:
    """Alice의 조직 (시급 25.00)."""
    return await create_organization(db, alice, "Cafe", color="#F97316", hourly_rate="25.00")


@pytest_asyncio.fixture
async def bakery(db: AsyncSession, bob: Profile) -> Organization:
    """Bob의 조직."""
    return await create_organization(db, bob, "Bakery", color="#10B981", hourly_rate="20.00")


def make_token(profile: Profile) -> str:
    """테스트용 authenticated JWT를 생성합니다."""
    return create_access_token({"sub": str(profile.id), "role": ROLE_AUTHENTICATED})


def service_token() -> str:
    """테스트용 service_role JWT를 생성합니다."""
    return create_access_token({"role": ROLE_SERVICE})


def anon_token() -> str:
    """테스트용 anon JWT를 생성합니다."""
    return create_access_token({"role": ROLE_ANON})


@pytest.fixture
def alice_token(alice: Profile) -> str:
    return make_token(alice)


@pytest.fixture
def bob_token(bob: Profile) -> str:
    return make_token(bob)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
