"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
Sets up the async SQLAlchemy engine, session factory, and ORM base class.
PostgreSQL (asyncpg) is the production target; SQLite (aiosqlite) is
accepted for local runs and the test-suite.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


def _engine_options(database_url: str) -> dict[str, Any]:
    """드라이버별 엔진 옵션을 구성합니다.

    Build engine keyword arguments for the configured driver.
    Pool sizing and the prepared statement cache flag only apply to asyncpg.
    """
    options: dict[str, Any] = {"echo": settings.DEBUG, "pool_pre_ping": True}
    if make_url(database_url).get_backend_name() == "postgresql":
        options.update(
            pool_size=5,
            max_overflow=10,
            # Supavisor(트랜잭션 모드 풀러)에서 prepared statement 비활성화
            # Disable prepared statement caches for transaction-mode pooling
            connect_args={"statement_cache_size": 0},
        )
    return options


def configure_sqlite(async_engine: AsyncEngine) -> None:
    """SQLite 연결 설정 — 외래 키 검사와 SAVEPOINT 지원.

    SQLite ships with foreign key enforcement off; the composite
    shift → organization key and the cascades depend on it. The driver's
    implicit transaction handling is also turned off so SQLAlchemy emits
    BEGIN itself and SAVEPOINT blocks nest inside the request transaction.
    """
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(async_engine.sync_engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


# 비동기 데이터베이스 엔진 — Async database engine
engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    **_engine_options(settings.DATABASE_URL),
)
configure_sqlite(engine)

# 비동기 세션 팩토리 — Async session factory
# expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능 (Allows attribute access after commit without refresh)
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    """

    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """요청 단위 비동기 데이터베이스 세션을 생성합니다.

    FastAPI dependency that yields one short-lived session per request.
    Every policy check and the write it guards run inside this session's
    transaction; the session is closed when the request completes.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 인스턴스 (Async session instance)
    """
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()
