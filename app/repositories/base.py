"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all tenant-owned tables.
Every statement is composed with the caller's row policy
(``app.policies.visible_to`` / ``may_own``), so a caller can only see,
change, or delete rows it owns unless it is the service caller.

Writes run inside a SAVEPOINT: a constraint violation rolls back only that
write, is translated into an HTTP failure, and leaves the request
transaction usable.

Policy failures are not errors at this layer: reads return ``None`` or an
empty list, writes return ``None``/``False``. Services decide how to surface
them.

Usage:
    class OrganizationRepository(BaseRepository[Organization]):
        def __init__(self) -> None:
            super().__init__(Organization)
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.policies import Caller, ServiceCaller, may_own, visible_to
from app.utils.exceptions import translate_integrity_error

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """테넌트 범위 제네릭 CRUD 레포지토리.

    Generic CRUD repository whose queries are always scoped by the caller's
    row policy.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
        allow_delete: 일반 사용자 삭제 정책 존재 여부
                      (Whether tenants have a DELETE policy on this table)
    """

    allow_delete: bool = True

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    @property
    def owner_field(self) -> str:
        """소유자 컬럼 이름 (Owner column name)."""
        return self.model.__owner_column__

    def scoped_query(self, caller: Caller) -> Select:
        """호출자에게 보이는 행만 선택하는 기본 쿼리."""
        return select(self.model).where(visible_to(self.model, caller))

    @asynccontextmanager
    async def _write(self, db: AsyncSession) -> AsyncIterator[None]:
        """SAVEPOINT 안에서 변경을 flush하고 무결성 오류를 HTTP 예외로 변환합니다.

        Mutations made in the block are flushed when it exits; on a
        constraint violation only the savepoint is rolled back.
        """
        try:
            async with db.begin_nested():
                yield
        except IntegrityError as exc:
            raise translate_integrity_error(exc) from exc

    async def get_by_id(
        self,
        db: AsyncSession,
        caller: Caller,
        record_id: UUID,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record visible to the caller.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            caller: 요청 호출자 (Request caller)
            record_id: 조회할 레코드의 UUID (UUID of the record to retrieve)

        Returns:
            ModelType | None: 조회된 레코드, 없거나 보이지 않으면 None
                              (Found record, or None when absent or hidden)
        """
        query: Select = self.scoped_query(caller).where(self.model.id == record_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_all(
        self,
        db: AsyncSession,
        caller: Caller,
        filters: dict[str, Any] | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelType]:
        """호출자에게 보이는 레코드 중 조건에 맞는 모든 레코드를 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            caller: 요청 호출자 (Request caller)
            filters: 추가 필터 딕셔너리 {'컬럼명': 값}, None 값은 무시
                     (Additional equality filters; None values are skipped)
            order_by: 정렬 기준 (Ordering clause or list of clauses)

        Returns:
            Sequence[ModelType]: 조회된 레코드 목록 (List of matching records)
        """
        query: Select = self.scoped_query(caller)

        # 동적 필터 적용 — Dynamic filter application
        if filters:
            for column_name, value in filters.items():
                if hasattr(self.model, column_name) and value is not None:
                    query = query.where(getattr(self.model, column_name) == value)

        if order_by is not None:
            if isinstance(order_by, (list, tuple)):
                query = query.order_by(*order_by)
            else:
                query = query.order_by(order_by)

        result = await db.execute(query)
        return result.scalars().all()

    async def create(
        self,
        db: AsyncSession,
        caller: Caller,
        obj_data: dict[str, Any],
    ) -> ModelType | None:
        """새 레코드를 생성합니다. 소유자가 호출자가 아니면 None.

        Insert a record if its declared owner passes the caller's write check.

        Returns:
            ModelType | None: 생성된 레코드 또는 정책 거부 시 None
                              (Created record, or None when the policy refuses)
        """
        if not may_own(caller, obj_data.get(self.owner_field)):
            return None

        db_obj: ModelType = self.model(**obj_data)
        async with self._write(db):
            db.add(db_obj)
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        caller: Caller,
        record_id: UUID,
        update_data: dict[str, Any],
    ) -> ModelType | None:
        """기존 레코드를 업데이트합니다.

        Update a record the caller can see (USING) as long as the
        post-update owner still passes the write check (WITH CHECK).
        Ownership cannot be handed to another tenant this way.

        Returns:
            ModelType | None: 업데이트된 레코드, 없거나 거부되면 None
                              (Updated record, or None when absent/hidden/refused)
        """
        db_obj: ModelType | None = await self.get_by_id(db, caller, record_id)
        if db_obj is None:
            return None

        new_owner: Any = update_data.get(self.owner_field, getattr(db_obj, self.owner_field))
        if not may_own(caller, new_owner):
            return None

        # exclude_unset으로 전달된 필드만 업데이트 (None 값도 허용)
        # Apply only fields passed via exclude_unset (allows setting to None)
        async with self._write(db):
            for field, value in update_data.items():
                if hasattr(db_obj, field):
                    setattr(db_obj, field, value)

        await db.refresh(db_obj)
        return db_obj

    async def delete(
        self,
        db: AsyncSession,
        caller: Caller,
        record_id: UUID,
    ) -> bool:
        """레코드를 삭제합니다. 삭제 정책이 없는 테이블은 서비스 호출자만 가능.

        Returns:
            bool: 삭제된 행이 있었는지 (Whether a row was deleted)
        """
        if not self.allow_delete and not isinstance(caller, ServiceCaller):
            return False

        db_obj: ModelType | None = await self.get_by_id(db, caller, record_id)
        if db_obj is None:
            return False

        async with self._write(db):
            await db.delete(db_obj)
        return True

    async def exists(
        self,
        db: AsyncSession,
        caller: Caller,
        filters: dict[str, Any],
    ) -> bool:
        """호출자에게 보이는 행 중 조건에 일치하는 행이 있는지 확인합니다."""
        query: Select = (
            select(func.count())
            .select_from(self.model)
            .where(visible_to(self.model, caller))
        )
        for column_name, value in filters.items():
            if hasattr(self.model, column_name):
                query = query.where(getattr(self.model, column_name) == value)

        count: int = (await db.execute(query)).scalar() or 0
        return count > 0

