"""비동기 SQLAlchemy 레포지토리 어댑터.

Async SQLAlchemy adapter. Each operation runs in its own session taken
from the configured ``async_sessionmaker`` (or the one the SQLAlchemy
database adapter registers in the container) and commits before returning.
"""

import uuid
from typing import Any, Sequence

from sqlalchemy import Select, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from zacatl.container import is_registered, resolve_dependency
from zacatl.repositories.lean import finalize_lean
from zacatl.repositories.types import Lean, SQLAlchemyRepositoryConfig
from zacatl.utils.exceptions import InternalServerError


class SQLAlchemyAdapter:
    """SQLAlchemy 모델 CRUD 어댑터 (CRUD over one declarative model)."""

    def __init__(self, config: SQLAlchemyRepositoryConfig) -> None:
        self.config: SQLAlchemyRepositoryConfig = config
        self._columns: set[str] = {attr.key for attr in inspect(config.model).column_attrs}
        self._primary_key = inspect(config.model).primary_key[0]

    @property
    def model(self) -> Any:
        return self.config.model

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self.config.session_factory is not None:
            return self.config.session_factory
        if not is_registered(async_sessionmaker):
            raise InternalServerError(
                message=f"No SQLAlchemy session factory for model '{self.model.__name__}'",
                reason="Pass session_factory or configure a SQLALCHEMY database on the server platform",
                component="SQLAlchemyAdapter",
                operation="session_factory",
            )
        return resolve_dependency(async_sessionmaker)

    def _coerce_id(self, id: Any) -> Any:
        """기본 키 타입으로 변환, 실패 시 None (Parse to the primary key type)."""
        try:
            python_type: type = self._primary_key.type.python_type
        except NotImplementedError:
            return id
        if isinstance(id, python_type):
            return id
        try:
            if python_type is uuid.UUID:
                return uuid.UUID(str(id))
            return python_type(id)
        except (TypeError, ValueError):
            return None

    def to_lean(self, value: Any) -> Lean | None:
        if value is None:
            return None
        if isinstance(value, dict):
            fields: dict[str, Any] = dict(value)
        else:
            fields = {key: getattr(value, key) for key in self._columns}
        return finalize_lean(fields, fields.get(self._primary_key.key, fields.get("id")))

    async def initialize_model(self) -> None:
        # 테이블 생성은 마이그레이션 책임 — schema creation belongs to migrations
        return None

    async def find_by_id(self, id: str) -> Lean | None:
        key: Any = self._coerce_id(id)
        if key is None:
            return None
        async with self.session_factory() as session:
            return self.to_lean(await session.get(self.model, key))

    async def find_many(self, filter: dict[str, Any] | None = None) -> list[Lean]:
        query: Select = select(self.model)

        # 동적 필터 적용, 모르는 컬럼은 무시 — unknown columns are ignored
        for column_name, value in (filter or {}).items():
            if column_name in self._columns:
                query = query.where(getattr(self.model, column_name) == value)

        async with self.session_factory() as session:
            rows: Sequence[Any] = (await session.execute(query)).scalars().all()
            return [lean for lean in (self.to_lean(row) for row in rows) if lean is not None]

    async def create(self, data: dict[str, Any]) -> Lean:
        async with self.session_factory() as session:
            record: Any = self.model(**data)
            session.add(record)
            await session.flush()
            await session.refresh(record)
            lean: Lean | None = self.to_lean(record)
            await session.commit()

        if lean is None:
            raise InternalServerError(
                message=f"Failed to create '{self.model.__name__}' record",
                reason="Created record has no primary key",
                component="SQLAlchemyAdapter",
                operation="create",
            )
        return lean

    async def update(self, id: str, data: dict[str, Any]) -> Lean | None:
        key: Any = self._coerce_id(id)
        if key is None:
            return None
        async with self.session_factory() as session:
            record: Any = await session.get(self.model, key)
            if record is None:
                return None

            for field, value in data.items():
                if field in self._columns and field != self._primary_key.key:
                    setattr(record, field, value)

            await session.flush()
            await session.refresh(record)
            lean: Lean | None = self.to_lean(record)
            await session.commit()
            return lean

    async def delete(self, id: str) -> Lean | None:
        key: Any = self._coerce_id(id)
        if key is None:
            return None
        async with self.session_factory() as session:
            record: Any = await session.get(self.model, key)
            if record is None:
                return None
            lean: Lean | None = self.to_lean(record)
            await session.delete(record)
            await session.commit()
            return lean

    async def exists(self, id: str) -> bool:
        key: Any = self._coerce_id(id)
        if key is None:
            return False
        query: Select = (
            select(func.count()).select_from(self.model).where(getattr(self.model, self._primary_key.key) == key)
        )
        async with self.session_factory() as session:
            count: int = (await session.execute(query)).scalar() or 0
            return count > 0
