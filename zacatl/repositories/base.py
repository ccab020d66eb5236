"""기본 레포지토리 — 모든 레포지토리의 부모 클래스.

Base repositories. ``BaseRepository`` picks its ORM adapter from the config
type; ``MongoRepository`` and ``SQLAlchemyRepository`` fix the ORM. Every
operation delegates to the adapter and returns lean dicts.

Usage:
    class GreetingRepository(SQLAlchemyRepository):
        def __init__(self) -> None:
            super().__init__(SQLAlchemyRepositoryConfig(model=Greeting))

    class MessageRepository(MongoRepository):
        def __init__(self) -> None:
            super().__init__(MongoRepositoryConfig(name="messages"))
"""

from typing import Any

from zacatl.repositories.loader import create_adapter
from zacatl.repositories.types import (
    Lean,
    MongoRepositoryConfig,
    ORMType,
    RepositoryConfig,
    SQLAlchemyRepositoryConfig,
)
from zacatl.utils.exceptions import InternalServerError


class BaseRepository:
    """ORM 중립 CRUD 레포지토리.

    ORM-neutral CRUD repository.

    Attributes:
        config: 레포지토리 설정 (Repository configuration)
    """

    def __init__(self, config: RepositoryConfig) -> None:
        orm_type: Any = getattr(config, "type", None)
        if orm_type not in (ORMType.MONGO, ORMType.SQLALCHEMY):
            raise InternalServerError(
                message=f"Invalid ORM type: {orm_type}",
                reason="Repository config type must be ORMType.MONGO or ORMType.SQLALCHEMY",
                component="BaseRepository",
                operation="__init__",
                metadata={"repository": type(self).__name__},
            )
        self.config: RepositoryConfig = config
        self._adapter: Any = create_adapter(config)

    @property
    def model(self) -> Any:
        """ORM 모델 — Mongo는 컬렉션, SQLAlchemy는 모델 클래스.

        The collection for Mongo, the declarative class for SQLAlchemy.
        """
        return self._adapter.model

    def is_mongo(self) -> bool:
        return self.config.type == ORMType.MONGO

    def is_sqlalchemy(self) -> bool:
        return self.config.type == ORMType.SQLALCHEMY

    async def initialize_model(self) -> None:
        await self._adapter.initialize_model()

    def to_lean(self, value: Any) -> Lean | None:
        return self._adapter.to_lean(value)

    async def find_by_id(self, id: str) -> Lean | None:
        """ID로 단일 문서를 조회합니다 (malformed ids → None)."""
        return await self._adapter.find_by_id(id)

    async def find_many(self, filter: dict[str, Any] | None = None) -> list[Lean]:
        return await self._adapter.find_many(filter or {})

    async def create(self, data: dict[str, Any]) -> Lean:
        return await self._adapter.create(data)

    async def update(self, id: str, data: dict[str, Any]) -> Lean | None:
        """문서를 수정하고 새 상태를 반환 (None when nothing matched)."""
        return await self._adapter.update(id, data)

    async def delete(self, id: str) -> Lean | None:
        """문서를 삭제하고 마지막 상태를 반환 (Last state, or None)."""
        return await self._adapter.delete(id)

    async def exists(self, id: str) -> bool:
        return await self._adapter.exists(id)


class MongoRepository(BaseRepository):
    """MongoDB 전용 레포지토리 (Mongo-only repository)."""

    def __init__(self, config: MongoRepositoryConfig) -> None:
        super().__init__(config)


class SQLAlchemyRepository(BaseRepository):
    """SQLAlchemy 전용 레포지토리 (SQLAlchemy-only repository)."""

    def __init__(self, config: SQLAlchemyRepositoryConfig) -> None:
        super().__init__(config)
