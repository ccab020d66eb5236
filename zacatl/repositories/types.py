"""레포지토리 타입 정의 모듈.

Repository configuration types and the ports every ORM adapter and every
repository implements. A lean document is a plain dict with ``id`` (str),
``created_at`` and ``updated_at`` (timezone-aware datetimes) plus the
stored fields.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

Lean = dict[str, Any]


class ORMType(str, Enum):
    MONGO = "mongo"
    SQLALCHEMY = "sqlalchemy"


@dataclass(frozen=True)
class MongoIndex:
    """컬렉션 인덱스 정의 (Collection index definition).

    Attributes:
        keys: 필드 이름 또는 (필드, 방향) 목록 (Field name or [(field, direction)])
        unique: 유니크 인덱스 여부 (Unique index)
        name: 인덱스 이름 (Optional index name)
    """

    keys: str | list[tuple[str, int]]
    unique: bool = False
    name: str | None = None


@dataclass(frozen=True)
class MongoRepositoryConfig:
    """MongoDB 레포지토리 설정.

    Attributes:
        name: 컬렉션 이름 (Collection name)
        indexes: 생성할 인덱스 (Indexes created by ``initialize_model``)
        timestamps: created_at/updated_at 자동 기록 (Stamp timestamps on writes)
    """

    name: str
    indexes: list[MongoIndex] = field(default_factory=list)
    timestamps: bool = True
    type: ORMType = ORMType.MONGO


@dataclass(frozen=True)
class SQLAlchemyRepositoryConfig:
    """SQLAlchemy 레포지토리 설정.

    Attributes:
        model: 선언형 ORM 모델 클래스 (Declarative model class)
        session_factory: async_sessionmaker, 없으면 컨테이너에서 해석
                         (Session factory; resolved from the container when None)
    """

    model: Any
    session_factory: Any = None
    type: ORMType = ORMType.SQLALCHEMY


RepositoryConfig = MongoRepositoryConfig | SQLAlchemyRepositoryConfig


class ORMPort(Protocol):
    """ORM 어댑터 인터페이스 (Contract implemented by each ORM adapter)."""

    @property
    def model(self) -> Any: ...

    def to_lean(self, value: Any) -> Lean | None: ...

    async def initialize_model(self) -> None: ...

    async def find_by_id(self, id: str) -> Lean | None: ...

    async def find_many(self, filter: dict[str, Any] | None = None) -> list[Lean]: ...

    async def create(self, data: dict[str, Any]) -> Lean: ...

    async def update(self, id: str, data: dict[str, Any]) -> Lean | None: ...

    async def delete(self, id: str) -> Lean | None: ...

    async def exists(self, id: str) -> bool: ...


class RepositoryPort(Protocol):
    """소비자용 레포지토리 계약 (Public repository contract)."""

    @property
    def model(self) -> Any: ...

    def to_lean(self, value: Any) -> Lean | None: ...

    async def find_by_id(self, id: str) -> Lean | None: ...

    async def find_many(self, filter: dict[str, Any] | None = None) -> list[Lean]: ...

    async def create(self, data: dict[str, Any]) -> Lean: ...

    async def update(self, id: str, data: dict[str, Any]) -> Lean | None: ...

    async def delete(self, id: str) -> Lean | None: ...

    async def exists(self, id: str) -> bool: ...
