"""테스트 인프라 — 컨테이너 초기화, 인메모리 SQLite, 가짜 Mongo, httpx 클라이언트.

Test infrastructure: container reset, in-memory SQLite engine, an
in-memory async Mongo double and an httpx client over the ASGI app.
"""

import copy
import uuid
from collections.abc import AsyncGenerator
from datetime import datetime
from typing import Any

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo import ReturnDocument
from sqlalchemy import DateTime, String, Uuid, func
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool

from zacatl.container import clear_container

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ---------------------------------------------------------------------------
# SQLAlchemy 테스트 모델
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    pass


class Greeting(Base):
    __tablename__ = "greetings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    message: Mapped[str] = mapped_column(String(200))
    language: Mapped[str] = mapped_column(String(10), default="en")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


# ---------------------------------------------------------------------------
# 가짜 비동기 Mongo — in-memory async PyMongo double
# ---------------------------------------------------------------------------
def _matches(document: dict[str, Any], filter: dict[str, Any]) -> bool:
    return all(document.get(key) == value for key, value in filter.items())


class FakeInsertOneResult:
    def __init__(self, inserted_id: ObjectId) -> None:
        self.inserted_id = inserted_id


class FakeCursor:
    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        return self._documents if length is None else self._documents[:length]


class FakeAsyncCollection:
    """AsyncCollection의 최소 구현 (Subset of AsyncCollection used by MongoAdapter)."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.documents: list[dict[str, Any]] = []
        self.indexes: list[tuple[Any, dict[str, Any]]] = []

    async def find_one(self, filter: dict[str, Any]) -> dict[str, Any] | None:
        for document in self.documents:
            if _matches(document, filter):
                return copy.deepcopy(document)
        return None

    def find(self, filter: dict[str, Any] | None = None) -> FakeCursor:
        return FakeCursor([copy.deepcopy(d) for d in self.documents if _matches(d, filter or {})])

    async def insert_one(self, document: dict[str, Any]) -> FakeInsertOneResult:
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return FakeInsertOneResult(document["_id"])

    async def find_one_and_update(
        self,
        filter: dict[str, Any],
        update: dict[str, Any],
        return_document: bool = ReturnDocument.BEFORE,
    ) -> dict[str, Any] | None:
        for document in self.documents:
            if _matches(document, filter):
                before = copy.deepcopy(document)
                document.update(update.get("$set", {}))
                return copy.deepcopy(document) if return_document == ReturnDocument.AFTER else before
        return None

    async def find_one_and_delete(self, filter: dict[str, Any]) -> dict[str, Any] | None:
        for index, document in enumerate(self.documents):
            if _matches(document, filter):
                return self.documents.pop(index)
        return None

    async def count_documents(self, filter: dict[str, Any], limit: int = 0) -> int:
        count = sum(1 for d in self.documents if _matches(d, filter))
        return min(count, limit) if limit else count

    async def create_index(self, keys: Any, **options: Any) -> str:
        self.indexes.append((keys, options))
        return options.get("name") or str(keys)


class FakeAsyncDatabase:
    def __init__(self, name: str = "test") -> None:
        self.name = name
        self.collections: dict[str, FakeAsyncCollection] = {}

    def __getitem__(self, name: str) -> FakeAsyncCollection:
        return self.collections.setdefault(name, FakeAsyncCollection(name))

    async def list_collection_names(self) -> list[str]:
        return list(self.collections)

    async def create_collection(self, name: str) -> FakeAsyncCollection:
        return self[name]


# ---------------------------------------------------------------------------
# 픽스처
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def reset_container():
    """각 테스트 전후로 DI 컨테이너를 비웁니다."""
    clear_container()
    yield
    clear_container()


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """인메모리 SQLite 엔진 (테이블 생성 포함)."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def mongo_database() -> FakeAsyncDatabase:
    return FakeAsyncDatabase("greetings")


def make_client(app: Any) -> AsyncClient:
    """ASGI 앱에 대한 httpx 클라이언트를 생성합니다."""
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
