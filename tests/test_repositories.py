"""레포지토리 테스트 — SQLAlchemy(인메모리 SQLite) 및 Mongo(가짜 컬렉션).

Repository tests over an in-memory SQLite database and an in-memory
async Mongo double registered under the ``AsyncDatabase`` token.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from bson import ObjectId
from pymongo.asynchronous.database import AsyncDatabase
from sqlalchemy.ext.asyncio import async_sessionmaker

from tests.conftest import FakeAsyncDatabase, Greeting
from zacatl.container import register_value
from zacatl.repositories import (
    BaseRepository,
    MongoIndex,
    MongoRepository,
    MongoRepositoryConfig,
    ORMType,
    SQLAlchemyRepository,
    SQLAlchemyRepositoryConfig,
    coerce_datetime,
    load_adapter_class,
)
from zacatl.utils.exceptions import InternalServerError


class GreetingRepository(SQLAlchemyRepository):
    def __init__(self, session_factory=None) -> None:
        super().__init__(SQLAlchemyRepositoryConfig(model=Greeting, session_factory=session_factory))


class MessageRepository(MongoRepository):
    def __init__(self) -> None:
        super().__init__(
            MongoRepositoryConfig(name="messages", indexes=[MongoIndex(keys="text", unique=True)])
        )


@pytest.fixture
def sql_repository(session_factory) -> GreetingRepository:
    return GreetingRepository(session_factory)


@pytest.fixture
def mongo_repository(mongo_database: FakeAsyncDatabase) -> MessageRepository:
    register_value(AsyncDatabase, mongo_database)
    return MessageRepository()


class TestBaseRepository:
    """ORM 선택 및 설정 검증."""

    def test_invalid_type_raises(self):
        config = SQLAlchemyRepositoryConfig(model=Greeting, type="prisma")
        with pytest.raises(InternalServerError) as exc_info:
            BaseRepository(config)
        assert "prisma" in exc_info.value.message

    def test_orm_checks(self, sql_repository, mongo_repository):
        assert sql_repository.is_sqlalchemy() and not sql_repository.is_mongo()
        assert mongo_repository.is_mongo() and not mongo_repository.is_sqlalchemy()

    def test_model(self, sql_repository, mongo_repository, mongo_database):
        assert sql_repository.model is Greeting
        assert mongo_repository.model is mongo_database["messages"]

    def test_missing_driver_message(self):
        """드라이버 import 실패 시 설치 안내."""
        with patch("zacatl.repositories.loader.importlib.import_module", side_effect=ImportError("no pymongo")):
            with pytest.raises(InternalServerError) as exc_info:
                load_adapter_class(ORMType.MONGO)
        assert "pip install 'pymongo'" in exc_info.value.reason

    def test_mongo_without_database_raises(self):
        repository = MessageRepository()
        with pytest.raises(InternalServerError):
            _ = repository.model

    def test_sqlalchemy_without_session_factory_raises(self):
        repository = GreetingRepository()
        with pytest.raises(InternalServerError):
            _ = repository._adapter.session_factory

    async def test_session_factory_from_container(self, session_factory):
        register_value(async_sessionmaker, session_factory)
        repository = GreetingRepository()
        created = await repository.create({"message": "hola", "language": "es"})
        assert await repository.exists(created["id"])


class TestSQLAlchemyRepository:
    """SQLAlchemy CRUD."""

    async def test_create_returns_lean(self, sql_repository):
        lean = await sql_repository.create({"message": "hello"})
        assert isinstance(lean, dict)
        assert isinstance(lean["id"], str)
        uuid.UUID(lean["id"])
        assert lean["message"] == "hello"
        assert lean["language"] == "en"
        assert lean["created_at"].tzinfo is not None
        assert lean["updated_at"].tzinfo is not None

    async def test_find_by_id(self, sql_repository):
        created = await sql_repository.create({"message": "hello"})
        found = await sql_repository.find_by_id(created["id"])
        assert found["message"] == "hello"

    async def test_find_by_id_missing_and_malformed(self, sql_repository):
        assert await sql_repository.find_by_id(str(uuid.uuid4())) is None
        assert await sql_repository.find_by_id("not-a-uuid") is None

    async def test_find_many_filters(self, sql_repository):
        await sql_repository.create({"message": "hello", "language": "en"})
        await sql_repository.create({"message": "hola", "language": "es"})
        assert len(await sql_repository.find_many()) == 2
        spanish = await sql_repository.find_many({"language": "es"})
        assert [g["message"] for g in spanish] == ["hola"]

    async def test_find_many_ignores_unknown_columns(self, sql_repository):
        await sql_repository.create({"message": "hello"})
        assert len(await sql_repository.find_many({"nonexistent": "x"})) == 1

    async def test_update(self, sql_repository):
        created = await sql_repository.create({"message": "hello"})
        updated = await sql_repository.update(created["id"], {"message": "hi", "unknown": 1})
        assert updated["message"] == "hi"
        assert updated["id"] == created["id"]

    async def test_update_missing_returns_none(self, sql_repository):
        assert await sql_repository.update(str(uuid.uuid4()), {"message": "hi"}) is None
        assert await sql_repository.update("bad-id", {"message": "hi"}) is None

    async def test_delete_returns_last_state(self, sql_repository):
        created = await sql_repository.create({"message": "bye"})
        deleted = await sql_repository.delete(created["id"])
        assert deleted["message"] == "bye"
        assert await sql_repository.find_by_id(created["id"]) is None
        assert await sql_repository.delete(created["id"]) is None

    async def test_exists(self, sql_repository):
        created = await sql_repository.create({"message": "hello"})
        assert await sql_repository.exists(created["id"]) is True
        assert await sql_repository.exists(str(uuid.uuid4())) is False
        assert await sql_repository.exists("bad-id") is False

    async def test_initialize_model_is_noop(self, sql_repository):
        assert await sql_repository.initialize_model() is None


class TestMongoRepository:
    """Mongo CRUD."""

    async def test_create_stamps_timestamps(self, mongo_repository, mongo_database):
        lean = await mongo_repository.create({"text": "hello"})
        assert ObjectId.is_valid(lean["id"])
        assert "_id" not in lean
        assert lean["created_at"].tzinfo is not None
        stored = mongo_database["messages"].documents[0]
        assert "created_at" in stored and "updated_at" in stored

    async def test_create_without_timestamps(self, mongo_database):
        register_value(AsyncDatabase, mongo_database)
        repository = MongoRepository(MongoRepositoryConfig(name="events", timestamps=False))
        await repository.create({"kind": "login"})
        assert "created_at" not in mongo_database["events"].documents[0]

    async def test_find_by_id(self, mongo_repository):
        created = await mongo_repository.create({"text": "hello"})
        found = await mongo_repository.find_by_id(created["id"])
        assert found["text"] == "hello"
        assert found["id"] == created["id"]

    async def test_find_by_id_malformed_is_none(self, mongo_repository):
        assert await mongo_repository.find_by_id("not-an-object-id") is None
        assert await mongo_repository.find_by_id(str(ObjectId())) is None

    async def test_find_many(self, mongo_repository):
        await mongo_repository.create({"text": "a", "lang": "en"})
        await mongo_repository.create({"text": "b", "lang": "es"})
        assert len(await mongo_repository.find_many()) == 2
        assert [m["text"] for m in await mongo_repository.find_many({"lang": "es"})] == ["b"]

    async def test_update(self, mongo_repository):
        created = await mongo_repository.create({"text": "hello"})
        updated = await mongo_repository.update(created["id"], {"text": "hi"})
        assert updated["text"] == "hi"
        assert updated["updated_at"] >= created["updated_at"]
        assert await mongo_repository.update(str(ObjectId()), {"text": "x"}) is None
        assert await mongo_repository.update("bad", {"text": "x"}) is None

    async def test_delete(self, mongo_repository):
        created = await mongo_repository.create({"text": "bye"})
        deleted = await mongo_repository.delete(created["id"])
        assert deleted["text"] == "bye"
        assert await mongo_repository.exists(created["id"]) is False
        assert await mongo_repository.delete(created["id"]) is None

    async def test_exists(self, mongo_repository):
        created = await mongo_repository.create({"text": "hello"})
        assert await mongo_repository.exists(created["id"]) is True
        assert await mongo_repository.exists("bad") is False

    async def test_initialize_model_creates_indexes(self, mongo_repository, mongo_database):
        await mongo_repository.initialize_model()
        assert "messages" in await mongo_database.list_collection_names()
        assert mongo_database["messages"].indexes == [("text", {"unique": True})]

    def test_to_lean(self, mongo_repository):
        object_id = ObjectId()
        lean = mongo_repository.to_lean({"_id": object_id, "__v": 0, "text": "x", "created_at": 0})
        assert lean["id"] == str(object_id)
        assert "__v" not in lean
        assert lean["created_at"] == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert mongo_repository.to_lean(None) is None
        assert mongo_repository.to_lean("not a document") is None


class TestCoerceDatetime:
    def test_naive_is_utc(self):
        assert coerce_datetime(datetime(2024, 1, 1)).tzinfo == timezone.utc

    def test_iso_string(self):
        assert coerce_datetime("2024-01-01T00:00:00+00:00") == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_missing_defaults_to_now(self):
        assert (datetime.now(timezone.utc) - coerce_datetime(None)).total_seconds() < 5
