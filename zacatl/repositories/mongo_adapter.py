"""비동기 PyMongo 레포지토리 어댑터.

Async PyMongo adapter. The database is resolved from the container under
the ``AsyncDatabase`` token (registered by the Mongo database adapter once
connected), so repositories can be built before the connection exists.
"""

from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from zacatl.container import is_registered, resolve_dependency
from zacatl.repositories.lean import finalize_lean
from zacatl.repositories.types import Lean, MongoRepositoryConfig
from zacatl.utils.exceptions import InternalServerError


def to_object_id(id: Any) -> ObjectId | None:
    """ObjectId로 변환, 잘못된 값은 None (Malformed ids become None)."""
    if isinstance(id, ObjectId):
        return id
    try:
        return ObjectId(id)
    except (InvalidId, TypeError):
        return None


class MongoAdapter:
    """MongoDB 컬렉션 CRUD 어댑터 (CRUD over one collection)."""

    def __init__(self, config: MongoRepositoryConfig) -> None:
        self.config: MongoRepositoryConfig = config

    @property
    def database(self) -> AsyncDatabase:
        if not is_registered(AsyncDatabase):
            raise InternalServerError(
                message=f"No MongoDB database is connected for collection '{self.config.name}'",
                reason="Configure a MONGO database on the server platform before using the repository",
                component="MongoAdapter",
                operation="database",
            )
        return resolve_dependency(AsyncDatabase)

    @property
    def model(self) -> AsyncCollection:
        return self.database[self.config.name]

    def _filter(self, filter: dict[str, Any] | None) -> dict[str, Any]:
        query: dict[str, Any] = dict(filter or {})
        # "id" 키는 _id로 변환 — "id" filters match on _id
        if "id" in query:
            query["_id"] = to_object_id(query.pop("id"))
        return query

    def to_lean(self, value: Any) -> Lean | None:
        if value is None:
            return None
        if hasattr(value, "model_dump"):
            value = value.model_dump()
        if not isinstance(value, dict):
            return None
        fields: dict[str, Any] = {k: v for k, v in value.items() if k not in ("_id", "__v")}
        return finalize_lean(fields, value.get("_id", value.get("id")))

    async def initialize_model(self) -> None:
        """컬렉션과 인덱스를 생성합니다 (Create the collection and its indexes)."""
        database: AsyncDatabase = self.database
        if self.config.name not in await database.list_collection_names():
            await database.create_collection(self.config.name)
        for index in self.config.indexes:
            options: dict[str, Any] = {"unique": index.unique}
            if index.name is not None:
                options["name"] = index.name
            await database[self.config.name].create_index(index.keys, **options)

    async def find_by_id(self, id: str) -> Lean | None:
        object_id: ObjectId | None = to_object_id(id)
        if object_id is None:
            return None
        return self.to_lean(await self.model.find_one({"_id": object_id}))

    async def find_many(self, filter: dict[str, Any] | None = None) -> list[Lean]:
        documents: list[dict[str, Any]] = await self.model.find(self._filter(filter)).to_list(None)
        return [lean for lean in (self.to_lean(doc) for doc in documents) if lean is not None]

    async def create(self, data: dict[str, Any]) -> Lean:
        document: dict[str, Any] = {k: v for k, v in data.items() if k not in ("id", "_id")}
        if self.config.timestamps:
            now: datetime = datetime.now(timezone.utc)
            document.setdefault("created_at", now)
            document.setdefault("updated_at", now)

        result = await self.model.insert_one(document)
        document["_id"] = result.inserted_id

        lean: Lean | None = self.to_lean(document)
        if lean is None:
            raise InternalServerError(
                message=f"Failed to create document in '{self.config.name}'",
                reason="Inserted document could not be converted to a lean document",
                component="MongoAdapter",
                operation="create",
            )
        return lean

    async def update(self, id: str, data: dict[str, Any]) -> Lean | None:
        object_id: ObjectId | None = to_object_id(id)
        if object_id is None:
            return None
        changes: dict[str, Any] = {k: v for k, v in data.items() if k not in ("id", "_id", "created_at")}
        if self.config.timestamps:
            changes["updated_at"] = datetime.now(timezone.utc)
        if not changes:
            return await self.find_by_id(id)

        document = await self.model.find_one_and_update(
            {"_id": object_id},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        return self.to_lean(document)

    async def delete(self, id: str) -> Lean | None:
        object_id: ObjectId | None = to_object_id(id)
        if object_id is None:
            return None
        return self.to_lean(await self.model.find_one_and_delete({"_id": object_id}))

    async def exists(self, id: str) -> bool:
        object_id: ObjectId | None = to_object_id(id)
        if object_id is None:
            return False
        return await self.model.count_documents({"_id": object_id}, limit=1) > 0
