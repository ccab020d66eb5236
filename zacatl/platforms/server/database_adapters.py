"""데이터베이스 어댑터 — 비동기 PyMongo / SQLAlchemy.

Database adapters. Each one connects, checks the connection, runs the
``on_database_connected`` callback and registers the handles repositories
resolve from the container.
"""

import inspect
import re
from typing import Any
from urllib.parse import unquote

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from zacatl.container import register_value
from zacatl.logs import logger
from zacatl.platforms.server.types import DatabaseConfig, DatabaseVendor
from zacatl.utils.exceptions import CustomError, InternalServerError

# mongodb://host/<db>?options — database name from the URI path
_MONGO_DB_NAME = re.compile(r"^mongodb(?:\+srv)?://[^/]+/([^?]+)(\?|$)")


def get_mongo_db_name(uri: str) -> str | None:
    match = _MONGO_DB_NAME.match(uri)
    return unquote(match.group(1)) if match else None


async def _notify_connected(config: DatabaseConfig, handle: Any) -> None:
    if config.on_database_connected is not None:
        result = config.on_database_connected(handle)
        if inspect.isawaitable(result):
            await result


class MongoDatabaseAdapter:
    """MongoDB 연결 어댑터 (registers the database under ``AsyncDatabase``)."""

    def __init__(self) -> None:
        self.client: Any = None

    async def connect(self, service_name: str, config: DatabaseConfig) -> None:
        self.client = config.instance or AsyncMongoClient(config.connection_string, tz_aware=True)
        if not hasattr(self.client, "get_database"):
            raise CustomError(
                message="database instance is not an AsyncMongoClient",
                code=500,
                reason="database instance not provided",
            )

        database = self.client.get_database(get_mongo_db_name(config.connection_string) or service_name)
        await self.client.admin.command("ping")
        await _notify_connected(config, database)

        register_value(AsyncDatabase, database)
        logger.info("MongoDB connected", data={"database": database.name})

    async def disconnect(self) -> None:
        if self.client is not None:
            await self.client.close()
            self.client = None


class SQLAlchemyDatabaseAdapter:
    """SQLAlchemy 연결 어댑터 (registers ``AsyncEngine`` and ``async_sessionmaker``)."""

    def __init__(self) -> None:
        self.engine: Any = None

    async def connect(self, service_name: str, config: DatabaseConfig) -> None:
        self.engine = config.instance or create_async_engine(config.connection_string)
        if not isinstance(self.engine, AsyncEngine):
            raise CustomError(
                message="database instance is not an AsyncEngine",
                code=500,
                reason="database instance not provided",
            )

        async with self.engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
        await _notify_connected(config, self.engine)

        register_value(AsyncEngine, self.engine)
        register_value(async_sessionmaker, async_sessionmaker(self.engine, expire_on_commit=False))
        logger.info("SQLAlchemy engine connected", data={"service": service_name, "dialect": self.engine.dialect.name})

    async def disconnect(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None


def create_database_adapter(vendor: DatabaseVendor) -> MongoDatabaseAdapter | SQLAlchemyDatabaseAdapter:
    if vendor == DatabaseVendor.MONGO:
        return MongoDatabaseAdapter()
    if vendor == DatabaseVendor.SQLALCHEMY:
        return SQLAlchemyDatabaseAdapter()
    raise InternalServerError(
        message=f"Unsupported database vendor: {vendor}",
        reason="Database vendor must be MONGO or SQLALCHEMY",
        component="DatabaseServer",
        operation="create_database_adapter",
        metadata={"vendor": str(vendor)},
    )
