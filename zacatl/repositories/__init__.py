"""레포지토리 패키지 (Repositories over async PyMongo and async SQLAlchemy)."""

from zacatl.repositories.base import BaseRepository, MongoRepository, SQLAlchemyRepository
from zacatl.repositories.lean import coerce_datetime
from zacatl.repositories.loader import create_adapter, load_adapter_class
from zacatl.repositories.types import (
    Lean,
    MongoIndex,
    MongoRepositoryConfig,
    ORMPort,
    ORMType,
    RepositoryConfig,
    RepositoryPort,
    SQLAlchemyRepositoryConfig,
)

__all__ = [
    "BaseRepository",
    "Lean",
    "MongoIndex",
    "MongoRepository",
    "MongoRepositoryConfig",
    "ORMPort",
    "ORMType",
    "RepositoryConfig",
    "RepositoryPort",
    "SQLAlchemyRepository",
    "SQLAlchemyRepositoryConfig",
    "coerce_datetime",
    "create_adapter",
    "load_adapter_class",
]
