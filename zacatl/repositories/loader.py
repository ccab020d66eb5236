"""ORM 어댑터 지연 로더.

Imports an ORM adapter module only when a repository of that kind is
built, so a service using one ORM never imports the other driver.
"""

import importlib
from typing import Any

from zacatl.repositories.types import ORMType, RepositoryConfig
from zacatl.utils.exceptions import InternalServerError

# ORM별 (모듈, 클래스, 필요한 패키지) — module, class and package per ORM
_ADAPTERS: dict[ORMType, tuple[str, str, str]] = {
    ORMType.MONGO: ("zacatl.repositories.mongo_adapter", "MongoAdapter", "pymongo"),
    ORMType.SQLALCHEMY: ("zacatl.repositories.sqlalchemy_adapter", "SQLAlchemyAdapter", "sqlalchemy[asyncio]"),
}


def load_adapter_class(orm_type: ORMType) -> type:
    """ORM 어댑터 클래스를 로드합니다.

    Raises:
        InternalServerError: 지원하지 않는 ORM 또는 드라이버 미설치
                             (Unsupported ORM, or its driver is not installed)
    """
    if orm_type not in _ADAPTERS:
        raise InternalServerError(
            message=f"Unsupported ORM type: {orm_type}",
            reason=f"Supported types: {', '.join(t.value for t in ORMType)}",
            component="AdapterLoader",
            operation="load_adapter_class",
        )

    module_name, class_name, package = _ADAPTERS[orm_type]
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise InternalServerError(
            message=f"{orm_type.value} support requires the '{package}' package",
            reason=f"Install it with: pip install '{package}'",
            component="AdapterLoader",
            operation="load_adapter_class",
            error=exc,
        ) from exc
    return getattr(module, class_name)


def create_adapter(config: RepositoryConfig) -> Any:
    return load_adapter_class(config.type)(config)
