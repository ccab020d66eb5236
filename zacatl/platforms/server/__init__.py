"""HTTP 서버 플랫폼 패키지 (HTTP server platform)."""

from zacatl.platforms.server.api_adapters import AsgiApiAdapter, FastApiApiAdapter, StarletteApiAdapter
from zacatl.platforms.server.api_server import ApiServer
from zacatl.platforms.server.database_adapters import (
    MongoDatabaseAdapter,
    SQLAlchemyDatabaseAdapter,
    create_database_adapter,
    get_mongo_db_name,
)
from zacatl.platforms.server.database_server import DatabaseServer
from zacatl.platforms.server.page_adapters import AsgiPageAdapter
from zacatl.platforms.server.page_server import PageServer
from zacatl.platforms.server.server import Server
from zacatl.platforms.server.types import (
    ApiServerType,
    ConfigServer,
    DatabaseConfig,
    DatabaseVendor,
    GatewayService,
    HttpServerConfig,
    PageConfig,
    ProxyConfig,
    ServerVendor,
    StaticConfig,
)

__all__ = [
    "ApiServer",
    "ApiServerType",
    "AsgiApiAdapter",
    "AsgiPageAdapter",
    "ConfigServer",
    "DatabaseConfig",
    "DatabaseServer",
    "DatabaseVendor",
    "FastApiApiAdapter",
    "GatewayService",
    "HttpServerConfig",
    "MongoDatabaseAdapter",
    "PageConfig",
    "PageServer",
    "ProxyConfig",
    "SQLAlchemyDatabaseAdapter",
    "Server",
    "ServerVendor",
    "StarletteApiAdapter",
    "StaticConfig",
    "create_database_adapter",
    "get_mongo_db_name",
]
