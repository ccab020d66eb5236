"""서버 플랫폼 설정 및 포트 정의.

Server platform configuration models and the ports implemented by the
vendor adapters (API, page, database).
"""

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from zacatl.api import AbstractRouteHandler, HookHandler


class ServerVendor(str, Enum):
    FASTAPI = "FASTAPI"
    STARLETTE = "STARLETTE"


class ApiServerType(str, Enum):
    SERVER = "SERVER"
    GATEWAY = "GATEWAY"


class DatabaseVendor(str, Enum):
    MONGO = "MONGO"
    SQLALCHEMY = "SQLALCHEMY"


class ServerModel(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)


class ProxyConfig(ServerModel):
    """프록시 설정 (Forward ``prefix/*`` to ``upstream``)."""

    upstream: str
    prefix: str = "/"
    rewrite_prefix: str | None = None


class GatewayService(ServerModel):
    proxies: list[ProxyConfig] = Field(default_factory=list)


class HttpServerConfig(ServerModel):
    """HTTP 서버 설정.

    Attributes:
        type: SERVER 또는 GATEWAY (GATEWAY also registers proxies)
        vendor: FASTAPI 또는 STARLETTE
        instance: 벤더 앱 인스턴스, 없으면 새로 생성 (ASGI app; built when None)
        gateway: 게이트웨이 프록시 목록 (Gateway proxies)
    """

    type: ApiServerType = ApiServerType.SERVER
    vendor: ServerVendor
    instance: Any = None
    gateway: GatewayService | None = None


OnDatabaseConnected = Callable[[Any], Awaitable[None] | None]


class DatabaseConfig(ServerModel):
    """데이터베이스 연결 설정.

    Attributes:
        vendor: MONGO 또는 SQLALCHEMY
        connection_string: 연결 URI (Connection URI)
        instance: 미리 생성한 AsyncMongoClient/AsyncEngine (Pre-built client or engine)
        on_database_connected: 연결 후 콜백 (Called with the database/engine once connected)
    """

    vendor: DatabaseVendor
    connection_string: str = ""
    instance: Any = None
    on_database_connected: OnDatabaseConnected | None = None


class PageConfig(ServerModel):
    """페이지 서버 설정 (Static files, SPA fallback and custom registration)."""

    static_dir: str | None = None
    api_prefix: str | None = None
    custom_register: Callable[[Any], Awaitable[None] | None] | None = None


class ConfigServer(ServerModel):
    """서버 플랫폼 설정.

    Attributes:
        name: 서비스 이름 (Service name, also the default Mongo database name)
        server: HTTP 서버 설정 (HTTP server configuration)
        databases: 데이터베이스 목록 (Databases connected on start)
        page: 페이지 서버 설정 (Optional page serving)
        port: 수신 포트 (Listening port)
        request_logging: 요청 로깅 미들웨어 사용 여부 (Install request logging middleware)
    """

    name: str
    server: HttpServerConfig
    databases: list[DatabaseConfig] = Field(default_factory=list)
    page: PageConfig | None = None
    port: int = 3000
    host: str = "0.0.0.0"
    request_logging: bool = False


class StaticConfig(ServerModel):
    root: str
    prefix: str | None = None


class ApiServerPort(Protocol):
    def register_route(self, handler: AbstractRouteHandler) -> None: ...

    def register_hook(self, handler: HookHandler) -> None: ...

    def register_proxy(self, config: ProxyConfig) -> None: ...

    async def listen(self, port: int) -> None: ...

    async def wait(self) -> None: ...

    async def close(self) -> None: ...

    def get_raw_server(self) -> Any: ...


class PageServerPort(Protocol):
    def register_static_files(self, config: StaticConfig) -> None: ...

    def register_spa_fallback(self, api_prefix: str, static_dir: str) -> None: ...

    async def register(self, server: Any) -> None: ...


class DatabaseServerPort(Protocol):
    async def connect(self, service_name: str, config: DatabaseConfig) -> None: ...

    async def disconnect(self) -> None: ...
