"""서버 플랫폼 — API, 페이지, 데이터베이스 서버 조합.

Server platform. Builds one API adapter and one page adapter over the same
ASGI app, plus an ``ApiServer``, a ``PageServer`` and, when databases are
configured, a ``DatabaseServer``.
"""

from typing import Any

from zacatl.layers.types import RestEntryPoints
from zacatl.platforms.server.api_adapters import AsgiApiAdapter, FastApiApiAdapter, StarletteApiAdapter
from zacatl.platforms.server.api_server import ApiServer
from zacatl.platforms.server.database_server import DatabaseServer
from zacatl.platforms.server.page_adapters import AsgiPageAdapter
from zacatl.platforms.server.page_server import PageServer
from zacatl.platforms.server.types import ConfigServer, HttpServerConfig, ServerVendor
from zacatl.utils.exceptions import CustomError, InternalServerError


class Server:
    def __init__(self, config: ConfigServer) -> None:
        self.config: ConfigServer = config
        self.api_adapter, self.page_adapter = self._create_adapters(config.server)

        self.api_server: ApiServer = ApiServer(config.server, self.api_adapter)
        self.page_server: PageServer = PageServer(config.page, self.page_adapter)
        self.database_server: DatabaseServer | None = (
            DatabaseServer(config.name, config.databases) if config.databases else None
        )

    def _create_adapters(self, server: HttpServerConfig) -> tuple[AsgiApiAdapter, AsgiPageAdapter]:
        """같은 앱 인스턴스 위에 API/페이지 어댑터를 생성합니다 (Both adapters share one app)."""
        options: dict[str, Any] = {"host": self.config.host, "request_logging": self.config.request_logging}
        if server.vendor == ServerVendor.FASTAPI:
            api: AsgiApiAdapter = FastApiApiAdapter(server.instance, **options)
        elif server.vendor == ServerVendor.STARLETTE:
            api = StarletteApiAdapter(server.instance, **options)
        else:
            raise InternalServerError(
                message=f"Unsupported server vendor: {server.vendor}",
                reason="Server vendor must be FASTAPI or STARLETTE",
                component="Server",
                operation="create_adapters",
                metadata={"vendor": str(server.vendor)},
            )
        return api, AsgiPageAdapter(api.get_raw_server())

    async def register_entrypoints(self, entry_points: RestEntryPoints) -> None:
        await self.api_server.register_entrypoints(entry_points)

    async def start(self, port: int | None = None) -> None:
        """데이터베이스 → 페이지 → 수신 순서로 서버를 시작합니다.

        Raises:
            CustomError: 시작 실패 (Any start failure, with service metadata)
        """
        try:
            if self.database_server is not None:
                await self.database_server.configure()
            await self.page_server.configure()
            await self.api_server.listen(port if port is not None else self.config.port)
        except Exception as exc:
            raise CustomError(
                message=f'failed to start service "{self.config.name}"',
                code=500,
                reason="service start failed",
                error=exc,
                metadata={
                    "service": {
                        "name": self.config.name,
                        "vendor": self.config.server.vendor.value,
                        "type": self.config.server.type.value,
                    }
                },
            ) from exc

    async def wait(self) -> None:
        """서버 종료까지 대기 (Block until the API server stops serving)."""
        await self.api_server.wait()

    async def stop(self) -> None:
        await self.api_server.close()
        if self.database_server is not None:
            await self.database_server.disconnect()

    def get_api_adapter(self) -> AsgiApiAdapter:
        return self.api_adapter

    def get_page_adapter(self) -> AsgiPageAdapter:
        return self.page_adapter

    def get_api_server(self) -> ApiServer:
        return self.api_server

    def get_page_server(self) -> PageServer:
        return self.page_server

    def get_database_server(self) -> DatabaseServer | None:
        return self.database_server

    def get_raw_server(self) -> Any:
        return self.api_adapter.get_raw_server()
