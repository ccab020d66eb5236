"""API 서버 — 훅/라우트 등록 및 게이트웨이 프록시.

Resolves REST hooks and routes from the container and hands them to the
vendor adapter; GATEWAY servers also register the configured proxies.
"""

from typing import Any

from zacatl.container import resolve_dependencies
from zacatl.layers.types import RestEntryPoints
from zacatl.platforms.server.api_adapters import AsgiApiAdapter
from zacatl.platforms.server.types import ApiServerType, HttpServerConfig, ProxyConfig
from zacatl.utils.exceptions import CustomError


class ApiServer:
    def __init__(self, config: HttpServerConfig, adapter: AsgiApiAdapter) -> None:
        self.config: HttpServerConfig = config
        self.adapter: AsgiApiAdapter = adapter

    async def register_entrypoints(self, entry_points: RestEntryPoints) -> None:
        await self.register_all_rest_handlers(entry_points)

        if self.config.type == ApiServerType.GATEWAY and self.config.gateway is not None:
            for proxy in self.config.gateway.proxies:
                self.register_proxy(proxy)

    def _register_handlers(self, handlers: list[Any], kind: str) -> None:
        for handler in handlers:
            try:
                if kind == "route":
                    self.adapter.register_route(handler)
                else:
                    self.adapter.register_hook(handler)
            except Exception as exc:
                raise CustomError(
                    message=f"failed to register {kind}: {type(handler).__name__}",
                    code=500,
                    reason="handler registration failed",
                    error=exc,
                    metadata={"handler": type(handler).__name__},
                ) from exc

    async def register_all_hooks(self, entry_points: RestEntryPoints) -> None:
        if entry_points.hooks:
            self._register_handlers(resolve_dependencies(entry_points.hooks), "hook")

    async def register_all_routes(self, entry_points: RestEntryPoints) -> None:
        if entry_points.routes:
            self._register_handlers(resolve_dependencies(entry_points.routes), "route")

    async def register_all_rest_handlers(self, entry_points: RestEntryPoints) -> None:
        # 훅 먼저, 라우트 다음 — hooks before routes
        await self.register_all_hooks(entry_points)
        await self.register_all_routes(entry_points)

    def register_proxy(self, config: ProxyConfig) -> None:
        self.adapter.register_proxy(config)

    async def listen(self, port: int) -> None:
        await self.adapter.listen(port)

    async def wait(self) -> None:
        await self.adapter.wait()

    async def close(self) -> None:
        await self.adapter.close()

    def get_raw_server(self) -> Any:
        return self.adapter.get_raw_server()

    def get_adapter(self) -> AsgiApiAdapter:
        return self.adapter
