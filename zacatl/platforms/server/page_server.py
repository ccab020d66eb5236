"""페이지 서버 — 프론트엔드 정적 파일/SPA 구성.

Serves a built frontend (React, Vue, Svelte, ...) next to the API on the
same app. Every registration failure is wrapped in a ``CustomError``.
"""

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from zacatl.platforms.server.page_adapters import AsgiPageAdapter
from zacatl.platforms.server.types import PageConfig, StaticConfig
from zacatl.utils.exceptions import CustomError


class PageServer:
    def __init__(self, config: PageConfig | None, adapter: AsgiPageAdapter) -> None:
        self.config: PageConfig | None = config
        self.adapter: AsgiPageAdapter = adapter

    def register_static_files(self, config: StaticConfig) -> None:
        try:
            self.adapter.register_static_files(config)
        except Exception as exc:
            raise CustomError(
                message="failed to register static files",
                code=500,
                reason="static file registration failed",
                error=exc,
                metadata={"config": config.model_dump()},
            ) from exc

    def register_spa_fallback(self, api_prefix: str, static_dir: str) -> None:
        try:
            self.adapter.register_spa_fallback(api_prefix, static_dir)
        except Exception as exc:
            raise CustomError(
                message="failed to register SPA fallback",
                code=500,
                reason="SPA fallback registration failed",
                error=exc,
                metadata={"api_prefix": api_prefix, "static_dir": static_dir},
            ) from exc

    async def register(self, callback: Callable[[Any], Awaitable[None] | None]) -> None:
        try:
            await self.adapter.register(callback)
        except Exception as exc:
            raise CustomError(
                message="failed to register page module",
                code=500,
                reason="page module registration failed",
                error=exc,
            ) from exc

    async def configure(self) -> None:
        """설정에 따라 정적 파일과 SPA 라우팅을 구성합니다.

        Static files when ``static_dir`` is set, the SPA fallback when both
        ``static_dir`` and ``api_prefix`` are set, then ``custom_register``.
        """
        if self.config is None:
            return

        static_dir: str | None = self.config.static_dir
        api_prefix: str | None = self.config.api_prefix

        if static_dir:
            self.register_static_files(StaticConfig(root=static_dir))
        if static_dir and api_prefix:
            self.register_spa_fallback(api_prefix, static_dir)

        if self.config.custom_register is not None:
            try:
                result = self.config.custom_register(self.adapter)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                raise CustomError(
                    message="failed to run custom page registration",
                    code=500,
                    reason="custom page registration failed",
                    error=exc,
                ) from exc

    def get_adapter(self) -> AsgiPageAdapter:
        return self.adapter
