"""ASGI 페이지 어댑터 — 정적 파일과 SPA 폴백.

Page adapter shared by FastAPI and Starlette apps: static files are a
``StaticFiles`` mount and the SPA fallback is a 404 exception handler.
"""

import inspect
import os
from collections.abc import Awaitable, Callable
from typing import Any

from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import FileResponse, JSONResponse, Response
from starlette.staticfiles import StaticFiles

from zacatl.platforms.server.types import StaticConfig


class AsgiPageAdapter:
    def __init__(self, app: Any) -> None:
        self.app: Any = app

    def register_static_files(self, config: StaticConfig) -> None:
        self.app.mount(config.prefix or "/", StaticFiles(directory=config.root, html=True), name="static")

    def register_spa_fallback(self, api_prefix: str, static_dir: str) -> None:
        """API 경로는 JSON 404, 나머지는 index.html 반환.

        Unknown API paths answer a JSON 404; every other unknown path gets
        ``index.html`` so the client-side router can handle it.
        """
        index_file: str = os.path.join(static_dir, "index.html")

        async def not_found(request: Request, exc: HTTPException) -> Response:
            if request.url.path.startswith(api_prefix):
                return JSONResponse(
                    {
                        "code": 404,
                        "error": "Not Found",
                        "message": f"Route {request.method}:{request.url.path} not found",
                    },
                    status_code=404,
                )
            return FileResponse(index_file)

        self.app.add_exception_handler(404, not_found)

    async def register(self, callback: Callable[[Any], Awaitable[None] | None]) -> None:
        # 벤더 앱을 직접 다루는 커스텀 등록 — custom setup against the raw app
        result = callback(self.app)
        if inspect.isawaitable(result):
            await result
