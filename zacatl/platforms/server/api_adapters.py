"""ASGI API 어댑터 — FastAPI / Starlette.

API adapters. Both vendors are ASGI apps, so route execution (hooks,
validation, error mapping, serialization), proxying and uvicorn lifecycle
live in ``AsgiApiAdapter``; the vendor subclasses only differ in how a
route is attached to the app.
"""

import asyncio
import inspect
import json
import socket
from collections.abc import Callable
from typing import Any

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from starlette.applications import Starlette
from starlette.requests import Request as StarletteRequest
from starlette.responses import JSONResponse, Response

from zacatl.api import (
    HOOK_ORDER,
    HTTP_METHODS,
    AbstractRouteHandler,
    HookHandler,
    Reply,
    Request,
    RouteSchema,
    build_error_response,
    to_path_template,
)
from zacatl.logs import logger
from zacatl.middleware import RequestLoggingMiddleware
from zacatl.platforms.server.types import ProxyConfig
from zacatl.utils.exceptions import InternalServerError

Endpoint = Callable[[StarletteRequest], Any]

# 프록시에서 제외할 홉 헤더 — hop-by-hop headers not forwarded by the proxy
_HOP_HEADERS = {"host", "content-length", "transfer-encoding", "connection", "content-encoding"}


class AsgiApiAdapter:
    """ASGI 공통 API 어댑터 (Shared adapter logic for ASGI vendors).

    Attributes:
        app: 벤더 앱 인스턴스 (The FastAPI/Starlette app)
        host: uvicorn 바인드 주소 (Bind address for ``listen``)
    """

    def __init__(self, app: Any, host: str = "0.0.0.0", request_logging: bool = False) -> None:
        self.app: Any = app
        self.host: str = host
        self._hooks: dict[str, list[HookHandler]] = {name: [] for name in HOOK_ORDER}
        self._proxy_clients: list[httpx.AsyncClient] = []
        self._server: uvicorn.Server | None = None
        self._serve_task: asyncio.Task | None = None
        self.port: int | None = None

        if request_logging:
            self.app.add_middleware(RequestLoggingMiddleware)

    # ── 벤더별 구현 — vendor specific ──

    def _add_route(self, path: str, endpoint: Endpoint, methods: list[str]) -> None:
        raise NotImplementedError

    # ── 등록 — registration ──

    def register_route(self, handler: AbstractRouteHandler) -> None:
        method: str = handler.method.upper()
        if method not in HTTP_METHODS:
            logger.warn(
                f"Skipping route with unsupported HTTP method: {method}",
                data={"handler": type(handler).__name__, "url": handler.url},
            )
            return
        self._add_route(to_path_template(handler.url), self._build_endpoint(handler), [method])

    def register_hook(self, handler: HookHandler) -> None:
        if handler.name not in self._hooks:
            raise InternalServerError(
                message=f"Unsupported hook name: {handler.name}",
                reason=f"Hook name must be one of {', '.join(HOOK_ORDER)}",
                component="ApiAdapter",
                operation="register_hook",
                metadata={"hook": type(handler).__name__},
            )
        self._hooks[handler.name].append(handler)

    def register_proxy(self, config: ProxyConfig) -> None:
        client: httpx.AsyncClient = self._create_proxy_client(config)
        self._proxy_clients.append(client)
        prefix: str = config.prefix.rstrip("/")
        self._add_route(f"{prefix}/{{path:path}}", self._build_proxy_endpoint(client, config), list(HTTP_METHODS))

    def _create_proxy_client(self, config: ProxyConfig) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=config.upstream, timeout=30.0)

    # ── 요청 처리 — request pipeline ──

    async def _run_hooks(self, name: str, request: Request, reply: Reply) -> bool:
        """훅을 실행하고 응답이 전송되었는지 반환 (True when a hook sent the reply)."""
        for hook in self._hooks[name]:
            result: Any = hook.execute(request, reply)
            if inspect.isawaitable(result):
                await result
            if reply.sent and name != "preSerialization":
                return True
        return False

    @staticmethod
    async def _read_body(raw: StarletteRequest) -> Any:
        body: bytes = await raw.body()
        if not body:
            return None
        content_type: str = raw.headers.get("content-type", "")
        if not content_type or "json" in content_type:
            return json.loads(body)
        return body.decode("utf-8", errors="replace")

    @staticmethod
    def _validate(schema: RouteSchema, request: Request) -> None:
        # 스키마가 있는 부분만 검증 — only parts with a schema are validated
        if schema.params is not None:
            request.params = schema.params.model_validate(request.params)
        if schema.query is not None:
            request.query = schema.query.model_validate(request.query)
        if schema.headers is not None:
            request.headers = schema.headers.model_validate(request.headers)
        if schema.body is not None:
            request.body = schema.body.model_validate(request.body)

    @staticmethod
    def _to_response(reply: Reply) -> Response:
        payload: Any = reply.payload
        if payload is None:
            return Response(status_code=reply.status_code, headers=reply.headers)
        if isinstance(payload, bytes):
            return Response(content=payload, status_code=reply.status_code, headers=reply.headers)
        if isinstance(payload, str):
            return Response(
                content=payload, status_code=reply.status_code, headers=reply.headers, media_type="text/plain"
            )
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(mode="json")
        return JSONResponse(jsonable_encoder(payload), status_code=reply.status_code, headers=reply.headers)

    def _build_endpoint(self, handler: AbstractRouteHandler) -> Endpoint:
        async def endpoint(raw: StarletteRequest) -> Response:
            reply: Reply = Reply()
            request: Request = Request(
                query=dict(raw.query_params),
                params=dict(raw.path_params),
                headers=dict(raw.headers),
                method=raw.method,
                url=str(raw.url.path),
                raw=raw,
            )
            try:
                if await self._run_hooks("onRequest", request, reply):
                    return self._to_response(reply)

                request.body = await self._read_body(raw)
                if await self._run_hooks("preValidation", request, reply):
                    return self._to_response(reply)

                self._validate(handler.schema, request)
                if await self._run_hooks("preHandler", request, reply):
                    return self._to_response(reply)

                await handler.execute(request, reply)
                if not reply.sent:
                    return Response(status_code=204)

                await self._run_hooks("preSerialization", request, reply)
                return self._to_response(reply)
            except Exception as exc:
                status_code, body = build_error_response(exc)
                return JSONResponse(body, status_code=status_code)

        endpoint.__name__ = type(handler).__name__
        return endpoint

    def _build_proxy_endpoint(self, client: httpx.AsyncClient, config: ProxyConfig) -> Endpoint:
        async def proxy(raw: StarletteRequest) -> Response:
            target: str = f"{(config.rewrite_prefix or '').rstrip('/')}/{raw.path_params.get('path', '')}"
            headers: dict[str, str] = {k: v for k, v in raw.headers.items() if k.lower() not in _HOP_HEADERS}
            try:
                upstream: httpx.Response = await client.request(
                    raw.method,
                    target,
                    params=list(raw.query_params.multi_items()),
                    headers=headers,
                    content=await raw.body(),
                )
            except httpx.HTTPError as exc:
                logger.error(
                    "Proxy request failed",
                    data={"upstream": config.upstream, "path": target, "error": str(exc)},
                )
                return JSONResponse(
                    {"ok": False, "message": "Bad Gateway", "error": {"name": type(exc).__name__}},
                    status_code=502,
                )
            return Response(
                content=upstream.content,
                status_code=upstream.status_code,
                headers={k: v for k, v in upstream.headers.items() if k.lower() not in _HOP_HEADERS},
            )

        return proxy

    # ── 수명 주기 — lifecycle ──

    def _bind_socket(self, port: int) -> socket.socket:
        """수신 소켓 바인드 — 실패 시 예외 (Bind the listening socket, raising on failure)."""
        family: socket.AddressFamily = socket.AF_INET6 if ":" in self.host else socket.AF_INET
        sock: socket.socket = socket.socket(family, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((self.host, port))
        except OSError as exc:
            sock.close()
            raise InternalServerError(
                message=f"Cannot listen on {self.host}:{port}",
                reason=str(exc),
                component="ApiAdapter",
                operation="listen",
                metadata={"host": self.host, "port": port},
                error=exc,
            ) from exc
        return sock

    async def _serve(self, sock: socket.socket) -> None:
        # uvicorn은 기동 실패 시 sys.exit 호출 — uvicorn exits the process on startup failure
        try:
            await self._server.serve(sockets=[sock])
        except SystemExit as exc:
            raise InternalServerError(
                message="Server exited during startup",
                component="ApiAdapter",
                operation="serve",
                metadata={"host": self.host, "port": self.port, "exit_code": exc.code},
            ) from exc

    async def listen(self, port: int) -> None:
        """uvicorn 서버를 백그라운드로 시작하고 기동 완료까지 대기합니다.

        Serve the app with uvicorn in a background task and wait until it is
        accepting connections. Port ``0`` picks a free port, see ``self.port``.

        Raises:
            InternalServerError: 바인드 실패 또는 기동 전 종료 (Bind failed, or the server stopped before listening)
        """
        sock: socket.socket = self._bind_socket(port)
        self.port = sock.getsockname()[1]
        self._server = uvicorn.Server(
            uvicorn.Config(self.app, host=self.host, port=self.port, log_level="warning")
        )
        self._serve_task = asyncio.create_task(self._serve(sock))

        while not self._server.started:
            if self._serve_task.done():
                error: BaseException | None = self._serve_task.exception()
                self._server = None
                self._serve_task = None
                sock.close()
                raise InternalServerError(
                    message=f"Server stopped before listening on port {self.port}",
                    component="ApiAdapter",
                    operation="listen",
                    metadata={"host": self.host, "port": self.port},
                    error=error,
                )
            await asyncio.sleep(0.05)

        logger.info(f"Server listening on {self.host}:{self.port}")

    async def wait(self) -> None:
        """서버가 종료될 때까지 대기합니다 (Block until the serve task finishes)."""
        if self._serve_task is not None:
            await self._serve_task

    async def close(self) -> None:
        if self._server is not None and self._serve_task is not None:
            self._server.should_exit = True
            await self._serve_task
            self._server = None
            self._serve_task = None
        for client in self._proxy_clients:
            await client.aclose()
        self._proxy_clients.clear()

    def get_raw_server(self) -> Any:
        return self.app


class FastApiApiAdapter(AsgiApiAdapter):
    """FastAPI 어댑터 (Routes attached with ``add_api_route``)."""

    def __init__(self, app: FastAPI | None = None, host: str = "0.0.0.0", request_logging: bool = False) -> None:
        super().__init__(app or FastAPI(), host=host, request_logging=request_logging)

    def _add_route(self, path: str, endpoint: Endpoint, methods: list[str]) -> None:
        self.app.add_api_route(path, endpoint, methods=methods, include_in_schema=False)


class StarletteApiAdapter(AsgiApiAdapter):
    """Starlette 어댑터 (Routes attached to the app router)."""

    def __init__(self, app: Starlette | None = None, host: str = "0.0.0.0", request_logging: bool = False) -> None:
        super().__init__(app or Starlette(), host=host, request_logging=request_logging)

    def _add_route(self, path: str, endpoint: Endpoint, methods: list[str]) -> None:
        self.app.router.add_route(path, endpoint, methods=methods)
