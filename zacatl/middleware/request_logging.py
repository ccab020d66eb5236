"""요청 로깅 미들웨어.

Request logging middleware.
Logs method, path, status code and duration of every request through the
framework logger and, when ``AXIOM_API_TOKEN`` and ``AXIOM_DATASET`` are
set, ships the same event to Axiom. Sensitive fields (password, token,
secret) are masked before anything leaves the process.
"""

import json
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from zacatl.config import settings
from zacatl.logs import logger

# 마스킹 대상 필드 패턴 — Fields to mask in request bodies and query strings
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|access_token|refresh_token|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 재귀 마스킹 (Recursively mask sensitive keys in dicts/lists)."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    return data


def _truncate(value: Any, max_len: int = 2000) -> Any:
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 로깅하는 미들웨어.

    Logs every request and response; error responses also carry the
    envelope ``message`` as the error detail.
    """

    def __init__(self, app: Any, axiom_client: AxiomClient | None = None, dataset: str | None = None) -> None:
        super().__init__(app)
        self._dataset: str = dataset or settings.AXIOM_DATASET
        self._client: AxiomClient | None = axiom_client

        if self._client is None and settings.AXIOM_API_TOKEN and self._dataset:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def _read_request_body(self, request: Request) -> Any:
        if request.method not in ("POST", "PUT", "PATCH"):
            return None
        body_bytes: bytes = await request.body()
        if not body_bytes:
            return None
        try:
            return _truncate(mask_sensitive(json.loads(body_bytes)))
        except (json.JSONDecodeError, UnicodeDecodeError):
            return "(non-json body)"

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        # 제외 경로 스킵 — Skip excluded paths
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time: float = time.perf_counter()
        method: str = request.method
        path: str = request.url.path
        query_params: dict[str, str] | None = dict(request.query_params) if request.query_params else None
        request_body: Any = await self._read_request_body(request)

        error_detail: str | None = None
        status_code: int = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code

            # 에러 응답 본문에서 사유 추출 — Extract the message from error responses
            if status_code >= 400:
                resp_body: bytes = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

                try:
                    error_data: Any = json.loads(resp_body)
                    error_detail = str(error_data.get("message", error_data)) if isinstance(error_data, dict) else str(error_data)
                except (json.JSONDecodeError, UnicodeDecodeError):
                    error_detail = resp_body.decode("utf-8", errors="replace")
                error_detail = error_detail[:500]

                # 소비한 본문으로 응답 재구성 — Re-wrap the consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event: dict[str, Any] = {
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            }
            if query_params:
                event["query_params"] = mask_sensitive(query_params)
            if request.path_params:
                event["path_params"] = dict(request.path_params)
            if request_body is not None:
                event["request_body"] = request_body
            if error_detail:
                event["error"] = error_detail

            if status_code >= 500:
                logger.error(f"{method} {path} {status_code}", data=event)
            else:
                logger.info(f"{method} {path} {status_code}", data=event)
            self._ship(event)

        return response

    def _ship(self, event: dict[str, Any]) -> None:
        if self._client is None:
            return
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception as exc:
            # 전송 실패는 요청 처리에 영향 없음 — shipping failures only get logged
            logger.warn("Failed to ship request log to Axiom", data={"error": str(exc)})
