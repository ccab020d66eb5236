"""ASGI 미들웨어 패키지 (ASGI middleware package)."""

from zacatl.middleware.request_logging import RequestLoggingMiddleware, mask_sensitive

__all__ = ["RequestLoggingMiddleware", "mask_sensitive"]
