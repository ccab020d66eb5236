"""structlog 프로세서 구성 모듈.

Structured logging configuration using structlog.
Builds the processor chain used by the default logger adapter: JSON
output in production, the structlog console renderer everywhere else.
"""

import logging
import os
import socket
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from zacatl.config import settings


def add_service_context(
    service_name: str | None = None,
    app_version: str | None = None,
    app_env: str | None = None,
) -> Processor:
    """서비스 메타데이터를 모든 로그에 추가하는 프로세서를 만듭니다.

    Build a processor that binds pid, host, service name, environment and
    app version/environment to every event.
    """
    bindings: dict[str, Any] = {
        "pid": os.getpid(),
        "host": socket.gethostname(),
        "service": service_name or settings.SERVICE_NAME,
        "environment": settings.ENV,
        "app": {
            "version": app_version or settings.APP_VERSION,
            "environment": app_env or settings.app_env,
        },
    }

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in bindings.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def resolve_log_level(level: str | None = None) -> int:
    """로그 레벨 이름을 정수로 변환합니다 ("TRACE"는 DEBUG로 취급)."""
    name: str = (level or settings.LOG_LEVEL).upper()
    if name == "TRACE":
        return logging.DEBUG
    if name == "FATAL":
        return logging.CRITICAL
    return getattr(logging, name, logging.INFO)


def use_json_output(log_format: str | None = None) -> bool:
    fmt: str = (log_format or settings.LOG_FORMAT).lower()
    if fmt == "json":
        return True
    if fmt == "console":
        return False
    return settings.is_production


def build_processors(
    json_logs: bool,
    service_name: str | None = None,
    app_version: str | None = None,
    app_env: str | None = None,
) -> list[Processor]:
    """로그 프로세서 체인을 구성합니다.

    Configure the processor chain: context vars, level, ISO timestamp,
    service bindings, exception formatting and the final renderer.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_service_context(service_name, app_version, app_env),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer(default=str))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return processors


def bind_context(**kwargs: Any) -> None:
    """이후 모든 로그에 컨텍스트 변수를 바인딩합니다 (e.g. request id)."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
