"""로거 포트 및 팩토리 모듈.

Logger port and factory.
``create_logger`` wraps any ``LoggerPort`` adapter; the module-level
``logger`` uses the structlog adapter and is what the framework logs with.

Usage:
    from zacatl.logs import logger, create_logger, ConsoleLoggerAdapter

    logger.info("Application started")
    logger.error("Request failed", data={"path": "/greetings"}, details={"status": 500})

    cli_logger = create_logger(ConsoleLoggerAdapter())
"""

from typing import Any, Protocol

from zacatl.logs.adapters import StructlogLoggerAdapter


class LoggerPort(Protocol):
    """로거 어댑터 인터페이스 — 커스텀 전송 구현 시 사용.

    Adapter interface; implement it to plug in another transport.
    """

    def log(self, message: str, data: Any = None, details: Any = None) -> None: ...

    def info(self, message: str, data: Any = None, details: Any = None) -> None: ...

    def trace(self, message: str, data: Any = None, details: Any = None) -> None: ...

    def warn(self, message: str, data: Any = None, details: Any = None) -> None: ...

    def error(self, message: str, data: Any = None, details: Any = None) -> None: ...

    def fatal(self, message: str, data: Any = None, details: Any = None) -> None: ...


class Logger:
    """어댑터에 위임하는 로거 (Logger delegating every call to its adapter)."""

    def __init__(self, adapter: LoggerPort) -> None:
        self.adapter: LoggerPort = adapter

    def log(self, message: str, data: Any = None, details: Any = None) -> None:
        self.adapter.log(message, data, details)

    def info(self, message: str, data: Any = None, details: Any = None) -> None:
        self.adapter.info(message, data, details)

    def trace(self, message: str, data: Any = None, details: Any = None) -> None:
        self.adapter.trace(message, data, details)

    def warn(self, message: str, data: Any = None, details: Any = None) -> None:
        self.adapter.warn(message, data, details)

    def error(self, message: str, data: Any = None, details: Any = None) -> None:
        self.adapter.error(message, data, details)

    def fatal(self, message: str, data: Any = None, details: Any = None) -> None:
        self.adapter.fatal(message, data, details)


def create_logger(adapter: LoggerPort | None = None) -> Logger:
    """어댑터로 로거를 생성합니다 (기본: structlog).

    Create a logger over ``adapter``, defaulting to ``StructlogLoggerAdapter``.
    """
    return Logger(adapter or StructlogLoggerAdapter())


# 기본 로거 인스턴스 — Default framework logger
logger: Logger = create_logger()
