"""로깅 패키지 (Logging package)."""

from zacatl.logs.adapters import ConsoleLoggerAdapter, StructlogLoggerAdapter
from zacatl.logs.config import bind_context, clear_context, unbind_context
from zacatl.logs.logger import Logger, LoggerPort, create_logger, logger

__all__ = [
    "ConsoleLoggerAdapter",
    "Logger",
    "LoggerPort",
    "StructlogLoggerAdapter",
    "bind_context",
    "clear_context",
    "create_logger",
    "logger",
    "unbind_context",
]
