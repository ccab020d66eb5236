"""로거 어댑터 모듈 — structlog 및 콘솔 구현.

Logger adapter module.
Both adapters implement ``LoggerPort``: ``StructlogLoggerAdapter`` for
services (structured output), ``ConsoleLoggerAdapter`` for CLI tools and
desktop apps where plain coloured lines read better.
"""

import json
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

import structlog

from zacatl.logs.config import build_processors, resolve_log_level, use_json_output


class StructlogLoggerAdapter:
    """structlog 기반 구조화 로거 어댑터.

    structlog-based adapter producing one structured event per call. The
    ``data`` and ``details`` inputs are emitted as top-level keys only when
    provided.

    Args:
        level: 최소 로그 레벨 (Minimum level name, defaults to settings.LOG_LEVEL)
        json_logs: JSON 출력 여부 (Force JSON/console output, defaults from settings)
        stream: 출력 스트림 (Destination stream, defaults to stdout)
        service_name: 서비스 이름 (Overrides settings.SERVICE_NAME)
    """

    def __init__(
        self,
        level: str | None = None,
        json_logs: bool | None = None,
        stream: TextIO | None = None,
        service_name: str | None = None,
        app_version: str | None = None,
        app_env: str | None = None,
    ) -> None:
        self._logger = structlog.wrap_logger(
            structlog.PrintLogger(stream or sys.stdout),
            processors=build_processors(
                json_logs if json_logs is not None else use_json_output(),
                service_name=service_name,
                app_version=app_version,
                app_env=app_env,
            ),
            wrapper_class=structlog.make_filtering_bound_logger(resolve_log_level(level)),
            cache_logger_on_first_use=False,
        )

    def get_structlog_instance(self) -> Any:
        """내부 structlog 로거 반환 (Underlying structlog logger for advanced use)."""
        return self._logger

    @staticmethod
    def _fields(data: Any, details: Any) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        if data is not None:
            fields["data"] = data
        if details is not None:
            fields["details"] = details
        return fields

    def log(self, message: str, data: Any = None, details: Any = None) -> None:
        self.info(message, data, details)

    def info(self, message: str, data: Any = None, details: Any = None) -> None:
        self._logger.info(message, **self._fields(data, details))

    def trace(self, message: str, data: Any = None, details: Any = None) -> None:
        self._logger.debug(message, **self._fields(data, details))

    def warn(self, message: str, data: Any = None, details: Any = None) -> None:
        self._logger.warning(message, **self._fields(data, details))

    def error(self, message: str, data: Any = None, details: Any = None) -> None:
        self._logger.error(message, **self._fields(data, details))

    def fatal(self, message: str, data: Any = None, details: Any = None) -> None:
        self._logger.critical(message, **self._fields(data, details))


# ANSI 색상 코드 — ANSI colour codes per level
_COLORS: dict[str, str] = {
    "reset": "\x1b[0m",
    "info": "\x1b[34m",
    "trace": "\x1b[90m",
    "warn": "\x1b[33m",
    "error": "\x1b[31m",
    "fatal": "\x1b[35m",
}


class ConsoleLoggerAdapter:
    """경량 콘솔 로거 어댑터 — CLI/데스크톱용.

    Lightweight console adapter. Lines look like
    ``[2024-01-01T00:00:00+00:00] [INFO] message {"data": ...}``.
    info/trace go to stdout, warn/error/fatal to stderr.
    """

    def __init__(
        self,
        colors: bool = True,
        timestamps: bool = True,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.enable_colors: bool = colors
        self.enable_timestamps: bool = timestamps
        self._stdout: TextIO | None = stdout
        self._stderr: TextIO | None = stderr

    def _format(self, level: str, message: str, data: Any, details: Any) -> str:
        parts: list[str] = []
        if self.enable_timestamps:
            parts.append(f"[{datetime.now(timezone.utc).isoformat()}]")
        parts.append(f"[{level.upper()}]")
        parts.append(message)

        structured: dict[str, Any] = {}
        if data is not None:
            structured["data"] = data
        if details is not None:
            structured["details"] = details
        if structured:
            parts.append(json.dumps(structured, default=str))

        output: str = " ".join(parts)
        if self.enable_colors:
            output = f"{_COLORS[level]}{output}{_COLORS['reset']}"
        return output

    def _write(self, level: str, message: str, data: Any, details: Any) -> None:
        if level in ("info", "trace"):
            stream: TextIO = self._stdout or sys.stdout
        else:
            stream = self._stderr or sys.stderr
        print(self._format(level, message, data, details), file=stream)

    def log(self, message: str, data: Any = None, details: Any = None) -> None:
        self.info(message, data, details)

    def info(self, message: str, data: Any = None, details: Any = None) -> None:
        self._write("info", message, data, details)

    def trace(self, message: str, data: Any = None, details: Any = None) -> None:
        self._write("trace", message, data, details)

    def warn(self, message: str, data: Any = None, details: Any = None) -> None:
        self._write("warn", message, data, details)

    def error(self, message: str, data: Any = None, details: Any = None) -> None:
        self._write("error", message, data, details)

    def fatal(self, message: str, data: Any = None, details: Any = None) -> None:
        self._write("fatal", message, data, details)
