"""커스텀 예외 클래스 모듈.

Custom exception classes module.
Provides a structured base error carrying correlation IDs, the failing
component/operation and an optional cause, plus pre-configured subclasses
for common HTTP error patterns. Route adapters translate these into JSON
error envelopes using ``code`` as the status code.

Usage:
    from zacatl.utils.exceptions import NotFoundError, InternalServerError
    raise NotFoundError(message="Greeting not found")
    raise InternalServerError(
        message="Failed to resolve 'GreetingService'",
        component="DIContainer",
        operation="resolve_dependencies",
    )
"""

import json
import traceback
import uuid
from datetime import datetime, timezone
from typing import Any, Literal

# HTTP 상태 코드 또는 "invalid" 문자열 — HTTP status code or the "invalid" marker
ErrorCode = int | Literal["invalid"] | None


class CustomError(Exception):
    """구조화된 기본 예외 — 모든 프레임워크 예외의 부모 클래스.

    Structured base exception for the framework.
    Every instance gets a unique ``id`` and a ``correlation_id`` (generated
    when not supplied) so a single failure can be traced across log lines.

    Attributes:
        message: 오류 메시지 (Human-readable message)
        code: HTTP 상태 코드 또는 "invalid" (HTTP status code, "invalid" or None)
        reason: 원인 설명 (Short explanation of why it failed)
        metadata: 부가 정보 (Extra structured context)
        error: 원인 예외 (Underlying cause)
        component: 실패한 컴포넌트 (Component where it failed, e.g. "DIContainer")
        operation: 실패한 작업 (Operation that failed, e.g. "resolve_dependencies")
        id: 예외 고유 ID (Unique error id)
        correlation_id: 상관관계 ID (Correlation id)
        time: 발생 시각 UTC (Creation time in UTC)
    """

    custom: bool = True

    def __init__(
        self,
        message: str,
        code: ErrorCode = None,
        reason: str | None = None,
        metadata: dict[str, Any] | None = None,
        error: BaseException | None = None,
        component: str | None = None,
        operation: str | None = None,
        correlation_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.code: ErrorCode = code
        self.reason: str | None = reason
        self.metadata: dict[str, Any] | None = metadata
        self.error: BaseException | None = error
        self.component: str | None = component
        self.operation: str | None = operation
        self.id: str = str(uuid.uuid4())
        self.correlation_id: str = correlation_id or str(uuid.uuid4())
        self.time: datetime = datetime.now(timezone.utc)

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화 가능한 딕셔너리로 변환합니다.

        Convert to a JSON-safe dict. Optional fields are only present when set.
        """
        out: dict[str, Any] = {
            "name": self.name,
            "message": self.message,
            "time": self.time.isoformat(),
            "id": self.id,
            "correlation_id": self.correlation_id,
            "custom": self.custom,
        }
        if self.code is not None:
            out["code"] = self.code
        if self.reason is not None:
            out["reason"] = self.reason
        if self.metadata is not None:
            out["metadata"] = self.metadata
        if self.component is not None:
            out["component"] = self.component
        if self.operation is not None:
            out["operation"] = self.operation
        if self.error is not None:
            out["error"] = {"name": type(self.error).__name__, "message": str(self.error)}
        return out

    def __str__(self) -> str:
        lines: list[str] = [
            f"[{self.time.isoformat()}] {self.name}: {self.message}",
            f"CorrelationId: {self.correlation_id}",
        ]
        if self.code is not None:
            lines.append(f"Code: {self.code}")
        if self.component is not None:
            lines.append(f"Component: {self.component}")
        if self.operation is not None:
            lines.append(f"Operation: {self.operation}")
        if self.reason is not None:
            lines.append(f"Reason: {self.reason}")
        if self.metadata is not None:
            lines.append(f"Metadata: {json.dumps(self.metadata, indent=2, default=str)}")
        if self.error is not None:
            lines.append(f"Caused by: {type(self.error).__name__}: {self.error}")
        if self.__traceback__ is not None:
            lines.append("Stack: " + "".join(traceback.format_tb(self.__traceback__)))
        return "\n".join(lines)


class _FixedCodeError(CustomError):
    """고정 상태 코드를 가진 예외의 공통 부모 (Parent for fixed-code errors)."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        reason: str | None = None,
        metadata: dict[str, Any] | None = None,
        error: BaseException | None = None,
        component: str | None = None,
        operation: str | None = None,
        correlation_id: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=self.status_code,
            reason=reason,
            metadata=metadata,
            error=error,
            component=component,
            operation=operation,
            correlation_id=correlation_id,
        )


class BadRequestError(_FixedCodeError):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when the request is malformed beyond what schema validation catches.
    """

    status_code = 400


class UnauthorizedError(_FixedCodeError):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    401 Unauthorized exception.
    """

    status_code = 401


class ForbiddenError(_FixedCodeError):
    """403 Forbidden 예외 — 권한 부족 시 사용.

    403 Forbidden exception.
    """

    status_code = 403


class NotFoundError(_FixedCodeError):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested resource (record, route, IPC channel) does not exist.
    """

    status_code = 404


class BadResourceError(_FixedCodeError):
    """422 예외 — 리소스는 존재하지만 사용할 수 없는 상태일 때 사용.

    422 exception for resources that exist but cannot be used as requested.
    """

    status_code = 422


class ValidationError(_FixedCodeError):
    """422 Validation 예외 — 비즈니스 규칙 검증 실패 시 사용.

    422 Validation exception.
    Raised for business-rule validation failures (schema failures are 400).
    """

    status_code = 422


class InternalServerError(_FixedCodeError):
    """500 Internal Server Error 예외 — 프레임워크 내부 오류.

    500 Internal Server Error exception.
    Raised for wiring/configuration failures inside the framework.
    """

    status_code = 500
