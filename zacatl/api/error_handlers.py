"""예외 → HTTP 응답 변환 모듈.

Maps any exception raised while serving a route to a status code and a
JSON envelope ``{ok: false, message, error}``.
"""

from typing import Any

from zacatl.logs import logger
from zacatl.utils.error_guards import is_custom_error, is_syntax_error, is_validation_error


def build_error_response(exc: BaseException) -> tuple[int, dict[str, Any]]:
    """예외를 (상태 코드, 본문)으로 변환합니다.

    Returns:
        tuple: (status_code, body)
    """
    if is_custom_error(exc):
        status_code: int = exc.code if isinstance(exc.code, int) and exc.code >= 400 else 500
        error: dict[str, Any] = {"name": exc.name, "code": exc.code, "correlation_id": exc.correlation_id}
        if exc.reason is not None:
            error["reason"] = exc.reason
        if status_code >= 500:
            logger.error(exc.message, data=exc.to_dict())
        return status_code, {"ok": False, "message": exc.message, "error": error}

    if is_validation_error(exc):
        issues: list[dict[str, Any]] = [
            {"loc": list(issue.get("loc", ())), "msg": issue.get("msg"), "type": issue.get("type")}
            for issue in exc.errors()
        ]
        return 400, {
            "ok": False,
            "message": "Validation failed",
            "error": {"name": "ValidationError", "issues": issues},
        }

    if is_syntax_error(exc):
        return 400, {"ok": False, "message": "Malformed request body", "error": {"name": "BadRequest"}}

    logger.error(
        "Unhandled route error",
        data={"name": type(exc).__name__, "message": str(exc)},
    )
    return 500, {"ok": False, "message": "Internal Server Error", "error": {"name": type(exc).__name__}}
