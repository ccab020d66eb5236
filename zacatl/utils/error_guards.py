"""예외 타입 판별 헬퍼 모듈.

Type-guard helpers used by the error mapping and by consumers that need to
branch on the kind of failure without importing every exception class.
"""

import json
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from zacatl.utils.exceptions import CustomError


def is_error(error: Any) -> bool:
    return isinstance(error, Exception)


def is_custom_error(error: Any) -> bool:
    """프레임워크 예외 여부 (Whether ``error`` is a zacatl ``CustomError``)."""
    return isinstance(error, CustomError)


def is_validation_error(error: Any) -> bool:
    """pydantic 스키마 검증 실패 여부.

    Whether ``error`` is a pydantic validation failure. Checked by class name
    as well so errors raised by a second pydantic copy are still recognised.
    """
    if isinstance(error, PydanticValidationError):
        return True
    return is_error(error) and type(error).__name__ == "ValidationError" and hasattr(error, "errors")


def is_os_error(error: Any) -> bool:
    # 파일시스템/네트워크 오류 (Filesystem or network errors carrying errno)
    return isinstance(error, OSError)


def is_syntax_error(error: Any) -> bool:
    """구문 오류 여부 — JSON 디코딩 및 UTF-8 디코딩 실패 포함.

    Whether ``error`` is a syntax error, including malformed JSON payloads
    and bodies that are not valid UTF-8.
    """
    return isinstance(error, (SyntaxError, json.JSONDecodeError, UnicodeDecodeError))
