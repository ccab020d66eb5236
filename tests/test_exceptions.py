"""예외 클래스, 타입 가드, HTTP 오류 변환 테스트.

Custom error tests: fixed codes, serialization, type guards and the
exception → HTTP envelope mapping.
"""

import json

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from zacatl.api import build_error_response
from zacatl.utils.error_guards import (
    is_custom_error,
    is_error,
    is_os_error,
    is_syntax_error,
    is_validation_error,
)
from zacatl.utils.exceptions import (
    BadRequestError,
    BadResourceError,
    CustomError,
    ForbiddenError,
    InternalServerError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


class _Payload(BaseModel):
    name: str


def _pydantic_error() -> PydanticValidationError:
    try:
        _Payload.model_validate({})
    except PydanticValidationError as exc:
        return exc
    raise AssertionError("validation should have failed")


class TestCustomError:
    """CustomError 기본 동작."""

    def test_generates_ids(self):
        """id와 correlation_id가 자동 생성됨."""
        error = CustomError(message="boom")
        assert error.id
        assert error.correlation_id
        assert error.id != error.correlation_id
        assert error.custom is True
        assert error.time.tzinfo is not None

    def test_keeps_given_correlation_id(self):
        error = CustomError(message="boom", correlation_id="req-123")
        assert error.correlation_id == "req-123"

    def test_to_dict_only_includes_set_fields(self):
        """설정되지 않은 선택 필드는 포함되지 않음."""
        data = CustomError(message="boom").to_dict()
        assert data["name"] == "CustomError"
        assert data["message"] == "boom"
        for key in ("code", "reason", "metadata", "component", "operation", "error"):
            assert key not in data

    def test_to_dict_reduces_cause(self):
        cause = ValueError("bad value")
        data = CustomError(
            message="boom",
            code=500,
            reason="because",
            metadata={"a": 1},
            component="DIContainer",
            operation="resolve",
            error=cause,
        ).to_dict()
        assert data["error"] == {"name": "ValueError", "message": "bad value"}
        assert data["component"] == "DIContainer"
        json.dumps(data)

    def test_str_is_multiline(self):
        text = str(CustomError(message="boom", code=418, component="Teapot", reason="short and stout"))
        assert "CustomError: boom" in text
        assert "Code: 418" in text
        assert "Component: Teapot" in text
        assert "Reason: short and stout" in text

    def test_fixed_codes(self):
        """하위 클래스의 고정 상태 코드."""
        assert BadRequestError(message="x").code == 400
        assert UnauthorizedError(message="x").code == 401
        assert ForbiddenError(message="x").code == 403
        assert NotFoundError(message="x").code == 404
        assert BadResourceError(message="x").code == 422
        assert ValidationError(message="x").code == 422
        assert InternalServerError(message="x").code == 500

    def test_subclass_name(self):
        assert NotFoundError(message="x").name == "NotFoundError"
        assert isinstance(NotFoundError(message="x"), CustomError)


class TestErrorGuards:
    """타입 가드 함수."""

    def test_is_error(self):
        assert is_error(ValueError())
        assert not is_error("not an error")

    def test_is_custom_error(self):
        assert is_custom_error(NotFoundError(message="x"))
        assert not is_custom_error(ValueError())

    def test_is_validation_error(self):
        assert is_validation_error(_pydantic_error())
        assert not is_validation_error(ValidationError(message="business rule"))

    def test_is_os_error(self):
        assert is_os_error(FileNotFoundError())
        assert not is_os_error(ValueError())

    def test_is_syntax_error(self):
        try:
            json.loads("{bad")
        except json.JSONDecodeError as exc:
            assert is_syntax_error(exc)
        assert is_syntax_error(SyntaxError())
        assert is_syntax_error(UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"))
        assert not is_syntax_error(ValueError())


class TestBuildErrorResponse:
    """예외 → (상태 코드, 본문) 변환."""

    def test_pydantic_validation_is_400(self):
        status, body = build_error_response(_pydantic_error())
        assert status == 400
        assert body["ok"] is False
        assert body["error"]["name"] == "ValidationError"
        assert body["error"]["issues"][0]["loc"] == ["name"]

    def test_json_decode_is_400(self):
        status, body = build_error_response(json.JSONDecodeError("Expecting value", "{", 1))
        assert status == 400
        assert body["error"]["name"] == "BadRequest"

    def test_custom_error_uses_code(self):
        error = NotFoundError(message="Greeting not found", reason="no such id")
        status, body = build_error_response(error)
        assert status == 404
        assert body == {
            "ok": False,
            "message": "Greeting not found",
            "error": {
                "name": "NotFoundError",
                "code": 404,
                "correlation_id": error.correlation_id,
                "reason": "no such id",
            },
        }

    def test_custom_error_without_http_code_is_500(self):
        status, _ = build_error_response(CustomError(message="x", code="invalid"))
        assert status == 500
        status, _ = build_error_response(CustomError(message="x", code=302))
        assert status == 500

    def test_unknown_error_is_500(self):
        status, body = build_error_response(RuntimeError("secret detail"))
        assert status == 500
        assert body["message"] == "Internal Server Error"
        assert body["error"] == {"name": "RuntimeError"}
