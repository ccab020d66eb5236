"""표준 응답 봉투 모델 헬퍼 (Standard response envelope helper)."""

from typing import Any

from pydantic import BaseModel, create_model


def make_with_default_response(model: Any, name: str | None = None) -> type[BaseModel]:
    """``{ok, message, data}`` 봉투 모델을 생성합니다.

    Build the ``{ok, message, data}`` envelope around ``model``.

    Example:
        GreetingResponse = make_with_default_response(GreetingOut)
        GreetingResponse(ok=True, message="Greeting found", data=greeting)
    """
    label: str = name or f"{getattr(model, '__name__', 'Data')}Response"
    return create_model(
        label,
        ok=(bool, ...),
        message=(str, ...),
        data=(model, ...),
    )
