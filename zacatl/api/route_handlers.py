"""라우트 핸들러 기본 클래스 모듈.

Route handler base classes.
Subclasses declare ``url``, ``schema`` and a ``handler`` method; the
constructor takes its dependencies (auto-wired by the container) and may
pass ``url``/``schema`` up instead of using class attributes.

Usage:
    class GetGreetingRoute(GetRouteHandler):
        url = "/greetings/:id"
        schema = RouteSchema(params=GreetingParams, response=GreetingOut)

        def __init__(self, service: GreetingService) -> None:
            super().__init__()
            self.service = service

        async def handler(self, request: Request) -> dict:
            return await self.service.get(request.params.id)
"""

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from zacatl.api.request import HttpMethod, Reply, Request
from zacatl.utils.exceptions import InternalServerError


@dataclass
class RouteSchema:
    """라우트 스키마 — 요청 검증 및 응답 검증용 pydantic 모델.

    Optional pydantic models validating each request part and the response.
    """

    body: type[BaseModel] | None = None
    query: type[BaseModel] | None = None
    params: type[BaseModel] | None = None
    headers: type[BaseModel] | None = None
    response: type[BaseModel] | None = None


class AbstractRouteHandler(ABC):
    """모든 라우트 핸들러의 부모 클래스 (Base class for every route handler)."""

    url: str = ""
    method: HttpMethod = "GET"
    schema: RouteSchema | None = None

    def __init__(
        self,
        url: str | None = None,
        method: HttpMethod | None = None,
        schema: RouteSchema | None = None,
    ) -> None:
        self.url = url if url is not None else type(self).url
        self.method = method if method is not None else type(self).method
        self.schema = schema or type(self).schema or RouteSchema()

    @abstractmethod
    def handler(self, request: Request) -> Any:
        """요청 처리 — 동기 또는 async (Handle the request, sync or async)."""

    def build_response(self, data: Any) -> Any:
        return data

    async def execute(self, request: Request, reply: Reply) -> Any:
        """핸들러를 실행하고 응답을 전송합니다.

        Run ``handler``; unless it already sent the reply, send 200 with
        ``build_response(result)`` (validated against ``schema.response``).

        Returns:
            Any: 핸들러 결과 (The raw handler result)
        """
        result: Any = self.handler(request)
        if inspect.isawaitable(result):
            result = await result

        if reply.sent:
            return result

        response: Any = self.build_response(result)
        if self.schema.response is not None:
            # 응답 스키마 위반은 서버 오류 — a response breaking its schema is a server error
            try:
                response = self.schema.response.model_validate(response)
            except PydanticValidationError as exc:
                raise InternalServerError(
                    message="Response validation failed",
                    reason=str(exc),
                    component=type(self).__name__,
                    operation="execute",
                    metadata={"url": self.url, "method": self.method},
                    error=exc,
                ) from exc

        reply.code(200).send(response)
        return result


class GetRouteHandler(AbstractRouteHandler):
    method: HttpMethod = "GET"

    def __init__(self, url: str | None = None, schema: RouteSchema | None = None) -> None:
        super().__init__(url=url, method="GET", schema=schema)


class PostRouteHandler(AbstractRouteHandler):
    method: HttpMethod = "POST"

    def __init__(self, url: str | None = None, schema: RouteSchema | None = None) -> None:
        super().__init__(url=url, method="POST", schema=schema)


class PutRouteHandler(AbstractRouteHandler):
    method: HttpMethod = "PUT"

    def __init__(self, url: str | None = None, schema: RouteSchema | None = None) -> None:
        super().__init__(url=url, method="PUT", schema=schema)


class PatchRouteHandler(AbstractRouteHandler):
    method: HttpMethod = "PATCH"

    def __init__(self, url: str | None = None, schema: RouteSchema | None = None) -> None:
        super().__init__(url=url, method="PATCH", schema=schema)


class DeleteRouteHandler(AbstractRouteHandler):
    method: HttpMethod = "DELETE"

    def __init__(self, url: str | None = None, schema: RouteSchema | None = None) -> None:
        super().__init__(url=url, method="DELETE", schema=schema)
