"""요청/응답 래퍼 모듈.

Request and reply objects handed to route handlers and hooks. They are
independent of the HTTP vendor: the API adapters build them from the
incoming ASGI request and turn the reply back into a response.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Literal

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

HTTP_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")

# ":id" 형식 경로 파라미터 — ":id" style path parameters
_COLON_PARAM = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def to_path_template(url: str) -> str:
    """``/greetings/:id`` → ``/greetings/{id}`` (``{id}`` 형식은 그대로 유지)."""
    return _COLON_PARAM.sub(r"{\1}", url)


@dataclass
class Request:
    """핸들러에 전달되는 요청 (Request seen by hooks and handlers).

    After schema validation ``body``, ``query``, ``params`` and ``headers``
    hold the validated pydantic models; otherwise the raw parsed values.
    """

    body: Any = None
    query: Any = field(default_factory=dict)
    params: Any = field(default_factory=dict)
    headers: Any = field(default_factory=dict)
    method: str = "GET"
    url: str = "/"
    raw: Any = None
    # 훅 간 공유 상태 — per-request state shared between hooks and handler
    state: dict[str, Any] = field(default_factory=dict)


class Reply:
    """응답 빌더 (Mutable reply; ``send`` marks it as answered)."""

    def __init__(self) -> None:
        self.sent: bool = False
        self.status_code: int = 200
        self.headers: dict[str, str] = {}
        self.payload: Any = None

    def code(self, status_code: int) -> "Reply":
        self.status_code = status_code
        return self

    def header(self, name: str, value: str) -> "Reply":
        self.headers[name] = value
        return self

    def send(self, payload: Any = None) -> "Reply":
        self.payload = payload
        self.sent = True
        return self
