"""훅 핸들러 기본 클래스 (Hook handler base class).

Hooks run around every route in this order: onRequest, preValidation,
preHandler, preSerialization. A hook that sends the reply ends the request
before the route handler runs.
"""

from abc import ABC, abstractmethod
from typing import Any, Literal

from zacatl.api.request import Reply, Request

HookHandlerName = Literal["onRequest", "preValidation", "preHandler", "preSerialization"]

HOOK_ORDER: tuple[str, ...] = ("onRequest", "preValidation", "preHandler", "preSerialization")


class HookHandler(ABC):
    name: HookHandlerName = "onRequest"

    def __init__(self, name: HookHandlerName | None = None) -> None:
        self.name = name or type(self).name

    @abstractmethod
    def execute(self, request: Request, reply: Reply) -> Any:
        """훅 실행 — 동기 또는 async (Run the hook, sync or async)."""
