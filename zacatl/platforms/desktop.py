"""데스크톱 플랫폼 — IPC 핸들러 디스패치.

Desktop platform. IPC handlers are looked up by channel; the desktop shell
(Electron, Neutralino or a Python webview bridge) calls ``invoke``.
"""

import inspect
from abc import ABC, abstractmethod
from typing import Any, Literal

from pydantic import BaseModel

from zacatl.container import resolve_dependencies
from zacatl.layers.types import IPCEntryPoints
from zacatl.logs import logger
from zacatl.utils.exceptions import NotFoundError


class WindowConfig(BaseModel):
    title: str
    width: int
    height: int
    resizable: bool = True
    min_width: int | None = None
    min_height: int | None = None


class ConfigDesktop(BaseModel):
    window: WindowConfig
    platform: Literal["neutralino", "electron"]


class IPCHandler(ABC):
    channel: str = ""

    @abstractmethod
    def handle(self, payload: Any) -> Any:
        """채널 메시지 처리 — 동기 또는 async (Handle one message, sync or async)."""


class Desktop:
    def __init__(self, config: ConfigDesktop) -> None:
        self.config: ConfigDesktop = config
        self.handlers: dict[str, IPCHandler] = {}
        self.started: bool = False

    async def register_entrypoints(self, entry_points: IPCEntryPoints) -> None:
        for handler in resolve_dependencies(entry_points.handlers):
            self.handlers[handler.channel] = handler

    async def start(self) -> None:
        window: WindowConfig = self.config.window
        logger.info(
            f"Starting desktop platform ({self.config.platform}): {window.title}",
            data={"width": window.width, "height": window.height, "channels": sorted(self.handlers)},
        )
        self.started = True

    async def invoke(self, channel: str, payload: Any = None) -> Any:
        """채널로 메시지를 전달합니다.

        Raises:
            NotFoundError: 등록되지 않은 채널 (No handler for ``channel``)
        """
        handler: IPCHandler | None = self.handlers.get(channel)
        if handler is None:
            raise NotFoundError(
                message=f"No IPC handler registered for channel '{channel}'",
                component="Desktop",
                operation="invoke",
                metadata={"channel": channel},
            )
        result: Any = handler.handle(payload)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def stop(self) -> None:
        self.started = False
