"""플랫폼 조합 — Server / CLI / Desktop.

Wraps the configured platforms and forwards entry points, start and stop
to each of them in that order.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from zacatl.layers.types import EntryPoints
from zacatl.platforms.cli import CLI, ConfigCLI
from zacatl.platforms.desktop import ConfigDesktop, Desktop
from zacatl.platforms.server import ConfigServer, Server


class ConfigPlatforms(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    server: ConfigServer | None = None
    cli: ConfigCLI | None = None
    desktop: ConfigDesktop | None = None


class Platforms:
    def __init__(self, config: ConfigPlatforms) -> None:
        self.config: ConfigPlatforms = config
        self.server: Server | None = Server(config.server) if config.server is not None else None
        self.cli: CLI | None = CLI(config.cli) if config.cli is not None else None
        self.desktop: Desktop | None = Desktop(config.desktop) if config.desktop is not None else None

    async def register_entrypoints(self, entry_points: EntryPoints) -> None:
        if self.server is not None and entry_points.rest is not None:
            await self.server.register_entrypoints(entry_points.rest)
        if self.cli is not None and entry_points.cli is not None:
            await self.cli.register_entrypoints(entry_points.cli)
        if self.desktop is not None and entry_points.ipc is not None:
            await self.desktop.register_entrypoints(entry_points.ipc)

    async def start(self, port: int | None = None) -> Any:
        """플랫폼을 시작합니다 (Start every platform; returns the CLI command result, if any)."""
        result: Any = None
        if self.server is not None:
            await self.server.start(port)
        if self.cli is not None:
            result = await self.cli.start()
        if self.desktop is not None:
            await self.desktop.start()
        return result

    async def wait(self) -> None:
        if self.server is not None:
            await self.server.wait()

    async def stop(self) -> None:
        if self.server is not None:
            await self.server.stop()
        if self.cli is not None:
            await self.cli.stop()
        if self.desktop is not None:
            await self.desktop.stop()
