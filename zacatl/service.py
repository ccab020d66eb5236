"""서비스 — 레이어와 플랫폼을 조합하는 진입점.

Service composition root. Validates the configuration, registers the
layers in the container, builds the platforms and starts them.

Usage:
    service = Service({
        "type": ServiceType.SERVER,
        "layers": {
            "infrastructure": {"repositories": [GreetingRepository]},
            "domain": {"providers": [GreetingService]},
            "application": {"entry_points": {"rest": {"routes": [GetGreetingRoute]}}},
        },
        "platforms": {
            "server": {
                "name": "greetings",
                "server": {"vendor": ServerVendor.FASTAPI},
                "databases": [{"vendor": DatabaseVendor.SQLALCHEMY, "connection_string": url}],
                "port": 8000,
            }
        },
    })
    await service.start()
"""

import asyncio
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from zacatl.layers import ConfigLayers, Layers
from zacatl.logs import logger
from zacatl.platforms import ConfigPlatforms, Platforms
from zacatl.utils.exceptions import InternalServerError


class ServiceType(str, Enum):
    SERVER = "SERVER"
    CLI = "CLI"
    DESKTOP = "DESKTOP"


class RunConfig(BaseModel):
    auto: bool = False


class ConfigService(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    type: ServiceType | None = None
    layers: ConfigLayers | None = None
    platforms: ConfigPlatforms | None = None
    run: RunConfig | None = None


# 서비스 타입별 필수 플랫폼과 진입점 — required platform and entry point per type
_REQUIREMENTS: dict[ServiceType, tuple[str, str, str, str]] = {
    ServiceType.SERVER: ("server", "Server", "rest", "REST"),
    ServiceType.CLI: ("cli", "CLI", "cli", "CLI"),
    ServiceType.DESKTOP: ("desktop", "Desktop", "ipc", "IPC"),
}


class Service:
    def __init__(self, config: ConfigService | dict[str, Any]) -> None:
        self.config: ConfigService = (
            config if isinstance(config, ConfigService) else ConfigService.model_validate(config)
        )
        self.validate_config(self.config)

        self.layers: Layers | None = Layers(self.config.layers) if self.config.layers is not None else None
        self.platforms: Platforms | None = (
            Platforms(self.config.platforms) if self.config.platforms is not None else None
        )
        self._start_task: asyncio.Task | None = None
        self.result: Any = None

        if self.config.run is not None and self.config.run.auto:
            self._auto_start()

    @staticmethod
    def validate_config(config: ConfigService) -> None:
        """서비스 타입에 필요한 플랫폼/진입점 설정을 검증합니다.

        Raises:
            InternalServerError: 타입 누락 또는 필수 설정 누락 (Missing type or required section)
        """
        if config.type is None:
            raise InternalServerError(
                message="Service configuration must specify a 'type' field",
                reason="Missing service type",
                component="Service",
                operation="validate_config",
            )

        platform, platform_label, entry_point, entry_label = _REQUIREMENTS[config.type]
        metadata: dict[str, Any] = {"service_type": config.type.value}

        if config.platforms is None or getattr(config.platforms, platform) is None:
            raise InternalServerError(
                message=f"ServiceType.{config.type.value} requires 'platforms.{platform}' configuration",
                reason=f"{platform_label} platform configuration is missing",
                component="Service",
                operation="validate_config",
                metadata=metadata,
            )

        application = config.layers.application if config.layers is not None else None
        if application is None or getattr(application.entry_points, entry_point) is None:
            raise InternalServerError(
                message=(
                    f"ServiceType.{config.type.value} requires "
                    f"'layers.application.entry_points.{entry_point}' configuration"
                ),
                reason=f"{entry_label} entry points configuration is missing",
                component="Service",
                operation="validate_config",
                metadata=metadata,
            )

    def _auto_start(self) -> None:
        try:
            loop: asyncio.AbstractEventLoop = asyncio.get_running_loop()
        except RuntimeError:
            self.result = asyncio.run(self.run())
            return

        self._start_task = loop.create_task(self.start())
        self._start_task.add_done_callback(self._on_auto_start_done)

    @staticmethod
    def _on_auto_start_done(task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.fatal("Failed to start service automatically", data={"error": str(task.exception())})

    async def start(self, port: int | None = None) -> Any:
        """진입점을 플랫폼에 등록하고 플랫폼을 시작합니다 (errors propagate).

        Returns:
            Any: CLI 명령 결과, 그 외 None (The CLI command result, otherwise None)
        """
        application = self.config.layers.application if self.config.layers is not None else None
        if application is None or self.platforms is None:
            return None
        await self.platforms.register_entrypoints(application.entry_points)
        return await self.platforms.start(port)

    async def run(self, port: int | None = None) -> Any:
        """시작 후 서버가 종료될 때까지 대기하고 정리합니다.

        Start, block until the server stops serving (like ``uvicorn.run``),
        then stop every platform.
        """
        try:
            result: Any = await self.start(port)
            if self.platforms is not None:
                await self.platforms.wait()
            return result
        finally:
            await self.stop()

    async def stop(self) -> None:
        if self.platforms is not None:
            await self.platforms.stop()
