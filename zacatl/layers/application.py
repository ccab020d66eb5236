"""애플리케이션 레이어 — 진입점 등록.

Application layer. Registers REST hooks and routes, CLI commands and IPC
handlers as singletons and checks that every one of them resolves, so a
missing provider fails at startup instead of on the first request.
"""

from typing import Any

from zacatl.container import register_singleton, resolve_dependencies
from zacatl.layers.types import ConfigApplication
from zacatl.utils.exceptions import CustomError, InternalServerError


class Application:
    def __init__(self, config: ConfigApplication) -> None:
        self.config: ConfigApplication = config
        self.register()

    def register(self) -> None:
        entry_points = self.config.entry_points
        if entry_points.rest is not None:
            self._register_rest()
        if entry_points.cli is not None:
            self._register_group("cli", {"commands": entry_points.cli.commands})
        if entry_points.ipc is not None:
            self._register_group("ipc", {"handlers": entry_points.ipc.handlers})

    def _register_rest(self) -> None:
        rest = self.config.entry_points.rest
        self._register_group("rest", {"hooks": rest.hooks, "routes": rest.routes})

    def _register_group(self, group: str, classes_by_kind: dict[str, list[type]]) -> None:
        for classes in classes_by_kind.values():
            for cls in classes:
                register_singleton(cls)

        # 모든 진입점이 해석되는지 검증 — every entry point must resolve
        metadata: dict[str, Any] = {f"expected_{kind}": len(classes) for kind, classes in classes_by_kind.items()}
        for kind, classes in classes_by_kind.items():
            try:
                metadata[f"resolved_{kind}"] = len(resolve_dependencies(classes))
            except CustomError as exc:
                metadata[f"resolved_{kind}"] = 0
                raise InternalServerError(
                    message=f"Failed to register all {group.upper()} entry point dependencies",
                    reason=f"Not all {group} entry points could be resolved from the DI container",
                    component="ApplicationLayer",
                    operation="register",
                    metadata=metadata,
                    error=exc,
                ) from exc
