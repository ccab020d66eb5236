"""인프라 레이어 — 레포지토리 등록 (Infrastructure layer: repositories)."""

from zacatl.container import register_singleton, resolve_dependencies
from zacatl.layers.types import ConfigInfrastructure
from zacatl.utils.exceptions import InternalServerError


class Infrastructure:
    def __init__(self, config: ConfigInfrastructure) -> None:
        self.config: ConfigInfrastructure = config
        self.register()

    def register(self) -> None:
        """레포지토리를 싱글턴으로 등록하고 해석 가능 여부를 검증합니다.

        Register repositories as singletons and check every one resolves.
        """
        repositories = self.config.repositories
        for repository in repositories:
            register_singleton(repository)

        resolved = resolve_dependencies(repositories)
        if len(resolved) != len(repositories):
            raise InternalServerError(
                message="Failed to register all infrastructure repositories",
                reason="Not all repositories could be resolved from the DI container",
                component="InfrastructureLayer",
                operation="register",
                metadata={"expected": len(repositories), "resolved": len(resolved)},
            )
