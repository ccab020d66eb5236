"""레이어 조합 — Infrastructure → Domain → Application 순서로 등록.

Applies the layers in dependency order so each layer can resolve the
ones registered before it.
"""

from zacatl.layers.application import Application
from zacatl.layers.domain import Domain
from zacatl.layers.infrastructure import Infrastructure
from zacatl.layers.types import ConfigLayers


class Layers:
    def __init__(self, config: ConfigLayers) -> None:
        self.config: ConfigLayers = config
        self.infrastructure: Infrastructure | None = None
        self.domain: Domain | None = None
        self.application: Application | None = None

        if config.infrastructure is not None:
            self.infrastructure = Infrastructure(config.infrastructure)
        if config.domain is not None:
            self.domain = Domain(config.domain)
        if config.application is not None:
            self.application = Application(config.application)
