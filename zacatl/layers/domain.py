"""도메인 레이어 — 프로바이더/서비스 등록 (Domain layer: providers and services)."""

from zacatl.container import register_singleton
from zacatl.layers.types import ConfigDomain


class Domain:
    def __init__(self, config: ConfigDomain) -> None:
        self.config: ConfigDomain = config
        self.register()

    def register(self) -> None:
        for provider in self.config.providers:
            register_singleton(provider)
        for service in self.config.services:
            register_singleton(service)
