"""아키텍처 레이어 패키지 (Architecture layers)."""

from zacatl.layers.application import Application
from zacatl.layers.domain import Domain
from zacatl.layers.infrastructure import Infrastructure
from zacatl.layers.layers import Layers
from zacatl.layers.types import (
    CLIEntryPoints,
    ConfigApplication,
    ConfigDomain,
    ConfigInfrastructure,
    ConfigLayers,
    EntryPoints,
    IPCEntryPoints,
    RestEntryPoints,
)

__all__ = [
    "Application",
    "CLIEntryPoints",
    "ConfigApplication",
    "ConfigDomain",
    "ConfigInfrastructure",
    "ConfigLayers",
    "Domain",
    "EntryPoints",
    "IPCEntryPoints",
    "Infrastructure",
    "Layers",
    "RestEntryPoints",
]
