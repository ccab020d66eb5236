"""레이어 설정 모델 (Layer configuration models).

Lists hold classes; the container builds and wires the instances.
"""

from pydantic import BaseModel, ConfigDict, Field


class LayerModel(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")


class ConfigInfrastructure(LayerModel):
    repositories: list[type] = Field(default_factory=list)


class ConfigDomain(LayerModel):
    providers: list[type] = Field(default_factory=list)
    services: list[type] = Field(default_factory=list)


class RestEntryPoints(LayerModel):
    hooks: list[type] = Field(default_factory=list)
    routes: list[type] = Field(default_factory=list)


class CLIEntryPoints(LayerModel):
    commands: list[type] = Field(default_factory=list)


class IPCEntryPoints(LayerModel):
    handlers: list[type] = Field(default_factory=list)


class EntryPoints(LayerModel):
    rest: RestEntryPoints | None = None
    cli: CLIEntryPoints | None = None
    ipc: IPCEntryPoints | None = None


class ConfigApplication(LayerModel):
    entry_points: EntryPoints = Field(default_factory=EntryPoints)


class ConfigLayers(LayerModel):
    infrastructure: ConfigInfrastructure | None = None
    domain: ConfigDomain | None = None
    application: ConfigApplication | None = None
