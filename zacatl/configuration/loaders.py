"""설정 파일 로더 모듈 — JSON/YAML.

Configuration file loaders.
The format is always chosen explicitly by the caller, the same way a
repository chooses its ORM adapter; there is no extension sniffing.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, Literal, TypeVar

import yaml
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from zacatl.utils.exceptions import InternalServerError, NotFoundError

ConfigFormat = Literal["json", "yaml", "yml"]

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class LoadedConfig(Generic[T]):
    """로드된 설정과 메타데이터 (Loaded data plus where it came from)."""

    data: T
    file_path: str
    format: ConfigFormat


class JSONLoader:
    """JSON 설정 로더 (JSON configuration loader)."""

    extensions: tuple[str, ...] = ("json",)

    def parse(self, content: str) -> Any:
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise InternalServerError(
                message="Failed to parse JSON configuration",
                reason=str(exc),
                component="JSONLoader",
                operation="parse",
                error=exc,
            ) from exc

    def load(self, file_path: str | Path) -> Any:
        return self.parse(Path(file_path).read_text(encoding="utf-8"))


class YAMLLoader:
    """YAML 설정 로더 (YAML configuration loader, safe_load only)."""

    extensions: tuple[str, ...] = ("yaml", "yml")

    def parse(self, content: str) -> Any:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise InternalServerError(
                message="Failed to parse YAML configuration",
                reason=str(exc),
                component="YAMLLoader",
                operation="parse",
                error=exc,
            ) from exc

    def load(self, file_path: str | Path) -> Any:
        return self.parse(Path(file_path).read_text(encoding="utf-8"))


def get_loader(format: str) -> JSONLoader | YAMLLoader:
    """형식에 맞는 로더를 반환합니다 (Return the loader for ``format``)."""
    if format == "json":
        return JSONLoader()
    if format in ("yaml", "yml"):
        return YAMLLoader()
    raise InternalServerError(
        message=f"Unsupported config format: {format}",
        reason="Format must be json, yaml or yml",
        component="ConfigLoader",
        operation="get_loader",
        metadata={"format": format},
    )


def validate_config(data: Any, schema: type[ModelT]) -> ModelT:
    """pydantic 모델로 설정을 검증합니다 (raises pydantic ValidationError)."""
    return schema.model_validate(data)


def validate_loaded_config(loaded: LoadedConfig[Any], schema: type[ModelT]) -> LoadedConfig[ModelT]:
    return LoadedConfig(
        data=validate_config(loaded.data, schema),
        file_path=loaded.file_path,
        format=loaded.format,
    )


def safe_validate_config(data: Any, schema: type[ModelT]) -> dict[str, Any]:
    """예외 없이 검증 결과를 반환합니다.

    Validate without raising.

    Returns:
        dict: ``{"success": True, "data": model}`` 또는
              ``{"success": False, "error": {"issues": [...]}}``
    """
    try:
        return {"success": True, "data": schema.model_validate(data)}
    except PydanticValidationError as exc:
        return {"success": False, "error": {"issues": exc.errors()}}


def load_config(
    file_path: str | Path,
    format: ConfigFormat,
    schema: type[BaseModel] | None = None,
) -> LoadedConfig[Any]:
    """설정 파일을 로드하고 선택적으로 검증합니다.

    Load a configuration file with an explicit format, validating it with
    ``schema`` when given.

    Raises:
        NotFoundError: 파일이 없을 때 (File does not exist)
    """
    path: Path = Path(file_path)
    if not path.exists():
        raise NotFoundError(
            message=f"Config file not found: {path}",
            component="ConfigLoader",
            operation="load_config",
            metadata={"file_path": str(path)},
        )

    raw: Any = get_loader(format).load(path)
    data: Any = validate_config(raw, schema) if schema is not None else raw
    return LoadedConfig(data=data, file_path=str(path), format=format)


def load_config_from_paths(
    paths: list[tuple[str | Path, ConfigFormat]],
    schema: type[BaseModel] | None = None,
) -> LoadedConfig[Any]:
    """여러 경로 중 처음 존재하는 설정 파일을 로드합니다.

    Load the first existing file among ``paths`` (``(path, format)`` pairs).
    """
    for file_path, format in paths:
        if Path(file_path).exists():
            return load_config(file_path, format, schema)

    listed: str = ", ".join(f"{p} ({f})" for p, f in paths)
    raise NotFoundError(
        message=f"No config file found in any of these paths: {listed}",
        component="ConfigLoader",
        operation="load_config_from_paths",
    )
