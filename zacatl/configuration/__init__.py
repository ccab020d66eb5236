"""설정 파일 로딩 패키지 (Configuration file loading package)."""

from zacatl.configuration.loaders import (
    ConfigFormat,
    JSONLoader,
    LoadedConfig,
    YAMLLoader,
    get_loader,
    load_config,
    load_config_from_paths,
    safe_validate_config,
    validate_config,
    validate_loaded_config,
)

__all__ = [
    "ConfigFormat",
    "JSONLoader",
    "LoadedConfig",
    "YAMLLoader",
    "get_loader",
    "load_config",
    "load_config_from_paths",
    "safe_validate_config",
    "validate_config",
    "validate_loaded_config",
]
