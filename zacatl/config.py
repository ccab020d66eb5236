"""서비스 환경 설정 모듈.

Service environment configuration module using pydantic-settings.
All settings can be overridden via environment variables or a .env file
located in the current working directory.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from zacatl.utils.exceptions import InternalServerError


class Settings(BaseSettings):
    """서비스 전역 설정 — 환경 변수 기반 구성.

    Global service settings loaded from environment variables.

    Attributes:
        SERVICE_NAME: 서비스 이름, 로그 태그에 사용 (Service name used in log bindings)
        ENV: 런타임 환경 (Runtime environment, "production" switches logs to JSON)
        APP_ENV: 애플리케이션 환경 (Application environment label)
        APP_VERSION: 애플리케이션 버전 (Application version label)
        LOG_LEVEL: 로그 레벨 (Minimum log level)
        LOG_FORMAT: 로그 출력 형식 (Log output format: "auto", "json" or "console")
        CONNECTION_STRING: 기본 데이터베이스 연결 문자열 (Default database connection string)
        AXIOM_API_TOKEN: Axiom API 토큰 (Axiom API token, empty disables shipping)
        AXIOM_DATASET: Axiom 데이터셋 이름 (Axiom dataset name)
    """

    SERVICE_NAME: str = "zacatl"
    ENV: str = "development"
    APP_ENV: str = ""  # 비어 있으면 ENV 값을 사용 (Falls back to ENV when empty)
    APP_VERSION: str = "0.0.0"

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "auto"  # "auto"이면 production에서만 JSON (JSON only in production when "auto")

    CONNECTION_STRING: str = ""

    # Axiom 로깅 설정 — Axiom observability platform settings
    AXIOM_API_TOKEN: str = ""
    AXIOM_DATASET: str = ""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"

    @property
    def app_env(self) -> str:
        return self.APP_ENV or self.ENV


# 전역 설정 싱글턴 인스턴스 — Global settings singleton instance
settings: Settings = Settings()


def get_config_or_throw(name: str) -> Any:
    """설정 값을 조회하고, 없으면 예외를 발생시킵니다.

    Read a setting by name, re-reading the environment so late overrides
    are honoured. Empty values count as missing.

    Raises:
        InternalServerError: 설정 키가 없거나 값이 비어 있을 때
                             (Unknown key or empty value)
    """
    try:
        current: Settings = Settings()
    except PydanticValidationError as exc:
        raise InternalServerError(
            message="Failed to read service settings",
            reason=str(exc),
            component="Settings",
            operation="get_config_or_throw",
            error=exc,
        ) from exc

    if name not in Settings.model_fields:
        raise InternalServerError(
            message=f"Unknown configuration key '{name}'",
            reason="Key is not declared on Settings",
            component="Settings",
            operation="get_config_or_throw",
            metadata={"name": name},
        )

    value: Any = getattr(current, name)
    if value in ("", None):
        raise InternalServerError(
            message=f"Configuration key '{name}' is not set",
            reason="Value is empty",
            component="Settings",
            operation="get_config_or_throw",
            metadata={"name": name},
        )
    return value
