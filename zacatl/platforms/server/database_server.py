"""데이터베이스 서버 — 서비스의 모든 DB 연결 관리.

Connects every configured database on start and disconnects them on stop.
"""

from typing import Any

from zacatl.platforms.server.database_adapters import create_database_adapter
from zacatl.platforms.server.types import DatabaseConfig, DatabaseServerPort
from zacatl.utils.exceptions import CustomError


class DatabaseServer:
    def __init__(self, service_name: str, databases: list[DatabaseConfig]) -> None:
        self.service_name: str = service_name
        self.databases: list[DatabaseConfig] = databases
        self.adapters: dict[str, DatabaseServerPort] = {}

    async def configure(self) -> None:
        """설정된 모든 데이터베이스에 연결합니다.

        Raises:
            CustomError: 연결 문자열 누락 또는 연결 실패 (Missing connection string, or connect failed)
        """
        for database in self.databases:
            if not database.connection_string:
                raise CustomError(
                    message="database connection string is not provided",
                    code=500,
                    reason="database connection string not provided",
                    metadata={"database": {"vendor": database.vendor.value}},
                )

            try:
                adapter: Any = create_database_adapter(database.vendor)
                await adapter.connect(self.service_name, database)
                self.adapters[database.vendor.value] = adapter
            except Exception as exc:
                raise CustomError(
                    message=f'failed to configure database for service "{self.service_name}"',
                    code=500,
                    reason="database configuration failed",
                    error=exc,
                    metadata={
                        "database": {
                            "vendor": database.vendor.value,
                            "connection_string": database.connection_string,
                        }
                    },
                ) from exc

    def get_adapter(self, vendor: str) -> DatabaseServerPort | None:
        return self.adapters.get(vendor)

    def get_adapters(self) -> dict[str, DatabaseServerPort]:
        return self.adapters

    async def disconnect(self) -> None:
        for adapter in self.adapters.values():
            await adapter.disconnect()
        self.adapters.clear()
