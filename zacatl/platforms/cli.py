"""CLI 플랫폼 — argparse 서브커맨드 실행.

CLI platform. Each command class becomes an argparse subcommand; the
container builds the commands so they can depend on domain providers.

Usage:
    class GreetCommand(CLICommand):
        name = "greet"
        help = "Print a greeting"

        def __init__(self, service: GreetingService) -> None:
            self.service = service

        def configure(self, parser: argparse.ArgumentParser) -> None:
            parser.add_argument("--name", default="world")

        async def execute(self, args: argparse.Namespace) -> int:
            print(await self.service.greet(args.name))
            return 0
"""

import argparse
import inspect
import sys
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from zacatl.container import resolve_dependencies
from zacatl.layers.types import CLIEntryPoints
from zacatl.logs import ConsoleLoggerAdapter, create_logger

logger = create_logger(ConsoleLoggerAdapter())


class ConfigCLI(BaseModel):
    """CLI 설정.

    Attributes:
        name: 실행 파일 이름 (Program name shown in help)
        version: 버전 (``--version`` output)
        description: 도움말 설명 (Help description)
        argv: 파싱할 인자, None이면 sys.argv[1:] (Arguments to parse)
    """

    name: str
    version: str
    description: str | None = None
    argv: list[str] | None = None


class CLICommand(ABC):
    name: str = ""
    help: str = ""

    def configure(self, parser: argparse.ArgumentParser) -> None:
        """서브커맨드 인자 정의 (Declare the subcommand arguments)."""

    @abstractmethod
    def execute(self, args: argparse.Namespace) -> Any:
        """명령 실행 — 동기 또는 async (Run the command, sync or async)."""


class CLI:
    def __init__(self, config: ConfigCLI) -> None:
        self.config: ConfigCLI = config
        self.commands: dict[str, CLICommand] = {}

    async def register_entrypoints(self, entry_points: CLIEntryPoints) -> None:
        for command in resolve_dependencies(entry_points.commands):
            self.commands[command.name] = command

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog=self.config.name, description=self.config.description)
        parser.add_argument("--version", action="version", version=f"{self.config.name} {self.config.version}")
        subparsers = parser.add_subparsers(dest="command")
        for name, command in self.commands.items():
            command.configure(subparsers.add_parser(name, help=command.help))
        return parser

    async def start(self, argv: list[str] | None = None) -> Any:
        """인자를 파싱하고 선택된 명령을 실행합니다.

        Parse ``argv`` and run the chosen command. Without a command the
        help text is printed and ``None`` returned.

        Returns:
            Any: 명령 실행 결과 (The command's return value)
        """
        parser: argparse.ArgumentParser = self.build_parser()
        args: argparse.Namespace = parser.parse_args(
            argv if argv is not None else self.config.argv if self.config.argv is not None else sys.argv[1:]
        )

        if args.command is None:
            parser.print_help()
            return None

        logger.trace(f"Running {self.config.name} {args.command}")
        result: Any = self.commands[args.command].execute(args)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def stop(self) -> None:
        self.commands.clear()
