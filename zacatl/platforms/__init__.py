"""실행 플랫폼 패키지 (Server, CLI and desktop platforms)."""

from zacatl.platforms.cli import CLI, CLICommand, ConfigCLI
from zacatl.platforms.desktop import ConfigDesktop, Desktop, IPCHandler, WindowConfig
from zacatl.platforms.platforms import ConfigPlatforms, Platforms

__all__ = [
    "CLI",
    "CLICommand",
    "ConfigCLI",
    "ConfigDesktop",
    "ConfigPlatforms",
    "Desktop",
    "IPCHandler",
    "Platforms",
    "WindowConfig",
]
