"""
Package manager registry — the three commands every manager must provide.

Each supported package manager is reduced to the same interface:
manifest init, silent dev-dependency install, and build. The scaffold
pipeline only ever talks to a manager through this table.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class PackageManager(str, Enum):
    """Supported package managers, in preference order."""

    NPM = "npm"
    YARN = "yarn"
    YARN3 = "yarn3"
    PNPM = "pnpm"

    @property
    def binary(self) -> str:
        """Executable that must be on PATH for this manager."""
        if self is PackageManager.YARN3:
            return "yarn"
        return self.value

    @property
    def display_name(self) -> str:
        return self.name


class PackageManagerCommands(BaseModel):
    """Command strings for one package manager."""

    model_config = ConfigDict(frozen=True)

    init: str
    dev_install: str
    build: str


PACKAGE_MANAGER_COMMANDS: dict[PackageManager, PackageManagerCommands] = {
    PackageManager.NPM: PackageManagerCommands(
        init="npm init -y",
        dev_install="npm install --silent -D",
        build="npm run build",
    ),
    PackageManager.YARN: PackageManagerCommands(
        init="yarn init -y",
        dev_install="yarn add --silent -D",
        build="yarn run build",
    ),
    PackageManager.YARN3: PackageManagerCommands(
        init="yarn init -y",
        dev_install="yarn add --silent -D",
        build="yarn run build",
    ),
    PackageManager.PNPM: PackageManagerCommands(
        init="pnpm init",
        dev_install="pnpm install --silent -D",
        build="pnpm run build",
    ),
}


def commands_for(manager: PackageManager) -> PackageManagerCommands:
    """Look up the command set for a package manager."""
    return PACKAGE_MANAGER_COMMANDS[manager]
