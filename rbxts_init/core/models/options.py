"""
Option models — raw flags, host tools, and the resolved configuration.

RawOptions comes straight from the CLI and may leave any option unset.
ResolvedConfiguration is what every pipeline step consumes: every
decision has been made and nothing can change afterwards.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from rbxts_init.core.models.package_manager import PackageManager


class InitMode(str, Enum):
    """Project template archetype."""

    NONE = "none"
    GAME = "game"
    PLACE = "place"
    MODEL = "model"
    PLUGIN = "plugin"
    PACKAGE = "package"

    @property
    def template_name(self) -> str:
        """Directory name of the template this mode copies."""
        if self is InitMode.PLACE:
            return InitMode.GAME.value
        return self.value


# Choices offered when `init` is invoked without a mode.
TEMPLATE_CHOICES: tuple[InitMode, ...] = (
    InitMode.GAME,
    InitMode.MODEL,
    InitMode.PLUGIN,
    InitMode.PACKAGE,
)


class RawOptions(BaseModel):
    """Unresolved input from command-line flags.

    ``None`` means the flag was not given on the command line.
    ``yes`` is the recommended-defaults shortcut.
    """

    model_config = ConfigDict(frozen=True)

    mode: InitMode = InitMode.NONE
    yes: bool = False
    git: bool | None = None
    eslint: bool | None = None
    prettier: bool | None = None
    vscode: bool | None = None
    package_manager: PackageManager | None = None


class ToolAvailability(BaseModel):
    """Snapshot of which external tools are on the host's PATH."""

    model_config = ConfigDict(frozen=True)

    npm: bool = True
    pnpm: bool = True
    yarn: bool = True
    git: bool = True

    def has_manager(self, manager: PackageManager) -> bool:
        return bool(getattr(self, manager.binary))

    def available_managers(self) -> list[PackageManager]:
        """Available package managers, in registry order."""
        return [pm for pm in PackageManager if self.has_manager(pm)]


class OptionDefaults(BaseModel):
    """Defaults consulted by the option resolver.

    ``recommended`` is what ``--yes`` turns every toggle into; ``hint``
    is the pre-selected answer offered by each confirmation prompt;
    ``unprompted`` is used when a toggle is neither flagged nor asked.
    """

    model_config = ConfigDict(frozen=True)

    recommended: bool = True
    hint: bool = True
    unprompted: bool = False
    template: InitMode = InitMode.GAME
    package_manager: PackageManager = PackageManager.NPM


class ResolvedConfiguration(BaseModel):
    """Final decisions driving the scaffold pipeline."""

    model_config = ConfigDict(frozen=True)

    template: InitMode
    git: bool
    eslint: bool
    prettier: bool
    vscode: bool
    package_manager: PackageManager

    @property
    def is_package(self) -> bool:
        return self.template is InitMode.PACKAGE

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")
