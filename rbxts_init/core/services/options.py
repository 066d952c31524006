"""
Option resolver — flags, prompts and defaults into one configuration.

Precedence for every option, highest first:

    1. explicit command-line flag
    2. interactive answer (only asked when neither the flag nor --yes is given)
    3. default from OptionDefaults (``recommended`` under --yes)

Prompts are issued in a fixed order: template, git, eslint, prettier,
vscode, package manager. The prompter owns cancellation; when the user
aborts, it ends the process and this module never sees a result.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol, TypeVar

from rbxts_init.core.models.options import (
    TEMPLATE_CHOICES,
    InitMode,
    OptionDefaults,
    RawOptions,
    ResolvedConfiguration,
    ToolAvailability,
)
from rbxts_init.core.models.package_manager import PackageManager

logger = logging.getLogger(__name__)

T = TypeVar("T")

GIT_PROMPT = "Configure Git"
ESLINT_PROMPT = "Configure ESLint"
PRETTIER_PROMPT = "Configure Prettier"
VSCODE_PROMPT = "Configure VSCode Project Settings"
TEMPLATE_PROMPT = "Select template"
PACKAGE_MANAGER_PROMPT = "Multiple package managers detected. Select package manager:"


class Prompter(Protocol):
    """Interactive question source."""

    def confirm(self, message: str, default: bool) -> bool: ...

    def select(self, message: str, choices: Sequence[tuple[str, T]], default: int = 0) -> T: ...


def resolve_options(
    raw: RawOptions,
    tools: ToolAvailability,
    prompter: Prompter,
    defaults: OptionDefaults | None = None,
) -> ResolvedConfiguration:
    """Resolve every option, prompting only for what is still open."""
    defaults = defaults or OptionDefaults()

    template = _resolve_template(raw, prompter, defaults)
    git = _resolve_toggle(raw.git, raw, prompter, GIT_PROMPT, defaults, tool_present=tools.git)
    eslint = _resolve_toggle(raw.eslint, raw, prompter, ESLINT_PROMPT, defaults)
    prettier = _resolve_toggle(raw.prettier, raw, prompter, PRETTIER_PROMPT, defaults)
    vscode = _resolve_toggle(raw.vscode, raw, prompter, VSCODE_PROMPT, defaults)
    package_manager = _resolve_package_manager(raw, tools, prompter, defaults)

    config = ResolvedConfiguration(
        template=template,
        git=git,
        eslint=eslint,
        prettier=prettier,
        vscode=vscode,
        package_manager=package_manager,
    )
    logger.info("Resolved configuration: %s", config.to_dict())
    return config


def _resolve_template(
    raw: RawOptions,
    prompter: Prompter,
    defaults: OptionDefaults,
) -> InitMode:
    if raw.mode is not InitMode.NONE:
        return raw.mode
    choices = [(mode.value, mode) for mode in TEMPLATE_CHOICES]
    return prompter.select(TEMPLATE_PROMPT, choices, default=TEMPLATE_CHOICES.index(defaults.template))


def _resolve_toggle(
    flag: bool | None,
    raw: RawOptions,
    prompter: Prompter,
    message: str,
    defaults: OptionDefaults,
    tool_present: bool = True,
) -> bool:
    """Resolve one boolean option.

    An explicit flag is taken as-is even when the tool is missing; the
    step that needs the tool reports the failure.
    """
    if flag is not None:
        return flag
    if raw.yes:
        return defaults.recommended and tool_present
    if not tool_present:
        return defaults.unprompted
    return prompter.confirm(message, default=defaults.hint)


def _resolve_package_manager(
    raw: RawOptions,
    tools: ToolAvailability,
    prompter: Prompter,
    defaults: OptionDefaults,
) -> PackageManager:
    if raw.package_manager is not None:
        return raw.package_manager

    available = tools.available_managers()
    if len(available) > 1 and not raw.yes:
        choices = [(pm.display_name, pm) for pm in available]
        return prompter.select(PACKAGE_MANAGER_PROMPT, choices)

    if not available or defaults.package_manager in available:
        return defaults.package_manager
    return available[0]
