"""
CLI command for project initialization.

Thin wrapper over ``rbxts_init.core.use_cases.init``.

    rbxts-init init                 # prompts for the template
    rbxts-init init model --yes     # recommended options, no prompts
    rbxts-init init package --no-git --package-manager pnpm
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Any

import click
from click.core import ParameterSource

from rbxts_init.core.errors import ScaffoldError
from rbxts_init.core.models.options import InitMode, RawOptions
from rbxts_init.core.models.package_manager import PackageManager

_TOGGLES = ("git", "eslint", "prettier", "vscode")
_EXPLICIT_SOURCES = (ParameterSource.COMMANDLINE, ParameterSource.ENVIRONMENT)


def _init_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Options accepted both before and after the template sub-command."""
    options = [
        click.option("--yes", "-y", is_flag=True, help="Use recommended options, no prompts."),
        click.option("--git/--no-git", default=None, help="Configure Git."),
        click.option("--eslint/--no-eslint", default=None, help="Configure ESLint."),
        click.option("--prettier/--no-prettier", default=None, help="Configure Prettier."),
        click.option("--vscode/--no-vscode", default=None, help="Configure VSCode Project Settings."),
        click.option(
            "--package-manager",
            "--packageManager",
            "package_manager",
            type=click.Choice([pm.value for pm in PackageManager]),
            default=None,
            help="Choose an alternative package manager.",
        ),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


def _explicit(ctx: click.Context | None, name: str) -> Any:
    """Value of a parameter only if the user actually passed it."""
    if ctx is None or name not in ctx.params:
        return None
    if ctx.get_parameter_source(name) not in _EXPLICIT_SOURCES:
        return None
    return ctx.params[name]


def _raw_options(ctx: click.Context, mode: InitMode) -> RawOptions:
    """Merge group-level and sub-command flags; the sub-command wins."""
    contexts = [ctx] if ctx.command.name == "init" else [ctx, ctx.parent]

    def pick(name: str) -> Any:
        for c in contexts:
            value = _explicit(c, name)
            if value is not None:
                return value
        return None

    package_manager = pick("package_manager")
    return RawOptions(
        mode=mode,
        yes=bool(pick("yes")),
        package_manager=PackageManager(package_manager) if package_manager else None,
        **{name: pick(name) for name in _TOGGLES},
    )


def _run(ctx: click.Context, mode: InitMode) -> None:
    from rbxts_init.core.services.detection import detect_tools
    from rbxts_init.core.use_cases.init import run_init
    from rbxts_init.ui.cli.prompts import ClickPrompter, ClickReporter

    obj = ctx.find_root().obj or {}
    raw = _raw_options(ctx, mode)

    try:
        run_init(
            raw,
            ClickPrompter(),
            registry=obj.get("registry"),
            reporter=ClickReporter(),
            detect=obj.get("detect", detect_tools),
        )
    except ScaffoldError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    click.secho("✅ Project initialized", fg="green", bold=True)


@click.group(invoke_without_command=True)
@_init_options
@click.pass_context
def init(ctx: click.Context, **_: Any) -> None:
    """Create a project from a template."""
    if ctx.invoked_subcommand is None:
        _run(ctx, InitMode.NONE)


def _mode_command(mode: InitMode, help_text: str) -> click.Command:
    @click.command(mode.value, help=help_text)
    @_init_options
    @click.pass_context
    def command(ctx: click.Context, **_: Any) -> None:
        _run(ctx, mode)

    return command


_MODES = (
    (InitMode.GAME, "Generate a Roblox place"),
    (InitMode.PLACE, "Generate a Roblox place"),
    (InitMode.MODEL, "Generate a Roblox model"),
    (InitMode.PLUGIN, "Generate a Roblox Studio plugin"),
    (InitMode.PACKAGE, "Generate a roblox-ts npm package"),
)

for _mode, _help in _MODES:
    init.add_command(_mode_command(_mode, _help))
