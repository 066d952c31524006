"""
Scaffold steps — the side effects of ``init``, one function per step.

Each step takes a StepContext and either runs commands through the
CommandRunner or rewrites config files through the typed documents in
``core.models.config_files``. Steps do not decide whether they run;
that is the pipeline's job.

The pure parts (dependency list, manifest patch, editor settings) are
separate functions so they can be tested without touching disk.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rbxts_init.core.config.loader import ScaffoldSettings
from rbxts_init.core.engine.executor import CommandError, CommandRunner
from rbxts_init.core.models.config_files import (
    EslintConfig,
    PackageJson,
    VSCodeExtensions,
    VSCodeSettings,
    YarnRc,
)
from rbxts_init.core.models.options import ResolvedConfiguration
from rbxts_init.core.models.package_manager import (
    PackageManager,
    PackageManagerCommands,
    commands_for,
)

logger = logging.getLogger(__name__)

GIT_HINT = (
    "Do you not have Git installed? Git CLI is required to use Git functionality. "
    'If you do not wish to use Git, answer no to "Configure Git".'
)

BUILD_SCRIPTS = {"build": "rbxtsc", "watch": "rbxtsc -w"}

ESLINT_PRETTIER_EXTENDS = "prettier"
YARN_NODE_LINKER = "node-modules"

ROBLOX_TS_EXTENSION = "roblox-ts.vscode-roblox-ts"
ESLINT_EXTENSION = "dbaeumer.vscode-eslint"
PRETTIER_EXTENSION = "esbenp.prettier-vscode"
ZIPFS_EXTENSION = "arcanis.vscode-zipfs"

YARN3_SET_VERSION = "yarn set version latest"
YARN3_VSCODE_SDKS = "yarn dlx @yarnpkg/sdks vscode"


@dataclass
class StepContext:
    """Everything a step needs; shared by all steps of one run."""

    config: ResolvedConfiguration
    settings: ScaffoldSettings
    cwd: Path
    runner: CommandRunner

    @property
    def commands(self) -> PackageManagerCommands:
        return commands_for(self.config.package_manager)

    @property
    def build_command(self) -> str:
        return self.settings.build_command or self.commands.build

    def path(self, relative: str) -> Path:
        return self.cwd / relative

    def copy_config_template(self, file_name: str) -> None:
        source = self.settings.config_template(file_name)
        logger.debug("Copying %s → %s", source, self.path(file_name))
        shutil.copyfile(source, self.path(file_name))


# ── Pure helpers ────────────────────────────────────────────────


def manifest_patch(
    manifest: PackageJson,
    config: ResolvedConfiguration,
    build_command: str,
    scope: str,
) -> dict[str, Any]:
    """Keys to merge into the package.json written by the manager."""
    scripts = {**manifest.scripts, **BUILD_SCRIPTS}
    patch: dict[str, Any] = {"scripts": scripts}

    if config.is_package:
        scripts["prepublishOnly"] = build_command
        patch.update({
            "name": f"{scope}/{manifest.name}",
            "main": "out/init.lua",
            "types": "out/index.d.ts",
            "files": ["out", "!**/*.tsbuildinfo"],
            "publishConfig": {"access": "public"},
        })
    return patch


def dev_dependencies(config: ResolvedConfiguration, compiler_version: str) -> list[str]:
    """Development dependencies installed in a single command."""
    packages = [
        "@rbxts/types",
        f"@rbxts/compiler-types@compiler-{compiler_version}",
        "typescript",
    ]
    if config.prettier:
        packages.append("prettier")
    if config.eslint:
        packages.extend(["eslint", "@typescript-eslint/parser", "eslint-plugin-roblox-ts"])
        if config.prettier:
            packages.append("eslint-plugin-prettier")
    return packages


def _format_on_save(formatter: str) -> dict[str, Any]:
    return {"editor.defaultFormatter": formatter, "editor.formatOnSave": True}


def vscode_documents(config: ResolvedConfiguration) -> tuple[VSCodeExtensions, VSCodeSettings]:
    """Recommended extensions and workspace settings for this configuration.

    ESLint wins the default-formatter slot when both linters are on;
    Prettier is still recommended.
    """
    recommendations = [ROBLOX_TS_EXTENSION]
    settings: dict[str, Any] = {"typescript.enablePromptUseWorkspaceTsdk": True}

    if config.eslint:
        recommendations.append(ESLINT_EXTENSION)
        settings.update({
            "[typescript]": _format_on_save(ESLINT_EXTENSION),
            "[typescriptreact]": _format_on_save(ESLINT_EXTENSION),
            "eslint.run": "onType",
            "eslint.format.enable": True,
        })

    if config.prettier:
        recommendations.append(PRETTIER_EXTENSION)
        if not config.eslint:
            settings.update({
                "[typescript]": _format_on_save(PRETTIER_EXTENSION),
                "[typescriptreact]": _format_on_save(PRETTIER_EXTENSION),
            })

    if config.package_manager is PackageManager.YARN3:
        recommendations.append(ZIPFS_EXTENSION)

    return (
        VSCodeExtensions.model_validate({"recommendations": recommendations}),
        VSCodeSettings.model_validate(settings),
    )


# ── Steps ───────────────────────────────────────────────────────


def init_manifest(ctx: StepContext) -> None:
    ctx.runner.run(ctx.commands.init, step="manifest")

    path = ctx.path("package.json")
    manifest = PackageJson.read_json(path)
    patch = manifest_patch(manifest, ctx.config, ctx.build_command, ctx.settings.package_scope)
    manifest.merged(patch).write_json(path, indent=2)


def init_git(ctx: StepContext) -> None:
    try:
        ctx.runner.run("git init", step="git")
    except CommandError as e:
        raise e.with_hint(GIT_HINT) from e

    ctx.copy_config_template(".gitignore")
    ctx.copy_config_template(".gitattributes")


def install_dependencies(ctx: StepContext) -> None:
    packages = dev_dependencies(ctx.config, ctx.settings.compiler_version)
    ctx.runner.run(f"{ctx.commands.dev_install} {' '.join(packages)}", step="dependencies")


def setup_yarn3(ctx: StepContext) -> None:
    ctx.runner.run(YARN3_SET_VERSION, step="yarn3")

    legacy = ctx.path(".yarnrc")
    if legacy.is_file() or legacy.is_symlink():
        legacy.unlink()

    path = ctx.path(".yarnrc.yml")
    yarnrc = YarnRc.read_yaml(path)
    if yarnrc.node_linker != YARN_NODE_LINKER:
        yarnrc.merged({"nodeLinker": YARN_NODE_LINKER}).write_yaml(path)


def configure_eslint(ctx: StepContext) -> None:
    ctx.copy_config_template(".eslintrc.yml")
    ctx.copy_config_template(".eslintignore")

    if ctx.config.prettier:
        path = ctx.path(".eslintrc.yml")
        eslintrc = EslintConfig.read_yaml(path)
        eslintrc.merged({"extends": ESLINT_PRETTIER_EXTENDS}).write_yaml(path)


def configure_prettier(ctx: StepContext) -> None:
    ctx.copy_config_template(".prettierrc.yml")
    ctx.copy_config_template(".prettierignore")


def configure_vscode(ctx: StepContext) -> None:
    extensions, settings = vscode_documents(ctx.config)

    # Yarn PnP needs the SDKs; other managers resolve them on their own
    if ctx.config.package_manager is PackageManager.YARN3:
        ctx.runner.run(YARN3_VSCODE_SDKS, step="vscode")

    extensions.write_json(ctx.path(".vscode/extensions.json"), indent="\t")
    settings.write_json(ctx.path(".vscode/settings.json"), indent="\t")


def copy_template(ctx: StepContext) -> None:
    source = ctx.settings.template_dir(ctx.config.template.template_name)
    logger.debug("Copying template %s → %s", source, ctx.cwd)
    shutil.copytree(source, ctx.cwd, dirs_exist_ok=True)


def build(ctx: StepContext) -> None:
    ctx.runner.run(ctx.build_command, step="build")
