"""
Conflict detection — refuse to start if we would overwrite anything.

Runs before the first pipeline step. Every path the pipeline may write
is checked, every conflict is collected, and only then do we decide:
either the directory is clean and the pipeline may start, or nothing
is touched and the user gets the full list.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from rbxts_init.core.config.loader import ScaffoldSettings
from rbxts_init.core.errors import ScaffoldError
from rbxts_init.core.models.options import ResolvedConfiguration

logger = logging.getLogger(__name__)

# Every fixed location a pipeline step may create or rewrite.
PIPELINE_PATHS: tuple[str, ...] = (
    "package.json",
    "package-lock.json",
    ".yarnrc",
    ".yarnrc.yml",
    "tsconfig.json",
    ".gitignore",
    ".gitattributes",
    ".eslintrc.yml",
    ".eslintignore",
    ".prettierrc.yml",
    ".prettierignore",
    ".vscode",
    ".vscode/settings.json",
    ".vscode/extensions.json",
)


class ConflictError(ScaffoldError):
    """One or more destination paths already exist."""

    def __init__(self, paths: list[str]):
        self.paths = paths
        lines = "".join(f"  - {p}\n" for p in paths)
        super().__init__(f"Cannot initialize project, process could overwrite:\n{lines}")


def collect_paths(cwd: Path, template_dir: Path) -> list[Path]:
    """Build the PathSet: fixed config paths, then template entries."""
    paths = [cwd / rel for rel in PIPELINE_PATHS]
    for entry in sorted(template_dir.iterdir()):
        paths.append(cwd / entry.name)
    return paths


def is_conflict(path: Path) -> bool:
    """A path conflicts if it is a file, a symlink, or a non-empty directory."""
    if path.is_symlink():
        return True
    if not path.exists():
        return False
    if path.is_dir():
        return any(path.iterdir())
    return True


def find_conflicts(paths: list[Path], cwd: Path) -> list[str]:
    """Return every conflicting path, relative to ``cwd``, in input order."""
    conflicts: list[str] = []
    seen: set[Path] = set()
    for path in paths:
        if path in seen:
            continue
        seen.add(path)
        if is_conflict(path):
            conflicts.append(os.path.relpath(path, cwd))
    return conflicts


def check_conflicts(
    config: ResolvedConfiguration,
    cwd: Path,
    settings: ScaffoldSettings,
) -> None:
    """Pre-flight gate for the scaffold pipeline.

    Raises:
        ConflictError: listing all conflicting paths.
    """
    template_dir = settings.template_dir(config.template.template_name)
    paths = collect_paths(cwd, template_dir)
    conflicts = find_conflicts(paths, cwd)
    if conflicts:
        logger.info("Found %d conflicting path(s)", len(conflicts))
        raise ConflictError(conflicts)
    logger.debug("No conflicts among %d path(s)", len(paths))
