"""
Shared test fixtures and configuration.
"""

import json
import logging
from pathlib import Path

import pytest

from rbxts_init.adapters.base import ExecutionContext
from rbxts_init.adapters.mock import MockAdapter
from rbxts_init.adapters.registry import AdapterRegistry
from rbxts_init.core.config.loader import ScaffoldSettings

NPM_INIT_MANIFEST = {
    "name": "my-project",
    "version": "1.0.0",
    "description": "",
    "main": "index.js",
    "scripts": {"test": 'echo "Error: no test specified" && exit 1'},
    "keywords": [],
    "author": "",
    "license": "ISC",
}


class ScriptedPrompter:
    """Prompter that answers from a script and records every question.

    Questions without a scripted answer get the prompt's default.
    """

    def __init__(self, confirms=None, selects=None):
        self.confirms = dict(confirms or {})
        self.selects = dict(selects or {})
        self.asked: list[str] = []
        self.choices: dict[str, list[str]] = {}

    def confirm(self, message, default):
        self.asked.append(message)
        return self.confirms.get(message, default)

    def select(self, message, choices, default=0):
        self.asked.append(message)
        self.choices[message] = [title for title, _ in choices]
        if message in self.selects:
            wanted = self.selects[message]
            for title, value in choices:
                if value == wanted or title == wanted:
                    return value
            raise AssertionError(f"{wanted!r} not offered for {message!r}")
        return choices[default][1]


def _write_manifest(ctx: ExecutionContext) -> None:
    path = Path(ctx.working_dir) / "package.json"
    path.write_text(json.dumps(NPM_INIT_MANIFEST, indent=2), encoding="utf-8")


def _yarn_berry_files(ctx: ExecutionContext) -> None:
    cwd = Path(ctx.working_dir)
    (cwd / ".yarnrc").write_text("lastUpdateCheck 0\n", encoding="utf-8")
    (cwd / ".yarnrc.yml").write_text("yarnPath: .yarn/releases/yarn-4.1.0.cjs\n", encoding="utf-8")


@pytest.fixture
def restore_logging():
    """Put the root logger back the way it was after setup_logging ran."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def project_root() -> Path:
    """Return the repository root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def settings() -> ScaffoldSettings:
    """Settings pointing at the packaged templates."""
    return ScaffoldSettings()


@pytest.fixture
def shell() -> MockAdapter:
    """Mock shell adapter that simulates the package managers' init commands."""
    mock = MockAdapter(adapter_name="shell")
    for command in ("npm init -y", "yarn init -y", "pnpm init"):
        mock.on_command(command, _write_manifest)
    mock.on_command("yarn set version latest", _yarn_berry_files)
    return mock


@pytest.fixture
def registry(shell: MockAdapter) -> AdapterRegistry:
    """Registry whose shell adapter is the mock."""
    reg = AdapterRegistry()
    reg.register(shell)
    return reg


@pytest.fixture
def prompter() -> ScriptedPrompter:
    return ScriptedPrompter()


@pytest.fixture
def make_prompter():
    """Factory for prompters with scripted answers."""
    return ScriptedPrompter
