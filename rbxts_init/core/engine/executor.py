"""
Command executor — run one shell command, or fail loudly.

Adapters report failures as Receipts. The scaffold pipeline wants the
opposite: the first failing command must stop everything. CommandRunner
sits between the two and turns a failed Receipt into a CommandError
that still carries the command line and exit code.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rbxts_init.adapters.registry import AdapterRegistry
from rbxts_init.core.errors import ScaffoldError
from rbxts_init.core.models.action import Action

logger = logging.getLogger(__name__)


class CommandError(ScaffoldError):
    """An external command exited non-zero or could not be spawned."""

    def __init__(
        self,
        command: str,
        exit_code: int | None,
        message: str = "",
        hint: str = "",
    ):
        self.command = command
        self.exit_code = exit_code
        self.message = message
        self.hint = hint
        super().__init__(str(self))

    def with_hint(self, hint: str) -> CommandError:
        """Same failure, with an extra line of advice for the user."""
        return CommandError(self.command, self.exit_code, self.message, hint=hint)

    def __str__(self) -> str:
        text = f'Command "{self.command}" exited with code {self.exit_code}\n\n{self.message}'
        if self.hint:
            text = f"{text}\n{self.hint}"
        return text


class CommandRunner:
    """Run shell commands in one working directory through the registry."""

    def __init__(self, registry: AdapterRegistry, cwd: Path):
        self.registry = registry
        self.cwd = cwd
        self._count = 0

    def run(self, command: str, step: str = "") -> str:
        """Run ``command`` to completion and return its stdout.

        Raises:
            CommandError: on non-zero exit or spawn failure.
        """
        self._count += 1
        action = Action(
            id=f"{step or 'cmd'}:{self._count}",
            adapter="shell",
            step=step,
            params={"command": command},
        )
        logger.debug("[%s] %s", action.id, command)

        receipt = self.registry.execute_action(action, working_dir=str(self.cwd))
        if receipt.ok:
            return receipt.output

        logger.debug("[%s] failed: %s", action.id, receipt.error)
        raise CommandError(command, receipt.exit_code, receipt.error or "")
