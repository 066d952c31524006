"""
Mock adapter — test double for every external command.

Used in mock mode to run the whole pipeline without npm, yarn, pnpm or
git installed. Responses are keyed by command line; hooks let a test
simulate a tool's side effects (e.g. ``npm init`` writing package.json).
"""

from __future__ import annotations

from collections.abc import Callable

from rbxts_init.adapters.base import Adapter, ExecutionContext
from rbxts_init.core.models.action import Receipt

CommandHook = Callable[[ExecutionContext], None]


class MockAdapter(Adapter):
    """Universal mock adapter for testing.

    By default, returns success for everything. Can be configured
    with custom responses and side-effect hooks per command.
    """

    def __init__(
        self,
        adapter_name: str = "shell",
        default_output: str = "",
    ):
        self._name = adapter_name
        self._default_output = default_output
        self._responses: dict[str, Receipt] = {}
        self._hooks: dict[str, CommandHook] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def commands(self) -> list[str]:
        """Command lines received, in order."""
        return [ctx.action.command for ctx in self._call_log]

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def set_response(self, command: str, receipt: Receipt) -> None:
        """Set a custom response for a specific command line."""
        self._responses[command] = receipt

    def set_failure(
        self,
        command: str,
        error: str = "Mock failure",
        exit_code: int | None = 1,
    ) -> None:
        """Configure a specific command to fail."""
        self._responses[command] = Receipt.failure(
            adapter=self._name,
            action_id=command,
            error=error,
            exit_code=exit_code,
        )

    def on_command(self, command: str, hook: CommandHook) -> None:
        """Run ``hook`` whenever ``command`` is executed."""
        self._hooks[command] = hook

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)
        command = context.action.command

        hook = self._hooks.get(command)
        if hook is not None:
            hook(context)

        if command in self._responses:
            return self._responses[command]

        return Receipt.success(
            adapter=self._name,
            action_id=context.action.id,
            output=self._default_output,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log, responses and hooks."""
        self._call_log.clear()
        self._responses.clear()
        self._hooks.clear()
