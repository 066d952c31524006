"""
Action and Receipt models — the command execution contract.

An Action asks an adapter to run one external command for a pipeline
step. The adapter answers with a Receipt; it never raises. Turning a
failed Receipt into an exception is the command runner's job.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class Action(BaseModel):
    """A requested command, dispatched through the adapter registry."""

    id: str                         # "<step>:<n>", unique within one run
    adapter: str = "shell"
    step: str = ""                  # pipeline step that issued it
    params: dict[str, Any] = Field(default_factory=dict)

    @property
    def command(self) -> str:
        return str(self.params.get("command", ""))


class Receipt(BaseModel):
    """Outcome of one command.

    ``exit_code`` is None when the command never ran (spawn failure,
    validation failure, missing adapter).
    """

    adapter: str
    action_id: str
    status: Literal["ok", "failed"] = "ok"
    exit_code: int | None = None
    output: str = ""
    error: str | None = None
    duration_ms: int = 0
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls, adapter: str, action_id: str, output: str = "", **kwargs: Any) -> Receipt:
        kwargs.setdefault("exit_code", 0)
        return cls(adapter=adapter, action_id=action_id, output=output, **kwargs)

    @classmethod
    def failure(cls, adapter: str, action_id: str, error: str, **kwargs: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, status="failed", error=error, **kwargs)
