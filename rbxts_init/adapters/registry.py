"""
Adapter registry — the only way a command reaches a process.

The command runner hands every Action to the registry, which picks the
adapter, validates, executes and times it. Whatever happens, the caller
gets a Receipt back.
"""

from __future__ import annotations

import logging
import time

from rbxts_init.adapters.base import Adapter, ExecutionContext
from rbxts_init.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Adapters by name, plus an optional mock that replaces all of them.

    In mock mode without a mock adapter every action succeeds with no
    output, which is enough to walk the pipeline without any tools.
    """

    def __init__(self, mock_mode: bool = False):
        self._adapters: dict[str, Adapter] = {}
        self._mock_mode = mock_mode
        self._mock_adapter: Adapter | None = None

    @classmethod
    def default(cls) -> AdapterRegistry:
        """Registry with the real shell adapter registered."""
        from rbxts_init.adapters.shell.command import ShellCommandAdapter

        registry = cls()
        registry.register(ShellCommandAdapter())
        return registry

    @property
    def mock_mode(self) -> bool:
        return self._mock_mode

    def set_mock_mode(self, enabled: bool, mock_adapter: Adapter | None = None) -> None:
        self._mock_mode = enabled
        self._mock_adapter = mock_adapter

    def register(self, adapter: Adapter) -> None:
        if adapter.name in self._adapters:
            logger.warning("Replacing adapter %s", adapter.name)
        self._adapters[adapter.name] = adapter

    def get(self, name: str) -> Adapter | None:
        return self._adapters.get(name)

    def _resolve(self, action: Action) -> Adapter | None:
        if self._mock_mode:
            return self._mock_adapter
        return self._adapters.get(action.adapter)

    def execute_action(self, action: Action, working_dir: str = ".") -> Receipt:
        """Run one action and return its Receipt. Never raises."""
        start = time.monotonic()
        context = ExecutionContext(action=action, working_dir=working_dir, params=action.params)

        adapter = self._resolve(action)
        if adapter is None and self._mock_mode:
            return Receipt.success(action.adapter, action.id, metadata={"mock": True, "command": action.command})
        if adapter is None:
            return Receipt.failure(action.adapter, action.id, f"No adapter registered for '{action.adapter}'")

        try:
            valid, reason = adapter.validate(context)
        except Exception as e:
            valid, reason = False, str(e)
        if not valid:
            return Receipt.failure(action.adapter, action.id, f"Validation failed: {reason}")

        try:
            receipt = adapter.execute(context)
        except Exception as e:
            logger.error("Adapter %s raised on %s: %s", adapter.name, action.command, e)
            receipt = Receipt.failure(action.adapter, action.id, f"Unexpected error: {e}")

        receipt.duration_ms = int((time.monotonic() - start) * 1000)
        return receipt
