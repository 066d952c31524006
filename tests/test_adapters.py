"""
Tests for the adapter layer — registry, mock adapter, and shell adapter.
"""

from pathlib import Path

import pytest

from rbxts_init.adapters.base import ExecutionContext
from rbxts_init.adapters.mock import MockAdapter
from rbxts_init.adapters.registry import AdapterRegistry
from rbxts_init.adapters.shell.command import ShellCommandAdapter
from rbxts_init.core.models.action import Action, Receipt


def _action(command: str = "echo hello", **params) -> Action:
    return Action(id="test:1", adapter="shell", step="test", params={"command": command, **params})


# ── Registry ────────────────────────────────────────────────────────


class TestAdapterRegistry:
    def test_register_and_get(self):
        registry = AdapterRegistry()
        mock = MockAdapter()
        registry.register(mock)
        assert registry.get("shell") is mock
        assert registry.get("docker") is None

    def test_default_has_shell(self):
        registry = AdapterRegistry.default()
        assert isinstance(registry.get("shell"), ShellCommandAdapter)

    def test_missing_adapter_is_failed_receipt(self):
        receipt = AdapterRegistry().execute_action(_action())
        assert receipt.failed
        assert "No adapter registered" in receipt.error
        assert receipt.exit_code is None

    def test_mock_mode_without_adapter_succeeds(self):
        registry = AdapterRegistry(mock_mode=True)
        receipt = registry.execute_action(_action("npm init -y"))
        assert receipt.ok
        assert receipt.metadata["command"] == "npm init -y"

    def test_mock_mode_routes_to_mock(self):
        registry = AdapterRegistry.default()
        mock = MockAdapter()
        registry.set_mock_mode(True, mock)
        registry.execute_action(_action("git init"))
        assert mock.commands == ["git init"]

    def test_validation_failure(self):
        registry = AdapterRegistry.default()
        receipt = registry.execute_action(_action(""))
        assert receipt.failed
        assert "Validation failed" in receipt.error

    def test_raising_adapter_never_escapes(self):
        class Exploding(MockAdapter):
            def execute(self, context):
                raise RuntimeError("boom")

        registry = AdapterRegistry()
        registry.register(Exploding())
        receipt = registry.execute_action(_action())
        assert receipt.failed
        assert "boom" in receipt.error

    def test_duration_recorded(self, registry):
        receipt = registry.execute_action(_action())
        assert receipt.duration_ms >= 0


# ── Mock adapter ────────────────────────────────────────────────────


class TestMockAdapter:
    def test_default_success(self):
        mock = MockAdapter(default_output="ok")
        receipt = mock.execute(ExecutionContext(action=_action()))
        assert receipt.ok
        assert receipt.output == "ok"
        assert mock.call_count == 1

    def test_set_failure(self):
        mock = MockAdapter()
        mock.set_failure("git init", error="git: not found", exit_code=127)
        receipt = mock.execute(ExecutionContext(action=_action("git init")))
        assert receipt.failed
        assert receipt.exit_code == 127
        assert receipt.error == "git: not found"

    def test_set_response(self):
        mock = MockAdapter()
        mock.set_response("yarn --version", Receipt.success("shell", "x", output="4.1.0"))
        receipt = mock.execute(ExecutionContext(action=_action("yarn --version")))
        assert receipt.output == "4.1.0"

    def test_hook_sees_working_dir(self, tmp_path: Path):
        mock = MockAdapter()
        mock.on_command("touch", lambda ctx: (Path(ctx.working_dir) / "f").write_text(""))
        mock.execute(ExecutionContext(action=_action("touch"), working_dir=str(tmp_path)))
        assert (tmp_path / "f").exists()

    def test_reset(self):
        mock = MockAdapter()
        mock.set_failure("git init")
        mock.execute(ExecutionContext(action=_action("git init")))
        mock.reset()
        assert mock.call_count == 0
        assert mock.execute(ExecutionContext(action=_action("git init"))).ok


# ── Shell adapter ───────────────────────────────────────────────────


class TestShellCommandAdapter:
    @pytest.fixture
    def adapter(self) -> ShellCommandAdapter:
        return ShellCommandAdapter()

    def test_runs_command(self, adapter, tmp_path: Path):
        ctx = ExecutionContext(action=_action("echo hello"), working_dir=str(tmp_path))
        receipt = adapter.execute(ctx)
        assert receipt.ok
        assert receipt.output == "hello"
        assert receipt.exit_code == 0

    def test_runs_in_working_dir(self, adapter, tmp_path: Path):
        ctx = ExecutionContext(action=_action("echo x > marker.txt"), working_dir=str(tmp_path))
        assert adapter.execute(ctx).ok
        assert (tmp_path / "marker.txt").read_text().strip() == "x"

    def test_non_zero_exit(self, adapter, tmp_path: Path):
        ctx = ExecutionContext(action=_action("echo oops >&2; exit 3"), working_dir=str(tmp_path))
        receipt = adapter.execute(ctx)
        assert receipt.failed
        assert receipt.exit_code == 3
        assert receipt.error == "oops"

    def test_non_zero_exit_without_stderr(self, adapter, tmp_path: Path):
        ctx = ExecutionContext(action=_action("exit 2"), working_dir=str(tmp_path))
        receipt = adapter.execute(ctx)
        assert receipt.error == "Command exited with code 2"

    def test_validate_missing_command(self, adapter):
        ok, error = adapter.validate(ExecutionContext(action=_action("")))
        assert not ok
        assert "command" in error

    def test_validate_missing_cwd(self, adapter, tmp_path: Path):
        ctx = ExecutionContext(action=_action(), working_dir=str(tmp_path / "gone"))
        ok, error = adapter.validate(ctx)
        assert not ok
        assert "does not exist" in error
