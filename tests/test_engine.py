"""
Tests for the execution engine — command runner and scaffold pipeline.
"""

from pathlib import Path

import pytest

from rbxts_init.adapters.mock import MockAdapter
from rbxts_init.adapters.registry import AdapterRegistry
from rbxts_init.core.engine.executor import CommandError, CommandRunner
from rbxts_init.core.engine.pipeline import (
    PIPELINE,
    PipelineStep,
    enabled_steps,
    run_pipeline,
)
from rbxts_init.core.models.options import InitMode, ResolvedConfiguration
from rbxts_init.core.models.package_manager import PackageManager
from rbxts_init.core.services.scaffold_steps import StepContext


def _config(**overrides) -> ResolvedConfiguration:
    values = dict(
        template=InitMode.GAME,
        git=True,
        eslint=True,
        prettier=True,
        vscode=True,
        package_manager=PackageManager.NPM,
    )
    values.update(overrides)
    return ResolvedConfiguration(**values)


class RecordingReporter:
    def __init__(self):
        self.events: list[tuple[str, str]] = []

    def step_started(self, label):
        self.events.append(("start", label))

    def step_finished(self, label, elapsed_ms):
        self.events.append(("done", label))

    def step_failed(self, label, elapsed_ms):
        self.events.append(("failed", label))


# ── Command runner ──────────────────────────────────────────────────


class TestCommandRunner:
    def test_returns_output(self, tmp_path: Path):
        registry = AdapterRegistry()
        registry.register(MockAdapter(default_output="v1"))
        runner = CommandRunner(registry, tmp_path)
        assert runner.run("npm --version", step="probe") == "v1"

    def test_passes_cwd_and_step(self, shell, registry, tmp_path: Path):
        CommandRunner(registry, tmp_path).run("git init", step="git")
        ctx = shell.call_log[0]
        assert ctx.working_dir == str(tmp_path)
        assert ctx.action.step == "git"
        assert ctx.action.id == "git:1"

    def test_failure_raises(self, shell, registry, tmp_path: Path):
        shell.set_failure("npm run build", error="tsc exploded", exit_code=2)
        with pytest.raises(CommandError) as exc:
            CommandRunner(registry, tmp_path).run("npm run build")
        assert exc.value.command == "npm run build"
        assert exc.value.exit_code == 2
        assert str(exc.value) == 'Command "npm run build" exited with code 2\n\ntsc exploded'


class TestCommandError:
    def test_with_hint(self):
        error = CommandError("git init", 127, "not found").with_hint("Install git.")
        assert error.hint == "Install git."
        assert str(error).endswith("not found\nInstall git.")

    def test_spawn_failure_has_no_code(self):
        assert "exited with code None" in str(CommandError("nope", None))


# ── Pipeline ────────────────────────────────────────────────────────


class TestEnabledSteps:
    def test_everything_on(self):
        names = [s.name for s in enabled_steps(_config())]
        assert names == [
            "manifest", "git", "dependencies", "eslint", "prettier", "vscode", "template", "build",
        ]

    def test_everything_off(self):
        names = [s.name for s in enabled_steps(_config(git=False, eslint=False, prettier=False, vscode=False))]
        assert names == ["manifest", "dependencies", "template", "build"]

    def test_yarn3_step(self):
        names = [s.name for s in enabled_steps(_config(package_manager=PackageManager.YARN3))]
        assert names.index("yarn3") == names.index("dependencies") + 1

    def test_labels(self):
        labels = {s.name: s.label for s in PIPELINE}
        assert labels["manifest"] == "Initializing package.json.."
        assert labels["build"] == "Compiling.."


class TestRunPipeline:
    def _ctx(self, registry, settings, tmp_path, **overrides) -> StepContext:
        return StepContext(
            config=_config(**overrides),
            settings=settings,
            cwd=tmp_path,
            runner=CommandRunner(registry, tmp_path),
        )

    def test_runs_in_order_and_skips_disabled(self, registry, settings, tmp_path: Path):
        order: list[str] = []
        pipeline = (
            PipelineStep("a", "A..", lambda ctx: order.append("a")),
            PipelineStep("b", "B..", lambda ctx: order.append("b"), lambda c: c.git),
            PipelineStep("c", "C..", lambda ctx: order.append("c")),
        )
        report = run_pipeline(self._ctx(registry, settings, tmp_path, git=False), pipeline=pipeline)
        assert order == ["a", "c"]
        assert report.ran == ["a", "c"]
        assert report.skipped == ["b"]

    def test_first_failure_stops(self, registry, settings, tmp_path: Path):
        order: list[str] = []

        def fail(ctx):
            raise CommandError("x", 1)

        pipeline = (
            PipelineStep("a", "A..", lambda ctx: order.append("a")),
            PipelineStep("b", "B..", fail),
            PipelineStep("c", "C..", lambda ctx: order.append("c")),
        )
        reporter = RecordingReporter()
        with pytest.raises(CommandError):
            run_pipeline(self._ctx(registry, settings, tmp_path), reporter, pipeline)
        assert order == ["a"]
        assert reporter.events == [
            ("start", "A.."), ("done", "A.."), ("start", "B.."), ("failed", "B.."),
        ]

    def test_report_to_dict(self, registry, settings, tmp_path: Path):
        pipeline = (PipelineStep("a", "A..", lambda ctx: None),)
        data = run_pipeline(self._ctx(registry, settings, tmp_path), pipeline=pipeline).to_dict()
        assert data["ran"] == ["a"]
        assert data["skipped"] == []
        assert data["duration_ms"] >= 0
