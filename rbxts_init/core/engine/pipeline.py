"""
Scaffold pipeline — the ordered list of init steps and the loop that runs them.

Each step is a (predicate, action) pair evaluated against one immutable
ResolvedConfiguration. Steps run strictly in order; the first exception
stops the run. Nothing is rolled back: earlier steps stay on disk and
the user re-runs after fixing the cause.

Flow:
    manifest → git → dependencies → yarn3 → eslint → prettier → vscode → template → build
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Literal

from rbxts_init.core.models.options import ResolvedConfiguration
from rbxts_init.core.models.package_manager import PackageManager
from rbxts_init.core.observability.timing import LoggingReporter, ProgressReporter, StepTimer
from rbxts_init.core.services import scaffold_steps as steps
from rbxts_init.core.services.scaffold_steps import StepContext

logger = logging.getLogger(__name__)

Predicate = Callable[[ResolvedConfiguration], bool]


def _always(config: ResolvedConfiguration) -> bool:
    return True


@dataclass(frozen=True)
class PipelineStep:
    """One labelled unit of work with its enablement predicate."""

    name: str
    label: str
    action: Callable[[StepContext], None]
    enabled: Predicate = _always


PIPELINE: tuple[PipelineStep, ...] = (
    PipelineStep("manifest", "Initializing package.json..", steps.init_manifest),
    PipelineStep("git", "Initializing Git..", steps.init_git, lambda c: c.git),
    PipelineStep("dependencies", "Installing dependencies..", steps.install_dependencies),
    PipelineStep(
        "yarn3",
        "Setting up yarn v3..",
        steps.setup_yarn3,
        lambda c: c.package_manager is PackageManager.YARN3,
    ),
    PipelineStep("eslint", "Configuring ESLint..", steps.configure_eslint, lambda c: c.eslint),
    PipelineStep("prettier", "Configuring prettier..", steps.configure_prettier, lambda c: c.prettier),
    PipelineStep("vscode", "Configuring vscode..", steps.configure_vscode, lambda c: c.vscode),
    PipelineStep("template", "Copying template files..", steps.copy_template),
    PipelineStep("build", "Compiling..", steps.build),
)


@dataclass
class StepRecord:
    name: str
    status: Literal["ok", "skipped"]
    duration_ms: int = 0


@dataclass
class PipelineReport:
    """What ran and what was skipped."""

    records: list[StepRecord] = field(default_factory=list)

    @property
    def ran(self) -> list[str]:
        return [r.name for r in self.records if r.status == "ok"]

    @property
    def skipped(self) -> list[str]:
        return [r.name for r in self.records if r.status == "skipped"]

    @property
    def duration_ms(self) -> int:
        return sum(r.duration_ms for r in self.records)

    def to_dict(self) -> dict:
        return {
            "ran": self.ran,
            "skipped": self.skipped,
            "duration_ms": self.duration_ms,
        }


def enabled_steps(
    config: ResolvedConfiguration,
    pipeline: Sequence[PipelineStep] = PIPELINE,
) -> list[PipelineStep]:
    """Steps that will run for this configuration, in order."""
    return [step for step in pipeline if step.enabled(config)]


def run_pipeline(
    ctx: StepContext,
    reporter: ProgressReporter | None = None,
    pipeline: Sequence[PipelineStep] = PIPELINE,
) -> PipelineReport:
    """Run every enabled step in order; the first failure propagates."""
    reporter = reporter or LoggingReporter()
    report = PipelineReport()

    for step in pipeline:
        if not step.enabled(ctx.config):
            logger.debug("Skipping step %s", step.name)
            report.records.append(StepRecord(name=step.name, status="skipped"))
            continue

        with StepTimer(step.label, reporter) as timer:
            step.action(ctx)
        report.records.append(StepRecord(name=step.name, status="ok", duration_ms=timer.elapsed_ms))

    return report
