"""
Init use case — scaffold a project in a directory.

Ties together tool detection, option resolution, the conflict
pre-flight, and the scaffold pipeline. Strictly in that order: nothing
is written until the conflict check has passed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from rbxts_init.adapters.registry import AdapterRegistry
from rbxts_init.core.config.loader import ScaffoldSettings, load_settings
from rbxts_init.core.engine.executor import CommandRunner
from rbxts_init.core.engine.pipeline import PipelineReport, run_pipeline
from rbxts_init.core.models.options import RawOptions, ResolvedConfiguration, ToolAvailability
from rbxts_init.core.observability.timing import ProgressReporter
from rbxts_init.core.services.conflicts import check_conflicts
from rbxts_init.core.services.detection import detect_tools
from rbxts_init.core.services.options import Prompter, resolve_options
from rbxts_init.core.services.scaffold_steps import StepContext

logger = logging.getLogger(__name__)


@dataclass
class InitResult:
    """Result of the init use case."""

    config: ResolvedConfiguration
    report: PipelineReport
    cwd: Path

    def to_dict(self) -> dict:
        return {
            "cwd": str(self.cwd),
            "config": self.config.to_dict(),
            "pipeline": self.report.to_dict(),
        }


def run_init(
    raw: RawOptions,
    prompter: Prompter,
    cwd: Path | None = None,
    settings: ScaffoldSettings | None = None,
    registry: AdapterRegistry | None = None,
    reporter: ProgressReporter | None = None,
    detect: Callable[[], ToolAvailability] = detect_tools,
) -> InitResult:
    """Scaffold a roblox-ts project.

    Args:
        raw: Flags from the command line.
        prompter: Source of interactive answers.
        cwd: Target directory (default: current directory).
        settings: Scaffolder settings (default: from environment).
        registry: Adapter registry (default: real shell adapter).
        reporter: Progress reporter for step boundaries.
        detect: Tool prober (replaceable in tests).

    Raises:
        ConflictError: if the directory already holds files we would write.
        CommandError: if an external command fails.
        ConfigError: if settings are invalid.
    """
    cwd = (cwd or Path.cwd()).resolve()
    settings = settings or load_settings()
    registry = registry or AdapterRegistry.default()

    tools = detect()
    logger.info("Detected tools: %s", tools.model_dump())

    config = resolve_options(raw, tools, prompter)
    check_conflicts(config, cwd, settings)

    ctx = StepContext(
        config=config,
        settings=settings,
        cwd=cwd,
        runner=CommandRunner(registry, cwd),
    )
    report = run_pipeline(ctx, reporter)
    logger.info("Initialized %s project in %s", config.template.value, cwd)
    return InitResult(config=config, report=report, cwd=cwd)
