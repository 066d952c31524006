"""
Step timing — the named progress boundary around each pipeline step.

StepTimer measures one step and tells a ProgressReporter when it starts
and ends. The core only knows the reporter protocol; the CLI supplies a
reporter that prints, tests supply one that records.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class ProgressReporter(Protocol):
    def step_started(self, label: str) -> None: ...

    def step_finished(self, label: str, elapsed_ms: int) -> None: ...

    def step_failed(self, label: str, elapsed_ms: int) -> None: ...


class LoggingReporter:
    """Reporter that only writes to the log."""

    def step_started(self, label: str) -> None:
        logger.info("%s", label)

    def step_finished(self, label: str, elapsed_ms: int) -> None:
        logger.info("%s done (%d ms)", label, elapsed_ms)

    def step_failed(self, label: str, elapsed_ms: int) -> None:
        logger.info("%s failed after %d ms", label, elapsed_ms)


class StepTimer:
    """Context manager for timing one labelled step.

    Exceptions are never swallowed; the reporter just hears about them.
    """

    def __init__(self, label: str, reporter: ProgressReporter):
        self.label = label
        self._reporter = reporter
        self._start: float = 0.0
        self.elapsed_ms: int = 0

    def __enter__(self) -> StepTimer:
        self._reporter.step_started(self.label)
        self._start = time.monotonic()
        return self

    def __exit__(self, exc_type: Any, *args: Any) -> None:
        self.elapsed_ms = int((time.monotonic() - self._start) * 1000)
        if exc_type is None:
            self._reporter.step_finished(self.label, self.elapsed_ms)
        else:
            self._reporter.step_failed(self.label, self.elapsed_ms)
