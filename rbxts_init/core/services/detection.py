"""
Tool detection — which package managers and git are on this host.

Each tool is probed on its own thread; one probe blowing up never
affects the others. A probe that errors counts as "available": if the
tool really is missing, the first command that needs it will say so.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum

from rbxts_init.core.models.options import ToolAvailability

logger = logging.getLogger(__name__)

DEFAULT_TOOLS: tuple[str, ...] = ("npm", "pnpm", "yarn", "git")

Which = Callable[[str], str | None]


class ProbeStatus(str, Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    ERROR = "error"


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of probing one tool."""

    tool: str
    status: ProbeStatus
    path: str | None = None
    error: str | None = None

    @property
    def available(self) -> bool:
        """Collapse to a boolean; a failed probe counts as available."""
        return self.status is not ProbeStatus.UNAVAILABLE


def probe_tool(tool: str, which: Which = shutil.which) -> ProbeResult:
    """Probe a single tool on the executable search path."""
    try:
        path = which(tool)
    except Exception as e:
        logger.debug("Probe for %s failed, assuming available: %s", tool, e)
        return ProbeResult(tool=tool, status=ProbeStatus.ERROR, error=str(e))

    if path is None:
        return ProbeResult(tool=tool, status=ProbeStatus.UNAVAILABLE)
    return ProbeResult(tool=tool, status=ProbeStatus.AVAILABLE, path=path)


def probe_tools(tools: Sequence[str], which: Which = shutil.which) -> list[ProbeResult]:
    """Probe all tools concurrently.

    Returns:
        One ProbeResult per tool, in the same order as ``tools``.
    """
    if not tools:
        return []

    with ThreadPoolExecutor(max_workers=len(tools)) as pool:
        futures = [pool.submit(probe_tool, tool, which) for tool in tools]
        results = [future.result() for future in futures]

    for result in results:
        logger.debug("Probe %s → %s", result.tool, result.status.value)
    return results


def detect_tools(which: Which = shutil.which) -> ToolAvailability:
    """Snapshot of npm / pnpm / yarn / git availability."""
    results = probe_tools(DEFAULT_TOOLS, which)
    return ToolAvailability(**{r.tool: r.available for r in results})
