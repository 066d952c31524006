"""
Tests for tool detection — concurrent probes, fail-open semantics.
"""

import threading

from rbxts_init.core.services.detection import (
    DEFAULT_TOOLS,
    ProbeStatus,
    detect_tools,
    probe_tool,
    probe_tools,
)


def _fake_which(installed: dict[str, str], broken: tuple[str, ...] = ()):
    def which(tool: str):
        if tool in broken:
            raise PermissionError(f"cannot stat {tool}")
        return installed.get(tool)

    return which


class TestProbeTool:
    def test_available(self):
        result = probe_tool("npm", _fake_which({"npm": "/usr/bin/npm"}))
        assert result.status is ProbeStatus.AVAILABLE
        assert result.path == "/usr/bin/npm"
        assert result.available

    def test_unavailable(self):
        result = probe_tool("pnpm", _fake_which({}))
        assert result.status is ProbeStatus.UNAVAILABLE
        assert not result.available

    def test_error_counts_as_available(self):
        result = probe_tool("yarn", _fake_which({}, broken=("yarn",)))
        assert result.status is ProbeStatus.ERROR
        assert result.available
        assert "cannot stat yarn" in result.error


class TestProbeTools:
    def test_order_preserved(self):
        tools = ["git", "yarn", "npm"]
        results = probe_tools(tools, _fake_which({"npm": "/bin/npm"}))
        assert [r.tool for r in results] == tools

    def test_empty(self):
        assert probe_tools([], _fake_which({})) == []

    def test_one_failure_does_not_affect_others(self):
        which = _fake_which({"npm": "/bin/npm", "git": "/bin/git"}, broken=("pnpm",))
        results = {r.tool: r for r in probe_tools(DEFAULT_TOOLS, which)}
        assert results["npm"].status is ProbeStatus.AVAILABLE
        assert results["pnpm"].status is ProbeStatus.ERROR
        assert results["yarn"].status is ProbeStatus.UNAVAILABLE
        assert results["git"].status is ProbeStatus.AVAILABLE

    def test_probes_run_concurrently(self):
        # Every probe waits for all the others; sequential probing would deadlock
        barrier = threading.Barrier(len(DEFAULT_TOOLS), timeout=5)

        def which(tool: str):
            barrier.wait()
            return f"/bin/{tool}"

        results = probe_tools(DEFAULT_TOOLS, which)
        assert all(r.status is ProbeStatus.AVAILABLE for r in results)


class TestDetectTools:
    def test_snapshot(self):
        tools = detect_tools(_fake_which({"npm": "/bin/npm", "git": "/bin/git"}))
        assert tools.npm is True
        assert tools.git is True
        assert tools.pnpm is False
        assert tools.yarn is False

    def test_fail_open(self):
        tools = detect_tools(_fake_which({}, broken=DEFAULT_TOOLS))
        assert tools.npm and tools.pnpm and tools.yarn and tools.git
