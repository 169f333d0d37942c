"""Tool runner - run external format/lint/type/test commands concurrently."""

import asyncio
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    """Outcome of one external tool."""

    name: str
    ok: bool
    elapsed: float


@dataclass
class ToolReport:
    """Outcome of a tool run."""

    results: list[ToolResult]
    total_elapsed: float

    @property
    def all_ok(self) -> bool:
        return all(r.ok for r in self.results)


async def run_tool(name: str, command: Sequence[str], cwd: Path | str | None = None) -> ToolResult:
    """Run one command, inheriting stdout/stderr.

    Args:
        name: Display name.
        command: Executable and arguments.
        cwd: Working directory.

    Returns:
        ToolResult; a command that cannot be started counts as failed.
    """
    if not command:
        logger.warning("Tool %s has an empty command", name)
        return ToolResult(name=name, ok=False, elapsed=0.0)

    start = time.perf_counter()
    try:
        process = await asyncio.create_subprocess_exec(*command, cwd=cwd)
        returncode = await process.wait()
        ok = returncode == 0
    except OSError as e:
        logger.warning("Could not start %s: %s", name, e)
        ok = False

    return ToolResult(name=name, ok=ok, elapsed=time.perf_counter() - start)


async def run_tools(
    tools: Sequence[tuple[str, Sequence[str]]],
    cwd: Path | str | None = None,
) -> ToolReport:
    """Run all tools concurrently.

    Args:
        tools: (name, command) pairs.
        cwd: Working directory for every tool.

    Returns:
        ToolReport with results in the given order.
    """
    start = time.perf_counter()
    results = await asyncio.gather(*(run_tool(name, cmd, cwd) for name, cmd in tools))
    return ToolReport(results=list(results), total_elapsed=time.perf_counter() - start)
