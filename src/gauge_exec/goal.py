#
# src/gauge_exec/goal.py
#
"""
The `execute` goal: runs the project's gauge specs during the test phase.
"""
import asyncio

import structlog

from gauge_exec.config.models import ExecutionConfig
from gauge_exec.exceptions import BuildStepFailure, ExecutionFailure
from gauge_exec.execution.command import build_command, format_command
from gauge_exec.execution.protocols import CommandRunner, RunResult
from gauge_exec.execution.runner import SubprocessRunner

log = structlog.get_logger("goal")

GOAL_NAME = "execute"
DEFAULT_PHASE = "test"
FAILURE_PREFIX = "Failed to execute gauge specs. "


class GaugeExecutionGoal:
    """Goal which executes gauge specs in the project."""

    def __init__(self, config: ExecutionConfig, runner: CommandRunner | None = None):
        self.config = config
        self.runner = runner if runner is not None else SubprocessRunner()

    def command(self) -> list[str]:
        return build_command(self.config)

    async def run(self) -> RunResult:
        command = self.command()
        goal_log = log.bind(goal=GOAL_NAME, phase=DEFAULT_PHASE)
        goal_log.info("Executing gauge specs", command=format_command(command))
        try:
            result = await self.runner.run(command)
        except ExecutionFailure as e:
            goal_log.error(
                "Gauge execution failed",
                kind=e.kind.value if e.kind else None,
                error=str(e),
            )
            raise BuildStepFailure(FAILURE_PREFIX + str(e)) from e
        goal_log.info("Gauge specs passed", duration=round(result.duration, 3))
        return result

    def execute(self) -> RunResult:
        """Synchronous entry point for hosts without a running event loop."""
        return asyncio.run(self.run())


# 🔼⚙️
