#
# src/gauge_exec/__init__.py
#
"""
gauge-exec: runs gauge specs as a build step.
"""

from gauge_exec.config import ExecutionConfig
from gauge_exec.exceptions import BuildStepFailure, ExecutionFailure, FailureKind
from gauge_exec.execution import RunResult, SubprocessRunner, build_command
from gauge_exec.goal import GaugeExecutionGoal

__all__ = [
    "BuildStepFailure",
    "ExecutionConfig",
    "ExecutionFailure",
    "FailureKind",
    "GaugeExecutionGoal",
    "RunResult",
    "SubprocessRunner",
    "build_command",
]

# 🔼⚙️
