#
# src/gauge_exec/execution/protocols.py
#
"""
Defines protocols and data structures for running gauge.
"""
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from attrs import define, field


@define(frozen=True, slots=True)
class RunResult:
    """
    Outcome of a successful run. Failures are raised as ExecutionFailure.
    """
    command: tuple[str, ...] = field(converter=tuple)
    exit_code: int
    duration: float


@runtime_checkable
class CommandRunner(Protocol):
    """
    Protocol for something that can run a command to completion.
    """
    async def run(self, command: Sequence[str]) -> RunResult:
        """
        Runs the command, relaying its console output live.

        Args:
            command: The program and its arguments, as argv.

        Returns:
            A RunResult when the command exits with code 0.

        Raises:
            ExecutionFailure: If the command cannot be started, exits
                non-zero, or the wait is interrupted.
        """
        ...

# 🔼⚙️
