#
# src/gauge_exec/exceptions.py
#
"""
Exception hierarchy for gauge-exec.
"""

import enum
from collections.abc import Sequence


class GaugeExecError(Exception):
    """Base class for all gauge-exec errors."""


class ConfigurationError(GaugeExecError):
    """Raised when configuration cannot be loaded or is invalid."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        full_message = message
        if path:
            full_message += f" (Config: '{path}')"
        super().__init__(full_message)


class FailureKind(enum.Enum):
    """Why a gauge run failed."""

    SPAWN = "spawn"
    NON_ZERO_EXIT = "non_zero_exit"
    INTERRUPTED = "interrupted"
    RELAY = "relay"


class ExecutionFailure(GaugeExecError):
    """Base class for failures while running the gauge child process."""

    kind: FailureKind | None = None

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        exit_code: int | None = None,
    ):
        self.command = tuple(command)
        self.exit_code = exit_code
        super().__init__(message)
        if self.command and hasattr(self, "add_note"):
            self.add_note(f"Command: {list(self.command)}")


class SpawnFailure(ExecutionFailure):
    """The child process could not be started."""

    kind = FailureKind.SPAWN


class NonZeroExit(ExecutionFailure):
    """The child process ran and reported failure."""

    kind = FailureKind.NON_ZERO_EXIT


class Interrupted(ExecutionFailure):
    """Waiting for the child process was interrupted."""

    kind = FailureKind.INTERRUPTED


class RelayFailure(ExecutionFailure):
    """The child's output could not be copied to the parent's streams."""

    kind = FailureKind.RELAY


class BuildStepFailure(GaugeExecError):
    """Raised by the execute goal; halts the build step."""


# 🔼⚙️
