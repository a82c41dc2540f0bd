# tests/unit/test_goal.py

"""Unit tests for the GaugeExecutionGoal entry point."""

import io
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from gauge_exec.config import ExecutionConfig
from gauge_exec.exceptions import (
    BuildStepFailure,
    ExecutionFailure,
    Interrupted,
    NonZeroExit,
    SpawnFailure,
)
from gauge_exec.execution import CommandRunner, RunResult, SubprocessRunner
from gauge_exec.goal import FAILURE_PREFIX, GaugeExecutionGoal

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="fake gauge is a shell script")


def cause_chain(error: BaseException) -> list[BaseException]:
    chain = []
    cause = error.__cause__
    while cause is not None:
        chain.append(cause)
        cause = cause.__cause__
    return chain


@pytest.fixture
def mock_runner() -> AsyncMock:
    """Provides a mock CommandRunner that succeeds by default."""
    runner = AsyncMock(spec=CommandRunner)

    async def _run(command: Sequence[str]) -> RunResult:
        return RunResult(command=command, exit_code=0, duration=0.1)

    runner.run.side_effect = _run
    return runner


class TestGaugeExecutionGoal:
    """Tests against a mocked runner."""

    def test_default_runner_is_subprocess(self) -> None:
        goal = GaugeExecutionGoal(ExecutionConfig())
        assert isinstance(goal.runner, SubprocessRunner)

    async def test_runs_built_command(
        self, mock_runner: AsyncMock, full_config: ExecutionConfig
    ) -> None:
        goal = GaugeExecutionGoal(full_config, runner=mock_runner)

        result = await goal.run()

        mock_runner.run.assert_awaited_once_with(goal.command())
        assert result.exit_code == 0
        assert goal.command()[:3] == ["gauge", "--tags", "a & b"]

    @pytest.mark.parametrize(
        "failure",
        [
            NonZeroExit("gauge exited with code 1", command=["gauge"], exit_code=1),
            SpawnFailure("Could not start 'gauge': boom", command=["gauge"]),
            Interrupted("Interrupted while waiting for gauge to finish", command=["gauge"]),
        ],
    )
    async def test_execution_failure_wrapped(self, mock_runner: AsyncMock, failure) -> None:
        """Every failure kind becomes a BuildStepFailure carrying the original as cause."""
        mock_runner.run.side_effect = failure
        goal = GaugeExecutionGoal(ExecutionConfig(), runner=mock_runner)

        with pytest.raises(BuildStepFailure) as exc_info:
            await goal.run()

        assert str(exc_info.value) == FAILURE_PREFIX + str(failure)
        assert exc_info.value.__cause__ is failure

    async def test_plain_execution_failure_wrapped(self, mock_runner: AsyncMock) -> None:
        """Custom runners may raise the base class, which has no specific kind."""
        failure = ExecutionFailure("custom runner failed")
        mock_runner.run.side_effect = failure
        goal = GaugeExecutionGoal(ExecutionConfig(), runner=mock_runner)

        with pytest.raises(BuildStepFailure) as exc_info:
            await goal.run()

        assert failure.kind is None
        assert str(exc_info.value) == "Failed to execute gauge specs. custom runner failed"
        assert exc_info.value.__cause__ is failure

    async def test_unexpected_errors_propagate_unwrapped(self, mock_runner: AsyncMock) -> None:
        mock_runner.run.side_effect = RuntimeError("bug")
        goal = GaugeExecutionGoal(ExecutionConfig(), runner=mock_runner)

        with pytest.raises(RuntimeError, match="bug"):
            await goal.run()

    def test_execute_is_synchronous(self, mock_runner: AsyncMock) -> None:
        goal = GaugeExecutionGoal(ExecutionConfig(tags="smoke"), runner=mock_runner)

        result = goal.execute()

        assert result.command == ("gauge", "--tags", "smoke")


@posix_only
class TestGoalWithFakeGauge:
    """End-to-end runs against a `gauge` script on PATH."""

    def test_success_passes_arguments(
        self, fake_gauge: Callable[[str], Path], tmp_path: Path
    ) -> None:
        fake_gauge('printf "%s\\n" "$@"')
        out = io.StringIO()
        config = ExecutionConfig(tags="a & b", in_parallel=True, nodes=4, flags=["--verbose"], specs_dir=tmp_path)
        goal = GaugeExecutionGoal(config, runner=SubprocessRunner(stdout=out, stderr=io.StringIO()))

        goal.execute()

        assert out.getvalue().splitlines() == [
            "--tags", "a & b", "--parallel", "-n", "4", "--verbose", str(tmp_path),
        ]

    def test_exit_code_two_fails_build(self, fake_gauge: Callable[[str], Path]) -> None:
        fake_gauge("echo 'spec failed' >&2\nexit 2")
        err = io.StringIO()
        goal = GaugeExecutionGoal(
            ExecutionConfig(), runner=SubprocessRunner(stdout=io.StringIO(), stderr=err)
        )

        with pytest.raises(BuildStepFailure) as exc_info:
            goal.execute()

        assert str(exc_info.value).startswith("Failed to execute gauge specs. ")
        assert isinstance(exc_info.value.__cause__, NonZeroExit)
        assert exc_info.value.__cause__.exit_code == 2
        assert err.getvalue().strip() == "spec failed"

    def test_gauge_missing_from_path(self, empty_path: Path) -> None:
        goal = GaugeExecutionGoal(ExecutionConfig())

        with pytest.raises(BuildStepFailure) as exc_info:
            goal.execute()

        chain = cause_chain(exc_info.value)
        assert isinstance(chain[0], SpawnFailure)
        assert any(isinstance(cause, OSError) for cause in chain)
        assert str(exc_info.value).startswith("Failed to execute gauge specs. Could not start 'gauge'")
