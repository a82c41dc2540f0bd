#
# src/gauge_exec/execution/runner.py
#
"""
Runs gauge as a child process using asyncio.subprocess, relaying its
stdout and stderr live to the parent's streams.
"""
import asyncio
import codecs
import sys
import time
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TextIO

import structlog

from gauge_exec.exceptions import Interrupted, NonZeroExit, RelayFailure, SpawnFailure
from gauge_exec.execution.command import format_command
from gauge_exec.execution.protocols import CommandRunner, RunResult

log = structlog.get_logger("execution.runner")

DEFAULT_TERMINATE_TIMEOUT = 5.0  # seconds between SIGTERM and SIGKILL
DEFAULT_CHUNK_SIZE = 8192


async def relay_stream(
    source: asyncio.StreamReader,
    sink: TextIO,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> None:
    """
    Copies `source` to `sink` until EOF.

    Reads chunks rather than lines so progress output without a trailing
    newline still shows up immediately.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while True:
        chunk = await source.read(chunk_size)
        if not chunk:
            break
        text = decoder.decode(chunk)
        if text:
            sink.write(text)
            sink.flush()
    tail = decoder.decode(b"", final=True)
    if tail:
        sink.write(tail)
        sink.flush()


class SubprocessRunner(CommandRunner):
    """
    Implements the CommandRunner protocol by executing a command in a subprocess.
    """

    def __init__(
        self,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        terminate_timeout: float = DEFAULT_TERMINATE_TIMEOUT,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self._stdout = stdout
        self._stderr = stderr
        self._cwd = cwd
        self._env = dict(env) if env is not None else None
        self._terminate_timeout = terminate_timeout
        self._chunk_size = chunk_size

    async def run(self, command: Sequence[str]) -> RunResult:
        """
        Executes the command using asyncio.create_subprocess_exec.
        """
        argv = list(command)
        if not argv:
            raise ValueError("Cannot run an empty command")

        runner_log = log.bind(command=format_command(argv))
        started = time.monotonic()

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self._cwd,
                env=self._env,
            )
        except OSError as e:
            runner_log.error("Failed to start command", executable=argv[0], error=str(e))
            raise SpawnFailure(f"Could not start '{argv[0]}': {e}", command=argv) from e

        runner_log = runner_log.bind(pid=process.pid)
        runner_log.info("Command started")

        # Both relays must be running before the wait, or a full pipe
        # buffer blocks the child forever.
        stdout_sink = self._stdout if self._stdout is not None else sys.stdout
        stderr_sink = self._stderr if self._stderr is not None else sys.stderr
        relays = [
            asyncio.create_task(
                relay_stream(process.stdout, stdout_sink, self._chunk_size),
                name=f"relay-stdout-{process.pid}",
            ),
            asyncio.create_task(
                relay_stream(process.stderr, stderr_sink, self._chunk_size),
                name=f"relay-stderr-{process.pid}",
            ),
        ]

        # A failed relay must end the wait too; otherwise the child blocks on
        # the pipe nobody drains.
        waiter = asyncio.create_task(process.wait(), name=f"wait-{process.pid}")
        tasks = [waiter, *relays]
        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
            _raise_relay_error(relays)
            exit_code = waiter.result()
        except asyncio.CancelledError as e:
            runner_log.warning("Interrupted while waiting for command; stopping it")
            await self._stop(process, tasks, runner_log)
            current = asyncio.current_task()
            if current is not None:
                current.uncancel()
            raise Interrupted(
                f"Interrupted while waiting for {argv[0]} to finish", command=argv
            ) from e
        except (OSError, ValueError) as e:
            # Sink write failures: broken pipe, closed stream.
            runner_log.error("Relaying output failed; stopping command", error=str(e))
            await self._stop(process, tasks, runner_log)
            raise RelayFailure(
                f"Could not relay output of {argv[0]}: {e}", command=argv
            ) from e
        except BaseException:
            await self._stop(process, tasks, runner_log)
            raise

        duration = time.monotonic() - started
        runner_log.info("Command finished", exit_code=exit_code, duration=round(duration, 3))

        if exit_code != 0:
            raise NonZeroExit(
                f"{argv[0]} exited with code {exit_code}", command=argv, exit_code=exit_code
            )
        return RunResult(command=argv, exit_code=exit_code, duration=duration)

    async def _stop(
        self, process: asyncio.subprocess.Process, tasks: list[asyncio.Task], runner_log
    ) -> None:
        await self._terminate(process, runner_log)
        await _cancel_all(tasks)

    async def _terminate(self, process: asyncio.subprocess.Process, runner_log) -> None:
        """SIGTERM the child, then SIGKILL it if it outlives the timeout."""
        if process.returncode is not None:
            return
        try:
            process.terminate()
            try:
                await asyncio.wait_for(process.wait(), timeout=self._terminate_timeout)
                runner_log.info("Child terminated", exit_code=process.returncode)
                return
            except asyncio.TimeoutError:
                runner_log.warning(
                    "Child ignored SIGTERM, killing it", timeout=self._terminate_timeout
                )
            process.kill()
            await process.wait()
        except ProcessLookupError:
            # Already gone.
            pass


def _raise_relay_error(relays: list[asyncio.Task]) -> None:
    for relay in relays:
        if relay.done() and not relay.cancelled() and relay.exception() is not None:
            raise relay.exception()


async def _cancel_all(tasks: list[asyncio.Task]) -> None:
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


# 🔼⚙️
