# src/gauge_exec/cli/execute_cmds.py

from pathlib import Path

import click
import structlog

from gauge_exec.cli.utils import (
    execution_options,
    logging_options,
    resolve_config,
    setup_logging_from_context,
)
from gauge_exec.exceptions import BuildStepFailure, ConfigurationError, FailureKind
from gauge_exec.goal import GOAL_NAME, GaugeExecutionGoal
from gauge_exec.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.execute")

EXIT_BUILD_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130  # Standard exit code for SIGINT


def _echo_cause_chain(error: BaseException) -> None:
    cause = error.__cause__
    while cause is not None:
        click.echo(f"  Caused by: {type(cause).__name__}: {cause}", err=True)
        cause = cause.__cause__


@click.command(name=GOAL_NAME)
@execution_options
@logging_options
@click.pass_context
def execute_cli(
    ctx: click.Context,
    config_path: Path | None,
    specs_dir: Path | None,
    tags: str | None,
    in_parallel: bool | None,
    nodes: int | None,
    flags: tuple[str, ...],
    extra_flags: tuple[str, ...],
    **kwargs,
):
    """Run gauge specs, streaming gauge's output.

    Arguments after `--` are passed to gauge verbatim, after any --flag values.
    """
    try:
        config = resolve_config(
            config_path,
            specs_dir=specs_dir,
            tags=tags,
            in_parallel=in_parallel,
            nodes=nodes,
            flags=flags,
            extra_flags=extra_flags,
        )
    except ConfigurationError as e:
        click.echo(f"Error: Configuration problem: {e}", err=True)
        ctx.exit(EXIT_CONFIG_ERROR)

    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
        default_log_level=config.global_config.log_level,
    )

    goal = GaugeExecutionGoal(config.execution)
    try:
        goal.execute()
    except BuildStepFailure as e:
        click.echo(f"Error: {e}", err=True)
        _echo_cause_chain(e)
        interrupted = getattr(e.__cause__, "kind", None) is FailureKind.INTERRUPTED
        ctx.exit(EXIT_INTERRUPTED if interrupted else EXIT_BUILD_FAILURE)
    except KeyboardInterrupt:
        log.warning("Shutdown initiated by KeyboardInterrupt (CTRL-C).")
        ctx.exit(EXIT_INTERRUPTED)
    else:
        log.info("'execute' command finished.")

# 🔼⚙️
