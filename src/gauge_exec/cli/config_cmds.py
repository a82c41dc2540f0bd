# src/gauge_exec/cli/config_cmds.py

from pathlib import Path

import click
import structlog
from rich.pretty import pretty_repr

from gauge_exec.cli.utils import (
    execution_options,
    logging_options,
    resolve_config,
    setup_logging_from_context,
)
from gauge_exec.exceptions import ConfigurationError
from gauge_exec.execution import build_command, format_command
from gauge_exec.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.config")


# Create a command group for config-related commands
@click.group(name="config")
def config_cli():
    """Commands for inspecting and validating configuration."""
    pass


@config_cli.command(name="show")
@execution_options
@logging_options
@click.pass_context
def show_config(
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
    """Load, validate, and display the configuration and the gauge command."""
    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
        default_log_level="WARNING",
    )
    log.info("Executing 'config show' command", config_path=str(config_path))

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
        log.error("Failed to load or validate configuration", error=str(e))
        click.echo(f"Error: Configuration problem:\n{e}", err=True)
        ctx.exit(2)

    click.echo(pretty_repr(config, expand_all=True))
    click.echo(f"Command: {format_command(build_command(config.execution))}")

# 🔼⚙️
