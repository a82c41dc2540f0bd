# src/gauge_exec/cli/utils.py

import logging
from pathlib import Path
from typing import Any

import click
import structlog
from attrs import evolve

from gauge_exec.config import GaugeExecConfig, find_config_path, load_config, merge_overrides
from gauge_exec.telemetry.logger import setup_logging as core_setup_logging

log = structlog.get_logger("cli.utils")

LOG_LEVEL_CHOICES = click.Choice(list(logging._nameToLevel.keys()), case_sensitive=False)


def logging_options(f):
    """Adds the options controlling gauge-exec's own log output (never gauge's)."""
    f = click.option(
        "-l",
        "--log-level",
        type=LOG_LEVEL_CHOICES,
        default=None,
        envvar="GAUGE_EXEC_LOG_LEVEL",
        help="Level for gauge-exec's log messages on stderr. Beats [global] log_level.",
    )(f)
    f = click.option(
        "--log-file",
        type=click.Path(dir_okay=False, writable=True, resolve_path=True),
        default=None,
        envvar="GAUGE_EXEC_LOG_FILE",
        help="Also write gauge-exec's log messages to this file as JSON lines.",
    )(f)
    f = click.option(
        "--json-logs",
        is_flag=True,
        default=None,
        envvar="GAUGE_EXEC_JSON_LOGS",
        help="Render stderr log messages as JSON instead of key=value text.",
    )(f)
    return f


def execution_options(f):
    """Decorator adding the config file and per-run gauge options."""
    f = click.argument("extra_flags", nargs=-1, type=click.UNPROCESSED)(f)
    f = click.option(
        "--flag",
        "flags",
        multiple=True,
        help="Additional flag passed to gauge verbatim. Repeatable; order is kept.",
    )(f)
    f = click.option(
        "-n",
        "--nodes",
        type=int,
        default=None,
        help="Number of parallel nodes, passed as -n. Only used with --parallel; 0 omits -n.",
    )(f)
    f = click.option(
        "--parallel/--no-parallel",
        "in_parallel",
        default=None,
        help="Execute specs in parallel.",
    )(f)
    f = click.option(
        "--tags",
        default=None,
        help="Tag expression selecting specs, e.g. 'tag1 & tag2 & !tag3'.",
    )(f)
    f = click.option(
        "--specs-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Gauge specs directory.",
    )(f)
    f = click.option(
        "-c",
        "--config-path",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path),
        default=None,
        envvar="GAUGE_EXEC_CONF",
        show_envvar=True,
        help="Path to the gauge-exec TOML file (default: ./gauge-exec.toml if present).",
    )(f)
    return f


def resolve_config(
    config_path: Path | None,
    specs_dir: Path | None = None,
    tags: str | None = None,
    in_parallel: bool | None = None,
    nodes: int | None = None,
    flags: tuple[str, ...] = (),
    extra_flags: tuple[str, ...] = (),
) -> GaugeExecConfig:
    """Loads file and environment configuration, then applies CLI values."""
    path = config_path if config_path is not None else find_config_path()
    config = load_config(path)
    cli_flags = tuple(flags) + tuple(extra_flags)
    execution = merge_overrides(
        config.execution,
        specs_dir=specs_dir,
        tags=tags,
        in_parallel=in_parallel,
        nodes=nodes,
        flags=cli_flags or None,
    )
    return evolve(config, execution=execution)


def setup_logging_from_context(
    ctx: click.Context,
    local_log_level: str | None = None,
    local_log_file: str | None = None,
    local_json_logs: bool | None = None,
    default_log_level: str = "INFO",
) -> None:
    """
    Configures logging for a subcommand.

    Options given on the subcommand beat those given on the group.
    `default_log_level` is the fallback, normally `[global] log_level`.
    An unknown level name falls back to INFO.
    """
    obj: dict[str, Any] = ctx.obj or {}
    level_name = (local_log_level or obj.get("LOG_LEVEL") or default_log_level).upper()
    level = logging.getLevelNamesMapping().get(level_name, logging.INFO)
    log_file = local_log_file or obj.get("LOG_FILE")
    json_logs = local_json_logs if local_json_logs is not None else obj.get("JSON_LOGS", False)

    core_setup_logging(level=level, json_logs=json_logs, log_file=log_file)
    log.debug("Logging configured", level=logging.getLevelName(level), log_file=log_file, json=json_logs)


# ⚙️🛠️
