#
# src/gauge_exec/execution/command.py
#
"""
Builds the gauge command line from an ExecutionConfig.
"""

import shlex
from collections.abc import Sequence

from gauge_exec.config.models import ExecutionConfig

GAUGE = "gauge"
TAGS_FLAG = "--tags"
PARALLEL_FLAG = "--parallel"
NODES_FLAG = "-n"


def build_command(config: ExecutionConfig) -> list[str]:
    """
    Returns the argv for a gauge run, in a fixed order:
    executable, tags, parallel flags, additional flags, specs directory.
    """
    command = [GAUGE]
    _add_tags(command, config)
    _add_parallel_flags(command, config)
    command.extend(config.flags)
    _add_specs_dir(command, config)
    return command


def _add_tags(command: list[str], config: ExecutionConfig) -> None:
    if config.tags and config.tags.strip():
        command.extend([TAGS_FLAG, config.tags])


def _add_parallel_flags(command: list[str], config: ExecutionConfig) -> None:
    if not config.in_parallel:
        return
    command.append(PARALLEL_FLAG)
    if config.nodes != 0:
        command.extend([NODES_FLAG, str(config.nodes)])


def _add_specs_dir(command: list[str], config: ExecutionConfig) -> None:
    if config.specs_dir is not None:
        command.append(str(config.specs_dir.absolute()))


def format_command(command: Sequence[str]) -> str:
    """Shell-quoted rendering for display only."""
    return shlex.join(command)


# 🔼⚙️
