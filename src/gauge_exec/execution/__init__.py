#
# src/gauge_exec/execution/__init__.py
#
"""
Command construction and process execution sub-package for gauge-exec.
"""
from .command import GAUGE, NODES_FLAG, PARALLEL_FLAG, TAGS_FLAG, build_command, format_command
from .protocols import CommandRunner, RunResult
from .runner import SubprocessRunner, relay_stream

__all__ = [
    "GAUGE",
    "NODES_FLAG",
    "PARALLEL_FLAG",
    "TAGS_FLAG",
    "CommandRunner",
    "RunResult",
    "SubprocessRunner",
    "build_command",
    "format_command",
    "relay_stream",
]

# 🔼⚙️
