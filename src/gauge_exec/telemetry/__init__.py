# src/gauge_exec/telemetry/__init__.py

"""
Logging setup for gauge-exec.
"""

from gauge_exec.telemetry.logger import StructLogger, setup_logging

__all__ = ["StructLogger", "setup_logging"]
