# src/gauge_exec/telemetry/logger/__init__.py

from gauge_exec.telemetry.logger.base import StructLogger, setup_logging

__all__ = ["StructLogger", "setup_logging"]
