#
# config/__init__.py
#
"""
Configuration handling sub-package for gauge-exec.

Exports the loading functions and core configuration models.
"""

from .loader import find_config_path, load_config, merge_overrides
from .models import ExecutionConfig, GaugeExecConfig, GlobalConfig

__all__ = [
    "ExecutionConfig",
    "GaugeExecConfig",
    "GlobalConfig",
    "find_config_path",
    "load_config",
    "merge_overrides",
]

# 🔼⚙️
