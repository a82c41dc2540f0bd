#
# src/gauge_exec/config/models.py
#
"""
Attrs-based data models for gauge-exec configuration structure.
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from attrs import define, field


# --- Validators & converters ---
def _validate_log_level(inst: Any, attr: Any, value: str) -> None:
    """Validator for standard logging level names."""
    valid = logging._nameToLevel.keys()
    if not isinstance(value, str) or value.upper() not in valid:
        raise ValueError(f"Invalid log_level '{value}'. Must be one of {list(valid)}.")


def _validate_int(inst: Any, attr: Any, value: int) -> None:
    """Validator ensures value is a real integer, not a bool."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Field '{attr.name}' must be an integer, got {value!r}")


def _validate_flags(inst: Any, attr: Any, value: tuple[str, ...]) -> None:
    for flag in value:
        if not isinstance(flag, str):
            raise ValueError(f"Field '{attr.name}' must contain only strings, got {flag!r}")


def _to_optional_path(value: str | Path | None) -> Path | None:
    if value is None:
        return None
    return Path(value)


def _to_flags(value: Iterable[str] | None) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        # A bare string is one flag, not a sequence of characters.
        return (value,)
    return tuple(value)


# --- Execution settings ---
@define(frozen=True, slots=True)
class ExecutionConfig:
    """Settings for a single gauge run."""

    specs_dir: Path | None = field(default=None, converter=_to_optional_path)
    tags: str | None = field(default=None)
    in_parallel: bool | None = field(default=None)
    nodes: int = field(default=0, validator=_validate_int)
    flags: tuple[str, ...] = field(factory=tuple, converter=_to_flags, validator=_validate_flags)


@define(frozen=True, slots=True)
class GlobalConfig:
    """Global default settings for gauge-exec."""

    log_level: str = field(default="INFO", validator=_validate_log_level)

    @property
    def numeric_log_level(self) -> int:
        return logging.getLevelName(self.log_level.upper())


@define(frozen=True, slots=True)
class GaugeExecConfig:
    """Root configuration object for the gauge-exec application."""

    execution: ExecutionConfig = field(factory=ExecutionConfig)
    global_config: GlobalConfig = field(factory=GlobalConfig, metadata={"toml_name": "global"})


# 🔼⚙️
