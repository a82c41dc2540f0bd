#
# src/gauge_exec/config/loader.py
#
"""
Loads gauge-exec configuration from a TOML file and the environment.

Precedence (highest first): CLI overrides > environment variables >
config file > model defaults. CLI overrides are applied separately with
`merge_overrides` once the file and environment have been resolved.
"""

import os
import shlex
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
from attrs import evolve

from gauge_exec.config.models import ExecutionConfig, GaugeExecConfig, GlobalConfig
from gauge_exec.exceptions import ConfigurationError

log = structlog.get_logger("config.loader")

DEFAULT_CONFIG_FILENAME = "gauge-exec.toml"

# Environment variable names mirror the gauge.* build properties.
ENV_SPECS_DIR = "GAUGE_SPECS_DIR"
ENV_TAGS = "GAUGE_EXEC_TAGS"
ENV_IN_PARALLEL = "GAUGE_EXEC_IN_PARALLEL"
ENV_NODES = "GAUGE_EXEC_NODES"
ENV_ADDITIONAL_FLAGS = "GAUGE_EXEC_ADDITIONAL_FLAGS"
ENV_LOG_LEVEL = "GAUGE_EXEC_LOG_LEVEL"

_EXECUTION_KEYS = frozenset({"specs_dir", "tags", "in_parallel", "nodes", "flags"})
_GLOBAL_KEYS = frozenset({"log_level"})
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def parse_bool(value: str, name: str) -> bool:
    """Parse a boolean from an environment variable string."""
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {value!r}")


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError("Configuration file not found", path=str(path)) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML: {e}", path=str(path)) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file: {e}", path=str(path)) from e


def _check_table(data: Any, table: str, allowed: frozenset[str], path: Path) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"[{table}] must be a table", path=str(path))
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ConfigurationError(
            f"Unknown key(s) in [{table}]: {', '.join(unknown)}", path=str(path)
        )
    return dict(data)


def _execution_from_file(data: dict[str, Any], path: Path) -> dict[str, Any]:
    """Type-check [execution] values; attrs only validates what it converts."""
    values: dict[str, Any] = {}
    expected = {
        "tags": str,
        "in_parallel": bool,
        "nodes": int,
        "specs_dir": str,
        "flags": list,
    }
    for key, value in data.items():
        wanted = expected[key]
        # bool is an int subclass; nodes = true is a mistake, not 1.
        if not isinstance(value, wanted) or (wanted is int and isinstance(value, bool)):
            raise ConfigurationError(
                f"[execution].{key} must be of type {wanted.__name__}, got {type(value).__name__}",
                path=str(path),
            )
        values[key] = value

    specs_dir = values.get("specs_dir")
    if specs_dir is not None:
        specs_path = Path(specs_dir).expanduser()
        if not specs_path.is_absolute():
            specs_path = path.parent / specs_path
        values["specs_dir"] = specs_path
    return values


def _execution_from_env(env: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    if ENV_SPECS_DIR in env:
        values["specs_dir"] = Path(env[ENV_SPECS_DIR]).expanduser()
    if ENV_TAGS in env:
        values["tags"] = env[ENV_TAGS]
    if ENV_IN_PARALLEL in env:
        values["in_parallel"] = parse_bool(env[ENV_IN_PARALLEL], ENV_IN_PARALLEL)
    if ENV_NODES in env:
        raw = env[ENV_NODES]
        try:
            values["nodes"] = int(raw.strip())
        except ValueError as e:
            raise ConfigurationError(f"Invalid integer for {ENV_NODES}: {raw!r}") from e
    if ENV_ADDITIONAL_FLAGS in env:
        try:
            values["flags"] = shlex.split(env[ENV_ADDITIONAL_FLAGS])
        except ValueError as e:
            raise ConfigurationError(f"Cannot split {ENV_ADDITIONAL_FLAGS}: {e}") from e
    return values


def find_config_path(cwd: Path | None = None) -> Path | None:
    """Returns the default config file in `cwd` if one exists."""
    candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> GaugeExecConfig:
    """
    Loads and validates configuration.

    Args:
        config_path: TOML file to read, or None to use defaults only.
        env: Environment mapping to read overrides from. Defaults to os.environ.

    Returns:
        The validated root configuration.

    Raises:
        ConfigurationError: If the file or any value is invalid.
    """
    env = os.environ if env is None else env
    load_log = log.bind(config_path=str(config_path) if config_path else None)

    execution_values: dict[str, Any] = {}
    global_values: dict[str, Any] = {}

    if config_path is not None:
        load_log.debug("Reading configuration file")
        raw = _read_toml(config_path)
        unknown = sorted(set(raw) - {"execution", "global"})
        if unknown:
            raise ConfigurationError(
                f"Unknown table(s): {', '.join(unknown)}", path=str(config_path)
            )
        execution_values.update(
            _execution_from_file(
                _check_table(raw.get("execution"), "execution", _EXECUTION_KEYS, config_path),
                config_path,
            )
        )
        global_values.update(
            _check_table(raw.get("global"), "global", _GLOBAL_KEYS, config_path)
        )

    env_values = _execution_from_env(env)
    if env_values:
        load_log.debug("Applying environment overrides", keys=sorted(env_values))
    execution_values.update(env_values)
    if ENV_LOG_LEVEL in env:
        global_values["log_level"] = env[ENV_LOG_LEVEL]

    try:
        config = GaugeExecConfig(
            execution=ExecutionConfig(**execution_values),
            global_config=GlobalConfig(**global_values),
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            str(e), path=str(config_path) if config_path else None
        ) from e

    load_log.debug("Configuration loaded", execution=config.execution)
    return config


def merge_overrides(config: ExecutionConfig, **overrides: Any) -> ExecutionConfig:
    """Applies overrides whose value is not None on top of `config`."""
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    try:
        return evolve(config, **changes)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(str(e)) from e


# 🔼⚙️
