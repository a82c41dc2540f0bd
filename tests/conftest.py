#
# tests/conftest.py
#
import os
import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from gauge_exec.config import ExecutionConfig


@pytest.fixture(autouse=True)
def clean_gauge_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own GAUGE_* settings out of the tests."""
    for name in list(os.environ):
        if name.startswith("GAUGE_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def empty_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """PATH pointing only at an empty directory, so `gauge` cannot be found."""
    bin_dir = tmp_path / "empty-bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", str(bin_dir))
    return bin_dir


@pytest.fixture
def fake_gauge(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[[str], Path]:
    """
    Installs a `gauge` shell script with the given body on PATH.

    The script's directory is prepended, so /bin/sh and friends still resolve.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")

    def _install(body: str) -> Path:
        script = bin_dir / "gauge"
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _install


@pytest.fixture
def full_config() -> ExecutionConfig:
    """All options set, matching a typical parallel CI run."""
    return ExecutionConfig(
        specs_dir=Path("/proj/specs"),
        tags="a & b",
        in_parallel=True,
        nodes=4,
        flags=["--verbose"],
    )
