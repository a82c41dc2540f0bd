# tests/unit/test_logging.py

"""Tests for structlog setup and custom processors."""

import json
import logging
from pathlib import Path

import structlog

from gauge_exec.telemetry.logger import setup_logging
from gauge_exec.telemetry.logger.processors import (
    LOG_EMOJIS,
    add_emoji_processor,
    remove_extra_keys_processor,
)


class TestProcessors:
    def test_emoji_from_level(self) -> None:
        event = add_emoji_processor(None, "warning", {"event": "careful", "level": "warning"})
        assert event["event"] == f"{LOG_EMOJIS[logging.WARNING]} careful"

    def test_emoji_from_key(self) -> None:
        event = add_emoji_processor(None, "info", {"event": "go", "level": "info", "emoji_key": "run"})
        event = remove_extra_keys_processor(None, "info", event)
        assert event["event"] == f"{LOG_EMOJIS['run']} go"
        assert "emoji_key" not in event


def test_file_logging_writes_json(tmp_path: Path) -> None:
    log_file = tmp_path / "gauge-exec.log"
    setup_logging(level=logging.INFO, log_file=str(log_file), file_only=True)

    structlog.get_logger("tests.logging").info("hello file", answer=42)
    for handler in logging.getLogger().handlers:
        handler.flush()

    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    hello = next(r for r in records if "hello file" in r["event"])
    assert hello["answer"] == 42
    assert hello["level"] == "info"
    assert hello["logger"] == "tests.logging"
