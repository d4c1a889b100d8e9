"""Tests for logging setup and the JSONL formatter."""

from __future__ import annotations

import json
import logging

from rss_reader.config import LoggingConfig
from rss_reader.logging_utils import log_event, setup_logging


def test_setup_logging_writes_jsonl_file(tmp_path):
    cfg = LoggingConfig(level="DEBUG", console=False, file=True, format="jsonl")

    logger = setup_logging(cfg, tmp_path)
    log_event(logging.getLogger("rss_reader.service"), "Fetched feed", feed_index=2, items=10)
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / cfg.filename).read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 1
    entry = json.loads(lines[0])
    assert entry["message"] == "Fetched feed"
    assert entry["logger"] == "rss_reader.service"
    assert entry["level"] == "INFO"
    assert entry["feed_index"] == 2
    assert entry["items"] == 10
    assert "timestamp" in entry


def test_setup_logging_console_only(tmp_path):
    logger = setup_logging(LoggingConfig(console=True, file=True), None)

    assert logger.name == "rss_reader"
    assert logger.propagate is False
    assert len(logger.handlers) == 1
    assert list(tmp_path.iterdir()) == []


def test_log_event_ignores_missing_logger():
    log_event(None, "nothing happens", key="value")
