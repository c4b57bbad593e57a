import json
import logging
import sys
from collections.abc import Generator
from pathlib import Path

import pytest
from loguru import logger

from ringdeque.logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    """Restores loguru sinks and the root logger after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    logger.remove()
    logger.add(sys.stderr)
    root.handlers[:] = handlers
    root.setLevel(level)


def test_file_sink_writes_json_lines(tmp_path: Path) -> None:
    """Tests that the file sink emits one JSON object per record."""
    setup_logging(console_level="ERROR", file_level="DEBUG", log_dir=tmp_path)
    logger.bind(capacity=8).debug("Resized {}", "buffer")
    logger.complete()

    (log_file,) = tmp_path.glob("ringdeque_*.log")
    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    debug_record = records[-1]
    assert debug_record["level"] == "DEBUG"
    assert debug_record["message"] == "Resized buffer"
    assert debug_record["extra"] == {"capacity": 8}
    assert debug_record["source"]["function"] == "test_file_sink_writes_json_lines"


def test_standard_logging_is_intercepted() -> None:
    """Tests that stdlib logging records reach loguru sinks."""
    setup_logging(console_level="ERROR")
    messages: list[str] = []
    logger.add(messages.append, level="WARNING", format="{level} {message}")

    logging.getLogger("some.library").warning("from stdlib")

    assert [m.strip() for m in messages] == ["WARNING from stdlib"]
