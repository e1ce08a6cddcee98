import json
import logging
from pathlib import Path

from lshsig.logging import StructuredLogger, get_logger, setup_logging


def test_get_logger_returns_singleton() -> None:
    assert get_logger() is get_logger()
    assert isinstance(get_logger(), StructuredLogger)


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    log_file = tmp_path / "lshsig.log"
    logger = setup_logging(log_file)
    logger.info_with_fields("Batch done", operation="batch_complete", rows=3)

    content = log_file.read_text()
    assert "Batch done" in content
    assert "'rows': 3" in content
    assert "DEBUG" in content


def test_setup_logging_json_format(tmp_path: Path) -> None:
    log_file = tmp_path / "lshsig.jsonl"
    logger = setup_logging(log_file, json_format=True)
    logger.warning_with_fields("Constant varies", field="seed", row=2)

    entries = [json.loads(line) for line in log_file.read_text().splitlines()]
    assert entries[-1]["level"] == "WARNING"
    assert entries[-1]["fields"] == {"field": "seed", "row": 2}
    assert entries[-1]["logger"] == "lshsig"


def test_setup_logging_replaces_handlers(tmp_path: Path) -> None:
    setup_logging(tmp_path / "first.log")
    logger = setup_logging(tmp_path / "second.log")
    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].baseFilename.endswith("second.log")


def test_child_loggers_propagate(tmp_path: Path) -> None:
    log_file = tmp_path / "child.log"
    setup_logging(log_file)
    logging.getLogger("lshsig.exceptions").error("child message")
    assert "child message" in log_file.read_text()
