from __future__ import annotations

import logging
from pathlib import Path

from docsite.logging import configure_logging, get_logger


def test_get_logger_nests_components() -> None:
    assert get_logger().name == "docsite"
    assert get_logger("highlight").name == "docsite.highlight"


def test_configure_logging_levels() -> None:
    assert configure_logging().level == logging.INFO
    assert configure_logging(verbose=True).level == logging.DEBUG
    logger = configure_logging(quiet=True)
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_log_file_records_debug_messages(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "docsite.log"
    logger = configure_logging(quiet=True, log_file=log_file)

    get_logger("highlight").debug("Highlighted %s", "index.html")
    for handler in logger.handlers:
        handler.flush()

    assert "docsite.highlight: Highlighted index.html" in log_file.read_text(encoding="utf-8")
    configure_logging()
