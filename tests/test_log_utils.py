import logging
import logging.handlers

import pytest
from rich.logging import RichHandler

from javafetch import log_utils

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _restore_logger():
    original_level = log_utils.logger.level
    original_handlers = list(log_utils.logger.handlers)
    yield
    for handler in log_utils.logger.handlers[:]:
        if handler not in original_handlers:
            log_utils.logger.removeHandler(handler)
            handler.close()
    log_utils._file_handler = None
    log_utils.set_log_level(logging.getLevelName(original_level))


def test_logger_has_rich_console_handler():
    assert any(isinstance(h, RichHandler) for h in log_utils.logger.handlers)
    assert log_utils.logger.propagate is False


def test_set_log_level_updates_handlers():
    log_utils.set_log_level("debug")

    assert log_utils.logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in log_utils.logger.handlers)


def test_invalid_level_keeps_current(mocker):
    log_utils.set_log_level("INFO")
    warning = mocker.patch.object(log_utils.logger, "warning")

    log_utils.set_log_level("LOUD")

    assert log_utils.logger.level == logging.INFO
    warning.assert_called_once()


def test_add_file_logging_writes_log(tmp_path):
    log_utils.add_file_logging(tmp_path / "logs", "INFO")
    log_utils.logger.info("Resolved Java 11.0.2")

    for handler in log_utils.logger.handlers:
        handler.flush()
    content = (tmp_path / "logs" / "javafetch.log").read_text(encoding="utf-8")
    assert "Resolved Java 11.0.2" in content


def test_add_file_logging_replaces_previous_handler(tmp_path):
    log_utils.add_file_logging(tmp_path / "first")
    log_utils.add_file_logging(tmp_path / "second")

    file_handlers = [
        h
        for h in log_utils.logger.handlers
        if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(file_handlers) == 1
