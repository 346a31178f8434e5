"""Tests for logger setup."""

import logging

import pytest

from lexilens.logger import SERVER_LOGGERS, get_logger, setup_logger, setup_relay_logger


@pytest.fixture
def restore_loggers():
    names = ("lexilens",) + SERVER_LOGGERS
    saved = {
        name: (list(logging.getLogger(name).handlers), logging.getLogger(name).propagate)
        for name in names
    }
    yield
    for name, (handlers, propagate) in saved.items():
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers = handlers
        logger.propagate = propagate


def read_log(logs_dir):
    files = list(logs_dir.iterdir())
    assert len(files) == 1
    return files[0].name, files[0].read_text(encoding="utf-8")


def test_setup_logger_writes_to_named_file(tmp_path, restore_loggers):
    logger = setup_logger(log_file="job.log", logs_dir=tmp_path)
    logger.info("chunk 0 done")

    name, text = read_log(tmp_path)
    assert name == "job.log"
    assert "| INFO     | lexilens | chunk 0 done" in text
    assert get_logger() is logger


def test_repeated_setup_does_not_duplicate_handlers(tmp_path, restore_loggers):
    setup_logger(log_file="job.log", logs_dir=tmp_path)
    logger = setup_logger(log_file="job.log", logs_dir=tmp_path)

    assert len(logger.handlers) == 2


def test_relay_logger_captures_uvicorn_records(tmp_path, restore_loggers):
    setup_relay_logger(logs_dir=tmp_path)
    logging.getLogger("uvicorn.error").info("Application startup complete.")
    logging.getLogger("uvicorn.access").info('127.0.0.1 - "GET /status HTTP/1.1" 200')

    name, text = read_log(tmp_path)
    assert name.startswith("relay_") and name.endswith(".log")
    assert "| uvicorn.error | Application startup complete." in text
    assert "| uvicorn.access | " in text
    assert logging.getLogger("uvicorn.access").propagate is False
