"""Logging configuration for the LexiLens job and relay.

Both entry points log to a timestamped file under ``config.LOGS_DIR`` and to
stdout. The relay also routes uvicorn's own loggers through the same handlers
so server lifecycle and access lines land in the relay log file.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

import config

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _timestamped(prefix: str) -> str:
    return f"{prefix}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"


def _build_handlers(log_path: Path, level: int) -> list[logging.Handler]:
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))

    # Console output stays bare, it is read by whoever started the process
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))

    return [file_handler, console_handler]


def setup_logger(
    name: str = "lexilens",
    log_file: str | None = None,
    level: int = logging.INFO,
    logs_dir: Path = config.LOGS_DIR,
) -> logging.Logger:
    """
    Set up and return a configured logger.

    Args:
        name: Logger name
        log_file: Log file name inside ``logs_dir``. Defaults to ``run_<timestamp>.log``.
        level: Logging level
        logs_dir: Directory the log file is written to

    Returns:
        Configured logger instance
    """
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / (log_file or _timestamped("run"))

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Re-running setup replaces handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    for handler in _build_handlers(log_path, level):
        logger.addHandler(handler)

    logger.info(f"Log file: {log_path}")

    return logger


def get_logger(name: str = "lexilens") -> logging.Logger:
    """Get an existing logger by name."""
    return logging.getLogger(name)


def attach_server_loggers(logger: logging.Logger, names: tuple[str, ...] = SERVER_LOGGERS) -> None:
    """Send records from the named third-party loggers through ``logger``'s handlers."""
    for name in names:
        server_logger = logging.getLogger(name)
        server_logger.handlers = list(logger.handlers)
        server_logger.setLevel(logger.level)
        server_logger.propagate = False


def setup_relay_logger(logs_dir: Path = config.LOGS_DIR) -> logging.Logger:
    """Set up the relay logger, writing to ``relay_<timestamp>.log``, and adopt uvicorn's loggers."""
    logger = setup_logger(log_file=_timestamped("relay"), logs_dir=logs_dir)
    attach_server_loggers(logger)
    return logger
