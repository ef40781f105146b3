# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-07
# Updated: 2026-02-04
# Description: logging_utils.py
# -----------------------------------------------------------------------------
import logging
import os
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import colorlog

BASE_LOGGER_NAME = "iq_match"

_DATEFMT = "%Y-%m-%d %H:%M:%S"
_TRUTHY = ("1", "true", "yes", "y")

# one rotating file shared by every iq_match logger, opened on first use
_file_handler: Optional[RotatingFileHandler] = None
_file_handler_lock = threading.Lock()


def _log_env(suffix: str, default: str) -> str:
    return (os.getenv(f"IQ_LOG_{suffix}") or default).strip()


def _console_handler() -> logging.Handler:
    handler = colorlog.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(
            fmt=(
                "%(log_color)s%(asctime)s [%(levelname)-8s] "
                "%(name)s:%(lineno)d%(reset)s %(message_log_color)s%(message)s"
            ),
            datefmt=_DATEFMT,
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
            secondary_log_colors={
                "message": {
                    "WARNING": "yellow",
                    "ERROR": "light_red",
                    "CRITICAL": "red",
                }
            },
        )
    )
    return handler


def _shared_file_handler() -> Optional[RotatingFileHandler]:
    """
    Rotating file sink for long batch runs (IQ_LOG_TO_FILE=1).
    Returns None when file logging is switched off.
    """
    global _file_handler
    if _log_env("TO_FILE", "0").lower() not in _TRUTHY:
        return None

    with _file_handler_lock:
        if _file_handler is None:
            path = Path(_log_env("FILE", "./logs/iqmatch.log"))
            path.parent.mkdir(parents=True, exist_ok=True)
            _file_handler = RotatingFileHandler(
                filename=str(path),
                maxBytes=int(_log_env("MAX_BYTES", str(5 * 1024 * 1024))),
                backupCount=int(_log_env("BACKUP_COUNT", "5")),
                encoding="utf-8",
            )
            _file_handler.setFormatter(
                logging.Formatter(
                    fmt="%(asctime)s [%(levelname)s] %(threadName)s %(name)s:%(lineno)d: %(message)s",
                    datefmt=_DATEFMT,
                )
            )
    return _file_handler


def _configure(full_name: str) -> logging.Logger:
    logger = logging.getLogger(full_name)
    if logger.handlers:
        return logger

    logger.addHandler(_console_handler())
    file_handler = _shared_file_handler()
    if file_handler is not None:
        logger.addHandler(file_handler)

    level_name = _log_env("LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Module-level logger: iq_match.<name>."""
    return _configure(f"{BASE_LOGGER_NAME}.{name}" if name else BASE_LOGGER_NAME)


def get_class_logger(cls: type) -> logging.Logger:
    """
    Logger named after module + class, e.g.

      iq_match.services.IQBatchProcessor.IQBatchProcessor
      iq_match.corpus.BlobIQCorpusStore.BlobIQCorpusStore
    """
    module = getattr(cls, "__module__", "unknown_module")
    classname = getattr(cls, "__name__", "UnknownClass")
    return _configure(f"{BASE_LOGGER_NAME}.{module}.{classname}")
