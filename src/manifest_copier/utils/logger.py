"""日誌工具。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
_level = logging.INFO
_log_file: Optional[Path] = None
_managed: set[str] = set()


def configure(level: str | int = logging.INFO, log_file: Optional[Path] = None) -> None:
    """Apply level and optional warning log file to every logger handed out by get_logger."""
    global _level, _log_file
    _level = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    _log_file = log_file
    for name in _managed:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        _attach_handlers(logger, None)


def get_logger(name: str, log_file: Optional[Path] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    _attach_handlers(logger, log_file)
    _managed.add(name)
    return logger


def _attach_handlers(logger: logging.Logger, log_file: Optional[Path]) -> None:
    logger.setLevel(_level)
    formatter = logging.Formatter(_FORMAT)

    log_path = log_file or _log_file
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.WARNING)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(_level)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
