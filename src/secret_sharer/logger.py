"""Logging setup shared by the CLI and library modules."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "secret_sharer"
DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logger(
    name: str = LOGGER_NAME,
    log_file: Optional[Union[str, Path]] = None,
    log_level: Union[int, str] = logging.INFO,
    max_size: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    console: bool = True,
    format_str: Optional[str] = None,
) -> logging.Logger:
    """Configure ``name`` with console and/or rotating file handlers.

    Existing handlers are replaced, so calling this twice does not duplicate
    output.
    """
    if isinstance(log_level, str):
        log_level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_str or DEFAULT_FORMAT)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_size,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_module_logger(module_name: str) -> logging.Logger:
    """Child logger under the package namespace, e.g. ``secret_sharer.storage``."""
    return logging.getLogger(f"{LOGGER_NAME}.{module_name}")


__all__ = ["LOGGER_NAME", "setup_logger", "get_module_logger"]
