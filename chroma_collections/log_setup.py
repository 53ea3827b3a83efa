"""Centralized logging utilities for chroma_collections."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from .config import AppConfig, load_config

_LOGGER: Optional[logging.Logger] = None

# ``extra`` fields appended to the message when present on a record.
EXTRA_FIELDS = (
    "collection",
    "count",
    "n_results",
    "model",
    "prompt_tokens",
    "total_tokens",
    "status_code",
    "elapsed_ms",
)


class ExtraFormatter(logging.Formatter):
    """Formatter that renders known ``extra`` fields as ``[key=value, ...]``."""

    def format(self, record: logging.LogRecord) -> str:
        extras = [
            f"{name}={getattr(record, name)}"
            for name in EXTRA_FIELDS
            if getattr(record, name, None) is not None
        ]
        if not extras:
            return super().format(record)
        # Extras go on the message so they stay ahead of any traceback.
        msg, args = record.msg, record.args
        record.msg = f"{record.getMessage()} [{', '.join(extras)}]"
        record.args = None
        try:
            return super().format(record)
        finally:
            record.msg, record.args = msg, args


def setup_logging(level: str | int | None = None, config: Optional[AppConfig] = None) -> logging.Logger:
    """Configure the package logger once and return it."""

    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    config = config or load_config()
    level = level if level is not None else config.logging.level

    logger = logging.getLogger("chroma_collections")
    logger.setLevel(level if isinstance(level, int) else getattr(logging, str(level).upper(), logging.INFO))

    formatter = ExtraFormatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    if config.logging.file is not None:
        config.logging.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(config.logging.file, maxBytes=5 * 1024 * 1024, backupCount=5)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if config.logging.to_stdout or config.logging.file is None:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    logger.debug("Logging initialized at %s", logging.getLevelName(logger.level))
    _LOGGER = logger
    return logger


__all__ = ["ExtraFormatter", "setup_logging"]
