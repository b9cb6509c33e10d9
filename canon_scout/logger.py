# === FILE: canon_scout/logger.py ===
"""Логгер CanonScout.

Все модули пишут в один логгер ``CanonScout``::

    from canon_scout.logger import logger
    logger.info("Processing URL %d/%d: %s", i, total, url)

По умолчанию сообщения идут в stdout. CLI вызывает :func:`init_logging`
с ``--log-level``/``--log-file``/``--log-format``; файл логов ротируется
(5 MB, три архивных копии).
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Union

LOGGER_NAME = "CanonScout"
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_MAX_LOG_BYTES = 5 * 1024 * 1024
_LOG_BACKUPS = 3


def _console_handler(fmt: str) -> logging.Handler:
    # поток берётся в момент настройки (CliRunner подменяет sys.stdout)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _rotating_handler(path: Union[str, Path], fmt: str) -> logging.Handler:
    handler = RotatingFileHandler(
        str(path), maxBytes=_MAX_LOG_BYTES, backupCount=_LOG_BACKUPS, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure(
    level: Union[int, str] = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Заменяет обработчики логгера CanonScout: консоль и, если задан, файл."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()

    lg.addHandler(_console_handler(log_format))
    if log_file is not None:
        lg.addHandler(_rotating_handler(log_file, log_format))
    # без дублей в корневом логгере
    lg.propagate = False
    return lg


init_logging = configure

logger: logging.Logger = configure()

__all__ = ["logger", "configure", "init_logging", "DEFAULT_FORMAT"]
