# robots_policy/logger.py
"""Логгер пакета robots_policy.

Модули пишут в общий логгер ``RobotsPolicy``::

    from robots_policy.logger import logger
    logger.debug("Line %d: unsupported directive %r ignored", number, key)

При импорте обработчики не добавляются: библиотека молчит, пока приложение
(например, CLI) не вызовет :func:`configure`.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("RobotsPolicy")

__all__ = ["logger", "configure", "DEFAULT_FORMAT"]


def configure(
    level: Union[int, str] = "WARNING",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Заменяет обработчики логгера: stderr и, если задан, файл с ротацией.

    stdout остается за выводом команд CLI.
    """
    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        )

    for old in logger.handlers:
        old.close()
    logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
