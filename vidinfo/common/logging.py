# vidinfo/common/logging.py
from __future__ import annotations

import logging
from typing import Optional


def get_logger(name: str = "vidinfo", level: Optional[int | str] = None) -> logging.Logger:
    """
    Return the package logger.
    If no handlers are set, we add a basicConfig once. The level defaults to
    the configured `log_level` setting.
    """
    if level is None:
        from vidinfo.common.settings import get_settings
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.setLevel(level)
    return logger
