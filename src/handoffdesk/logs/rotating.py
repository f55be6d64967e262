from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from handoffdesk._paths import logs_dir

LOG_FILENAME = "handoffdesk.log"


def get_logger(name: str = "handoffdesk") -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    handler = logging.handlers.RotatingFileHandler(
        log_path(), maxBytes=1_500_000, backupCount=5, encoding="utf-8"
    )
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


def log_path() -> Path:
    return logs_dir() / LOG_FILENAME
