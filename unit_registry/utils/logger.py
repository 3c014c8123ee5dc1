# unit_registry/utils/logger.py
"""
Logging setup shared by every module: console plus a size-rotated file
(LOG_DIR/LOG_FILE, defaults to <repo>/logs/registry.log).
Configured once, on the first get_logger() call.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from unit_registry.config import settings

DEFAULT_LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Third-party loggers that flood DEBUG/INFO (font cache scans, one line per HTTP call)
QUIET_LOGGERS = ("matplotlib", "PIL", "httpx", "httpcore")

_configured = False


def _handlers(level: str):
    log_dir = settings.LOG_DIR or DEFAULT_LOG_DIR
    os.makedirs(log_dir, exist_ok=True)

    console = logging.StreamHandler()
    rotating = RotatingFileHandler(
        filename=os.path.join(log_dir, settings.LOG_FILE),
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler in (console, rotating):
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return console, rotating


def configure_logging():
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    root = logging.getLogger()
    root.setLevel(level)
    for handler in _handlers(level):
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Named logger; call at module top level."""
    configure_logging()
    return logging.getLogger(name)
