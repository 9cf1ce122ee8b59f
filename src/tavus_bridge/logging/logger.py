"""Central logger configuration.

One pipe-delimited format for the relay, the coaching API and uvicorn itself, so
a Tavus callback and the n8n forward it triggers read as one trail in the logs.
"""

import logging
import sys
from typing import Optional

from src.tavus_bridge.config.settings import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _resolve_level(level: Optional[str]) -> int:
    value = logging.getLevelName((level or settings.app_log_level or "INFO").upper())
    # getLevelName returns "Level X" for unknown names
    return value if isinstance(value, int) else logging.INFO


def _stdout_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logger(name: str = "tavus_bridge", level: Optional[str] = None) -> logging.Logger:
    """Create and return a configured logger.

    Every module does: `logger = setup_logger(__name__)`.
    Level defaults to APP_LOG_LEVEL.
    """
    logger = logging.getLogger(name)

    # uvicorn --reload re-imports modules; keep a single handler
    if logger.handlers:
        return logger

    logger.setLevel(_resolve_level(level))
    logger.addHandler(_stdout_handler())
    logger.propagate = False
    return logger


def align_uvicorn_logging() -> None:
    """Give uvicorn's own loggers the same format (call before uvicorn.run)."""
    for name in _UVICORN_LOGGERS:
        uv_logger = logging.getLogger(name)
        uv_logger.handlers = [_stdout_handler()]
        uv_logger.propagate = False
