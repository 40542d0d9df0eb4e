"""Logging setup shared by the API server and the CLI scripts.

Usage:
    from docrag.logging_config import setup_logging
    setup_logging()   # once at startup
"""

import logging
import sys

from docrag.config import Settings, get_settings

# Third-party loggers that follow ``log_level_http`` instead of ``log_level``
_HTTP_LOGGERS = ("httpx", "httpcore")


def _parse_level(value: str) -> int:
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(settings: Settings | None = None) -> None:
    """Configure root and per-library log levels from settings."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    # uvicorn installs its own handlers; scripts and tests may not have any
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s - %(message)s")
        )
        root.addHandler(handler)

    http_level = _parse_level(settings.log_level_http)
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
