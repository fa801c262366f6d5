from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from ..config import LoggingSettings, get_settings

_QUIET_LOGGERS = ("mcp", "googleapiclient.discovery_cache", "hypercorn.access")


def configure_logging(settings: Optional[LoggingSettings] = None, *, level: Optional[str] = None) -> None:
    """Configure process logging on stderr, leaving stdout to the MCP transport."""

    settings = settings or get_settings().logging
    resolved_level = getattr(logging, (level or settings.level).upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.file_enabled:
        settings.directory.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                settings.directory / "gcal-mcp.log",
                maxBytes=1_000_000,
                backupCount=5,
                encoding="utf-8",
            )
        )

    logging.basicConfig(
        level=resolved_level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved_level, logging.WARNING))
