"""Process bootstrap: logging setup for the CLI and servers."""

from __future__ import annotations

from .logging import configure_logging

__all__ = ["configure_logging"]
