from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from platformdirs import user_log_dir

from ..domain import CredentialState

load_dotenv()

APP_NAME = "gcal-mcp"
OOB_REDIRECT_URI = "urn:ietf:wg:oauth:2.0:oob"


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing at startup."""


@dataclass(frozen=True)
class GoogleOAuthSettings:
    client_id: Optional[str]
    client_secret: Optional[str]
    redirect_uri: str = OOB_REDIRECT_URI
    refresh_token: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    @property
    def missing_env_vars(self) -> List[str]:
        missing = []
        if not self.client_id:
            missing.append("GOOGLE_CLIENT_ID")
        if not self.client_secret:
            missing.append("GOOGLE_CLIENT_SECRET")
        return missing

    @property
    def state(self) -> CredentialState:
        if not self.is_configured:
            return CredentialState.UNCONFIGURED
        if not self.refresh_token:
            return CredentialState.CONFIGURED
        return CredentialState.AUTHORIZED


@dataclass(frozen=True)
class ServerSettings:
    http_host: str = "127.0.0.1"
    http_port: int = 8000
    tool_timeout: Optional[float] = None


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"
    file_enabled: bool = False
    directory: Path = Path(user_log_dir(APP_NAME))


@dataclass(frozen=True)
class AppSettings:
    google: GoogleOAuthSettings
    server: ServerSettings
    logging: LoggingSettings


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _timeout_from_env(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        seconds = float(raw)
    except ValueError:
        return None
    return seconds if seconds > 0 else None


def _flag_from_env(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    google = GoogleOAuthSettings(
        client_id=os.getenv("GOOGLE_CLIENT_ID") or None,
        client_secret=os.getenv("GOOGLE_CLIENT_SECRET") or None,
        redirect_uri=os.getenv("GOOGLE_REDIRECT_URI") or OOB_REDIRECT_URI,
        refresh_token=os.getenv("GOOGLE_REFRESH_TOKEN") or None,
    )

    server = ServerSettings(
        http_host=os.getenv("GCAL_MCP_HTTP_HOST", "127.0.0.1"),
        http_port=_int_from_env("GCAL_MCP_HTTP_PORT", 8000),
        tool_timeout=_timeout_from_env("GCAL_MCP_TOOL_TIMEOUT"),
    )

    log_dir = os.getenv("GCAL_MCP_LOG_DIR")
    logging_settings = LoggingSettings(
        level=os.getenv("GCAL_MCP_LOG_LEVEL", "INFO").upper(),
        file_enabled=_flag_from_env("GCAL_MCP_LOG_TO_FILE"),
        directory=Path(log_dir) if log_dir else Path(user_log_dir(APP_NAME)),
    )

    return AppSettings(google=google, server=server, logging=logging_settings)
