from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .api import Dispatcher
from .bootstrap import configure_logging
from .config import AppSettings, ConfigurationError, get_settings
from .services import CALENDAR_SCOPE, ServiceContext

logger = logging.getLogger(__name__)


def build_parser(settings: AppSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Google Calendar tools for MCP clients.")
    parser.add_argument("--log-level", default=None, help="Override GCAL_MCP_LOG_LEVEL.")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("stdio", help="Serve the tools over MCP stdio (default).")

    http_parser = subparsers.add_parser("http", help="Serve the tools over a local HTTP API.")
    http_parser.add_argument("--host", default=settings.server.http_host)
    http_parser.add_argument("--port", type=int, default=settings.server.http_port)

    subparsers.add_parser("auth-url", help="Print the OAuth2 authorization URL.")

    exchange_parser = subparsers.add_parser(
        "exchange-code", help="Exchange an authorization code for a refresh token."
    )
    exchange_parser.add_argument("code")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)
    configure_logging(settings.logging, level=args.log_level)

    try:
        context = ServiceContext.from_settings(settings)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc

    command = args.command or "stdio"
    if command == "auth-url":
        print(context.credentials.authorization_url([CALENDAR_SCOPE]))
        return 0
    if command == "exchange-code":
        print(context.credentials.exchange_code(args.code))
        return 0

    dispatcher = Dispatcher(context, timeout=settings.server.tool_timeout)
    if command == "http":
        from .services.http import run_local_server

        run_local_server(dispatcher, host=args.host, port=args.port)
    else:
        from .services.mcp import run_mcp_server

        run_mcp_server(dispatcher)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
