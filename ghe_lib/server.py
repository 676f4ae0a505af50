"""Command-line entry point: configuration, tool registry and transport startup."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Sequence

import anyio
from mcp.server import FastMCP

from . import __version__
from .bridge import PortBindError, SessionBridge, SessionRegistry, bind_with_fallback, serve_http
from .config import LANGUAGES, TRANSPORTS, Config, ConfigError, load_config
from .logs import configure_logging
from .tools import GitHubContext, build_context, build_server

LOGGER = logging.getLogger("ghe.server")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-enterprise-mcp",
        description="MCP server for GitHub and GitHub Enterprise Server",
    )
    parser.add_argument("--transport", choices=TRANSPORTS, help="stdio (default) or http")
    parser.add_argument(
        "--baseUrl",
        "--github-api-url",
        "--github-enterprise-url",
        dest="base_url",
        help="GitHub API base URL, e.g. https://ghe.example.com/api/v3",
    )
    parser.add_argument("--token", help="Personal access token")
    parser.add_argument("--timeout", type=int, help="Upstream request timeout in milliseconds")
    parser.add_argument("--language", choices=LANGUAGES, help="Message language")
    parser.add_argument("--host", help="HTTP bind address (http transport)")
    parser.add_argument("--port", type=int, help="HTTP port (http transport)")
    parser.add_argument(
        "--port-attempts",
        dest="port_attempts",
        type=int,
        help="How many consecutive ports to try when the port is taken",
    )
    parser.add_argument("--debug", action="store_true", default=None, help="Verbose logging on stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides = {
        "base_url": args.base_url,
        "token": args.token,
        "language": args.language,
        "transport": args.transport,
        "host": args.host,
        "port": args.port,
        "port_attempts": args.port_attempts,
        "debug": args.debug,
    }
    if args.timeout is not None:
        overrides["timeout"] = args.timeout / 1000.0
    return overrides


def build_bridge(config: Config, app: FastMCP, tool_names: List[str]) -> SessionBridge:
    return SessionBridge(
        app._mcp_server,
        tool_names,
        SessionRegistry(),
        version=__version__,
        keepalive=config.keepalive,
    )


async def run_http(config: Config, context: GitHubContext, app: FastMCP, tool_names: List[str]) -> None:
    strings = context.strings
    bridge = build_bridge(config, app, tool_names)
    sock = bind_with_fallback(config.host, config.port, config.port_attempts, strings=strings)
    host, port = sock.getsockname()[:2]
    LOGGER.info(strings.t("common", "server_start", transport="http"))
    LOGGER.info(strings.t("common", "server_start_http", host=host, port=port))
    try:
        await serve_http(bridge.build_app(debug=config.debug), sock, log_level="debug" if config.debug else "info")
    finally:
        LOGGER.info(strings.t("common", "server_shutdown"))


async def run_stdio(context: GitHubContext, app: FastMCP) -> None:
    LOGGER.info(context.strings.t("common", "server_start", transport="stdio"))
    await app.run_stdio_async()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config(_overrides(args))
    except ConfigError as exc:
        print(f"github-enterprise-mcp: configuration error: {exc}", file=sys.stderr)
        return 2

    configure_logging(config.debug)
    LOGGER.debug("configuration: %s", config.redacted())
    context = build_context(config)
    app, tool_names = build_server(context)
    LOGGER.info(context.strings.t("common", "api_url", url=config.base_url))

    async def _serve() -> None:
        try:
            if config.transport == "http":
                await run_http(config, context, app, tool_names)
            else:
                await run_stdio(context, app)
        finally:
            await context.aclose()

    try:
        anyio.run(_serve)
    except PortBindError as exc:
        LOGGER.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        LOGGER.info(context.strings.t("common", "server_shutdown"))
    return 0
