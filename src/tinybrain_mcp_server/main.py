"""Entry point for the TinyBrain MCP server."""

from __future__ import annotations

import argparse
import json
import logging

from tinybrain_mcp.config import ServerSettings, configure_logging
from tinybrain_mcp.errors import TransportError
from tinybrain_mcp.server import MCPServer
from tinybrain_mcp_server.fastmcp_adapter import build_fastmcp_app
from tinybrain_mcp_server.session_manager import SessionManager
from tinybrain_mcp_server.tools import build_tools

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(description="TinyBrain MCP server")
    parser.add_argument(
        "--catalog",
        action="store_true",
        help="Print the available tool catalog as JSON and exit.",
    )
    parser.add_argument(
        "--transport",
        choices=("stdio", "http"),
        default="stdio",
        help="Transport to serve on (default: stdio).",
    )
    parser.add_argument("--host", default="127.0.0.1", help="HTTP bind host.")
    parser.add_argument("--port", type=int, default=8000, help="HTTP bind port.")
    parser.add_argument("--path", default="/mcp", help="HTTP endpoint path.")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="INFO",
        help="Log level for stderr output.",
    )
    return parser


def build_server(
    settings: ServerSettings | None = None,
    session_manager: SessionManager | None = None,
) -> MCPServer:
    """Create a server with the full TinyBrain tool set registered."""
    server = MCPServer(settings)
    server.register_tools(*build_tools(session_manager or SessionManager()))
    return server


def main(argv: list[str] | None = None) -> int:
    """Register tools and serve, or print the catalog."""
    args = build_parser().parse_args(argv)
    settings = ServerSettings(log_level=args.log_level)
    configure_logging(settings.log_level)

    server = build_server(settings)
    if args.catalog:
        print(json.dumps(server.to_catalog(), indent=2))
        return 0

    if args.transport == "http":
        app = build_fastmcp_app(server.registry, name=settings.name)
        app.run(transport="http", host=args.host, port=args.port, path=args.path)
        return 0

    try:
        server.serve_stdio()
    except TransportError as exc:
        logger.error("Server error: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
