"""Health and statistics tools."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from tinybrain_mcp.context import CallContext
from tinybrain_mcp.tools import ToolDefinition, ToolParameters
from tinybrain_mcp.version import __version__
from tinybrain_mcp_server.session_manager import SessionManager
from tinybrain_mcp_server.tools.common import parse_arguments


class NoParameters(ToolParameters):
    """Empty parameter schema."""


def get_database_stats_tool(session_manager: SessionManager) -> ToolDefinition:
    """Create the get_database_stats tool definition."""

    def handler(_: CallContext, arguments: dict[str, Any]) -> dict[str, object]:
        parse_arguments(NoParameters, arguments)
        return session_manager.stats()

    return ToolDefinition.from_model(
        name="get_database_stats",
        description="Get statistics about stored sessions and memories",
        parameters_model=NoParameters,
        handler=handler,
    )


def health_check_tool(session_manager: SessionManager) -> ToolDefinition:
    """Create the health_check tool definition."""

    def handler(_: CallContext, arguments: dict[str, Any]) -> dict[str, object]:
        parse_arguments(NoParameters, arguments)
        stats = session_manager.stats()
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
            "sessions": stats["sessions"],
        }

    return ToolDefinition.from_model(
        name="health_check",
        description="Perform a health check on the server and its store",
        parameters_model=NoParameters,
        handler=handler,
    )
