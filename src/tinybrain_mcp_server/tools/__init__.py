"""Tool registration helpers for the TinyBrain MCP server."""

from __future__ import annotations

from tinybrain_mcp.tools import ToolDefinition, echo_tool
from tinybrain_mcp_server.session_manager import SessionManager
from tinybrain_mcp_server.tools.memories import (
    get_memory_tool,
    search_memories_tool,
    store_memory_tool,
)
from tinybrain_mcp_server.tools.sessions import (
    create_session_tool,
    get_session_tool,
    list_sessions_tool,
)
from tinybrain_mcp_server.tools.system import (
    get_database_stats_tool,
    health_check_tool,
)


def build_tools(session_manager: SessionManager) -> list[ToolDefinition]:
    """Instantiate all tool definitions with the provided session manager."""
    return [
        create_session_tool(session_manager),
        get_session_tool(session_manager),
        list_sessions_tool(session_manager),
        store_memory_tool(session_manager),
        get_memory_tool(session_manager),
        search_memories_tool(session_manager),
        get_database_stats_tool(session_manager),
        health_check_tool(session_manager),
        echo_tool(),
    ]
