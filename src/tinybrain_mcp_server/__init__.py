"""TinyBrain tool set served over the Model Context Protocol."""

from tinybrain_mcp_server.errors import ToolError
from tinybrain_mcp_server.session_manager import SessionManager
from tinybrain_mcp_server.tools import build_tools

__all__ = [
    "SessionManager",
    "ToolError",
    "build_tools",
]
