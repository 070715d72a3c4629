"""tinybrain_mcp package initialization."""

from tinybrain_mcp.config import ServerSettings
from tinybrain_mcp.context import CallContext
from tinybrain_mcp.dispatcher import Dispatcher
from tinybrain_mcp.registry import ToolRegistry
from tinybrain_mcp.server import MCPServer
from tinybrain_mcp.tools import ToolDefinition, ToolParameters, echo_tool
from tinybrain_mcp.version import __version__

__all__ = [
    "CallContext",
    "Dispatcher",
    "MCPServer",
    "ServerSettings",
    "ToolDefinition",
    "ToolParameters",
    "ToolRegistry",
    "__version__",
    "echo_tool",
]
