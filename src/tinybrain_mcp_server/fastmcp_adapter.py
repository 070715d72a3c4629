"""Adapters for exposing registered tools via FastMCP."""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult

from tinybrain_mcp.context import CallContext
from tinybrain_mcp.dispatcher import render_result_text
from tinybrain_mcp.registry import ToolRegistry
from tinybrain_mcp.tools import ToolDefinition


class ToolDefinitionAdapter(Tool):
    """Expose a :class:`ToolDefinition` as a FastMCP tool."""

    def __init__(self, definition: ToolDefinition) -> None:
        """Create a FastMCP tool wrapper for the provided definition."""
        super().__init__(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema or {"type": "object"},
            output_schema=None,
            tags=set(),
        )
        self._definition = definition

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        """Delegate to the wrapped handler and return its JSON text."""
        payload = self._definition.handler(CallContext(), dict(arguments or {}))
        return ToolResult(content=render_result_text(payload))


def to_fastmcp_tools(registry: ToolRegistry) -> list[Tool]:
    """Convert every registered tool into a FastMCP-compatible tool."""
    return [ToolDefinitionAdapter(definition) for definition in registry.definitions()]


def build_fastmcp_app(registry: ToolRegistry, name: str = "tinybrain-mcp") -> FastMCP:
    """Create a FastMCP server instance exposing the registry's tools."""
    app = FastMCP(
        name=name,
        instructions=(
            "Security-focused LLM memory storage over the Model Context Protocol."
        ),
    )
    for tool in to_fastmcp_tools(registry):
        app.add_tool(tool)
    return app
