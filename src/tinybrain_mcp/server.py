"""MCP server facade.

This module ties together the pieces needed to run a Model Context Protocol (MCP)
server: an explicitly owned tool registry, the dispatcher that answers requests
against it, and the line transport that drives the dispatcher from a stream.
"""

from __future__ import annotations

import logging
from typing import IO, Any, AnyStr

from tinybrain_mcp.config import ServerSettings
from tinybrain_mcp.context import CallContext
from tinybrain_mcp.dispatcher import Dispatcher
from tinybrain_mcp.envelope import (
    JsonRpcRequest,
    JsonRpcResponse,
    decode_request,
    encode_response,
)
from tinybrain_mcp.errors import RequestDecodeError
from tinybrain_mcp.registry import ToolRegistry
from tinybrain_mcp.tools import ToolDefinition, ToolHandler
from tinybrain_mcp.transport import LineTransport, serve_stdio

logger = logging.getLogger(__name__)


class MCPServer:
    """Registry, dispatcher and transport for one inbound stream.

    Each server owns its registry, so tests can build a fresh one per case.
    """

    def __init__(
        self,
        settings: ServerSettings | None = None,
        registry: ToolRegistry | None = None,
    ) -> None:
        """Initialize a server with an empty (or supplied) registry."""
        self.settings = settings or ServerSettings()
        self.registry = registry if registry is not None else ToolRegistry()
        self.dispatcher = Dispatcher(self.registry, self.settings)

    def register(
        self,
        name: str,
        description: str,
        input_schema: dict[str, Any],
        handler: ToolHandler,
    ) -> None:
        """Register a handler under ``name``, replacing any previous entry."""
        self.registry.register(name, description, input_schema, handler)

    def register_tool(self, tool: ToolDefinition) -> None:
        """Register a tool with the server.

        Args:
            tool: Tool definition to register. An existing tool with the same
                name is replaced.

        """
        self.registry.register_tool(tool)

    def register_tools(self, *tools: ToolDefinition) -> None:
        """Register multiple tools at once.

        Args:
            *tools: Collection of tool definitions to register.

        """
        for tool in tools:
            self.register_tool(tool)

    def available_tools(self) -> list[str]:
        """List the names of registered tools.

        Returns:
            Sorted list of tool names.

        """
        return self.registry.names()

    def to_catalog(self) -> dict[str, dict[str, Any]]:
        """Produce a catalog for discovery.

        Returns:
            Mapping of tool names to their advertised descriptors.

        """
        return {tool.name: tool.to_wire() for tool in self.registry.list()}

    def handle(
        self, request: JsonRpcRequest, context: CallContext | None = None
    ) -> JsonRpcResponse:
        """Dispatch one decoded request."""
        return self.dispatcher.dispatch(request, context)

    def handle_line(self, line: str | bytes) -> str | None:
        """Answer one raw line the way the transport loop would.

        Returns:
            The serialized response, or ``None`` for blank or malformed lines.

        """
        if not line.strip():
            return None
        try:
            request = decode_request(line)
        except RequestDecodeError as exc:
            logger.warning("Failed to parse request: error=%s", exc)
            return None
        return encode_response(self.handle(request))

    def serve(self, reader: IO[AnyStr], writer: IO[AnyStr]) -> int:
        """Run the transport loop over the given streams until end-of-stream."""
        logger.info(
            "Starting MCP server: name=%s version=%s tools=%d",
            self.settings.name,
            self.settings.version,
            len(self.registry),
        )
        return LineTransport(self.dispatcher, reader, writer).serve()

    def serve_stdio(self) -> int:
        """Run the transport loop on stdin/stdout."""
        logger.info(
            "Starting MCP server on stdio: name=%s version=%s tools=%d",
            self.settings.name,
            self.settings.version,
            len(self.registry),
        )
        return serve_stdio(self.dispatcher)
