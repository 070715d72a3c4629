"""Thread-safe registry mapping tool names to definitions."""

from __future__ import annotations

import logging
import threading
from typing import Any

from tinybrain_mcp.envelope import ToolDescriptor
from tinybrain_mcp.tools import ToolDefinition, ToolHandler

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Authoritative set of invocable tools.

    Descriptor and handler live in the same :class:`ToolDefinition`, stored under
    one lock, so a reader never sees one without the other.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._tools: dict[str, ToolDefinition] = {}
        self._lock = threading.RLock()

    def register(
        self,
        name: str,
        description: str,
        input_schema: dict[str, Any],
        handler: ToolHandler,
    ) -> None:
        """Insert or replace the tool registered under ``name``.

        Args:
            name: Registry key; not validated.
            description: Human-readable description.
            input_schema: Advertised argument schema; not validated.
            handler: Callable invoked by ``tools/call``.

        """
        self.register_tool(
            ToolDefinition(
                name=name,
                description=description,
                handler=handler,
                input_schema=input_schema,
            )
        )

    def register_tool(self, tool: ToolDefinition) -> None:
        """Insert or replace a prepared definition."""
        with self._lock:
            replaced = tool.name in self._tools
            self._tools[tool.name] = tool
        if replaced:
            logger.debug("Replaced tool registration: name=%s", tool.name)
        else:
            logger.debug("Registered tool: name=%s", tool.name)

    def list(self) -> list[ToolDescriptor]:
        """Snapshot of every descriptor; order is unspecified."""
        with self._lock:
            tools = list(self._tools.values())
        return [tool.descriptor() for tool in tools]

    def lookup(self, name: str) -> ToolHandler | None:
        """Return the handler for ``name``, or ``None`` when it is not registered.

        Raises:
            ValueError: If ``name`` is empty.

        """
        tool = self.get(name)
        return tool.handler if tool is not None else None

    def get(self, name: str) -> ToolDefinition | None:
        """Return the full definition for ``name`` if present."""
        if not name:
            raise ValueError("tool name must not be empty")
        with self._lock:
            return self._tools.get(name)

    def names(self) -> list[str]:
        """Sorted names of registered tools."""
        with self._lock:
            return sorted(self._tools)

    def definitions(self) -> list[ToolDefinition]:
        """Snapshot of every registered definition."""
        with self._lock:
            return list(self._tools.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._tools)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tools
