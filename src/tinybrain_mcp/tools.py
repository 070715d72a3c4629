"""Tool definitions and the handler contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from pydantic import BaseModel, ConfigDict

from tinybrain_mcp.context import CallContext
from tinybrain_mcp.envelope import ToolDescriptor

ToolHandler = Callable[[CallContext, Dict[str, Any]], Any]
"""Handler signature: ``(context, arguments) -> result``; failure is an exception."""


class ToolParameters(BaseModel):
    """Base arguments schema for tools that describe their input with pydantic."""

    model_config = ConfigDict(extra="forbid")


@dataclass
class ToolDefinition:
    """A tool that can be registered with the server.

    Attributes:
        name: Unique name of the tool, used as the registry key.
        description: Human-readable description of the tool purpose.
        input_schema: Structured description of the expected arguments. It is
            advertised through ``tools/list`` and never enforced by the engine.
        handler: Callable that executes the tool logic.
    """

    name: str
    description: str
    handler: ToolHandler
    input_schema: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_model(
        cls,
        name: str,
        description: str,
        parameters_model: type[ToolParameters],
        handler: ToolHandler,
    ) -> ToolDefinition:
        """Build a definition whose schema is derived from a parameters model."""
        return cls(
            name=name,
            description=description,
            handler=handler,
            input_schema=parameters_model.model_json_schema(),
        )

    def descriptor(self) -> ToolDescriptor:
        """Return the discovery-friendly description of the tool."""
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            input_schema=self.input_schema,
        )


def echo_tool() -> ToolDefinition:
    """Create a tool that returns its arguments unchanged.

    Returns:
        ToolDefinition wired to the echo handler.
    """

    def handler(_: CallContext, arguments: Dict[str, Any]) -> Dict[str, Any]:
        return arguments

    return ToolDefinition(
        name="echo",
        description="Return the supplied arguments unchanged.",
        handler=handler,
        input_schema={"type": "object", "additionalProperties": True},
    )
