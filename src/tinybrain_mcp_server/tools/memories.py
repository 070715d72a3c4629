"""Tools for storing and retrieving memory entries."""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import Field

from tinybrain_mcp.context import CallContext
from tinybrain_mcp.tools import ToolDefinition, ToolParameters
from tinybrain_mcp_server.session_manager import SessionManager
from tinybrain_mcp_server.tools.common import parse_arguments

Category = Literal[
    "finding",
    "vulnerability",
    "exploit",
    "payload",
    "technique",
    "tool",
    "reference",
    "context",
    "hypothesis",
    "evidence",
    "recommendation",
    "note",
]


class StoreMemoryParams(ToolParameters):
    """Parameters for the store_memory tool."""

    session_id: str = Field(description="ID of the session this memory belongs to")
    title: str = Field(min_length=1, description="Title/summary of the memory")
    content: str = Field(description="Content of the memory")
    category: Category
    priority: int = Field(default=5, ge=0, le=10)
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    tags: List[str] = Field(default_factory=list)
    source: Optional[str] = None


class GetMemoryParams(ToolParameters):
    """Parameters for the get_memory tool."""

    memory_id: str


class SearchMemoriesParams(ToolParameters):
    """Parameters for the search_memories tool."""

    query: str = Field(min_length=1)
    session_id: Optional[str] = None
    category: Optional[Category] = None
    limit: int = Field(default=20, ge=1, le=500)


def store_memory_tool(session_manager: SessionManager) -> ToolDefinition:
    """Create the store_memory tool definition."""

    def handler(_: CallContext, arguments: dict[str, Any]) -> dict[str, object]:
        params = parse_arguments(StoreMemoryParams, arguments)
        entry = session_manager.store_memory(**params.model_dump())
        return entry.to_dict()

    return ToolDefinition.from_model(
        name="store_memory",
        description=(
            "Store a new piece of information in memory with security-focused "
            "categorization"
        ),
        parameters_model=StoreMemoryParams,
        handler=handler,
    )


def get_memory_tool(session_manager: SessionManager) -> ToolDefinition:
    """Create the get_memory tool definition."""

    def handler(_: CallContext, arguments: dict[str, Any]) -> dict[str, object]:
        params = parse_arguments(GetMemoryParams, arguments)
        return session_manager.get_memory(params.memory_id).to_dict()

    return ToolDefinition.from_model(
        name="get_memory",
        description="Retrieve a specific memory entry by ID",
        parameters_model=GetMemoryParams,
        handler=handler,
    )


def search_memories_tool(session_manager: SessionManager) -> ToolDefinition:
    """Create the search_memories tool definition."""

    def handler(context: CallContext, arguments: dict[str, Any]) -> dict[str, object]:
        params = parse_arguments(SearchMemoriesParams, arguments)
        context.raise_if_cancelled()
        entries = session_manager.search_memories(
            query=params.query,
            session_id=params.session_id,
            category=params.category,
            limit=params.limit,
        )
        return {
            "query": params.query,
            "results": [entry.to_dict() for entry in entries],
            "count": len(entries),
        }

    return ToolDefinition.from_model(
        name="search_memories",
        description="Search for memories by text, optionally within a session",
        parameters_model=SearchMemoriesParams,
        handler=handler,
    )
