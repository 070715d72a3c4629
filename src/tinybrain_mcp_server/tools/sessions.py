"""Tools for creating and inspecting sessions."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field

from tinybrain_mcp.context import CallContext
from tinybrain_mcp.tools import ToolDefinition, ToolParameters
from tinybrain_mcp_server.session_manager import SessionManager
from tinybrain_mcp_server.tools.common import parse_arguments

TaskType = Literal[
    "security_review",
    "penetration_test",
    "exploit_dev",
    "vulnerability_analysis",
    "threat_modeling",
    "incident_response",
    "general",
]
SessionStatus = Literal["active", "paused", "completed", "archived"]


class CreateSessionParams(ToolParameters):
    """Parameters for the create_session tool."""

    name: str = Field(min_length=1, description="Name of the session")
    task_type: TaskType = Field(description="Type of security task")
    description: str = Field(default="", description="Description of the session")


class GetSessionParams(ToolParameters):
    """Parameters for the get_session tool."""

    session_id: str = Field(description="ID of the session to retrieve")


class ListSessionsParams(ToolParameters):
    """Parameters for the list_sessions tool."""

    task_type: Optional[TaskType] = None
    status: Optional[SessionStatus] = None
    limit: int = Field(default=50, ge=1, le=1000)
    offset: int = Field(default=0, ge=0)


def create_session_tool(session_manager: SessionManager) -> ToolDefinition:
    """Create the create_session tool definition."""

    def handler(_: CallContext, arguments: dict[str, Any]) -> dict[str, object]:
        params = parse_arguments(CreateSessionParams, arguments)
        session = session_manager.create_session(
            name=params.name,
            task_type=params.task_type,
            description=params.description,
        )
        return session.to_dict()

    return ToolDefinition.from_model(
        name="create_session",
        description=(
            "Create a new security-focused session for tracking LLM interactions"
        ),
        parameters_model=CreateSessionParams,
        handler=handler,
    )


def get_session_tool(session_manager: SessionManager) -> ToolDefinition:
    """Create the get_session tool definition."""

    def handler(_: CallContext, arguments: dict[str, Any]) -> dict[str, object]:
        params = parse_arguments(GetSessionParams, arguments)
        return session_manager.get_session(params.session_id).to_dict()

    return ToolDefinition.from_model(
        name="get_session",
        description="Retrieve a session by ID",
        parameters_model=GetSessionParams,
        handler=handler,
    )


def list_sessions_tool(session_manager: SessionManager) -> ToolDefinition:
    """Create the list_sessions tool definition."""

    def handler(_: CallContext, arguments: dict[str, Any]) -> dict[str, object]:
        params = parse_arguments(ListSessionsParams, arguments)
        sessions = session_manager.list_sessions(
            task_type=params.task_type,
            status=params.status,
            limit=params.limit,
            offset=params.offset,
        )
        return {
            "sessions": [session.to_dict() for session in sessions],
            "count": len(sessions),
        }

    return ToolDefinition.from_model(
        name="list_sessions",
        description="List all sessions with optional filtering",
        parameters_model=ListSessionsParams,
        handler=handler,
    )
