"""Shared helpers for TinyBrain tools."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import ValidationError

from tinybrain_mcp.tools import ToolParameters
from tinybrain_mcp_server.errors import raise_tool_error

ParamsT = TypeVar("ParamsT", bound=ToolParameters)


def _describe(error: Any) -> str:
    location = ".".join(str(part) for part in error["loc"]) or "<root>"
    return f"{location}: {error['msg']}"


def parse_arguments(model: type[ParamsT], arguments: dict[str, Any]) -> ParamsT:
    """Validate raw tool arguments or raise an ``InvalidInput`` tool error."""
    try:
        return model.model_validate(arguments)
    except ValidationError as exc:
        problems = [_describe(error) for error in exc.errors()]
        raise_tool_error("InvalidInput", "; ".join(problems), problems)
