"""Shared test fixtures."""

from __future__ import annotations

import io
import json
from typing import Any, Callable

import pytest

from tinybrain_mcp.server import MCPServer
from tinybrain_mcp.tools import echo_tool
from tinybrain_mcp_server.main import build_server
from tinybrain_mcp_server.session_manager import SessionManager


@pytest.fixture()
def server() -> MCPServer:
    """Provide a fresh server with only the echo tool registered."""
    instance = MCPServer()
    instance.register_tool(echo_tool())
    return instance


@pytest.fixture()
def session_manager() -> SessionManager:
    """Provide an empty in-memory session manager."""
    return SessionManager()


@pytest.fixture()
def tinybrain_server(session_manager: SessionManager) -> MCPServer:
    """Provide a server with the full tool set bound to ``session_manager``."""
    return build_server(session_manager=session_manager)


@pytest.fixture()
def call_tool() -> Callable[..., dict[str, Any]]:
    """Return a helper that sends ``tools/call`` through a server and decodes it."""

    def _call(
        target: MCPServer, name: str, arguments: Any = None, request_id: Any = 1
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"name": name}
        if arguments is not None:
            params["arguments"] = arguments
        line = json.dumps(
            {"jsonrpc": "2.0", "id": request_id, "method": "tools/call", "params": params}
        )
        output = target.handle_line(line)
        assert output is not None
        return json.loads(output)

    return _call


@pytest.fixture()
def run_session() -> Callable[[MCPServer, list[str]], list[dict[str, Any]]]:
    """Return a helper feeding raw lines through the transport loop."""

    def _run(target: MCPServer, lines: list[str]) -> list[dict[str, Any]]:
        reader = io.BytesIO("".join(f"{line}\n" for line in lines).encode("utf-8"))
        writer = io.BytesIO()
        target.serve(reader, writer)
        return [
            json.loads(raw) for raw in writer.getvalue().decode("utf-8").splitlines()
        ]

    return _run
