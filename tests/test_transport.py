"""Tests for the newline-delimited transport loop."""

from __future__ import annotations

import io
import json
import logging
from typing import Any, Callable

import pytest

from tinybrain_mcp.dispatcher import Dispatcher
from tinybrain_mcp.errors import TransportError
from tinybrain_mcp.server import MCPServer
from tinybrain_mcp.transport import LineTransport

RunSession = Callable[[MCPServer, list[str]], list[dict[str, Any]]]


def _call(request_id: Any, arguments: dict[str, Any]) -> str:
    return json.dumps(
        {
            "jsonrpc": "2.0",
            "id": request_id,
            "method": "tools/call",
            "params": {"name": "echo", "arguments": arguments},
        }
    )


class _BrokenReader:
    def readline(self) -> bytes:
        raise OSError("stream broke")


class _BrokenWriter(io.BytesIO):
    def write(self, _: bytes) -> int:  # type: ignore[override]
        raise BrokenPipeError("peer went away")


class TestLineTransport:
    """Behavioral coverage for LineTransport."""

    def test_blank_line_then_request(
        self, server: MCPServer, run_session: RunSession
    ) -> None:
        """A blank line produces nothing; the valid request gets one response."""
        responses = run_session(server, ["", "   ", _call(1, {"a": 1})])

        assert len(responses) == 1
        assert responses[0]["id"] == 1

    def test_malformed_line_is_skipped(
        self,
        server: MCPServer,
        run_session: RunSession,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Malformed JSON is logged, answered by nothing, and the loop continues."""
        # Act
        with caplog.at_level(logging.WARNING):
            responses = run_session(server, ["{oops", _call(2, {"b": 2})])

        # Assert
        assert len(responses) == 1
        assert responses[0]["id"] == 2
        assert json.loads(responses[0]["result"]["content"][0]["text"]) == {"b": 2}
        assert "Failed to parse request" in caplog.text

    @pytest.mark.parametrize(
        "line",
        [
            "[]",
            '"just a string"',
            '{"jsonrpc": "2.0", "id": 1, "method": 5}',
            "[" * 100000,
            '{"jsonrpc": "2.0", "id": ' + "9" * 5000 + ', "method": "initialize"}',
        ],
    )
    def test_non_request_objects_are_skipped(
        self, server: MCPServer, run_session: RunSession, line: str
    ) -> None:
        """Lines that cannot become a request are skipped and the loop continues."""
        responses = run_session(server, [line, _call(3, {})])

        assert [response["id"] for response in responses] == [3]

    def test_missing_method_is_method_not_found(
        self, server: MCPServer, run_session: RunSession
    ) -> None:
        """A request object without a method is answered, not dropped."""
        responses = run_session(
            server, [json.dumps({"jsonrpc": "2.0", "id": 1}), _call(3, {})]
        )

        assert [response["id"] for response in responses] == [1, 3]
        assert responses[0]["error"] == {"code": -32601, "message": "Method not found"}

    def test_invalid_utf8_is_isolated(self, server: MCPServer) -> None:
        """A line that is not UTF-8 does not affect its neighbours."""
        # Arrange
        reader = io.BytesIO(b"\xff\xfe\xfd\n" + _call(4, {}).encode("utf-8") + b"\n")
        writer = io.BytesIO()

        # Act
        count = server.serve(reader, writer)

        # Assert
        assert count == 1
        assert json.loads(writer.getvalue())["id"] == 4

    def test_responses_keep_request_order(
        self, server: MCPServer, run_session: RunSession
    ) -> None:
        """Responses come back one per request, in input order."""
        lines = [
            _call(1, {"n": 1}),
            json.dumps({"jsonrpc": "2.0", "id": 2, "method": "tools/list"}),
            json.dumps({"jsonrpc": "2.0", "id": 3, "method": "bogus"}),
            json.dumps({"jsonrpc": "2.0", "id": 4, "method": "initialize"}),
        ]

        responses = run_session(server, lines)

        assert [response["id"] for response in responses] == [1, 2, 3, 4]
        assert "result" in responses[1]
        assert responses[2]["error"]["code"] == -32601

    def test_end_of_stream_is_clean(self, server: MCPServer) -> None:
        """An empty input stream terminates without error or output."""
        writer = io.BytesIO()

        assert server.serve(io.BytesIO(b""), writer) == 0
        assert writer.getvalue() == b""

    def test_text_streams_are_supported(self, server: MCPServer) -> None:
        """The loop works over text streams as well as binary ones."""
        # Arrange
        reader = io.StringIO(_call("t", {"x": "é"}) + "\n")
        writer = io.StringIO()

        # Act
        server.serve(reader, writer)

        # Assert
        message = json.loads(writer.getvalue())
        assert message["id"] == "t"
        assert json.loads(message["result"]["content"][0]["text"]) == {"x": "é"}

    def test_each_response_is_one_line(self, server: MCPServer) -> None:
        """Every response occupies exactly one newline-terminated line."""
        # Arrange
        reader = io.BytesIO(
            (_call(1, {"text": "line one\nline two"}) + "\n").encode("utf-8")
        )
        writer = io.BytesIO()

        # Act
        server.serve(reader, writer)

        # Assert
        output = writer.getvalue().decode("utf-8")
        assert output.endswith("\n")
        assert output.count("\n") == 1

    def test_read_fault_is_fatal(self, server: MCPServer) -> None:
        """An OSError from the reader surfaces as TransportError."""
        transport = LineTransport(server.dispatcher, _BrokenReader(), io.BytesIO())

        with pytest.raises(TransportError):
            transport.serve()

    def test_write_fault_is_fatal(self, server: MCPServer) -> None:
        """An OSError from the writer surfaces as TransportError."""
        reader = io.BytesIO((_call(1, {}) + "\n").encode("utf-8"))
        transport = LineTransport(server.dispatcher, reader, _BrokenWriter())

        with pytest.raises(TransportError):
            transport.serve()

    def test_stop_ends_the_loop_after_current_request(self, server: MCPServer) -> None:
        """A handler calling stop() lets its own response out, then the loop exits."""
        # Arrange
        lines = [_call(1, {}), _call(2, {})]
        reader = io.BytesIO("".join(f"{line}\n" for line in lines).encode("utf-8"))
        writer = io.BytesIO()
        transport = LineTransport(Dispatcher(server.registry), reader, writer)
        server.register("echo", "", {}, lambda _c, args: transport.stop())

        # Act
        count = transport.serve()

        # Assert
        assert count == 1
        assert json.loads(writer.getvalue())["id"] == 1
