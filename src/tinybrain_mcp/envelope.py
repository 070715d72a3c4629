"""JSON-RPC envelope types shared by the dispatcher and the transport loop.

Requests arrive as one JSON object per line, responses leave the same way. The
correlation id is opaque: it is never interpreted, only echoed back.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from tinybrain_mcp.errors import RequestDecodeError

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"

METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class JsonRpcRequest(BaseModel):
    """A decoded request line."""

    model_config = ConfigDict(extra="ignore")

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    method: str = ""
    params: Any = None


class JsonRpcError(BaseModel):
    """Error body of a response.

    Attributes:
        code: One of the fixed error codes.
        message: Short human-readable description.
        data: Optional diagnostic payload.

    """

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A response line; ``result`` and ``error`` are mutually exclusive."""

    jsonrpc: str = JSONRPC_VERSION
    id: Any = None
    result: Any = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def _check_exclusive(self) -> JsonRpcResponse:
        if self.result is not None and self.error is not None:
            raise ValueError("response cannot carry both result and error")
        return self

    def to_wire(self) -> dict[str, Any]:
        """Render the mapping written to the output stream.

        Returns:
            Mapping with ``jsonrpc`` and ``id`` always present and exactly the
            populated one of ``result``/``error``.

        """
        message: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            message["error"] = self.error.model_dump(exclude_none=True)
        elif self.result is not None:
            message["result"] = self.result
        return message


class ToolDescriptor(BaseModel):
    """Advertised shape of a registered tool, as returned by ``tools/list``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        """Serialize with protocol field names."""
        return self.model_dump(by_alias=True)


def success_response(request_id: Any, result: Any) -> JsonRpcResponse:
    """Build a success response echoing ``request_id``."""
    return JsonRpcResponse(id=request_id, result=result)


def error_response(
    request_id: Any, code: int, message: str, data: Any = None
) -> JsonRpcResponse:
    """Build an error response echoing ``request_id``."""
    return JsonRpcResponse(
        id=request_id, error=JsonRpcError(code=code, message=message, data=data)
    )


def decode_request(line: str | bytes) -> JsonRpcRequest:
    """Decode one input line into a request.

    Args:
        line: Raw line, with or without the trailing newline.

    Raises:
        RequestDecodeError: If the line is not UTF-8, not parseable JSON (too
            deeply nested or an over-long integer included), not an object, or
            has a non-string ``method``. A missing ``method`` decodes to ``""``
            so the dispatcher can answer it as an unknown method.

    Returns:
        The validated request.

    """
    try:
        text = line.decode("utf-8") if isinstance(line, bytes) else line
        payload = json.loads(text)
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise RequestDecodeError(f"malformed request line: {exc}") from exc

    if not isinstance(payload, dict):
        raise RequestDecodeError(
            f"request must be a JSON object, got {type(payload).__name__}"
        )
    try:
        return JsonRpcRequest.model_validate(payload)
    except ValidationError as exc:
        raise RequestDecodeError(f"invalid request object: {exc}") from exc


def encode_response(response: JsonRpcResponse) -> str:
    """Serialize a response to a single JSON line (without the newline)."""
    return json.dumps(response.to_wire(), ensure_ascii=False, default=str)
