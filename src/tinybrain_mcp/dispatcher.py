"""Routes decoded requests to the built-in methods and registered tools.

Every request yields exactly one response. Handler failures and malformed
parameters become error responses; nothing a client sends can raise out of
:meth:`Dispatcher.dispatch`.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable

from pydantic import BaseModel

from tinybrain_mcp.config import ServerSettings
from tinybrain_mcp.context import CallContext
from tinybrain_mcp.envelope import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    JsonRpcRequest,
    JsonRpcResponse,
    error_response,
    success_response,
)
from tinybrain_mcp.errors import RPCError, raise_rpc_error
from tinybrain_mcp.registry import ToolRegistry

logger = logging.getLogger(__name__)

MethodHandler = Callable[[JsonRpcRequest, CallContext], Any]


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render_result_text(result: Any) -> str:
    """Serialize a handler result for a text content block.

    Falls back to ``str(result)`` when the value cannot be encoded as JSON.
    """
    try:
        return json.dumps(result, default=_json_default, allow_nan=False)
    except (TypeError, ValueError) as exc:
        logger.error("Failed to serialize tool result: error=%s", exc)
        return str(result)


def text_content(text: str) -> dict[str, Any]:
    """Wrap text in the uniform ``tools/call`` result envelope."""
    return {"content": [{"type": "text", "text": text}]}


def describe_failure(exc: BaseException) -> str:
    """Non-empty description of a handler failure."""
    return str(exc) or type(exc).__name__


def _coerce_params(params: Any) -> dict[str, Any]:
    if not isinstance(params, dict):
        raise_rpc_error(INVALID_PARAMS, "Invalid params")
    return params


def _coerce_tool_name(params: dict[str, Any]) -> str:
    name = params.get("name")
    if not isinstance(name, str) or not name:
        raise_rpc_error(INVALID_PARAMS, "Invalid tool name")
    return name


def _coerce_arguments(params: dict[str, Any]) -> dict[str, Any]:
    arguments = params.get("arguments")
    if not isinstance(arguments, dict) or not all(
        isinstance(key, str) for key in arguments
    ):
        return {}
    return arguments


class Dispatcher:
    """Protocol state machine over a :class:`ToolRegistry`.

    The dispatcher holds no per-call state; the registry is its only shared
    resource.
    """

    def __init__(
        self, registry: ToolRegistry, settings: ServerSettings | None = None
    ) -> None:
        """Bind the dispatcher to a registry and the advertised server identity."""
        self.registry = registry
        self.settings = settings or ServerSettings()
        self._methods: dict[str, MethodHandler] = {
            "initialize": self._initialize,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }

    def dispatch(
        self, request: JsonRpcRequest, context: CallContext | None = None
    ) -> JsonRpcResponse:
        """Turn one request into exactly one response.

        Args:
            request: Decoded request.
            context: Cancellation context passed to tool handlers. A fresh one
                is created when omitted.

        Returns:
            Success or error response echoing ``request.id``.

        """
        logger.debug("Handling request: method=%s id=%r", request.method, request.id)
        method = self._methods.get(request.method)
        if method is None:
            return error_response(request.id, METHOD_NOT_FOUND, "Method not found")

        if context is None:
            context = CallContext(values={"request_id": request.id})
        try:
            return success_response(request.id, method(request, context))
        except RPCError as exc:
            return error_response(request.id, exc.code, exc.message, exc.data)
        except Exception as exc:
            logger.exception("Unexpected error during dispatch: method=%s", request.method)
            return error_response(
                request.id, INTERNAL_ERROR, "Internal error", describe_failure(exc)
            )

    def _initialize(self, _: JsonRpcRequest, __: CallContext) -> dict[str, Any]:
        return {
            "protocolVersion": self.settings.protocol_version,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {
                "name": self.settings.name,
                "version": self.settings.version,
            },
        }

    def _list_tools(self, _: JsonRpcRequest, __: CallContext) -> dict[str, Any]:
        return {"tools": [tool.to_wire() for tool in self.registry.list()]}

    def _call_tool(
        self, request: JsonRpcRequest, context: CallContext
    ) -> dict[str, Any]:
        params = _coerce_params(request.params)
        name = _coerce_tool_name(params)

        handler = self.registry.lookup(name)
        if handler is None:
            raise_rpc_error(METHOD_NOT_FOUND, "Tool not found")

        arguments = _coerce_arguments(params)

        started = time.perf_counter()
        try:
            result = handler(context, arguments)
        except Exception as exc:
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            logger.error(
                "Tool execution failed: tool=%s duration_ms=%.1f error=%s",
                name,
                elapsed_ms,
                exc,
            )
            raise RPCError(
                INTERNAL_ERROR, "Internal error", describe_failure(exc)
            ) from exc

        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.debug(
            "Tool executed successfully: tool=%s duration_ms=%.1f", name, elapsed_ms
        )
        return text_content(render_result_text(result))
