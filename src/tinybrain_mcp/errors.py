"""Error types raised inside the protocol engine."""

from __future__ import annotations

from typing import NoReturn


class RPCError(Exception):
    """A failure that maps directly onto a JSON-RPC error body."""

    def __init__(self, code: int, message: str, data: object | None = None) -> None:
        """Create an error carrying a protocol error code."""
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data


class RequestDecodeError(ValueError):
    """An input line could not be decoded into a request."""


class TransportError(Exception):
    """The underlying stream failed; the server cannot continue."""


class CallCancelledError(Exception):
    """A handler observed that its call context was cancelled or timed out."""


def raise_rpc_error(code: int, message: str, data: object | None = None) -> NoReturn:
    """Raise an :class:`RPCError` with the given body."""
    raise RPCError(code=code, message=message, data=data)
