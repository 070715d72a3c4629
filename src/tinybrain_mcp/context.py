"""Cancellable execution context handed to every tool handler."""

from __future__ import annotations

import threading
import time
from typing import Any

from tinybrain_mcp.errors import CallCancelledError


class CallContext:
    """Cancellation and deadline signal for one tool invocation.

    The engine creates a context per call but never cancels it or sets a
    deadline itself; that is left to whoever drives the dispatcher. Handlers
    that fan out work can share the context with their workers and poll
    :meth:`raise_if_cancelled`.
    """

    def __init__(
        self,
        deadline: float | None = None,
        values: dict[str, Any] | None = None,
    ) -> None:
        """Create a context.

        Args:
            deadline: Optional ``time.monotonic()`` instant after which the
                context counts as cancelled.
            values: Free-form data for collaborators (request id, caller info).

        """
        self._cancelled = threading.Event()
        self.deadline = deadline
        self.values: dict[str, Any] = dict(values or {})

    @classmethod
    def with_timeout(
        cls, seconds: float, values: dict[str, Any] | None = None
    ) -> CallContext:
        """Create a context that expires ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds, values=values)

    def cancel(self) -> None:
        """Signal cancellation to the handler and anything it spawned."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        """Whether the call was cancelled or its deadline has passed."""
        if self._cancelled.is_set():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or ``None`` without one."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; return ``cancelled``."""
        remaining = self.remaining()
        if remaining is not None:
            timeout = remaining if timeout is None else min(timeout, remaining)
        self._cancelled.wait(timeout)
        return self.cancelled

    def raise_if_cancelled(self) -> None:
        """Raise :class:`CallCancelledError` once the call should stop."""
        if self._cancelled.is_set():
            raise CallCancelledError("call cancelled")
        if self.cancelled:
            raise CallCancelledError("call deadline exceeded")
