"""Tests for the call context handed to tool handlers."""

from __future__ import annotations

import threading
import time

import pytest

from tinybrain_mcp.context import CallContext
from tinybrain_mcp.errors import CallCancelledError


def test_new_context_is_live() -> None:
    """A default context has no deadline and is not cancelled."""
    context = CallContext()

    assert not context.cancelled
    assert context.remaining() is None
    context.raise_if_cancelled()


def test_cancel_is_visible_to_other_threads() -> None:
    """Work spawned by a handler observes cancellation."""
    # Arrange
    context = CallContext()
    observed: list[bool] = []
    worker = threading.Thread(target=lambda: observed.append(context.wait(5.0)))
    worker.start()

    # Act
    context.cancel()
    worker.join(timeout=5.0)

    # Assert
    assert observed == [True]
    with pytest.raises(CallCancelledError, match="cancelled"):
        context.raise_if_cancelled()


def test_deadline_expires() -> None:
    """A context past its deadline counts as cancelled."""
    context = CallContext(deadline=time.monotonic() - 1.0)

    assert context.cancelled
    assert context.remaining() == 0.0
    with pytest.raises(CallCancelledError, match="deadline"):
        context.raise_if_cancelled()


def test_with_timeout_sets_future_deadline() -> None:
    """with_timeout leaves a positive budget and carries values."""
    context = CallContext.with_timeout(30.0, values={"request_id": 9})

    remaining = context.remaining()
    assert remaining is not None and 0.0 < remaining <= 30.0
    assert context.values == {"request_id": 9}
    assert not context.cancelled


def test_wait_returns_false_on_timeout() -> None:
    """wait() returns False when nothing cancels the context in time."""
    assert CallContext().wait(0.01) is False
