"""Newline-delimited JSON transport feeding the dispatcher.

One request line in, one response line out, strictly in order. A malformed line
is logged and dropped; only a broken stream ends the session with an error.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import IO, AnyStr

from tinybrain_mcp.dispatcher import Dispatcher
from tinybrain_mcp.envelope import decode_request, encode_response
from tinybrain_mcp.errors import RequestDecodeError, TransportError

logger = logging.getLogger(__name__)


class LineTransport:
    """Synchronous read-dispatch-write loop over a pair of streams.

    Both streams may be binary or text; binary input is decoded as UTF-8 per
    line so that one undecodable line cannot poison the rest of the session.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        reader: IO[AnyStr],
        writer: IO[AnyStr],
    ) -> None:
        """Bind the loop to a dispatcher and its input/output streams."""
        self.dispatcher = dispatcher
        self.reader = reader
        self.writer = writer
        self._stopped = threading.Event()

    def stop(self) -> None:
        """Return from :meth:`serve` once the current request is answered."""
        self._stopped.set()

    def serve(self) -> int:
        """Process lines until end-of-stream.

        Raises:
            TransportError: If reading from or writing to a stream fails.

        Returns:
            Number of responses written.

        """
        written = 0
        while not self._stopped.is_set():
            try:
                line = self.reader.readline()
            except OSError as exc:
                raise TransportError(f"failed to read request: {exc}") from exc
            if not line:
                logger.debug("Input stream closed after %d responses", written)
                break
            if not line.strip():
                continue

            try:
                request = decode_request(line)
            except RequestDecodeError as exc:
                logger.warning("Failed to parse request: error=%s line=%r", exc, line)
                continue

            response = self.dispatcher.dispatch(request)
            self._write_line(encode_response(response))
            written += 1
        return written

    def _write_line(self, payload: str) -> None:
        data = payload + "\n"
        try:
            if _is_binary(self.writer):
                self.writer.write(data.encode("utf-8"))
            else:
                self.writer.write(data)
            self.writer.flush()
        except OSError as exc:
            raise TransportError(f"failed to write response: {exc}") from exc


def _is_binary(stream: IO[AnyStr]) -> bool:
    mode = getattr(stream, "mode", "")
    if isinstance(mode, str) and "b" in mode:
        return True
    return not hasattr(stream, "encoding")


def serve_stdio(dispatcher: Dispatcher) -> int:
    """Run the loop on the process's stdin and stdout."""
    transport = LineTransport(dispatcher, sys.stdin.buffer, sys.stdout.buffer)
    return transport.serve()
