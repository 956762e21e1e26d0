"""Capture and tee plumbing for child output channels.

Each monitored channel gets:
- a CaptureBuffer: in-memory, append-only, drained only once its write side
  is closed
- a Tee: writes every chunk to the buffer, then to the caller's sink
- a StreamPump: daemon thread copying the child's pipe into the Tee as bytes
  arrive, so the OS pipe never fills up regardless of output size

Order of operations for a channel:
1. pump.start() right after the child is spawned
2. wait for the child to exit
3. pump.join() (pipe hits EOF once every writer has exited)
4. buffer.close() then buffer.drain()
"""

from __future__ import annotations

import io
import logging
import os
import threading
from typing import IO, Any

from .sinks import NOOUT, ByteSink

__all__ = [
    "CaptureBuffer",
    "Tee",
    "StreamPump",
]

logger = logging.getLogger(__name__)


class CaptureBuffer:
    """Append-only in-memory byte buffer with a closable write side."""

    def __init__(self) -> None:
        self._data = bytearray()
        self._closed = False

    @property
    def closed(self) -> bool:
        """Whether the write side has been closed."""
        return self._closed

    def write(self, data: bytes) -> int:
        if self._closed:
            raise ValueError("write to closed capture buffer")
        self._data += data
        return len(data)

    def close(self) -> None:
        """Close the write side. Idempotent."""
        self._closed = True

    def drain(self) -> bytes:
        """Return everything captured.

        Raises:
            ValueError: The write side is still open
        """
        if not self._closed:
            raise ValueError("capture buffer drained before its write side was closed")
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)


class Tee:
    """Duplicate each chunk into a capture buffer and a sink.

    The buffer is written first so it never misses bytes the sink saw. A
    failing sink is detached and its exception kept in ``sink_error``; the
    buffer keeps capturing.
    """

    def __init__(self, buffer: CaptureBuffer, sink: ByteSink = NOOUT) -> None:
        self.buffer = buffer
        self.sink = sink
        self.sink_error: Exception | None = None
        self._flush = getattr(sink, "flush", None)

    def write(self, data: bytes) -> int:
        self.buffer.write(data)
        if self.sink_error is None:
            try:
                self._write_all(data)
                if self._flush is not None:
                    self._flush()
            except Exception as e:
                logger.debug(f"Sink write failed, detaching sink: {e}")
                self.sink_error = e
        return len(data)

    def _write_all(self, data: bytes) -> None:
        """Write the whole chunk, retrying after short writes.

        A count of 0, or None from a raw stream (would block), is a failure.
        Other sinks returning None are taken to have written everything.
        """
        raw = isinstance(self.sink, io.RawIOBase)
        remaining = data
        while remaining:
            n = self.sink.write(remaining)
            if n is None:
                if raw:
                    raise BlockingIOError(f"short write: sink accepted no bytes of {len(remaining)}")
                return
            if n <= 0:
                raise OSError(f"short write: sink accepted 0 of {len(remaining)} bytes")
            remaining = remaining[n:]


class StreamPump:
    """Copy a child's pipe into a Tee on a daemon thread.

    Attributes:
        channel: Channel name used in errors and log messages
        error: Exception raised while reading the pipe, if any
    """

    def __init__(
        self,
        pipe: IO[bytes],
        tee: Tee,
        channel: str,
        chunk_size: int,
    ) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        self.pipe = pipe
        self.tee = tee
        self.channel = channel
        self.chunk_size = chunk_size
        self.error: Exception | None = None
        self._thread = threading.Thread(
            target=self._pump,
            name=f"exectee-{channel}",
            daemon=True,
        )

    @property
    def failure(self) -> Exception | None:
        """Read error, or sink error when reading succeeded."""
        return self.error or self.tee.sink_error

    def start(self) -> None:
        self._thread.start()

    def join(self) -> None:
        """Block until the pipe reaches EOF and the thread exits."""
        if self._thread.ident is not None:
            self._thread.join()

    def _pump(self) -> None:
        try:
            fd = self.pipe.fileno()
            while True:
                # os.read returns as soon as any bytes are available
                chunk = os.read(fd, self.chunk_size)
                if not chunk:
                    break
                self.tee.write(chunk)
        except Exception as e:
            logger.debug(f"Pump failed channel={self.channel}: {e}")
            self.error = e
        finally:
            _close_quietly(self.pipe)


def _close_quietly(pipe: Any) -> None:
    try:
        pipe.close()
    except OSError as e:
        logger.debug(f"Error closing pipe: {e}")
