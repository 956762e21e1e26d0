"""Output sinks.

A sink is any object with a ``write(bytes)`` method. NOOUT is the shared
discard sink used when a caller does not want live output.
"""

from __future__ import annotations

from typing import Any, Protocol

__all__ = [
    "ByteSink",
    "DiscardSink",
    "NOOUT",
    "as_byte_sink",
]


class ByteSink(Protocol):
    """Destination for live child output."""

    def write(self, data: bytes) -> Any: ...


class DiscardSink:
    """Sink that accepts any bytes and does nothing with them."""

    __slots__ = ()

    def write(self, data: bytes) -> int:
        return len(data)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass

    def __repr__(self) -> str:
        return "NOOUT"


NOOUT = DiscardSink()


def as_byte_sink(sink: Any) -> ByteSink:
    """Return an object that accepts bytes for the given sink.

    Text streams such as sys.stdout are written through their binary
    ``buffer`` attribute. None means discard.
    """
    if sink is None:
        return NOOUT
    buffer = getattr(sink, "buffer", None)
    if buffer is not None and hasattr(sink, "encoding") and hasattr(buffer, "write"):
        # Pending text must reach the buffer before raw bytes do
        flush = getattr(sink, "flush", None)
        if flush is not None:
            flush()
        return buffer
    if not hasattr(sink, "write"):
        raise TypeError(f"sink must have a write() method, got {type(sink).__name__}")
    return sink
