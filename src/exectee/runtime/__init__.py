"""Runtime module for process execution and output capture.

This module provides the process runner, its deferred wait handles and the
tee/capture plumbing used to duplicate child output to sinks.
"""

from __future__ import annotations

from .capture import CaptureBuffer, StreamPump, Tee
from .process_runner import CombinedHandle, DeferredHandle, ProcessRunner, SplitHandle, as_command
from .sinks import NOOUT, ByteSink, DiscardSink, as_byte_sink

__all__ = [
    "ProcessRunner",
    "DeferredHandle",
    "CombinedHandle",
    "SplitHandle",
    "as_command",
    "CaptureBuffer",
    "StreamPump",
    "Tee",
    "NOOUT",
    "ByteSink",
    "DiscardSink",
    "as_byte_sink",
]
