"""Process runner with teed output capture.

exectee runtime module

This module provides:
- Synchronous runs returning captured output plus any failure
- Deferred runs (fork) returning a consume-once wait handle
- Combined (stdout+stderr interleaved) and split capture
- Live duplication of every channel to a caller-supplied sink

Key design points:
- Combined mode redirects stderr onto the stdout pipe, so interleaving is
  whatever order the child wrote in
- Each pipe is copied by a StreamPump thread into a Tee (buffer + sink); the
  buffer is closed and drained only after the child exits and the pump joins
- Failures are returned in the result, never raised
- No timeouts, no signals, no cancellation: a hung child hangs the waiter
"""

from __future__ import annotations

import logging
import subprocess
import threading
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import anyio

from ..config import get_config
from ..errors import DrainError, ExecError, HandleConsumedError, RunError, StartError
from ..types import Command, CombinedResult, SplitResult
from .capture import CaptureBuffer, StreamPump, Tee
from .sinks import NOOUT, as_byte_sink

__all__ = [
    "ProcessRunner",
    "DeferredHandle",
    "CombinedHandle",
    "SplitHandle",
    "as_command",
]

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", CombinedResult, SplitResult)


def as_command(command: Command | Sequence[str]) -> Command:
    """Normalize a Command or an argv sequence into a Command.

    Raises:
        TypeError: command is a plain string or empty
    """
    if isinstance(command, Command):
        return command
    if isinstance(command, (str, bytes)):
        raise TypeError(
            "command must be a Command or an argv sequence; "
            "use run_line() for a single command string"
        )
    argv = list(command)
    if not argv:
        raise TypeError("command argv must not be empty")
    return Command(argv[0], tuple(argv[1:]))


class DeferredHandle(ABC, Generic[ResultT]):
    """Wait handle for a forked process.

    Calling the handle (or ``wait()``) blocks until the process exits, then
    closes and drains the capture buffers and returns the result. The work is
    done exactly once; later calls return an empty result carrying a
    HandleConsumedError.

    Attributes:
        command: The invocation
        start_error: Start failure, or None if the process was launched
    """

    def __init__(
        self,
        command: Command,
        process: subprocess.Popen[bytes] | None,
        pumps: list[StreamPump],
        start_error: StartError | None = None,
    ) -> None:
        self.command = command
        self.start_error = start_error
        self._process = process
        self._pumps = pumps
        self._lock = threading.Lock()
        self._consumed = False

    @property
    def started(self) -> bool:
        """Whether the process was launched."""
        return self._process is not None

    @property
    def pid(self) -> int | None:
        return self._process.pid if self._process is not None else None

    @property
    def consumed(self) -> bool:
        """Whether the handle has already been waited on."""
        return self._consumed

    def __call__(self) -> ResultT:
        return self.wait()

    def wait(self) -> ResultT:
        """Wait for the process and return its captured output."""
        with self._lock:
            if self._consumed:
                return self._build([], HandleConsumedError(self.command))

            if self._process is None:
                self._consumed = True
                return self._build([], self.start_error)

            # An interrupted wait leaves the handle unconsumed so it can be retried
            returncode = self._process.wait()
            for pump in self._pumps:
                pump.join()
            for pump in self._pumps:
                pump.tee.buffer.close()

            logger.debug(
                f"Subprocess completed pid={self._process.pid} "
                f"returncode={returncode}"
            )

            error: ExecError | None = None
            if returncode != 0:
                error = RunError(returncode, self.command)

            outputs = [pump.tee.buffer.drain() for pump in self._pumps]

            # First failure wins: run status, then channels in order
            if error is None:
                for pump in self._pumps:
                    if pump.failure is not None:
                        error = DrainError(pump.channel, pump.failure, self.command)
                        break

            result = self._build(outputs, error)
            self._consumed = True
            return result

    async def wait_async(self) -> ResultT:
        """Await ``wait()`` in a worker thread."""
        return await anyio.to_thread.run_sync(self.wait)

    @abstractmethod
    def _build(self, outputs: list[bytes], error: ExecError | None) -> ResultT:
        """Assemble the result from drained outputs, in channel order."""

    def __repr__(self) -> str:
        if self.start_error is not None:
            state = "failed"
        elif self._consumed:
            state = "consumed"
        else:
            state = "running"
        return f"{type(self).__name__}(argv={self.command.argv!r}, pid={self.pid}, state={state})"


class CombinedHandle(DeferredHandle[CombinedResult]):
    """Wait handle returning a CombinedResult."""

    def _build(self, outputs: list[bytes], error: ExecError | None) -> CombinedResult:
        output = outputs[0] if outputs else b""
        return CombinedResult(output=output, error=error)


class SplitHandle(DeferredHandle[SplitResult]):
    """Wait handle returning a SplitResult."""

    def _build(self, outputs: list[bytes], error: ExecError | None) -> SplitResult:
        stdout, stderr = outputs if outputs else (b"", b"")
        return SplitResult(stdout=stdout, stderr=stderr, error=error)


@dataclass
class ProcessRunner:
    """Runs programs, teeing their output to sinks while capturing it.

    Example:
        runner = ProcessRunner()

        result = runner.run(Command("make", ("test",)), sink=sys.stdout)
        if not result.ok:
            print(result.error)

        wait = runner.fork_split(["./build.sh"])
        ...
        result = wait()

    Attributes:
        chunk_size: Bytes read from a pipe per pump iteration
    """

    chunk_size: int = field(default_factory=lambda: get_config().chunk_size)

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")

    def run(
        self,
        command: Command | Sequence[str],
        sink: Any = NOOUT,
    ) -> CombinedResult:
        """Run to completion, capturing stdout and stderr together.

        Args:
            command: Command or argv sequence
            sink: Receives the same bytes live (default: discard)

        Returns:
            CombinedResult with interleaved output and any failure
        """
        return self.fork(command, sink).wait()

    def run_split(
        self,
        command: Command | Sequence[str],
        out_sink: Any = NOOUT,
        err_sink: Any = NOOUT,
    ) -> SplitResult:
        """Run to completion, capturing stdout and stderr separately.

        Args:
            command: Command or argv sequence
            out_sink: Receives stdout live (default: discard)
            err_sink: Receives stderr live (default: discard)

        Returns:
            SplitResult with both channels and any failure
        """
        return self.fork_split(command, out_sink, err_sink).wait()

    def fork(
        self,
        command: Command | Sequence[str],
        sink: Any = NOOUT,
    ) -> CombinedHandle:
        """Start the process and return a handle to wait for it.

        If the process cannot be started, the handle carries ``start_error``
        and calling it returns immediately with empty output.
        """
        command = as_command(command)
        tee = Tee(CaptureBuffer(), as_byte_sink(sink))

        try:
            process = self._spawn(command, stderr=subprocess.STDOUT)
        except OSError as e:
            return CombinedHandle(command, None, [], StartError(command.program, e, command))

        pump = StreamPump(process.stdout, tee, "combined", self.chunk_size)
        pump.start()
        return CombinedHandle(command, process, [pump])

    def fork_split(
        self,
        command: Command | Sequence[str],
        out_sink: Any = NOOUT,
        err_sink: Any = NOOUT,
    ) -> SplitHandle:
        """Start the process with separate stdout/stderr capture.

        If the process cannot be started, the handle carries ``start_error``
        and calling it returns immediately with empty output.
        """
        command = as_command(command)
        out_tee = Tee(CaptureBuffer(), as_byte_sink(out_sink))
        err_tee = Tee(CaptureBuffer(), as_byte_sink(err_sink))

        try:
            process = self._spawn(command, stderr=subprocess.PIPE)
        except OSError as e:
            return SplitHandle(command, None, [], StartError(command.program, e, command))

        pumps = [
            StreamPump(process.stdout, out_tee, "stdout", self.chunk_size),
            StreamPump(process.stderr, err_tee, "stderr", self.chunk_size),
        ]
        for pump in pumps:
            pump.start()
        return SplitHandle(command, process, pumps)

    def _spawn(self, command: Command, stderr: int) -> subprocess.Popen[bytes]:
        """Launch the child with stdout piped and stdin on the null device."""
        process = subprocess.Popen(
            command.argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=stderr,
            bufsize=0,
        )
        logger.debug(f"Started subprocess pid={process.pid} argv={command.argv}")
        return process
