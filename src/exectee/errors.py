"""exectee exception classes.

Failures are returned inside results rather than raised; these classes give
them a type so callers can branch on the failure point.
"""

from __future__ import annotations

import signal as _signal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Command

__all__ = [
    "ExecError",
    "StartError",
    "RunError",
    "DrainError",
    "HandleConsumedError",
]


class ExecError(Exception):
    """Base exception for exectee.

    Attributes:
        command: The invocation that failed (may be None)
    """

    def __init__(self, message: str, command: Command | None = None) -> None:
        self.command = command
        super().__init__(message)


class StartError(ExecError):
    """The executable could not be launched.

    Attributes:
        program: Program name as given by the caller
        cause: Underlying OSError raised while spawning
    """

    def __init__(
        self,
        program: str,
        cause: OSError | None = None,
        command: Command | None = None,
    ) -> None:
        self.program = program
        self.cause = cause
        super().__init__(f'exec: "{program}": {_describe_start_failure(cause)}', command)


class RunError(ExecError):
    """The process started but exited with a non-zero status or was killed.

    Attributes:
        returncode: Popen return code (negative when killed by a signal)
        signal: Signal name when killed by a signal, else None
    """

    def __init__(self, returncode: int, command: Command | None = None) -> None:
        self.returncode = returncode
        self.signal: str | None = None
        if returncode < 0:
            try:
                self.signal = _signal.Signals(-returncode).name
            except ValueError:
                self.signal = f"signal {-returncode}"
            message = f"signal: {self.signal}"
        else:
            message = f"exit status {returncode}"
        super().__init__(message, command)


class DrainError(ExecError):
    """Copying a captured channel failed after the process started.

    Attributes:
        channel: "combined", "stdout" or "stderr"
        cause: The exception raised while reading the pipe or writing the sink
    """

    def __init__(
        self,
        channel: str,
        cause: BaseException,
        command: Command | None = None,
    ) -> None:
        self.channel = channel
        self.cause = cause
        super().__init__(f"{channel}: {cause}", command)


class HandleConsumedError(ExecError):
    """A deferred handle was invoked more than once."""

    def __init__(self, command: Command | None = None) -> None:
        super().__init__("exec: wait already called", command)


def _describe_start_failure(cause: OSError | None) -> str:
    if cause is None:
        return "not started"
    if isinstance(cause, FileNotFoundError):
        return "executable file not found in $PATH"
    if isinstance(cause, PermissionError):
        return "permission denied"
    return cause.strerror or str(cause)
