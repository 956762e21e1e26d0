"""exectee value types.

Defines the command invocation and the result structures returned by the
run and fork operations.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import ExecError

__all__ = [
    "Command",
    "CombinedResult",
    "SplitResult",
]


@dataclass(frozen=True)
class Command:
    """A program and its arguments.

    Attributes:
        program: Executable name or path (looked up on PATH)
        args: Arguments passed to the program, in order
    """

    program: str
    args: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.program, str):
            raise TypeError(f"program must be str, got {type(self.program).__name__}")
        # Accept any sequence of str; store a tuple so the value stays immutable
        object.__setattr__(self, "args", tuple(self.args))
        for arg in self.args:
            if not isinstance(arg, str):
                raise TypeError(f"args must be str, got {type(arg).__name__}")

    @property
    def argv(self) -> list[str]:
        """Full argument vector (program first)."""
        return [self.program, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class CombinedResult:
    """Result of a combined-stream run.

    Attributes:
        output: Everything the child wrote to stdout and stderr, interleaved
        error: Start, run or drain failure; None on success
    """

    output: bytes = b""
    error: ExecError | None = None

    @property
    def ok(self) -> bool:
        """Whether the run succeeded."""
        return self.error is None

    @property
    def text(self) -> str:
        """Output decoded as UTF-8."""
        return self.output.decode("utf-8", errors="replace")

    def raise_for_error(self) -> CombinedResult:
        """Raise the carried error, if any; otherwise return self."""
        if self.error is not None:
            raise self.error
        return self


@dataclass(frozen=True)
class SplitResult:
    """Result of a split-stream run.

    Attributes:
        stdout: Bytes written to standard output
        stderr: Bytes written to standard error
        error: Start, run or drain failure; None on success
    """

    stdout: bytes = b""
    stderr: bytes = b""
    error: ExecError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")

    def raise_for_error(self) -> SplitResult:
        """Raise the carried error, if any; otherwise return self."""
        if self.error is not None:
            raise self.error
        return self
