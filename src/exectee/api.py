"""Module-level convenience functions.

Basic usage:
    from exectee import run, run_tee, fork

    result = run("echo", "foo")
    if result.ok:
        print(result.text)

    # Stream live to the terminal while capturing
    result = run_tee(sys.stdout, "make", "test")

    # Start now, collect later
    wait = fork("./long_job.sh")
    print("waiting...")
    result = wait()

    # Fire and forget. Output is captured into a buffer nobody drains.
    fork("bash", "./main.sh")

Each call uses a fresh ProcessRunner built from the global configuration.
"""

from __future__ import annotations

from typing import Any

import anyio

from .runtime.process_runner import CombinedHandle, ProcessRunner, SplitHandle
from .types import Command, CombinedResult, SplitResult

__all__ = [
    "run",
    "run_tee",
    "run2",
    "run_tee2",
    "fork",
    "fork_tee",
    "fork2",
    "fork_tee2",
    "run_line",
    "split_command_line",
    "run_async",
    "run_tee_async",
    "run2_async",
    "run_tee2_async",
]


def run(program: str, *args: str) -> CombinedResult:
    """Run a program, returning stdout and stderr combined."""
    return ProcessRunner().run(Command(program, args))


def run_tee(sink: Any, program: str, *args: str) -> CombinedResult:
    """Run a program, returning stdout and stderr combined.

    Both streams are also written to ``sink`` as they arrive.
    """
    return ProcessRunner().run(Command(program, args), sink)


def run2(program: str, *args: str) -> SplitResult:
    """Run a program, returning stdout and stderr separately."""
    return ProcessRunner().run_split(Command(program, args))


def run_tee2(out_sink: Any, err_sink: Any, program: str, *args: str) -> SplitResult:
    """Run a program, returning stdout and stderr separately.

    Stdout is also written to ``out_sink`` and stderr to ``err_sink`` live.
    """
    return ProcessRunner().run_split(Command(program, args), out_sink, err_sink)


def fork(program: str, *args: str) -> CombinedHandle:
    """Start a program; call the returned handle for combined output."""
    return ProcessRunner().fork(Command(program, args))


def fork_tee(sink: Any, program: str, *args: str) -> CombinedHandle:
    """Start a program teeing both streams to ``sink``."""
    return ProcessRunner().fork(Command(program, args), sink)


def fork2(program: str, *args: str) -> SplitHandle:
    """Start a program; call the returned handle for split output."""
    return ProcessRunner().fork_split(Command(program, args))


def fork_tee2(out_sink: Any, err_sink: Any, program: str, *args: str) -> SplitHandle:
    """Start a program teeing stdout to ``out_sink`` and stderr to ``err_sink``."""
    return ProcessRunner().fork_split(Command(program, args), out_sink, err_sink)


def split_command_line(command_line: str) -> Command:
    """Split a command string on single spaces.

    No quoting or escaping is supported, and consecutive spaces produce
    empty-string arguments. Each piece after the program is its own argument
    and a bare program gets none; older callers that joined the rest into a
    single argument (and passed "" for a bare program) must split themselves.
    """
    program, *args = command_line.split(" ")
    return Command(program, tuple(args))


def run_line(command_line: str) -> CombinedResult:
    """Run a whole command given as one string (see split_command_line)."""
    return ProcessRunner().run(split_command_line(command_line))


async def run_async(program: str, *args: str) -> CombinedResult:
    """Awaitable run(); the blocking wait happens in a worker thread."""
    return await anyio.to_thread.run_sync(lambda: run(program, *args))


async def run_tee_async(sink: Any, program: str, *args: str) -> CombinedResult:
    """Awaitable run_tee()."""
    return await anyio.to_thread.run_sync(lambda: run_tee(sink, program, *args))


async def run2_async(program: str, *args: str) -> SplitResult:
    """Awaitable run2()."""
    return await anyio.to_thread.run_sync(lambda: run2(program, *args))


async def run_tee2_async(out_sink: Any, err_sink: Any, program: str, *args: str) -> SplitResult:
    """Awaitable run_tee2()."""
    return await anyio.to_thread.run_sync(lambda: run_tee2(out_sink, err_sink, program, *args))
