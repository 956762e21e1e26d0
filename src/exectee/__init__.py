"""exectee - run external programs, tee their output, keep the bytes.

Usage:
    from exectee import run, run_tee2, fork

    result = run("echo", "foo")
    result = run_tee2(sys.stdout, sys.stderr, "./build.sh")
    wait = fork("sleep", "1"); result = wait()

Environment variables:
    EXECTEE_CHUNK_SIZE: pump read size in bytes (default 4096)
    EXECTEE_LOG_DEBUG: debug level for configure_logging() (default false)
"""

__version__ = "0.1.0"

from .api import (
    fork,
    fork2,
    fork_tee,
    fork_tee2,
    run,
    run2,
    run2_async,
    run_async,
    run_line,
    run_tee,
    run_tee2,
    run_tee2_async,
    run_tee_async,
    split_command_line,
)
from .config import Config, get_config, load_config, reload_config
from .errors import DrainError, ExecError, HandleConsumedError, RunError, StartError
from .log import configure_logging
from .runtime import NOOUT, CombinedHandle, DiscardSink, ProcessRunner, SplitHandle
from .types import Command, CombinedResult, SplitResult

__all__ = [
    "__version__",
    # Operations
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
    # Types
    "Command",
    "CombinedResult",
    "SplitResult",
    "ProcessRunner",
    "CombinedHandle",
    "SplitHandle",
    "DiscardSink",
    "NOOUT",
    # Errors
    "ExecError",
    "StartError",
    "RunError",
    "DrainError",
    "HandleConsumedError",
    # Configuration
    "Config",
    "load_config",
    "get_config",
    "reload_config",
    "configure_logging",
]
