"""Module-level API tests.

Covers the convenience functions re-exported from the package root, which
run the fake CLI the same way callers run real programs.
"""

from __future__ import annotations

import io
import sys

import pytest

import exectee
from exectee import (
    Command,
    CombinedHandle,
    RunError,
    SplitHandle,
    StartError,
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


class TestRunFunctions:
    """Synchronous convenience functions."""

    def test_run(self, fake_cli: list[str]):
        result = run(*fake_cli)

        assert result.error is None
        assert b"stdout: foo\n" in result.output
        assert b"stderr: bar\n" in result.output

    def test_run_missing_program(self):
        result = run("asdf")

        assert result.output == b""
        assert isinstance(result.error, StartError)
        assert str(result.error) == 'exec: "asdf": executable file not found in $PATH'

    def test_run_tee(self, fake_cli: list[str]):
        sink = io.BytesIO()
        result = run_tee(sink, *fake_cli)

        assert result.ok
        assert sink.getvalue() == result.output

    def test_run_tee_text_stream(self, fake_cli: list[str], capsysbinary: pytest.CaptureFixture):
        """Test sys.stdout works as a sink through its binary buffer."""
        result = run_tee(sys.stdout, *fake_cli, "--stderr", "")

        assert result.output == b"stdout: foo\n"
        assert capsysbinary.readouterr().out == b"stdout: foo\n"

    def test_run2(self, fake_cli: list[str]):
        result = run2(*fake_cli)

        assert result.stdout == b"stdout: foo\n"
        assert result.stderr == b"stderr: bar\n"
        assert result.error is None

    def test_run_tee2(self, fake_cli: list[str]):
        out_sink = io.BytesIO()
        err_sink = io.BytesIO()
        result = run_tee2(out_sink, err_sink, *fake_cli)

        assert out_sink.getvalue() == b"stdout: foo\n"
        assert err_sink.getvalue() == b"stderr: bar\n"
        assert result.ok

    def test_run2_missing_program(self):
        result = run2("asdf")

        assert (result.stdout, result.stderr) == (b"", b"")
        assert isinstance(result.error, StartError)


class TestForkFunctions:
    """Deferred convenience functions."""

    def test_fork(self, fake_cli: list[str]):
        wait = fork(*fake_cli)

        assert isinstance(wait, CombinedHandle)
        assert wait() == run(*fake_cli)

    def test_fork_missing_program(self):
        wait = fork("asdf")

        assert isinstance(wait.start_error, StartError)
        assert "asdf" in str(wait().error)

    def test_fork_tee(self, fake_cli: list[str]):
        sink = io.BytesIO()
        wait = fork_tee(sink, *fake_cli, "--exit-code", "1")

        result = wait()
        assert isinstance(result.error, RunError)
        assert sink.getvalue() == result.output

    def test_fork2(self, fake_cli: list[str]):
        wait = fork2(*fake_cli)

        assert isinstance(wait, SplitHandle)
        result = wait()
        assert result.stdout == b"stdout: foo\n"
        assert result.stderr == b"stderr: bar\n"

    def test_fork_tee2(self, fake_cli: list[str]):
        out_sink = io.BytesIO()
        wait = fork_tee2(out_sink, exectee.NOOUT, *fake_cli)

        result = wait()
        assert out_sink.getvalue() == b"stdout: foo\n"
        assert result.stderr == b"stderr: bar\n"

    def test_fire_and_forget(self, fake_cli: list[str]):
        """Test discarding the handle does not block the caller."""
        fork(*fake_cli)


class TestRunLine:
    """Single-string command lines."""

    @pytest.mark.skipif(" " in sys.executable, reason="interpreter path contains a space")
    def test_echo(self):
        result = run_line(f"{sys.executable} -c print('foo')")

        assert result.ok
        assert result.text == "foo\n"

    def test_split_on_spaces(self):
        assert split_command_line("echo foo bar") == Command("echo", ("foo", "bar"))

    def test_program_only(self):
        assert split_command_line("ls") == Command("ls", ())

    def test_consecutive_spaces_give_empty_args(self):
        assert split_command_line("echo  foo") == Command("echo", ("", "foo"))

    def test_no_quoting(self):
        assert split_command_line('echo "a b"') == Command("echo", ('"a', 'b"'))

    def test_missing_program(self):
        result = run_line("asdf --version")

        assert isinstance(result.error, StartError)
        assert result.error.program == "asdf"

    def test_empty_line(self):
        result = run_line("")

        assert isinstance(result.error, StartError)
        assert result.output == b""


class TestAsyncFunctions:
    """Awaitable wrappers."""

    @pytest.mark.asyncio
    async def test_run_async(self, fake_cli: list[str]):
        result = await run_async(*fake_cli)

        assert result == run(*fake_cli)

    @pytest.mark.asyncio
    async def test_run_tee_async(self, fake_cli: list[str]):
        sink = io.BytesIO()
        result = await run_tee_async(sink, *fake_cli)

        assert sink.getvalue() == result.output

    @pytest.mark.asyncio
    async def test_run2_async(self, fake_cli: list[str]):
        result = await run2_async(*fake_cli, "--exit-code", "7")

        assert isinstance(result.error, RunError)
        assert result.error.returncode == 7
        assert result.stdout == b"stdout: foo\n"

    @pytest.mark.asyncio
    async def test_run_tee2_async(self, fake_cli: list[str]):
        err_sink = io.BytesIO()
        result = await run_tee2_async(None, err_sink, *fake_cli)

        assert err_sink.getvalue() == result.stderr == b"stderr: bar\n"


def test_version():
    assert exectee.__version__ == "0.1.0"
