"""Tests for startup, mode selection, and the top-level loop."""

from pathlib import Path

import pytest

from msh import repl
from msh.config import ERROR_MESSAGE, PROMPT, ShellConfig
from msh.errors import StartupError
from msh.repl import main, run_loop, select_source
from msh.shell import Shell
from msh.source import BatchSource, InteractiveSource


class _ListSource:
    """A line source backed by a list, recording how many lines were read."""

    def __init__(self, lines: list[str]) -> None:
        self._lines = list(lines)
        self.reads = 0

    def read_line(self) -> str | None:
        self.reads += 1
        return self._lines.pop(0) if self._lines else None


class TestSelectSource:
    """Verify how the startup arguments choose the input source."""

    def test_no_arguments_is_interactive(self) -> None:
        """Zero arguments select interactive mode."""
        assert isinstance(select_source([], ShellConfig()), InteractiveSource)

    def test_one_argument_is_batch(self, tmp_path: Path) -> None:
        """One argument is the batch file."""
        script = tmp_path / "script"
        script.write_text("exit\n")
        with select_source([str(script)], ShellConfig()) as source:
            assert isinstance(source, BatchSource)
            assert source.path == script

    def test_two_arguments_is_a_usage_error(self, tmp_path: Path) -> None:
        """Two or more arguments are refused."""
        with pytest.raises(StartupError, match="usage"):
            select_source(["a", "b"], ShellConfig())

    def test_missing_batch_file(self, tmp_path: Path) -> None:
        """An unopenable batch file is a startup error."""
        with pytest.raises(StartupError):
            select_source([str(tmp_path / "missing")], ShellConfig())


class TestRunLoop:
    """Verify the read-execute loop."""

    def test_stops_at_end_of_input(self) -> None:
        """End of input ends the loop with status 0."""
        source = _ListSource(["\n", "   \n"])
        assert run_loop(Shell(), source) == 0
        assert source.reads == 3

    def test_stops_at_exit_without_reading_further(self) -> None:
        """Lines after exit are never read."""
        source = _ListSource(["quit\n", "echo never\n", "exit\n"])
        assert run_loop(Shell(), source) == 0
        assert source.reads == 1

    def test_errors_do_not_stop_the_loop(self, capfd: pytest.CaptureFixture[str]) -> None:
        """A failing command is reported and the loop carries on."""
        source = _ListSource(["no_such_command_xyz\n", "exit 1\n", "echo after\n"])
        assert run_loop(Shell(), source) == 0
        out, err = capfd.readouterr()
        assert out == "after\n"
        assert err == ERROR_MESSAGE * 2

    def test_log_is_flushed_after_each_line(self, tmp_path: Path) -> None:
        """With a log file set, entries leave memory as each line finishes."""
        log_file = tmp_path / "audit.log"
        shell = Shell(config=ShellConfig(log_path=str(log_file)))
        source = _ListSource(["no_such_command_xyz\n", "true\n"])
        run_loop(shell, source)
        assert [e.message for e in shell.logger.entries] == ["end of input"]
        assert "CommandNotFoundError" in log_file.read_text()
        assert "exited with 0" in log_file.read_text()


class TestInteractiveSource:
    """Verify the interactive source."""

    def test_prompts_before_each_read(self) -> None:
        """The prompt is handed to the reader every time."""
        prompts: list[str] = []

        def reader(prompt: str) -> str:
            prompts.append(prompt)
            return "ls"

        source = InteractiveSource(prompt=PROMPT, reader=reader)
        source.read_line()
        source.read_line()
        assert prompts == ["msh> ", "msh> "]

    def test_eof_is_end_of_input(self) -> None:
        """Ctrl+D (EOFError) becomes None."""

        def reader(_prompt: str) -> str:
            raise EOFError

        assert InteractiveSource(prompt=PROMPT, reader=reader).read_line() is None


class TestMain:
    """Verify the main() entrypoint."""

    def test_batch_mode_stops_at_exit(
        self, tmp_path: Path, capfd: pytest.CaptureFixture[str]
    ) -> None:
        """A script runs line by line, without a prompt, up to exit."""
        script = tmp_path / "script"
        script.write_text("echo hi\nexit\necho ignored\n")
        assert main([str(script)]) == 0
        out, err = capfd.readouterr()
        assert out == "hi\n"
        assert err == ""

    def test_batch_mode_end_of_file(
        self, tmp_path: Path, capfd: pytest.CaptureFixture[str]
    ) -> None:
        """A script without exit ends at end of file with status 0."""
        script = tmp_path / "script"
        script.write_text("\n\necho one\n   \necho two")
        assert main([str(script)]) == 0
        out, _err = capfd.readouterr()
        assert out == "one\ntwo\n"

    def test_nul_bytes_do_not_stop_the_shell(
        self, tmp_path: Path, capfd: pytest.CaptureFixture[str]
    ) -> None:
        """Lines with embedded NULs are reported and the script carries on."""
        script = tmp_path / "script"
        script.write_bytes(b"ec\x00ho hi\ncd a\x00b\necho after\n")
        assert main([str(script)]) == 0
        out, err = capfd.readouterr()
        assert out == "after\n"
        assert err == ERROR_MESSAGE * 2

    def test_too_many_arguments(self, capfd: pytest.CaptureFixture[str]) -> None:
        """Two arguments exit 1 with the error message."""
        assert main(["a", "b"]) == 1
        _out, err = capfd.readouterr()
        assert err == ERROR_MESSAGE

    def test_unreadable_batch_file(
        self, tmp_path: Path, capfd: pytest.CaptureFixture[str]
    ) -> None:
        """A missing batch file exits 1 with the error message."""
        assert main([str(tmp_path / "missing")]) == 1
        _out, err = capfd.readouterr()
        assert err == ERROR_MESSAGE

    def test_interactive_mode(
        self, monkeypatch: pytest.MonkeyPatch, capfd: pytest.CaptureFixture[str]
    ) -> None:
        """With no arguments the shell prompts and runs until end of input."""
        lines = iter(["echo interactive", "cd"])
        prompts: list[str] = []

        def reader(prompt: str) -> str:
            prompts.append(prompt)
            try:
                return next(lines)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr(
            repl,
            "InteractiveSource",
            lambda *, prompt: InteractiveSource(prompt=prompt, reader=reader),
        )
        assert main([]) == 0
        out, err = capfd.readouterr()
        assert out == "interactive\n"
        assert err == ERROR_MESSAGE
        assert prompts == [PROMPT] * 3

    def test_audit_log_is_written(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """MSH_LOG names a file the audit log is appended to."""
        log_file = tmp_path / "audit.log"
        script = tmp_path / "script"
        script.write_text("no_such_command_xyz\nexit\n")
        monkeypatch.setenv("MSH_LOG", str(log_file))
        assert main([str(script)]) == 0
        text = log_file.read_text()
        assert "[INFO] repl: batch mode" in text
        assert "CommandNotFoundError" in text
