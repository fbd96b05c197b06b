"""Tests for cli module."""

import logging

import pytest

from minirepl import ReservedNameError, cli, demos
from test_helpers import ScriptedEditor


@pytest.fixture(autouse=True)
def restore_logging():
    """main() configures process-wide logging; undo it after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    logging.disable(logging.NOTSET)


@pytest.fixture
def scripted_demo(monkeypatch):
    """Replace the ``minimal`` demo with one reading the given lines."""

    def _install(*lines):
        editor = ScriptedEditor(*lines)
        monkeypatch.setitem(cli.DEMOS, "minimal", lambda: demos.minimal(editor))
        return editor

    return _install


class TestParser:
    def test_defaults(self):
        args = cli.build_parser().parse_args([])

        assert args.demo == "minimal"
        assert args.log is None

    def test_demo_and_log(self):
        args = cli.build_parser().parse_args(["from-str", "-l", "out.log"])

        assert args.demo == "from-str"
        assert args.log == "out.log"

    def test_unknown_demo_rejected(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["nope"])


class TestRunRepl:
    @pytest.mark.asyncio
    async def test_clean_exit(self):
        assert await cli.run_repl(demos.minimal(ScriptedEditor("hello x"))) == 0

    @pytest.mark.asyncio
    async def test_critical_error_exit_code(self, capsys, monkeypatch):
        monkeypatch.delenv("MINIREPL_DEBUG", raising=False)

        code = await cli.run_repl(demos.errors(ScriptedEditor("critical boom")))

        assert code == 1
        assert capsys.readouterr().err == "Repl halted: boom\n"

    @pytest.mark.asyncio
    async def test_debug_prints_traceback(self, capsys, monkeypatch):
        monkeypatch.setenv("MINIREPL_DEBUG", "1")

        await cli.run_repl(demos.errors(ScriptedEditor("critical boom")))

        err = capsys.readouterr().err
        assert err.startswith("Repl halted: boom\n")
        assert "Traceback" in err


class TestMain:
    def test_exits_zero_at_end_of_input(self, capsys, scripted_demo):
        scripted_demo("hello World")

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["minimal"])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out == "Hello World\n"

    def test_build_error_exits_one(self, capsys, monkeypatch):
        def broken():
            raise ReservedNameError("help")

        monkeypatch.setitem(cli.DEMOS, "minimal", broken)

        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        assert exc_info.value.code == 1
        assert capsys.readouterr().err == (
            "Error: failed to create repl: 'help' is a reserved command name\n"
        )

    def test_log_file(self, tmp_path, scripted_demo):
        scripted_demo("add 1 2", "quit")
        log_path = tmp_path / "logs" / "repl.log"

        with pytest.raises(SystemExit):
            cli.main(["-l", str(log_path)])

        text = log_path.read_text(encoding="utf-8")
        assert text.startswith("=== repl_start ===")
        assert "=== command_exec ===" in text
        assert "command: add" in text
        assert "reason: quit" in text
