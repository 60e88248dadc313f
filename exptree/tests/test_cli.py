"""Tests for CLI module."""

import io
import subprocess
import sys
from pathlib import Path
import pytest

from exptree.cli import ExptreeCompleter, ExptreeREPL, ScriptRunner


class TestREPLCommands:
    """Tests for REPL command handling."""

    def test_help_command(self):
        """Help command returns help text."""
        repl = ExptreeREPL()
        result = repl.handle_command(":help")
        assert "help" in result.lower()
        assert "simplify" in result.lower()

    def test_simplify_command(self):
        """Simplify command toggles simplification."""
        repl = ExptreeREPL()
        assert repl.simplify == False

        result = repl.handle_command(":simplify on")
        assert repl.simplify == True
        assert "enabled" in result.lower()

        result = repl.handle_command(":simplify off")
        assert repl.simplify == False
        assert "disabled" in result.lower()

    def test_trace_toggle(self):
        """Trace command without arg toggles."""
        repl = ExptreeREPL()
        repl.handle_command(":trace")
        assert repl.trace == True
        repl.handle_command(":trace")
        assert repl.trace == False

    def test_postfix_command(self):
        """Postfix command sets postfix echo."""
        repl = ExptreeREPL()
        repl.handle_command(":postfix on")
        assert repl.postfix == True

    def test_quit_command(self):
        """Quit command sets running to False."""
        repl = ExptreeREPL()
        assert repl.running == True
        repl.handle_command(":quit")
        assert repl.running == False

    def test_unknown_command(self):
        """Unknown command returns error."""
        repl = ExptreeREPL()
        assert "Unknown" in repl.handle_command(":frobnicate")
        assert "Unknown" in repl.handle_command(":")


class TestREPLProcessLine:
    """Tests for REPL line processing."""

    def test_empty_line(self):
        """Empty line returns None."""
        repl = ExptreeREPL()
        assert repl.process_line("") is None
        assert repl.process_line("   ") is None

    def test_comment_line(self):
        """Comment line returns None."""
        repl = ExptreeREPL()
        assert repl.process_line("# comment") is None

    def test_render(self):
        """Expressions are rendered as infix."""
        repl = ExptreeREPL()
        assert repl.process_line("5 2 3 * +") == "5+(2*3)"

    def test_simplify(self):
        """With simplify on, the simplified form follows."""
        repl = ExptreeREPL()
        repl.handle_command(":simplify on")
        assert repl.process_line("x 0 +") == "x+0\n=> x"

    def test_trace(self):
        """With trace on, the trace follows the result."""
        repl = ExptreeREPL()
        repl.handle_command(":trace on")
        result = repl.process_line("x 0 +")
        assert "=> x" in result
        assert "add-zero-right" in result

    def test_postfix(self):
        """With postfix on, the postfix form is echoed."""
        repl = ExptreeREPL()
        repl.handle_command(":postfix on")
        assert repl.process_line("3  4 +") == "3+4\npostfix: 3 4 +"

    @pytest.mark.parametrize("line", ["3 +", "3 4 ?", "3 4"])
    def test_parse_error(self, line):
        """Parse errors are reported, not raised."""
        repl = ExptreeREPL()
        assert repl.process_line(line).startswith("Error:")


class TestCompleter:
    """Tests for tab completion."""

    def test_commands(self):
        """Commands complete from a colon."""
        matches = ExptreeCompleter()._get_matches(":s", ":s")
        assert matches == [":simplify"]

    def test_toggle_options(self):
        """on/off complete after a setting."""
        matches = ExptreeCompleter()._get_matches("", ":trace ")
        assert matches == ["on", "off"]

    def test_expression_context(self):
        """Nothing completes inside an expression."""
        assert ExptreeCompleter()._get_matches("x", "3 x") == []


class TestScriptRunner:
    """Tests for script execution."""

    def test_run_expression(self, capsys):
        """Run single expression."""
        runner = ScriptRunner()
        code = runner.run_expression("3 4 +")
        assert code == 0
        assert capsys.readouterr().out == "3+4\n"

    def test_run_expression_error(self, capsys):
        """Bad expression exits with 1."""
        runner = ScriptRunner()
        assert runner.run_expression("3 +") == 1
        assert "Error" in capsys.readouterr().out

    def test_run_script(self, tmp_path, capsys):
        """Scripts run commands and print expression results."""
        script = tmp_path / "exprs.txt"
        script.write_text("# sample\n:simplify on\n5 2 3 * +\n\nx x -\n")
        runner = ScriptRunner()
        assert runner.run_script(script) == 0
        assert capsys.readouterr().out == "5+(2*3)\n=> 11\nx-x\n=> 0\n"

    def test_run_script_error(self, tmp_path, capsys):
        """Errors stop the script with a line number."""
        script = tmp_path / "bad.txt"
        script.write_text("3 4 +\n3 4\n5 6 +\n")
        runner = ScriptRunner()
        assert runner.run_script(script) == 1
        captured = capsys.readouterr()
        assert captured.out == "3+4\n"
        assert f"{script}:2: Error:" in captured.err

    def test_run_script_missing(self, tmp_path, capsys):
        """Missing script exits with 1."""
        runner = ScriptRunner()
        assert runner.run_script(tmp_path / "missing.txt") == 1
        assert "Error reading" in capsys.readouterr().err


class TestCLIIntegration:
    """Integration tests using subprocess."""

    def run_cli(self, *args, input=None):
        return subprocess.run(
            [sys.executable, "-m", "exptree", *args],
            capture_output=True, text=True, input=input,
            cwd=Path(__file__).resolve().parents[2],
        )

    def test_help_flag(self):
        """--help flag works."""
        result = self.run_cli("--help")
        assert result.returncode == 0
        assert "postfix" in result.stdout

    def test_version_flag(self):
        """--version flag works."""
        result = self.run_cli("--version")
        assert result.returncode == 0
        assert "0.1.0" in result.stdout

    def test_expression_mode(self):
        """Expression mode renders the expression."""
        result = self.run_cli("-e", "5 2 3 * +")
        assert result.returncode == 0
        assert result.stdout == "5+(2*3)\n"

    def test_expression_simplify(self):
        """-s simplifies the expression."""
        result = self.run_cli("-s", "-e", "0 x -")
        assert result.returncode == 0
        assert result.stdout == "0-x\n=> (-x)\n"

    def test_expression_error(self):
        """Invalid expression exits with 1."""
        result = self.run_cli("-e", "3 4 ?")
        assert result.returncode == 1
        assert "Error" in result.stdout

    def test_filter_mode(self):
        """Lines from stdin are processed in order."""
        result = self.run_cli("-s", input="3 4 +\n# skip\nx 1 *\n")
        assert result.returncode == 0
        assert result.stdout == "3+4\n=> 7\nx*1\n=> x\n"

    def test_verbose_logging(self):
        """-v logs parse failures to stderr."""
        result = self.run_cli("-v", "-e", "3 +")
        assert result.returncode == 1
        assert "DEBUG exptree.builder" in result.stderr


class TestLineStatus:
    """Tests for success and failure reporting of single lines."""

    @pytest.mark.parametrize("line,expected", [
        ("Error 1 +", "Error+1"),
        ("Unknown x +", "Unknown+x"),
        ("Error", "Error"),
    ])
    def test_error_like_variables_succeed(self, line, expected):
        """Variables named Error or Unknown are ordinary expressions."""
        repl = ExptreeREPL()
        assert repl.execute(line) == (True, expected)

    def test_parse_error_fails(self):
        """Parse errors report failure."""
        ok, result = ExptreeREPL().execute("Error +")
        assert ok == False
        assert result.startswith("Error:")

    def test_unknown_command_fails(self):
        """Unknown commands report failure."""
        ok, result = ExptreeREPL().execute(":frobnicate")
        assert ok == False
        assert "Unknown command" in result

    def test_blank_and_command_lines_succeed(self):
        """Blank lines, comments and known commands succeed."""
        repl = ExptreeREPL()
        assert repl.execute("") == (True, None)
        assert repl.execute("# Error") == (True, None)
        assert repl.execute(":simplify on") == (True, "Simplify enabled")

    def test_run_expression_error_variable(self, capsys):
        """An expression on a variable named Error exits with 0."""
        runner = ScriptRunner()
        assert runner.run_expression("Error 1 +") == 0
        assert capsys.readouterr().out == "Error+1\n"

    def test_run_script_unknown_variable(self, tmp_path, capsys):
        """A variable named Unknown does not stop the script."""
        script = tmp_path / "vars.txt"
        script.write_text("Unknown x +\n3 4 +\n")
        runner = ScriptRunner()
        assert runner.run_script(script) == 0
        captured = capsys.readouterr()
        assert captured.out == "Unknown+x\n3+4\n"
        assert captured.err == ""

    def test_run_script_unknown_command(self, tmp_path, capsys):
        """An unknown command stops the script with a line number."""
        script = tmp_path / "cmd.txt"
        script.write_text("3 4 +\n:frobnicate\n5 6 +\n")
        runner = ScriptRunner()
        assert runner.run_script(script) == 1
        captured = capsys.readouterr()
        assert captured.out == "3+4\n"
        assert f"{script}:2: Unknown command" in captured.err

    def test_run_stdin_error_variable(self, monkeypatch, capsys):
        """Filter mode keeps going past variables named Error."""
        monkeypatch.setattr(sys, "stdin", io.StringIO("Error 1 +\n3 4 +\n"))
        runner = ScriptRunner()
        assert runner.run_stdin() == 0
        assert capsys.readouterr().out == "Error+1\n3+4\n"

    def test_run_stdin_parse_error(self, monkeypatch, capsys):
        """Filter mode stops at the first parse error."""
        monkeypatch.setattr(sys, "stdin", io.StringIO("3 +\n3 4 +\n"))
        runner = ScriptRunner()
        assert runner.run_stdin() == 1
        assert capsys.readouterr().out.startswith("Error:")


class TestNonInteractiveModes:
    """Tests that script and filter modes behave alike."""

    def test_stdin_suppresses_command_output(self, monkeypatch, capsys):
        """Filter mode does not echo command confirmations."""
        monkeypatch.setattr(sys, "stdin", io.StringIO(":simplify on\nx 0 +\n"))
        runner = ScriptRunner()
        assert runner.run_stdin() == 0
        assert capsys.readouterr().out == "x+0\n=> x\n"

    def test_script_and_stdin_match(self, tmp_path, monkeypatch, capsys):
        """The same lines print the same output in both modes."""
        text = ":trace on\n# note\n5 2 3 * +\n:postfix on\nx x -\n"
        script = tmp_path / "same.txt"
        script.write_text(text)
        assert ScriptRunner().run_script(script) == 0
        script_out = capsys.readouterr().out

        monkeypatch.setattr(sys, "stdin", io.StringIO(text))
        assert ScriptRunner().run_stdin() == 0
        assert capsys.readouterr().out == script_out

    def test_runner_does_not_touch_readline(self, monkeypatch):
        """Non-interactive runners leave readline history and completion alone."""
        import exptree.cli as cli

        calls = []
        monkeypatch.setattr(cli.ExptreeREPL, "setup_readline",
                            lambda self: calls.append(self))
        runner = ScriptRunner()
        runner.run_expression("3 4 +")
        assert calls == []
        assert not hasattr(runner.repl, "completer")

    def test_repl_run_sets_up_readline(self, monkeypatch):
        """The interactive loop installs readline support."""
        import exptree.cli as cli

        calls = []
        monkeypatch.setattr(cli.ExptreeREPL, "setup_readline",
                            lambda self: calls.append(self))
        monkeypatch.setattr(cli.ExptreeREPL, "save_history", lambda self: None)
        monkeypatch.setattr("builtins.input", lambda prompt: ":quit")
        repl = ExptreeREPL()
        repl.run()
        assert calls == [repl]
        assert repl.running == False
