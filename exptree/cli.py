#!/usr/bin/env python3
"""
exptree Command-Line Interface

Provides interactive REPL, script execution, and pipe/filter modes.

Usage:
    exptree                         # Start REPL
    exptree exprs.txt               # Run a file of postfix expressions
    exptree -e "3 4 +"              # Render one expression
    exptree -s -e "x 0 + 2 *"       # Render and simplify
    echo "x 0 +" | exptree -s       # Filter mode

Script Format:
    # comment
    :simplify on
    5 2 3 * +
    x 0 +

REPL Commands:
    :help              Show help
    :simplify on|off   Toggle simplification
    :trace on|off      Toggle simplification tracing
    :postfix on|off    Toggle echoing the postfix form
    :quit              Exit
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

from . import __version__
from .builder import ParseError
from .tree import ExpressionTree

logger = logging.getLogger(__name__)

# Try to import readline for better REPL experience
try:
    import readline
    HAS_READLINE = True
except ImportError:
    HAS_READLINE = False

SETTINGS = ("simplify", "trace", "postfix")


class ExptreeCompleter:
    """Tab completer for the exptree REPL."""

    COMMANDS = [
        ":help", ":quit", ":exit", ":q",
        ":simplify", ":trace", ":postfix",
    ]

    TOGGLE_OPTIONS = ["on", "off"]

    def complete(self, text: str, state: int) -> Optional[str]:
        """Return the next possible completion for 'text'."""
        if state == 0:
            line = readline.get_line_buffer() if HAS_READLINE else ""
            self.matches = self._get_matches(text, line)

        try:
            return self.matches[state]
        except IndexError:
            return None

    def _get_matches(self, text: str, line: str) -> list:
        line = line.lstrip()

        if any(line.startswith(f":{name} ") for name in SETTINGS):
            return [t for t in self.TOGGLE_OPTIONS if t.startswith(text)]

        if text.startswith(":") or (line.startswith(":") and " " not in line):
            return [c for c in self.COMMANDS if c.startswith(text)]

        return []


class UnknownCommandError(ValueError):
    """A REPL command that does not exist."""


class ExptreeREPL:
    """Interactive REPL for exptree."""

    def __init__(self):
        self.simplify = False
        self.trace = False
        self.postfix = False
        self.running = True
        self.history_file = Path.home() / ".exptree_history"

    def setup_readline(self):
        """Load history and install tab completion."""
        if not HAS_READLINE:
            return
        try:
            readline.read_history_file(self.history_file)
        except FileNotFoundError:
            pass
        readline.set_history_length(1000)

        self.completer = ExptreeCompleter()
        readline.set_completer(self.completer.complete)
        readline.parse_and_bind("tab: complete")
        readline.set_completer_delims(" \t\n")

    def save_history(self):
        """Save readline history."""
        if HAS_READLINE:
            try:
                readline.write_history_file(self.history_file)
            except OSError as e:
                logger.debug("could not save history to %s: %s", self.history_file, e)

    def _toggle(self, name: str, arg: str) -> str:
        if arg.lower() in ("on", "true", "1"):
            value = True
        elif arg.lower() in ("off", "false", "0"):
            value = False
        else:
            value = not getattr(self, name)
        setattr(self, name, value)
        return f"{name.capitalize()} {'enabled' if value else 'disabled'}"

    def run_command(self, line: str) -> Optional[str]:
        """
        Run a REPL command (starts with :).

        Returns a message to print, or None.

        Raises:
            UnknownCommandError: If the command does not exist
        """
        parts = line[1:].split(None, 1)
        if not parts:
            raise UnknownCommandError("Unknown command. Type :help for help.")

        cmd = parts[0].lower()
        arg = parts[1] if len(parts) > 1 else ""

        if cmd == "help":
            return self.help_text()

        elif cmd == "quit" or cmd == "exit" or cmd == "q":
            self.running = False
            return None

        elif cmd in SETTINGS:
            return self._toggle(cmd, arg)

        else:
            raise UnknownCommandError(f"Unknown command: {cmd}. Type :help for help.")

    def handle_command(self, line: str) -> Optional[str]:
        """Run a REPL command, reporting unknown commands as text."""
        try:
            return self.run_command(line)
        except UnknownCommandError as e:
            return str(e)

    def help_text(self) -> str:
        """Return help text."""
        return """exptree REPL Commands:
  :help              Show this help
  :simplify on|off   Toggle simplification
  :trace on|off      Toggle simplification tracing
  :postfix on|off    Toggle echoing the postfix form
  :quit              Exit

Syntax:
  3 4 +              Postfix expression (numbers, variables, + - *)
  # comment          Ignored
"""

    def evaluate(self, postfix: str) -> str:
        """
        Build, optionally simplify, and render a postfix expression.

        Raises:
            ParseError: If postfix is not a valid expression
        """
        tree = ExpressionTree.from_postfix(postfix)
        lines = [tree.to_string()]
        if self.postfix:
            lines.append(f"postfix: {tree.to_postfix()}")

        if self.simplify or self.trace:
            simplified, trace = tree.simplify(trace=True)
            lines.append(f"=> {simplified.to_string()}")
            if self.trace and trace:
                lines.append(trace.format("verbose"))

        return "\n".join(lines)

    def execute(self, line: str) -> Tuple[bool, Optional[str]]:
        """
        Execute a single line of input.

        Returns:
            (ok, text) where ok is False for a parse error or an unknown
            command, and text is the message to print, or None
        """
        line = line.strip()

        if not line or line.startswith("#"):
            return True, None

        try:
            if line.startswith(":"):
                return True, self.run_command(line)
            return True, self.evaluate(line)
        except UnknownCommandError as e:
            return False, str(e)
        except ParseError as e:
            return False, f"Error: {e}"

    def process_line(self, line: str) -> Optional[str]:
        """
        Process a single line of input.

        Returns the result to print, or None.
        """
        return self.execute(line)[1]

    def run(self):
        """Run the REPL loop."""
        self.setup_readline()

        print(f"exptree {__version__} - postfix expression trees")
        print("Type :help for help, :quit to exit")
        print()

        while self.running:
            try:
                line = input("exptree> ")
                result = self.process_line(line)
                if result:
                    print(result)

            except EOFError:
                print()
                break
            except KeyboardInterrupt:
                print()
                continue

        self.save_history()


class ScriptRunner:
    """Runs files and streams of postfix expressions."""

    def __init__(self):
        self.repl = ExptreeREPL()

    def _run_line(self, line: str, location: Optional[str] = None) -> bool:
        """
        Execute one non-interactive line and print its output.

        Command confirmations are not printed. A failure goes to stderr
        prefixed with location when one is given, otherwise to stdout.

        Returns:
            True if the line succeeded
        """
        ok, result = self.repl.execute(line)
        if not ok:
            if location:
                print(f"{location}: {result}", file=sys.stderr)
            else:
                print(result)
            return False
        if result and not line.strip().startswith(":"):
            print(result)
        return True

    def run_script(self, path: Path) -> int:
        """
        Run a script file.

        Returns:
            Exit code (0 for success)
        """
        try:
            lines = path.read_text().splitlines()
        except OSError as e:
            print(f"Error reading {path}: {e}", file=sys.stderr)
            return 1

        for lineno, line in enumerate(lines, 1):
            if not self._run_line(line, f"{path}:{lineno}"):
                return 1

        return 0

    def run_expression(self, expr_str: str) -> int:
        """
        Evaluate a single expression.

        Returns:
            Exit code (0 for success)
        """
        return 0 if self._run_line(expr_str) else 1

    def run_stdin(self) -> int:
        """
        Read expressions from stdin and evaluate them.

        Returns:
            Exit code (0 for success)
        """
        for line in sys.stdin:
            if not self._run_line(line):
                return 1

        return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="exptree",
        description="Build, simplify and render postfix expression trees",
        epilog="Examples:\n"
               "  exptree                        Start REPL\n"
               "  exptree exprs.txt              Run a file of expressions\n"
               "  exptree -e '5 2 3 * +'         Render an expression\n"
               "  exptree -s -e 'x 0 + 1 *'      Render and simplify\n"
               "  echo 'x x -' | exptree -s      Filter mode\n",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "script",
        nargs="?",
        help="File of postfix expressions, one per line"
    )

    parser.add_argument(
        "-e", "--expr",
        help="Evaluate a single postfix expression"
    )

    parser.add_argument(
        "-s", "--simplify",
        action="store_true",
        help="Simplify expressions"
    )

    parser.add_argument(
        "-t", "--trace",
        action="store_true",
        help="Show the simplification rules applied (implies --simplify)"
    )

    parser.add_argument(
        "-p", "--postfix",
        action="store_true",
        help="Also print the postfix form of each expression"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging on stderr"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    runner = ScriptRunner()
    runner.repl.simplify = args.simplify
    runner.repl.trace = args.trace
    runner.repl.postfix = args.postfix

    if args.script:
        sys.exit(runner.run_script(Path(args.script)))

    elif args.expr:
        sys.exit(runner.run_expression(args.expr))

    elif not sys.stdin.isatty():
        sys.exit(runner.run_stdin())

    else:
        runner.repl.run()


if __name__ == "__main__":
    main()
