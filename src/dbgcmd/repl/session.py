"""Interactive read-parse-print loop.

``ReplSession`` pulls one line at a time from an ``InputReader``, parses
it as a command, and prints the resulting tree.  Syntax errors are shown
with a caret under the offending column and never end the session; the
user simply gets the prompt back.

Two commands are handled by the session itself because they belong to
the input layer rather than to any backend:

``source "path"``
    Read further commands from ``path`` (redirections nest).
``quit`` / ``exit``
    Leave the loop.

Every other command is only printed; evaluating it is the job of the
backend the session is embedded in.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from dbgcmd.ast.nodes import Command, StringExpr
from dbgcmd.ast.serializer import AstSerializer
from dbgcmd.diagnostics.console import ConsoleDiagnosticSink
from dbgcmd.formatter.formatter import ExpressionFormatter
from dbgcmd.input.reader import InputReader, InputRedirectError
from dbgcmd.lexer.lexer import tokenize
from dbgcmd.parser.parser import DEFAULT_MAX_DEPTH, Parser, ParserConfig
from dbgcmd.repl.render import command_tree, token_table

logger = logging.getLogger(__name__)

OUTPUT_FORMATS: tuple[str, ...] = ("tree", "text", "json", "yaml")

_QUIT_COMMANDS = frozenset({"quit", "exit"})
_SOURCE_COMMAND = "source"


@dataclass(frozen=True)
class ReplConfig:
    """Configuration for :class:`ReplSession`.

    Parameters
    ----------
    prompt:
        Prompt shown before each interactive line.
    output_format:
        How parsed commands are printed: one of ``OUTPUT_FORMATS``.
    show_tokens:
        Print the token table before each parse.
    max_depth:
        Nesting limit passed to the parser.
    """

    prompt: str = "(dbg) "
    output_format: str = "tree"
    show_tokens: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format {self.output_format!r}; "
                f"expected one of {', '.join(OUTPUT_FORMATS)}"
            )


@dataclass
class ReplStats:
    """Counters collected over one session."""

    lines: int = 0
    commands: int = 0
    errors: int = 0


class ReplSession:
    """Drives the read → tokenize → parse → print loop.

    Parameters
    ----------
    reader:
        Source of input lines.
    console:
        Where parsed commands are printed.
    err_console:
        Where diagnostics and session errors are printed.
    config:
        Session options; defaults to ``ReplConfig()``.
    """

    def __init__(
        self,
        reader: InputReader,
        console: Console | None = None,
        err_console: Console | None = None,
        config: ReplConfig | None = None,
    ) -> None:
        self._reader = reader
        self._console = console if console is not None else Console()
        self._err_console = err_console if err_console is not None else Console(stderr=True)
        self._config = config if config is not None else ReplConfig()
        self._parser_config = ParserConfig(max_depth=self._config.max_depth)
        self._sink = ConsoleDiagnosticSink(console=self._err_console)
        self._serializer = AstSerializer()
        self._formatter = ExpressionFormatter()
        self.stats = ReplStats()

    def run(self) -> ReplStats:
        """Process lines until end of input or a quit command.

        Redirected files still open when the loop ends are closed, even
        when it ends with an exception.
        """
        try:
            while True:
                line = self._reader.read_line(self._config.prompt)
                if line is None:
                    break
                if not self.handle_line(line):
                    break
        finally:
            self._reader.close()
        logger.debug(
            "Session finished: %d line(s), %d command(s), %d error(s)",
            self.stats.lines,
            self.stats.commands,
            self.stats.errors,
        )
        return self.stats

    def handle_line(self, line: str) -> bool:
        """Parse and act on one line.  Returns False when the session should end."""
        if not line.strip():
            return True
        self.stats.lines += 1

        self._sink.set_line(line, self._reader.source, self._reader.line_number)
        errors_before = self._sink.count
        tokens = tokenize(line)
        if self._config.show_tokens:
            self._console.print(token_table(tokens))

        command = Parser(tokens, sink=self._sink, config=self._parser_config).parse_command()
        self.stats.errors += self._sink.count - errors_before
        if command is None:
            return True
        self.stats.commands += 1

        if command.name in _QUIT_COMMANDS:
            return False
        if command.name == _SOURCE_COMMAND:
            self._source(command)
            return True
        self._print(command)
        return True

    # ------------------------------------------------------------------
    # Builtins and output
    # ------------------------------------------------------------------

    def _source(self, command: Command) -> None:
        args = command.arguments
        if len(args) != 1 or not isinstance(args[0], StringExpr):
            self._err_console.print('[red]Usage:[/red] source "FILE"')
            self.stats.errors += 1
            return
        try:
            self._reader.redirect(args[0].value)
        except InputRedirectError as exc:
            self._err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
            self.stats.errors += 1

    def _print(self, command: Command) -> None:
        fmt = self._config.output_format
        if fmt == "tree":
            self._console.print(command_tree(command))
        elif fmt == "text":
            self._console.print(escape(self._formatter.format_command(command)), highlight=False)
        elif fmt == "json":
            self._console.print(Syntax(self._serializer.to_json(command), "json"))
        else:
            self._console.print(Syntax(self._serializer.to_yaml(command), "yaml"))
