"""Terminal rendering of syntax errors with ``rich``.

``ConsoleDiagnosticSink`` prints each report in the familiar compiler
shape::

    script.dbg:3:7: error: unmatched parentheses
    print (1 + 2
          ^

The location prefix tracks the input source and line number, which the
REPL updates before each parse so that errors inside redirected files
point at the right file and line.
"""
from __future__ import annotations

from rich.console import Console
from rich.markup import escape


class ConsoleDiagnosticSink:
    """Sink that renders diagnostics to a ``rich`` console.

    Parameters
    ----------
    console:
        Destination console; defaults to one writing to stderr.
    source:
        Name of the current input (file path or ``"<stdin>"``).
    line_number:
        1-based line number of ``line`` within ``source``.
    line:
        Text of the line being parsed, echoed under the message.
    """

    def __init__(
        self,
        console: Console | None = None,
        source: str = "<stdin>",
        line_number: int = 1,
        line: str = "",
    ) -> None:
        self._console = console if console is not None else Console(stderr=True)
        self.source = source
        self.line_number = line_number
        self.line = line
        self.count = 0

    def set_line(self, line: str, source: str, line_number: int) -> None:
        """Point the sink at the next line about to be parsed."""
        self.line = line
        self.source = source
        self.line_number = line_number

    def report(self, message: str, column: int) -> None:
        self.count += 1
        location = f"{self.source}:{self.line_number}:{column + 1}"
        self._console.print(
            f"[bold]{escape(location)}:[/bold] [bold red]error:[/bold red] {escape(message)}",
            highlight=False,
        )
        if self.line:
            self._console.print(escape(self.line), highlight=False)
            self._console.print(" " * column + "[bold green]^[/bold green]", highlight=False)
