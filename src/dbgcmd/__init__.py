"""dbgcmd-lang — command and expression parser for interactive debugging REPLs.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import dbgcmd

    # Split a line into tokens
    tokens = dbgcmd.tokenize('print $sp (8 * 4)')

    # Parse a command line; syntax errors go to the logging sink
    command = dbgcmd.parse('print $sp (8 * 4)')
    command.name              # 'print'
    command.argument_count    # 2

    # Parse one bare expression
    expr = dbgcmd.parse_expression('2 + 3 * 4')

    # Print a command back as text
    dbgcmd.format_command(command)   # 'print $sp (8 * 4)'

    dbgcmd.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from dbgcmd.ast.nodes import Command, Expression
    from dbgcmd.diagnostics.diagnostics import DiagnosticSink
    from dbgcmd.grammar.tokens import Token


def tokenize(line: str) -> list["Token"]:
    """Split one input line into tokens.

    Parameters
    ----------
    line:
        The input line, without its trailing newline.

    Returns
    -------
    list[Token]
        All tokens, terminated by a single ``EOF`` token.  The lexer never
        raises; characters it cannot use become ``UNKNOWN`` tokens.
    """
    from dbgcmd.lexer.lexer import tokenize as _tokenize

    return _tokenize(line)


def parse(line: str, sink: "DiagnosticSink | None" = None) -> "Command | None":
    """Parse one input line as a command.

    Parameters
    ----------
    line:
        Command text such as ``'x/4 $sp'`` or ``'print (1 + 2)'``.
    sink:
        Receives syntax errors.  When omitted, errors are logged through
        the ``dbgcmd.diagnostics`` logger.

    Returns
    -------
    Command | None
        The parsed command, or ``None`` if the line does not begin with a
        command name.
    """
    from dbgcmd.parser.parser import parse_command as _parse_command

    return _parse_command(line, sink=sink)


def parse_expression(line: str, sink: "DiagnosticSink | None" = None) -> "Expression | None":
    """Parse one input line as a single expression.

    Parameters
    ----------
    line:
        Expression text such as ``'$sp + 8 * 4'``.
    sink:
        Receives syntax errors.

    Returns
    -------
    Expression | None
        The expression tree, or ``None`` after a syntax error.
    """
    from dbgcmd.parser.parser import parse_expression as _parse_expression

    return _parse_expression(line, sink=sink)


def format_command(command: "Command") -> str:
    """Render a ``Command`` back to a line that parses to the same tree.

    Parameters
    ----------
    command:
        The command to render.

    Returns
    -------
    str
        Canonical single-line text.
    """
    from dbgcmd.formatter.formatter import format_command as _format_command

    return _format_command(command)


__all__ = [
    "__version__",
    "tokenize",
    "parse",
    "parse_expression",
    "format_command",
]
