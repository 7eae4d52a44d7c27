"""CLI entry point for dbgcmd.

Invoked as::

    dbgcmd [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m dbgcmd.cli.main

Commands
--------
parse       Parse one command line and print its AST
expr        Parse one expression and print its AST
tokens      Show the tokens of a line
repl        Start the interactive read-parse-print loop
grammar     Print the grammar reference
version     Show version information
"""
from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from dbgcmd.parser import ParserConfig

console = Console()
err_console = Console(stderr=True)

_FORMAT_OPTION = click.Choice(["tree", "text", "json", "yaml"], case_sensitive=False)


def _max_depth_option(func: Callable[..., None]) -> Callable[..., None]:
    """Attach the shared --max-depth option to a command."""
    return click.option(
        "--max-depth",
        type=click.IntRange(min=1),
        default=None,
        help="Maximum nesting of parentheses and unary operators, and maximum expression tree height.",
    )(func)


def _parser_config(max_depth: int | None) -> "ParserConfig":
    from dbgcmd.parser import ParserConfig

    return ParserConfig() if max_depth is None else ParserConfig(max_depth=max_depth)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="dbgcmd-lang")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Command and expression parser for interactive debugging REPLs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from dbgcmd import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]dbgcmd-lang[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# grammar command
# ---------------------------------------------------------------------------


@cli.command(name="grammar")
def grammar_command() -> None:
    """Print the command-language grammar and operator precedence."""
    from dbgcmd.grammar import FULL_GRAMMAR

    console.print(escape(FULL_GRAMMAR), highlight=False)


# ---------------------------------------------------------------------------
# tokens command
# ---------------------------------------------------------------------------


@cli.command(name="tokens")
@click.argument("line")
def tokens_command(line: str) -> None:
    """Show the tokens the lexer produces for LINE."""
    from dbgcmd.lexer import tokenize
    from dbgcmd.repl import token_table

    console.print(token_table(tokenize(line)))


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("line")
@click.option(
    "--format",
    "output_format",
    type=_FORMAT_OPTION,
    default="tree",
    help="AST output format",
)
@_max_depth_option
def parse_command(line: str, output_format: str, max_depth: int | None) -> None:
    """Parse LINE as a command and print its AST.

    Exits with status 1 if any syntax error was reported.

    Examples:

    \b
        dbgcmd parse 'print $sp (8 * 4)'
        dbgcmd parse 'print 1 @ 2' --format json
    """
    from dbgcmd.ast import AstSerializer
    from dbgcmd.diagnostics import ConsoleDiagnosticSink
    from dbgcmd.formatter import format_command
    from dbgcmd.lexer import tokenize
    from dbgcmd.parser import Parser
    from dbgcmd.repl import command_tree

    sink = ConsoleDiagnosticSink(console=err_console, source="<argv>", line=line)
    command = Parser(tokenize(line), sink=sink, config=_parser_config(max_depth)).parse_command()

    if command is not None:
        output_format = output_format.lower()
        if output_format == "tree":
            console.print(command_tree(command))
        elif output_format == "text":
            console.print(escape(format_command(command)), highlight=False)
        elif output_format == "json":
            console.print(Syntax(AstSerializer().to_json(command), "json"))
        else:
            console.print(Syntax(AstSerializer().to_yaml(command), "yaml"))

    if command is None or sink.count:
        sys.exit(1)


# ---------------------------------------------------------------------------
# expr command
# ---------------------------------------------------------------------------


@cli.command(name="expr")
@click.argument("line")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["tree", "text", "json"], case_sensitive=False),
    default="tree",
    help="AST output format",
)
@_max_depth_option
def expr_command(line: str, output_format: str, max_depth: int | None) -> None:
    """Parse LINE as a single expression and print its AST.

    Examples:

    \b
        dbgcmd expr '2 + 3 * 4'
        dbgcmd expr '-(1 + 2)' --format text
    """
    from dbgcmd.ast import AstSerializer
    from dbgcmd.diagnostics import ConsoleDiagnosticSink
    from dbgcmd.formatter import format_expression
    from dbgcmd.lexer import tokenize
    from dbgcmd.parser import Parser
    from dbgcmd.repl import expression_tree

    sink = ConsoleDiagnosticSink(console=err_console, source="<argv>", line=line)
    parser = Parser(tokenize(line), sink=sink, config=_parser_config(max_depth))
    expr = parser.parse_expression()

    if expr is None:
        sys.exit(1)

    if not parser.stream.at_end:
        column = parser.stream.current.column_start
        err_console.print(f"[yellow]Warning:[/yellow] ignoring trailing input at column {column + 1}")

    output_format = output_format.lower()
    if output_format == "tree":
        console.print(expression_tree(expr))
    elif output_format == "text":
        console.print(escape(format_expression(expr)), highlight=False)
    else:
        console.print(Syntax(AstSerializer().expression_to_json(expr), "json"))


# ---------------------------------------------------------------------------
# repl command
# ---------------------------------------------------------------------------


@cli.command(name="repl")
@click.option(
    "--file",
    "-f",
    "script",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Read commands from FILE before prompting.",
)
@click.option(
    "--format",
    "output_format",
    type=_FORMAT_OPTION,
    default="tree",
    help="How parsed commands are printed.",
)
@click.option("--prompt", default="(dbg) ", show_default=True, help="Interactive prompt.")
@click.option("--show-tokens", is_flag=True, default=False, help="Print tokens before each parse.")
@click.option("--batch", is_flag=True, default=False, help="Stop after FILE instead of prompting.")
@_max_depth_option
def repl_command(
    script: str | None,
    output_format: str,
    prompt: str,
    show_tokens: bool,
    batch: bool,
    max_depth: int | None,
) -> None:
    """Start the interactive read-parse-print loop.

    Type a command per line; `source "FILE"` reads commands from a file
    and `quit` leaves the loop.
    """
    from dbgcmd.input import InputReader, InputRedirectError
    from dbgcmd.repl import ReplConfig, ReplSession

    def _end_of_input(_prompt: str) -> str:
        raise EOFError

    reader = InputReader(prompt_fn=_end_of_input if batch else None)
    if not batch:
        reader.enable_history()
    if script is not None:
        try:
            reader.redirect(script)
        except InputRedirectError as exc:
            err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
            sys.exit(1)

    config = ReplConfig(
        prompt=prompt,
        output_format=output_format.lower(),
        show_tokens=show_tokens,
        max_depth=_parser_config(max_depth).max_depth,
    )
    stats = ReplSession(reader, console=console, err_console=err_console, config=config).run()

    if batch:
        console.print(
            f"\n[bold]{stats.commands}[/bold] command(s), [bold]{stats.errors}[/bold] error(s)"
        )
        if stats.errors:
            sys.exit(1)


if __name__ == "__main__":
    cli()
