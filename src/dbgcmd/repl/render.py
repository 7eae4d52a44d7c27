"""Rich renderables for parsed commands and token lists."""
from __future__ import annotations

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from dbgcmd.ast.nodes import (
    BinaryOpExpr,
    Command,
    Expression,
    FloatExpr,
    IdentifierExpr,
    IntegerExpr,
    Span,
    StringExpr,
    UnaryOpExpr,
    VariableExpr,
)
from dbgcmd.grammar.operators import binary_op_symbol, unary_op_symbol
from dbgcmd.grammar.tokens import Token


def _loc(span: Span) -> str:
    return f"[dim]{span.start}-{span.end}[/dim]"


def _label(expr: Expression) -> str:
    if isinstance(expr, IdentifierExpr):
        return f"[cyan]Identifier[/cyan] {escape(expr.name)} {_loc(expr.span)}"
    if isinstance(expr, IntegerExpr):
        return f"[cyan]Integer[/cyan] {expr.value} {_loc(expr.span)}"
    if isinstance(expr, FloatExpr):
        return f"[cyan]Float[/cyan] {expr.value!r} {_loc(expr.span)}"
    if isinstance(expr, StringExpr):
        return f"[cyan]String[/cyan] {escape(repr(expr.value))} {_loc(expr.span)}"
    if isinstance(expr, VariableExpr):
        return f"[cyan]Variable[/cyan] ${escape(expr.name)} {_loc(expr.span)}"
    if isinstance(expr, UnaryOpExpr):
        symbol = escape(unary_op_symbol(expr.op))
        return f"[magenta]UnaryOp[/magenta] {expr.op.name} ({symbol}) {_loc(expr.op_span)}"
    if isinstance(expr, BinaryOpExpr):
        symbol = escape(binary_op_symbol(expr.op))
        return f"[magenta]BinaryOp[/magenta] {expr.op.name} ({symbol}) {_loc(expr.op_span)}"
    raise TypeError(f"Unknown expression type: {type(expr)}")


def _add_expression(parent: Tree, expr: Expression) -> None:
    pending: list[tuple[Tree, Expression]] = [(parent, expr)]
    while pending:
        node, current = pending.pop()
        branch = node.add(_label(current))
        # Right first so the left operand is added (and listed) first.
        if isinstance(current, UnaryOpExpr):
            pending.append((branch, current.operand))
        elif isinstance(current, BinaryOpExpr):
            pending.append((branch, current.right))
            pending.append((branch, current.left))


def command_tree(command: Command) -> Tree:
    """Build a ``rich`` tree showing every node of ``command``."""
    tree = Tree(f"[bold]Command[/bold] {escape(command.name)} {_loc(command.span)}")
    for arg in command.arguments:
        _add_expression(tree, arg)
    return tree


def expression_tree(expr: Expression) -> Tree:
    """Build a ``rich`` tree rooted at a bare expression."""
    tree = Tree(_label(expr))
    if isinstance(expr, UnaryOpExpr):
        _add_expression(tree, expr.operand)
    elif isinstance(expr, BinaryOpExpr):
        _add_expression(tree, expr.left)
        _add_expression(tree, expr.right)
    return tree


def token_table(tokens: list[Token]) -> Table:
    """Tabulate tokens with their types and column ranges.

    Operator and parenthesis rows are highlighted.
    """
    table = Table(title="Tokens", show_lines=False)
    table.add_column("Type", style="bold", min_width=12)
    table.add_column("Text")
    table.add_column("Columns", justify="right")
    for tok in tokens:
        table.add_row(
            tok.type.name,
            escape(tok.value),
            f"{tok.column_start}-{tok.column_end}",
            style="magenta" if tok.is_punctuation else None,
        )
    return table
