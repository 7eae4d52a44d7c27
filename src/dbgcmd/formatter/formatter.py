"""Canonical formatter: AST → command-language source text.

The ``ExpressionFormatter`` renders expressions and commands with:

- single spaces around binary operators
- unary operators written directly against their operand
- parentheses only where precedence or associativity demands them

Command arguments are parsed as unary expressions, so an argument that is
a binary expression is always wrapped in parentheses.  Formatting a
parsed command and parsing the result again yields the same tree shape.

Usage
-----
::

    from dbgcmd.formatter import ExpressionFormatter
    from dbgcmd.parser import parse_command, parse_expression

    formatter = ExpressionFormatter()
    formatter.format_expression(parse_expression("((1+2))*3"))   # "(1 + 2) * 3"
    formatter.format_command(parse_command("x   1+2"))           # "x 1 +2"
"""
from __future__ import annotations

import math

from dbgcmd.ast.nodes import (
    BinaryOpExpr,
    Command,
    Expression,
    FloatExpr,
    IdentifierExpr,
    IntegerExpr,
    StringExpr,
    UnaryOpExpr,
    VariableExpr,
)
from dbgcmd.grammar.operators import binary_op_precedence, binary_op_symbol, unary_op_symbol

_STRING_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\0": "\\0",
}


class ExpressionFormatter:
    """Produces canonical source text from command and expression trees."""

    def format_command(self, command: Command) -> str:
        """Render ``command`` as a single input line.

        Parameters
        ----------
        command:
            The command to format.

        Returns
        -------
        str
            The command name followed by its arguments, space separated.
        """
        parts = [command.name]
        for arg in command.arguments:
            text = self.format_expression(arg)
            parts.append(f"({text})" if isinstance(arg, BinaryOpExpr) else text)
        return " ".join(parts)

    def format_expression(self, expr: Expression) -> str:
        """Render a single expression with minimal parentheses."""
        if isinstance(expr, IdentifierExpr):
            return expr.name
        if isinstance(expr, VariableExpr):
            return f"${expr.name}"
        if isinstance(expr, IntegerExpr):
            return str(expr.value)
        if isinstance(expr, FloatExpr):
            return self._format_float(expr.value)
        if isinstance(expr, StringExpr):
            return self._format_string(expr.value)
        if isinstance(expr, UnaryOpExpr):
            operand = self.format_expression(expr.operand)
            if isinstance(expr.operand, BinaryOpExpr):
                operand = f"({operand})"
            return f"{unary_op_symbol(expr.op)}{operand}"
        if isinstance(expr, BinaryOpExpr):
            precedence = binary_op_precedence(expr.op)
            left = self.format_expression(expr.left)
            right = self.format_expression(expr.right)
            # Left-associative: an equal-precedence right operand must keep
            # its parentheses, an equal-precedence left operand need not.
            if isinstance(expr.left, BinaryOpExpr) and binary_op_precedence(expr.left.op) < precedence:
                left = f"({left})"
            if isinstance(expr.right, BinaryOpExpr) and binary_op_precedence(expr.right.op) <= precedence:
                right = f"({right})"
            return f"{left} {binary_op_symbol(expr.op)} {right}"
        raise TypeError(f"Unknown expression type: {type(expr)}")

    @staticmethod
    def _format_string(value: str) -> str:
        """Render a Python string as a double-quoted literal."""
        escaped = "".join(_STRING_ESCAPES.get(ch, ch) for ch in value)
        return f'"{escaped}"'

    @staticmethod
    def _format_float(value: float) -> str:
        """Render a float so that it lexes back to the same value.

        Literals too large for a double parse as infinity, so infinity is
        written as the overflowing literal ``1e999``.
        """
        if math.isnan(value):
            raise ValueError("NaN has no literal form")
        if math.isinf(value):
            return "1e999" if value > 0 else "-1e999"
        return repr(value)


def format_command(command: Command) -> str:
    """Convenience function: format a ``Command`` to canonical text."""
    return ExpressionFormatter().format_command(command)


def format_expression(expr: Expression) -> str:
    """Convenience function: format an ``Expression`` to canonical text."""
    return ExpressionFormatter().format_expression(expr)
