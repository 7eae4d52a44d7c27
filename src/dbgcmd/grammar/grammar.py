"""Formal grammar of the debugger command language.

This module documents the grammar as EBNF-style string constants.  The
grammar is implemented by the hand-written parser in ``dbgcmd.parser``;
these constants are reference documentation, printed by
``dbgcmd grammar``.

Grammar notation used here:
    ``::=``       production rule
    ``|``         alternation
    ``( )``       grouping
    ``[ ]``       optional (zero or one)
    ``{ }``       zero or more repetitions
    ``IDENT``     terminal: ``[A-Za-z_][A-Za-z0-9_]*``
    ``INTEGER``   terminal: decimal digits
    ``FLOAT``     terminal: digits ``.`` digits, optional exponent
    ``STRING``    terminal: double-quoted, backslash escapes
    ``VARIABLE``  terminal: ``$`` followed by word characters
"""
from __future__ import annotations

from dbgcmd.ast.nodes import BinaryOpcode
from dbgcmd.grammar.operators import BINARY_PRECEDENCE, binary_op_symbol

# ---------------------------------------------------------------------------
# Top-level
# ---------------------------------------------------------------------------

GRAMMAR_COMMAND = """
command ::= IDENT { unary_expr } EOF
"""

# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

GRAMMAR_EXPRESSION = """
expression ::= unary_expr { binary_op unary_expr }

unary_expr ::= ( '+' | '-' | '!' | '~' ) unary_expr
             | primary_expr

primary_expr ::= IDENT
               | INTEGER
               | FLOAT
               | STRING
               | VARIABLE
               | '(' expression ')'
"""


def _precedence_table() -> str:
    """Render the binary operator precedence levels, tightest first."""
    levels: dict[int, list[str]] = {}
    for op, precedence in BINARY_PRECEDENCE.items():
        if op is BinaryOpcode.NONE:
            continue
        levels.setdefault(precedence, []).append(binary_op_symbol(op))
    rows = [
        f"{precedence:>5}  {' '.join(symbols)}"
        for precedence, symbols in sorted(levels.items(), reverse=True)
    ]
    return "\nbinary_op precedence (higher binds tighter, all left-associative):\n" + "\n".join(rows) + "\n"


GRAMMAR_PRECEDENCE = _precedence_table()

FULL_GRAMMAR = GRAMMAR_COMMAND + GRAMMAR_EXPRESSION + GRAMMAR_PRECEDENCE
