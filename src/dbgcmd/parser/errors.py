"""Syntax error catalogue for the command parser.

The parser reports errors to a diagnostic sink instead of raising, so the
"error types" here are just the fixed set of messages it can emit.  All
of them are plain syntax errors; the distinction exists only to keep the
wording in one place.
"""
from __future__ import annotations

from enum import Enum


class SyntaxErrorKind(Enum):
    """Every diagnostic the parser can report, valued by its message.

    UNMATCHED_PARENTHESES
        A ``)`` with no opener (reported at the ``)``), or a ``(`` whose
        group never closed (reported at the ``(``).
    INVALID_CHARACTER
        The lexer produced an ``UNKNOWN`` token.
    EXPECTED_PRIMARY
        An operator or the end of the line appeared where an operand was
        required.
    EXPECTED_COMMAND
        The line does not start with a command name.
    NESTING_TOO_DEEP
        Parentheses or unary operators nested beyond the configured limit.
    """

    UNMATCHED_PARENTHESES = "unmatched parentheses"
    INVALID_CHARACTER = "invalid character in input"
    EXPECTED_PRIMARY = "expected primary expression"
    EXPECTED_COMMAND = "expected command"
    NESTING_TOO_DEEP = "expression nested too deeply"

    def __str__(self) -> str:
        return self.value
