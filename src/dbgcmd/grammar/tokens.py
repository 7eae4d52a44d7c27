"""Token definitions for the debugger command language.

Every punctuation mark, operator, and literal kind is represented as a
member of the ``TokenType`` enum, and every scanned token is represented
by a ``Token`` dataclass that carries its type, raw text, and column
range.  A command always fits on a single input line, so positions are
plain columns rather than line/column pairs.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final


class TokenType(Enum):
    """Exhaustive enumeration of all command-language token types."""

    # -----------------------------------------------------------------
    # Names and literals
    # -----------------------------------------------------------------
    IDENTIFIER = auto()
    INTEGER = auto()
    FLOAT = auto()
    STRING = auto()
    VARIABLE = auto()  # $name

    # -----------------------------------------------------------------
    # Grouping
    # -----------------------------------------------------------------
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()

    # -----------------------------------------------------------------
    # Arithmetic operators
    # -----------------------------------------------------------------
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()

    # -----------------------------------------------------------------
    # Unary-only operators
    # -----------------------------------------------------------------
    EXCLAMATION = auto()
    TILDE = auto()

    # -----------------------------------------------------------------
    # Comparison operators
    # -----------------------------------------------------------------
    DOUBLE_EQUAL = auto()       # ==
    EXCLAMATION_EQUAL = auto()  # !=
    GREATER = auto()            # >
    LESS = auto()               # <
    GREATER_EQUAL = auto()      # >=
    LESS_EQUAL = auto()         # <=

    # -----------------------------------------------------------------
    # Logical and bitwise operators
    # -----------------------------------------------------------------
    DOUBLE_AMPERSAND = auto()   # &&
    DOUBLE_PIPE = auto()        # ||
    AMPERSAND = auto()
    PIPE = auto()
    CARET = auto()
    DOUBLE_LESS = auto()        # <<
    DOUBLE_GREATER = auto()     # >>

    # -----------------------------------------------------------------
    # Structure
    # -----------------------------------------------------------------
    UNKNOWN = auto()
    EOF = auto()


# Operator spellings, longest first so that the lexer can match greedily.
OPERATORS: Final[dict[str, TokenType]] = {
    "==": TokenType.DOUBLE_EQUAL,
    "!=": TokenType.EXCLAMATION_EQUAL,
    ">=": TokenType.GREATER_EQUAL,
    "<=": TokenType.LESS_EQUAL,
    "&&": TokenType.DOUBLE_AMPERSAND,
    "||": TokenType.DOUBLE_PIPE,
    "<<": TokenType.DOUBLE_LESS,
    ">>": TokenType.DOUBLE_GREATER,
    "(": TokenType.OPEN_PAREN,
    ")": TokenType.CLOSE_PAREN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "!": TokenType.EXCLAMATION,
    "~": TokenType.TILDE,
    ">": TokenType.GREATER,
    "<": TokenType.LESS,
    "&": TokenType.AMPERSAND,
    "|": TokenType.PIPE,
    "^": TokenType.CARET,
}

# Reverse of OPERATORS, used when rendering operators back to text.
SPELLINGS: Final[dict[TokenType, str]] = {
    token_type: text for text, token_type in OPERATORS.items()
}


@dataclass(frozen=True, slots=True)
class Token:
    """A single scanned token with its column range.

    Parameters
    ----------
    type:
        The ``TokenType`` variant for this token.
    value:
        The raw text as it appeared on the input line.
    column_start:
        0-based column of the first character.
    column_end:
        0-based column of the last character (inclusive).  The ``EOF``
        token has ``column_start == column_end == len(line)``.
    """

    type: TokenType
    value: str
    column_start: int
    column_end: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.column_start}-{self.column_end})"

    @property
    def is_punctuation(self) -> bool:
        """Return True if this token is an operator or a grouping delimiter."""
        return self.type in SPELLINGS
