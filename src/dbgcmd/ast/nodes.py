"""AST node definitions for the debugger command language.

Every node produced by the parser is a frozen dataclass so that trees are
immutable values: no subtree is ever shared between two parents, and a
tree is released as a whole when its root ``Command`` goes away.  The
``Expression`` union covers all expression variants; downstream code
should dispatch with ``isinstance`` checks.

All nodes carry a ``Span`` recording the columns of the text they were
parsed from, so a backend can point diagnostics at the right place on the
input line.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


# ---------------------------------------------------------------------------
# Source location
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Span:
    """Inclusive column range ``[start, end]`` on a single input line.

    Parameters
    ----------
    start:
        0-based column of the first character.
    end:
        0-based column of the last character.
    """

    start: int
    end: int

    def __repr__(self) -> str:
        return f"Span({self.start}-{self.end})"

    @classmethod
    def unknown(cls) -> "Span":
        """Return a sentinel span used when position info is unavailable."""
        return cls(start=0, end=0)

    def merge(self, other: "Span") -> "Span":
        """Return a span that covers both ``self`` and ``other``."""
        return Span(start=min(self.start, other.start), end=max(self.end, other.end))


# ---------------------------------------------------------------------------
# Operator codes
# ---------------------------------------------------------------------------


class UnaryOpcode(Enum):
    """Prefix operators.  ``NONE`` means "not a unary operator"."""

    PLUS = auto()
    MINUS = auto()
    LOGIC_NEGATE = auto()
    BIT_NEGATE = auto()
    NONE = auto()


class BinaryOpcode(Enum):
    """Infix operators.  ``NONE`` means "not a binary operator"."""

    ADD = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    MOD = auto()
    EQUALS = auto()
    NOT_EQUALS = auto()
    GREATER_THAN = auto()
    LESS_THAN = auto()
    GREATER_THAN_OR_EQUALS = auto()
    LESS_THAN_OR_EQUALS = auto()
    LOGIC_AND = auto()
    LOGIC_OR = auto()
    BIT_AND = auto()
    BIT_OR = auto()
    BIT_XOR = auto()
    LEFT_SHIFT = auto()
    RIGHT_SHIFT = auto()
    NONE = auto()


# ---------------------------------------------------------------------------
# Leaf expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class IdentifierExpr:
    """A bare name, e.g. ``rip`` or a keyword argument such as ``all``."""

    name: str
    span: Span


@dataclass(frozen=True, slots=True)
class IntegerExpr:
    """A decimal integer literal, clamped to the signed 64-bit range."""

    value: int
    span: Span


@dataclass(frozen=True, slots=True)
class FloatExpr:
    """A floating-point literal."""

    value: float
    span: Span


@dataclass(frozen=True, slots=True)
class StringExpr:
    """A double-quoted string literal; ``value`` holds the unescaped text."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class VariableExpr:
    """A reference to a debugger-session variable, written ``$name``."""

    name: str
    span: Span


# ---------------------------------------------------------------------------
# Operator expressions
# ---------------------------------------------------------------------------

# Forward reference: operator nodes are recursive.
Expression = Union[
    "IdentifierExpr",
    "IntegerExpr",
    "FloatExpr",
    "StringExpr",
    "VariableExpr",
    "UnaryOpExpr",
    "BinaryOpExpr",
]


@dataclass(frozen=True, slots=True)
class UnaryOpExpr:
    """A prefix operator applied to one operand, e.g. ``-x`` or ``~$mask``.

    ``op_span`` is the operator token; ``span`` runs from the operator to
    the end of the operand.
    """

    op: UnaryOpcode
    operand: "Expression"
    span: Span
    op_span: Span


@dataclass(frozen=True, slots=True)
class BinaryOpExpr:
    """An infix operator expression, e.g. ``a + b`` or ``x << 2``.

    ``op_span`` is the operator token; ``span`` covers both operands.
    """

    op: BinaryOpcode
    left: "Expression"
    right: "Expression"
    span: Span
    op_span: Span


# ---------------------------------------------------------------------------
# Root node
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Command:
    """One parsed input line: a command name followed by its arguments.

    Parameters
    ----------
    name:
        The command keyword, e.g. ``print``.
    span:
        Columns of the command name token.
    arguments:
        Successfully parsed argument expressions in source order.  Arguments
        that failed to parse are omitted rather than represented by
        placeholders.
    """

    name: str
    span: Span
    arguments: tuple[Expression, ...] = ()

    @property
    def argument_count(self) -> int:
        """Return the number of successfully parsed arguments."""
        return len(self.arguments)


def expression_depth(expr: Expression) -> int:
    """Return the height of ``expr``: 1 for a leaf, plus 1 per operator level.

    Walks with an explicit stack, so arbitrarily deep trees are measured
    without recursion.
    """
    deepest = 0
    stack: list[tuple[Expression, int]] = [(expr, 1)]
    while stack:
        node, depth = stack.pop()
        deepest = max(deepest, depth)
        if isinstance(node, UnaryOpExpr):
            stack.append((node.operand, depth + 1))
        elif isinstance(node, BinaryOpExpr):
            stack.append((node.left, depth + 1))
            stack.append((node.right, depth + 1))
    return deepest
