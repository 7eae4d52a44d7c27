"""Operator lookup tables.

Three read-only mappings drive the expression parser:

* token type -> unary opcode
* token type -> binary opcode
* binary opcode -> precedence (higher binds tighter)

The tables are built once at import time and wrapped in
``MappingProxyType`` so they can be shared by every parser without
copying.  Lookups for tokens that are not operators return the ``NONE``
opcode, and ``NONE`` has precedence ``-1`` so it never satisfies the
"precedence >= floor" test that keeps the climbing loop going.
"""
from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from dbgcmd.ast.nodes import BinaryOpcode, UnaryOpcode
from dbgcmd.grammar.tokens import SPELLINGS, TokenType

UNARY_TOKEN_MAP: Final[Mapping[TokenType, UnaryOpcode]] = MappingProxyType({
    TokenType.PLUS: UnaryOpcode.PLUS,
    TokenType.MINUS: UnaryOpcode.MINUS,
    TokenType.EXCLAMATION: UnaryOpcode.LOGIC_NEGATE,
    TokenType.TILDE: UnaryOpcode.BIT_NEGATE,
})

BINARY_TOKEN_MAP: Final[Mapping[TokenType, BinaryOpcode]] = MappingProxyType({
    TokenType.PLUS: BinaryOpcode.ADD,
    TokenType.MINUS: BinaryOpcode.SUBTRACT,
    TokenType.STAR: BinaryOpcode.MULTIPLY,
    TokenType.SLASH: BinaryOpcode.DIVIDE,
    TokenType.PERCENT: BinaryOpcode.MOD,
    TokenType.DOUBLE_EQUAL: BinaryOpcode.EQUALS,
    TokenType.EXCLAMATION_EQUAL: BinaryOpcode.NOT_EQUALS,
    TokenType.GREATER: BinaryOpcode.GREATER_THAN,
    TokenType.LESS: BinaryOpcode.LESS_THAN,
    TokenType.GREATER_EQUAL: BinaryOpcode.GREATER_THAN_OR_EQUALS,
    TokenType.LESS_EQUAL: BinaryOpcode.LESS_THAN_OR_EQUALS,
    TokenType.DOUBLE_AMPERSAND: BinaryOpcode.LOGIC_AND,
    TokenType.DOUBLE_PIPE: BinaryOpcode.LOGIC_OR,
    TokenType.AMPERSAND: BinaryOpcode.BIT_AND,
    TokenType.PIPE: BinaryOpcode.BIT_OR,
    TokenType.CARET: BinaryOpcode.BIT_XOR,
    TokenType.DOUBLE_LESS: BinaryOpcode.LEFT_SHIFT,
    TokenType.DOUBLE_GREATER: BinaryOpcode.RIGHT_SHIFT,
})

BINARY_PRECEDENCE: Final[Mapping[BinaryOpcode, int]] = MappingProxyType({
    BinaryOpcode.MULTIPLY: 700,
    BinaryOpcode.DIVIDE: 700,
    BinaryOpcode.MOD: 700,

    BinaryOpcode.ADD: 600,
    BinaryOpcode.SUBTRACT: 600,

    BinaryOpcode.LEFT_SHIFT: 500,
    BinaryOpcode.RIGHT_SHIFT: 500,

    BinaryOpcode.GREATER_THAN: 400,
    BinaryOpcode.LESS_THAN: 400,
    BinaryOpcode.GREATER_THAN_OR_EQUALS: 400,
    BinaryOpcode.LESS_THAN_OR_EQUALS: 400,

    BinaryOpcode.EQUALS: 300,
    BinaryOpcode.NOT_EQUALS: 300,

    BinaryOpcode.BIT_AND: 266,
    BinaryOpcode.BIT_XOR: 233,
    BinaryOpcode.BIT_OR: 200,

    BinaryOpcode.LOGIC_AND: 150,
    BinaryOpcode.LOGIC_OR: 100,

    BinaryOpcode.NONE: -1,
})

_UNARY_SYMBOLS: Final[Mapping[UnaryOpcode, str]] = MappingProxyType({
    op: SPELLINGS[token_type] for token_type, op in UNARY_TOKEN_MAP.items()
})

_BINARY_SYMBOLS: Final[Mapping[BinaryOpcode, str]] = MappingProxyType({
    op: SPELLINGS[token_type] for token_type, op in BINARY_TOKEN_MAP.items()
})


def token_type_to_unary_opcode(token_type: TokenType) -> UnaryOpcode:
    """Return the unary operator for ``token_type``, or ``UnaryOpcode.NONE``."""
    return UNARY_TOKEN_MAP.get(token_type, UnaryOpcode.NONE)


def token_type_to_binary_opcode(token_type: TokenType) -> BinaryOpcode:
    """Return the binary operator for ``token_type``, or ``BinaryOpcode.NONE``."""
    return BINARY_TOKEN_MAP.get(token_type, BinaryOpcode.NONE)


def binary_op_precedence(op: BinaryOpcode) -> int:
    """Return the precedence of ``op`` (higher binds tighter)."""
    return BINARY_PRECEDENCE[op]


def unary_op_symbol(op: UnaryOpcode) -> str:
    """Return the source spelling of a unary operator, e.g. ``"~"``.

    Raises
    ------
    KeyError
        For ``UnaryOpcode.NONE``, which has no spelling.
    """
    return _UNARY_SYMBOLS[op]


def binary_op_symbol(op: BinaryOpcode) -> str:
    """Return the source spelling of a binary operator, e.g. ``"<<"``.

    Raises
    ------
    KeyError
        For ``BinaryOpcode.NONE``, which has no spelling.
    """
    return _BINARY_SYMBOLS[op]
