"""Command-language grammar module.

Exports token definitions, the operator tables, and the grammar reference
text.
"""
from __future__ import annotations

from dbgcmd.grammar.grammar import (
    FULL_GRAMMAR,
    GRAMMAR_COMMAND,
    GRAMMAR_EXPRESSION,
    GRAMMAR_PRECEDENCE,
)
from dbgcmd.grammar.operators import (
    BINARY_PRECEDENCE,
    BINARY_TOKEN_MAP,
    UNARY_TOKEN_MAP,
    binary_op_precedence,
    binary_op_symbol,
    token_type_to_binary_opcode,
    token_type_to_unary_opcode,
    unary_op_symbol,
)
from dbgcmd.grammar.tokens import OPERATORS, SPELLINGS, Token, TokenType

__all__ = [
    # Token types
    "TokenType",
    "Token",
    "OPERATORS",
    "SPELLINGS",
    # Operator tables
    "UNARY_TOKEN_MAP",
    "BINARY_TOKEN_MAP",
    "BINARY_PRECEDENCE",
    "token_type_to_unary_opcode",
    "token_type_to_binary_opcode",
    "binary_op_precedence",
    "unary_op_symbol",
    "binary_op_symbol",
    # Grammar reference
    "FULL_GRAMMAR",
    "GRAMMAR_COMMAND",
    "GRAMMAR_EXPRESSION",
    "GRAMMAR_PRECEDENCE",
]
