"""AST module.

Exports all AST node types and the serializer for converting trees to
and from JSON/YAML.
"""
from __future__ import annotations

from dbgcmd.ast.nodes import (
    BinaryOpcode,
    BinaryOpExpr,
    Command,
    Expression,
    FloatExpr,
    IdentifierExpr,
    IntegerExpr,
    Span,
    StringExpr,
    UnaryOpcode,
    UnaryOpExpr,
    VariableExpr,
    expression_depth,
)
from dbgcmd.ast.serializer import AstSerializer

__all__ = [
    # Core node types
    "Span",
    "Command",
    # Opcodes
    "UnaryOpcode",
    "BinaryOpcode",
    # Expression types
    "Expression",
    "IdentifierExpr",
    "IntegerExpr",
    "FloatExpr",
    "StringExpr",
    "VariableExpr",
    "UnaryOpExpr",
    "BinaryOpExpr",
    "expression_depth",
    # Serializer
    "AstSerializer",
]
