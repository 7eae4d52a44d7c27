"""Command parser module.

Exports the ``Parser`` class, its configuration, the token cursor, the
``parse_command`` / ``parse_expression`` convenience functions, and the
syntax error catalogue.
"""
from __future__ import annotations

from dbgcmd.parser.errors import SyntaxErrorKind
from dbgcmd.parser.parser import (
    DEFAULT_MAX_DEPTH,
    Parser,
    ParserConfig,
    parse_command,
    parse_expression,
)
from dbgcmd.parser.stream import TokenStream

__all__ = [
    "Parser",
    "ParserConfig",
    "DEFAULT_MAX_DEPTH",
    "TokenStream",
    "SyntaxErrorKind",
    "parse_command",
    "parse_expression",
]
