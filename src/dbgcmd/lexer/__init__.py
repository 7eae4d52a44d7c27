"""Command-line lexer module.

Exports the ``Lexer`` class, the ``tokenize`` convenience function, and
the string-literal decoder used by the parser.
"""
from __future__ import annotations

from dbgcmd.lexer.lexer import Lexer, decode_string_literal, tokenize

__all__ = ["Lexer", "tokenize", "decode_string_literal"]
