"""Formatter module.

Exports the ``ExpressionFormatter`` class and convenience functions.
"""
from __future__ import annotations

from dbgcmd.formatter.formatter import ExpressionFormatter, format_command, format_expression

__all__ = ["ExpressionFormatter", "format_command", "format_expression"]
