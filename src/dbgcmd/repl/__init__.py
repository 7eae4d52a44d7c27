"""REPL module.

Exports the interactive session, its configuration, and the rich
renderers it uses.
"""
from __future__ import annotations

from dbgcmd.repl.render import command_tree, expression_tree, token_table
from dbgcmd.repl.session import OUTPUT_FORMATS, ReplConfig, ReplSession, ReplStats

__all__ = [
    "ReplSession",
    "ReplConfig",
    "ReplStats",
    "OUTPUT_FORMATS",
    "command_tree",
    "expression_tree",
    "token_table",
]
