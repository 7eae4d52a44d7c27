"""Line-input module.

Exports the ``InputReader`` and its redirection error.
"""
from __future__ import annotations

from dbgcmd.input.reader import (
    INTERACTIVE_SOURCE,
    MAX_INPUT_STACK_SIZE,
    InputReader,
    InputRedirectError,
)

__all__ = [
    "InputReader",
    "InputRedirectError",
    "MAX_INPUT_STACK_SIZE",
    "INTERACTIVE_SOURCE",
]
