"""Line input with history and nested file redirection.

The REPL reads one line at a time from an ``InputReader``.  Normally the
line comes from the terminal; after ``redirect(path)`` lines are read
from that file instead until it is exhausted, at which point the file is
closed and reading falls back to whatever was underneath it (another
redirected file, or the terminal).  Redirections nest, so a script may
itself ``source`` another script, up to ``MAX_INPUT_STACK_SIZE`` levels.

The reader remembers where the most recent line came from so that
diagnostics can name the file and line number.
"""
from __future__ import annotations

import importlib
import importlib.util
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)

MAX_INPUT_STACK_SIZE = 128

INTERACTIVE_SOURCE = "<stdin>"


class InputRedirectError(Exception):
    """Raised when input cannot be redirected to a file.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    path:
        The path that was being redirected to.
    """

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


@dataclass
class _InputFrame:
    """One redirected file on the input stack."""

    path: str
    handle: TextIO
    line_number: int = 0


class InputReader:
    """Reads lines from a stack of redirected files, then the terminal.

    Parameters
    ----------
    prompt_fn:
        Called with the prompt to read an interactive line; must raise
        ``EOFError`` at end of input.  Defaults to the builtin ``input``.
    max_depth:
        Maximum number of simultaneously open redirections.
    """

    def __init__(
        self,
        prompt_fn: Callable[[str], str] | None = None,
        max_depth: int = MAX_INPUT_STACK_SIZE,
    ) -> None:
        self._prompt_fn: Callable[[str], str] = prompt_fn if prompt_fn is not None else input
        self._max_depth = max_depth
        self._stack: list[_InputFrame] = []
        self._interactive_lines = 0
        self._source = INTERACTIVE_SOURCE
        self._line_number = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def depth(self) -> int:
        """Number of redirected files currently open."""
        return len(self._stack)

    @property
    def source(self) -> str:
        """Where the most recently returned line came from."""
        return self._source

    @property
    def line_number(self) -> int:
        """1-based line number of the most recently returned line."""
        return self._line_number

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @staticmethod
    def enable_history() -> bool:
        """Turn on line editing and history for interactive input.

        Importing ``readline`` hooks it into the builtin ``input``, which
        then records every non-empty line.  Returns False on platforms
        without ``readline``.
        """
        if importlib.util.find_spec("readline") is None:
            return False
        importlib.import_module("readline")
        return True

    def redirect(self, path: str | Path) -> None:
        """Read subsequent lines from ``path`` until it is exhausted.

        Raises
        ------
        InputRedirectError
            If the stack is already ``max_depth`` deep or the file cannot
            be opened.
        """
        path = str(path)
        if len(self._stack) >= self._max_depth:
            raise InputRedirectError("Input redirection stack too deep", path)
        try:
            # Undecodable bytes become U+FFFD, which the lexer reports as invalid.
            handle = open(path, encoding="utf-8", errors="replace")  # noqa: SIM115
        except OSError as exc:
            raise InputRedirectError(f"Could not open file {path!r}: {exc.strerror or exc}", path) from exc
        self._stack.append(_InputFrame(path=path, handle=handle))
        logger.debug("Redirected input to %r (depth %d)", path, len(self._stack))

    def read_line(self, prompt: str = "") -> str | None:
        """Return the next line without its newline, or ``None`` at end of input.

        ``prompt`` is only shown when reading from the terminal.
        """
        while self._stack:
            frame = self._stack[-1]
            line = frame.handle.readline()
            if line == "":
                self._pop()
                continue
            frame.line_number += 1
            self._source = frame.path
            self._line_number = frame.line_number
            return line.rstrip("\r\n")

        try:
            line = self._prompt_fn(prompt)
        except EOFError:
            return None
        self._interactive_lines += 1
        self._source = INTERACTIVE_SOURCE
        self._line_number = self._interactive_lines
        return line

    def close(self) -> None:
        """Close every redirected file still open."""
        while self._stack:
            self._pop()

    def _pop(self) -> None:
        frame = self._stack.pop()
        frame.handle.close()
        logger.debug("Finished reading %r after %d line(s)", frame.path, frame.line_number)

    def __enter__(self) -> "InputReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
