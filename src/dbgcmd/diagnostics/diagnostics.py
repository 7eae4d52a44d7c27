"""Diagnostic sinks for syntax errors.

The parser never raises on bad input.  Instead it reports each syntax
error exactly once to a *sink*: any object with a
``report(message, column)`` method.  This module defines that protocol,
the ``Diagnostic`` record, and two general-purpose sinks:

``DiagnosticCollector``
    Keeps every report in memory; used by tests and by callers that want
    to inspect errors after a parse.
``LoggingDiagnosticSink``
    Forwards every report to the standard ``logging`` machinery at
    WARNING level; the default when no sink is supplied.

A terminal renderer lives in ``dbgcmd.diagnostics.console``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticSink(Protocol):
    """Anything that accepts ``(message, column)`` syntax-error reports."""

    def report(self, message: str, column: int) -> None:
        """Record one diagnostic anchored at a 0-based column."""


@dataclass(frozen=True)
class Diagnostic:
    """A single syntax error.

    Parameters
    ----------
    message:
        Human-readable description, e.g. ``"unmatched parentheses"``.
    column:
        0-based column on the input line the error is anchored to.
    """

    message: str
    column: int

    def __str__(self) -> str:
        return f"{self.column + 1}: error: {self.message}"


@dataclass
class DiagnosticCollector:
    """In-memory sink that records diagnostics in the order reported.

    Parameters
    ----------
    diagnostics:
        Initial list of diagnostics; normally left empty.
    """

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report(self, message: str, column: int) -> None:
        """Append a ``Diagnostic`` for this report."""
        self.diagnostics.append(Diagnostic(message=message, column=column))

    @property
    def has_errors(self) -> bool:
        """Return True if anything was reported."""
        return bool(self.diagnostics)

    @property
    def messages(self) -> list[str]:
        """Return just the messages, in report order."""
        return [d.message for d in self.diagnostics]

    def clear(self) -> None:
        """Forget every recorded diagnostic."""
        self.diagnostics.clear()

    def __len__(self) -> int:
        return len(self.diagnostics)


class LoggingDiagnosticSink:
    """Sink that logs each report at WARNING level.

    Parameters
    ----------
    source:
        Name of the input the line came from, used as a log prefix.
    """

    def __init__(self, source: str = "<input>") -> None:
        self._source = source

    def report(self, message: str, column: int) -> None:
        logger.warning("%s:%d: %s", self._source, column + 1, message)
