"""Diagnostics module.

Exports the sink protocol, the ``Diagnostic`` record, and the built-in
sinks.
"""
from __future__ import annotations

from dbgcmd.diagnostics.console import ConsoleDiagnosticSink
from dbgcmd.diagnostics.diagnostics import (
    Diagnostic,
    DiagnosticCollector,
    DiagnosticSink,
    LoggingDiagnosticSink,
)

__all__ = [
    "Diagnostic",
    "DiagnosticSink",
    "DiagnosticCollector",
    "LoggingDiagnosticSink",
    "ConsoleDiagnosticSink",
]
