#!/usr/bin/env python3
"""Example: Quickstart — dbgcmd-lang

Minimal working example: tokenize a command line, parse it, inspect the
arguments, collect syntax errors, and print the command back as text.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install dbgcmd-lang
"""
from __future__ import annotations

import dbgcmd
from dbgcmd.ast import BinaryOpExpr, expression_depth
from dbgcmd.diagnostics import DiagnosticCollector

LINES = [
    "print $sp (8 * 4)",
    "x 4 ($base + $index << 3)",
    "break main (1 + 2",
    "step 1 @ 2",
]


def main() -> None:
    print(f"dbgcmd-lang version: {dbgcmd.__version__}")

    for line in LINES:
        print(f"\n> {line}")

        # Step 1: Tokenize
        tokens = dbgcmd.tokenize(line)
        print(f"  tokens: {' '.join(t.type.name for t in tokens)}")

        # Step 2: Parse, collecting errors instead of logging them
        sink = DiagnosticCollector()
        command = dbgcmd.parse(line, sink=sink)
        for diag in sink.diagnostics:
            print(f"  error at column {diag.column + 1}: {diag.message}")
        if command is None:
            continue

        # Step 3: Inspect the arguments
        print(f"  command '{command.name}' with {command.argument_count} argument(s)")
        for arg in command.arguments:
            depth = expression_depth(arg)
            kind = "binary" if isinstance(arg, BinaryOpExpr) else type(arg).__name__
            print(f"    {kind}: depth {depth}, columns {arg.span.start}-{arg.span.end}")

        # Step 4: Canonical text
        print(f"  formatted: {dbgcmd.format_command(command)}")


if __name__ == "__main__":
    main()
