"""Benchmark: lexer and command-parser throughput.

Counts how many input lines per second ``dbgcmd.tokenize`` and
``dbgcmd.parse`` can process for a representative mix of debugger
commands.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import dbgcmd
from dbgcmd.diagnostics import DiagnosticCollector

_ITERATIONS: int = 2_000

_SAMPLE_LINES: tuple[str, ...] = (
    "continue",
    "print $sp (8 * 4)",
    'set $label "loop\\tstart"',
    "x (($base + $index * 8) & ~7) 16",
    "break (($rip - 16) >> 2) ($flags & 1 == 0 || $count > 10)",
    "print -(1 + 2) !$ok 3.25e2",
    "disassemble $pc (($pc + 64) << 1 | 1)",
)


def _run(operation: str, fn: object) -> dict[str, object]:
    start = time.perf_counter()
    for _ in range(_ITERATIONS):
        for line in _SAMPLE_LINES:
            fn(line)  # type: ignore[operator]
    total = time.perf_counter() - start
    lines = _ITERATIONS * len(_SAMPLE_LINES)

    result: dict[str, object] = {
        "operation": operation,
        "iterations": lines,
        "total_seconds": round(total, 4),
        "ops_per_second": round(lines / total, 1),
        "avg_latency_ms": round(total / lines * 1000, 4),
    }
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} lines/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_tokenize_throughput() -> dict[str, object]:
    """Benchmark lexing alone.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    return _run("dbgcmd_tokenize_throughput", dbgcmd.tokenize)


def bench_parse_throughput() -> dict[str, object]:
    """Benchmark lexing plus command parsing.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    sink = DiagnosticCollector()
    return _run("dbgcmd_parse_throughput", lambda line: dbgcmd.parse(line, sink=sink))


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)

    for bench_fn, fname in [
        (bench_tokenize_throughput, "tokenize_throughput_baseline.json"),
        (bench_parse_throughput, "parse_throughput_baseline.json"),
    ]:
        result = bench_fn()
        output_path = results_dir / fname
        with open(output_path, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
        print(f"Results saved to {output_path}")
