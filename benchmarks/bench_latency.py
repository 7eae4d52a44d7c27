"""Benchmark: per-line parse latency (p50/p95/mean).

Parses one short and one deeply nested command repeatedly and reports the
latency distribution for each.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import dbgcmd
from dbgcmd.diagnostics import DiagnosticCollector

_WARMUP: int = 100
_ITERATIONS: int = 3_000

_SHORT_LINE = "print $sp"
_NESTED_LINE = "print " + "(" * 40 + "$a + $b * -$c" + ")" * 40


def _measure(operation: str, line: str) -> dict[str, object]:
    sink = DiagnosticCollector()
    for _ in range(_WARMUP):
        dbgcmd.parse(line, sink=sink)

    latencies_ms: list[float] = []
    for _ in range(_ITERATIONS):
        t0 = time.perf_counter()
        dbgcmd.parse(line, sink=sink)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": operation,
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_ms": round(sorted_lats[int(n * 0.50)], 4),
        "p95_ms": round(sorted_lats[min(int(n * 0.95), n - 1)], 4),
    }
    print(
        f"[bench_latency] {result['operation']}: "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


def bench_parse_latency() -> dict[str, object]:
    """Latency of parsing a two-token command."""
    return _measure("dbgcmd_parse_latency_short", _SHORT_LINE)


def bench_nested_parse_latency() -> dict[str, object]:
    """Latency of parsing an argument nested forty groups deep."""
    return _measure("dbgcmd_parse_latency_nested", _NESTED_LINE)


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "latency_baseline.json"
    results = [bench_parse_latency(), bench_nested_parse_latency()]
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(results, fh, indent=2)
    print(f"Results saved to {output_path}")
