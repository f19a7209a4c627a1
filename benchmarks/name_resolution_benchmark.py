#!/usr/bin/env python3
"""
Name-resolution overhead benchmark.

Compares raw NumPy matrix products against the named versions and reports
how many bytes the name-derivation path allocates once its memo is warm.
"""

from __future__ import annotations

import argparse
import sys
import time
import tracemalloc
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

import numpy as np

from nameddims import NamedArray, matrix_prod_names


@dataclass
class BenchmarkResult:
    case: str
    min_s: float
    mean_s: float
    iterations: int
    alloc_bytes: Optional[int]


def bench(fn: Callable[[], Any], *, iterations: int, warmup: int) -> List[float]:
    timings = []
    for step in range(iterations + warmup):
        start = time.perf_counter()
        fn()
        elapsed = time.perf_counter() - start
        if step >= warmup:
            timings.append(elapsed)
    return timings


def measure_allocations(fn: Callable[[], Any], *, repeats: int) -> int:
    fn()
    tracemalloc.start()
    try:
        before, _ = tracemalloc.get_traced_memory()
        for _ in range(repeats):
            fn()
        after, _ = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()
    return max(after - before, 0)


def run_case(
    case: str,
    fn: Callable[[], Any],
    *,
    iterations: int,
    warmup: int,
    track_allocations: bool,
) -> BenchmarkResult:
    timings = bench(fn, iterations=iterations, warmup=warmup)
    alloc = measure_allocations(fn, repeats=iterations) if track_allocations else None
    return BenchmarkResult(
        case=case,
        min_s=min(timings),
        mean_s=sum(timings) / len(timings),
        iterations=iterations,
        alloc_bytes=alloc,
    )


def format_results(results: Iterable[BenchmarkResult]) -> str:
    header = f"{'case':<16} {'min (us)':>12} {'mean (us)':>12} {'iters':>8} {'alloc (B)':>10}"
    rows = [header]
    for result in results:
        alloc = "-" if result.alloc_bytes is None else str(result.alloc_bytes)
        rows.append(
            f"{result.case:<16} {result.min_s * 1e6:12.3f} {result.mean_s * 1e6:12.3f} "
            f"{result.iterations:8d} {alloc:>10}"
        )
    return "\n".join(rows)


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark named matrix products against raw NumPy.")
    parser.add_argument("--size", type=int, default=64, help="Square matrix size (default: 64).")
    parser.add_argument("--seed", type=int, default=2024, help="Random seed for inputs (default: 2024).")
    parser.add_argument(
        "--iterations", type=int, default=1000, help="Timed iterations per case (default: 1000)."
    )
    parser.add_argument(
        "--warmup", type=int, default=50, help="Warmup iterations to discard (default: 50)."
    )
    return parser.parse_args(argv)


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    if args.size <= 0 or args.iterations <= 0:
        print("--size and --iterations must be positive", file=sys.stderr)
        return 1
    rng = np.random.default_rng(args.seed)
    a = rng.standard_normal((args.size, args.size))
    b = rng.standard_normal((args.size, args.size))
    v = rng.standard_normal(args.size)
    named_a = NamedArray(a, ("row", "k"))
    named_b = NamedArray(b, ("k", "col"))
    named_v = NamedArray(v, ("k",))

    cases = [
        ("derive names", lambda: matrix_prod_names(("row", "k"), ("k", "col")), True),
        ("raw mat @ mat", lambda: a @ b, False),
        ("named mat @ mat", lambda: named_a @ named_b, False),
        ("raw mat @ vec", lambda: a @ v, False),
        ("named mat @ vec", lambda: named_a @ named_v, False),
    ]
    results = [
        run_case(name, fn, iterations=args.iterations, warmup=args.warmup, track_allocations=track)
        for name, fn, track in cases
    ]
    print(format_results(results))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
