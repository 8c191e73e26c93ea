"""Simple benchmarking harness for psquared.

Measures add() throughput (values/sec) and memory for both estimators on a
synthetic log-normal stream. Keeps dependencies minimal; for deeper profiling
integrate with py-spy or scalene externally.
"""
from __future__ import annotations

import argparse
import random
import time
import tracemalloc
from typing import List

from psquared import HistogramEstimator, QuantileEstimator


def synthetic_values(n: int, seed: int = 42) -> List[float]:
    rng = random.Random(seed)
    return [rng.lognormvariate(0.0, 1.0) for _ in range(n)]


def _measure(label: str, est, values: List[float]) -> None:
    tracemalloc.start()
    start = time.perf_counter()
    for x in values:
        est.add(x)
    elapsed = time.perf_counter() - start
    current, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()

    vps = len(values) / elapsed if elapsed else float("inf")
    print(f"{label}: Processed {len(values)} values in {elapsed:.3f}s -> {vps:,.0f} values/sec")
    print(f"{label}: Current mem ~{current/1024:.1f} KB; Peak mem ~{peak/1024:.1f} KB")


def run(samples: int, p: float = 0.99, buckets: int = 10, seed: int = 42) -> None:
    values = synthetic_values(samples, seed)
    quantile = QuantileEstimator(p)
    histogram = HistogramEstimator(buckets)
    _measure(repr(quantile), quantile, values)
    _measure(repr(histogram), histogram, values)
    print(f"p{p:g} estimate: {quantile.value():.6g}")


def main() -> int:
    ap = argparse.ArgumentParser(description="Benchmark psquared add() throughput")
    ap.add_argument("--samples", type=int, default=200000, help="Synthetic values per estimator")
    ap.add_argument("--p", type=float, default=0.99, help="Quantile estimator target")
    ap.add_argument("--buckets", type=int, default=10, help="Histogram estimator buckets")
    ap.add_argument("--seed", type=int, default=42)
    args = ap.parse_args()
    run(args.samples, p=args.p, buckets=args.buckets, seed=args.seed)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual use
    raise SystemExit(main())
