#!/usr/bin/env python
"""Simulation harness for streaming quantile accuracy.

Feeds synthetic streams through QuantileEstimator / HistogramEstimator and
reports the absolute error against numpy's exact percentile at checkpoints.

Scenarios:
1. stationary: N(0,1).
2. lognormal: skewed LogNormal(0,1).
3. shift: mean jumps from 0 to 2 halfway through.
4. gradual: mean drifts linearly from 0 to 2.

Run:
    python scripts/sim_quantiles.py --samples 50000 --quantiles 0.5 0.99 --scenario shift
"""
from __future__ import annotations
import argparse
import json
from dataclasses import dataclass
from typing import Any, Dict, List

import numpy as np

from psquared import HistogramEstimator, QuantileEstimator


@dataclass
class ScenarioConfig:
    name: str
    samples: int
    quantiles: List[float]
    buckets: int
    checkpoints: int


def generate(name: str, samples: int, rng: np.random.Generator) -> np.ndarray:
    if name == "stationary":
        return rng.normal(0.0, 1.0, samples)
    if name == "lognormal":
        return rng.lognormal(0.0, 1.0, samples)
    if name == "shift":
        half = samples // 2
        return np.concatenate([rng.normal(0.0, 1.0, half), rng.normal(2.0, 1.0, samples - half)])
    if name == "gradual":
        return rng.normal(0.0, 1.0, samples) + np.linspace(0.0, 2.0, samples)
    raise ValueError(f"unknown scenario {name!r}")


def simulate(cfg: ScenarioConfig, seed: int) -> Dict[str, Any]:
    data = generate(cfg.name, cfg.samples, np.random.default_rng(seed))
    ests = {q: QuantileEstimator(q) for q in cfg.quantiles}
    hist = HistogramEstimator(cfg.buckets)
    step = max(1, cfg.samples // max(1, cfg.checkpoints))
    rows: List[Dict[str, Any]] = []
    for idx, x in enumerate(data, start=1):
        for est in ests.values():
            est.add(float(x))
        hist.add(float(x))
        if idx % step == 0 or idx == cfg.samples:
            seen = data[:idx]
            row: Dict[str, Any] = {"n": idx}
            for q, est in ests.items():
                exact = float(np.percentile(seen, q * 100.0))
                row[f"q{q:g}"] = {"estimate": est.value(), "exact": exact, "abs_err": abs(est.value() - exact)}
            edges = hist.boundaries()
            exact_edges = np.percentile(seen, np.linspace(0.0, 100.0, cfg.buckets + 1))
            row["histogram_max_abs_err"] = float(np.max(np.abs(np.asarray(edges) - exact_edges)))
            rows.append(row)
    return {
        "scenario": cfg.name,
        "samples": cfg.samples,
        "quantiles": cfg.quantiles,
        "buckets": cfg.buckets,
        "checkpoints": rows,
    }


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser("sim-quantiles", description="Streaming quantile accuracy simulation")
    p.add_argument("--samples", type=int, default=10000, help="Number of synthetic samples")
    p.add_argument("--quantiles", nargs="*", type=float, default=[0.5, 0.99], help="Target quantiles")
    p.add_argument("--buckets", type=int, default=10, help="Histogram buckets")
    p.add_argument("--checkpoints", type=int, default=10, help="How many times to compare against exact values")
    p.add_argument("--scenario", choices=["stationary", "lognormal", "shift", "gradual"], default="stationary")
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--out", help="Write JSON results to this file")
    return p.parse_args()


def main() -> int:
    args = parse_args()
    cfg = ScenarioConfig(
        name=args.scenario,
        samples=args.samples,
        quantiles=args.quantiles,
        buckets=args.buckets,
        checkpoints=args.checkpoints,
    )
    summary = simulate(cfg, args.seed)
    if args.out:
        with open(args.out, "w", encoding="utf-8") as fh:
            json.dump(summary, fh, indent=2)
        print(f"Wrote results to {args.out}")
    else:
        print(json.dumps(summary, indent=2))
    return 0

if __name__ == "__main__":  # pragma: no cover - manual use
    raise SystemExit(main())
