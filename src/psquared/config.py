from dataclasses import dataclass


# Histogram bucket bounds (inclusive)
MIN_BUCKETS = 4
MAX_BUCKETS = 65534


@dataclass
class EstimatorConfig:
    # Target probability for the single-quantile estimator, exclusive (0,1)
    p: float = 0.5
    # Equiprobable bucket count for the histogram estimator
    buckets: int = 10
    # Digits shown when rendering estimates
    precision: int = 6
    # Print a running estimate every N accepted values (0 = off)
    progress_every: int = 0


# Named targets for the quantile command
QUANTILE_PRESETS = {
    "median": 0.5,
    "p90": 0.9,
    "p95": 0.95,
    "p99": 0.99,
    "p999": 0.999,
}
