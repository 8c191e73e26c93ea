"""Snapshot helper for the estimators.

Returns a JSON-friendly dict (see schemas/metrics.schema.json) without
touching estimator state. Not-ready and non-finite estimates are reported
as None so the output stays strict JSON.
"""
from __future__ import annotations

import math
from typing import Any, Dict, List, Union

from .histogram import HistogramEstimator
from .quantile import QuantileEstimator

Estimator = Union[QuantileEstimator, HistogramEstimator]


def marker_labels(est: Estimator) -> List[str]:
    if isinstance(est, QuantileEstimator):
        p = est.p
        return ["min", f"p{p / 2:g}", f"p{p:g}", f"p{(1 + p) / 2:g}", "max"]
    b = est.buckets
    return ["min"] + [f"{i}/{b}" for i in range(1, b)] + ["max"]


def estimator_metrics(est: Estimator) -> Dict[str, Any]:
    markers = []
    for marker, label in enumerate(marker_labels(est), start=1):
        value = est.estimate(marker)
        markers.append(
            {
                "marker": marker,
                "label": label,
                "estimate": value if math.isfinite(value) else None,
                "count": est.count(marker),
            }
        )
    out: Dict[str, Any] = {
        "kind": "quantile" if isinstance(est, QuantileEstimator) else "histogram",
        "ready": est.ready,
        "observations": est.count(est.markers),
        "markers": markers,
    }
    if isinstance(est, QuantileEstimator):
        out["p"] = est.p
    else:
        out["buckets"] = est.buckets
    return out

__all__ = ["estimator_metrics", "marker_labels"]
