"""Equiprobable histogram boundaries using the generalised P² algorithm.

``b`` buckets are tracked by ``b + 1`` markers: marker 1 is the minimum,
marker ``b + 1`` the maximum, and marker ``i + 1`` approximates the ``i/b``
quantile, so every bucket holds roughly ``1/b`` of the observations.
"""
from __future__ import annotations

import math
import operator
from typing import List, Sequence

from .config import MAX_BUCKETS, MIN_BUCKETS
from .errors import ConfigurationError
from .markers import MarkerSet


class HistogramEstimator(MarkerSet):
    def __init__(self, buckets: int) -> None:
        try:
            buckets = operator.index(buckets)
        except TypeError:
            raise ConfigurationError(f"buckets must be an integer, got {buckets!r}") from None
        if not MIN_BUCKETS <= buckets <= MAX_BUCKETS:
            raise ConfigurationError(
                f"buckets out of range {MIN_BUCKETS} <= buckets <= {MAX_BUCKETS}"
            )
        self._b = buckets
        super().__init__(buckets + 1)

    def __repr__(self) -> str:
        return f"HistogramEstimator({self._b} buckets)"

    @property
    def buckets(self) -> int:
        return self._b

    def _reset_desired(self) -> None:
        # Desired positions are derived from the total count on every update.
        pass

    def _update_desired(self) -> Sequence[float]:
        b = self._b
        total = self._n[b] - 1.0
        return [1.0 + i * total / b for i in range(b + 1)]

    def add(self, x: float) -> None:
        """Observe one value; NaN is ignored."""
        x = float(x)
        if math.isnan(x):
            return
        self._observe(x)

    def boundaries(self) -> List[float]:
        """Bucket edges from min to max (``buckets + 1`` values); NaN until ready."""
        return self.estimates()


__all__ = ["HistogramEstimator"]
