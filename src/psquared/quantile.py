"""Streaming estimate of a single quantile using the P² algorithm.

Five markers track the minimum, the p/2, p and (1+p)/2 quantiles, and the
maximum. Memory O(1), update O(1). The estimate converges as more values are
added; it is never exact beyond the first five observations.
"""
from __future__ import annotations

import math
from typing import List, Sequence

from .errors import ConfigurationError
from .markers import MarkerSet

QUANTILE_MARKERS = 5


class QuantileEstimator(MarkerSet):
    """P² estimator for the ``p`` quantile.

    Markers for ``estimate``/``count``:

    * 1 = min
    * 2 = p/2
    * 3 = p
    * 4 = (1+p)/2
    * 5 = max
    """

    def __init__(self, p: float) -> None:
        try:
            p = float(p)
        except (TypeError, ValueError):
            raise ConfigurationError(f"p_quantile must be a number, got {p!r}") from None
        if not 0.0 < p < 1.0:
            raise ConfigurationError("p_quantile out of range 0 < p < 1")
        self._p = p
        self._n1: List[float] = [0.0] * QUANTILE_MARKERS  # desired marker positions
        super().__init__(QUANTILE_MARKERS)

    def __repr__(self) -> str:
        return f"QuantileEstimator({self._p} p_quantile)"

    @property
    def p(self) -> float:
        return self._p

    def _reset_desired(self) -> None:
        p = self._p
        n1 = self._n1
        n1[0] = 1.0
        n1[1] = 1.0 + 2.0 * p
        n1[2] = 1.0 + 4.0 * p
        n1[3] = 3.0 + 2.0 * p
        n1[4] = 5.0

    def _update_desired(self) -> Sequence[float]:
        p = self._p
        n1 = self._n1
        n1[1] += p / 2.0
        n1[2] += p
        n1[3] += (1.0 + p) / 2.0
        n1[4] += 1.0
        return n1

    def add(self, x: float) -> float:
        """Observe one value and return the current p estimate.

        Returns NaN until five values have been seen. NaN input is not counted:
        it returns NaN before the estimator is ready and the unchanged
        estimate afterwards.
        """
        x = float(x)
        if math.isnan(x):
            return x if self._fill else self._q[2]
        self._observe(x)
        if self._fill:
            return math.nan
        return self._q[2]

    def value(self) -> float:
        """Current p estimate (marker 3); NaN until ready."""
        return self.estimate(3)


__all__ = ["QuantileEstimator", "QUANTILE_MARKERS"]
