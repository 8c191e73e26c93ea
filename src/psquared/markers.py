"""Marker bookkeeping shared by the P² estimators (Jain & Chlamtac, 1985).

A ``MarkerSet`` holds ``m`` marker heights ``q`` and their integer positions
``n`` (kept as floats so the interpolation arithmetic needs no casts). The first
``m`` observations seed the markers; after that every observation bumps the
positions right of the cell it falls into and nudges interior markers one rank
towards their desired positions.

Subclasses decide where the markers *should* be by implementing
``_reset_desired`` and ``_update_desired``.
"""
from __future__ import annotations

import math
import operator
from bisect import bisect_right
from typing import Iterable, List, Sequence

from .errors import InvalidMarker
from .interpolate import linear, parabolic
from .logutil import get_logger


class MarkerSet:
    def __init__(self, size: int) -> None:
        self._size = size
        self._q: List[float] = [0.0] * size  # marker heights
        self._n: List[float] = [0.0] * size  # marker positions
        self._fill = size  # observations still needed to seed the markers
        self.clear()

    # -- hooks -----------------------------------------------------------------
    def _reset_desired(self) -> None:
        raise NotImplementedError

    def _update_desired(self) -> Sequence[float]:
        """Advance to the desired positions for the current count and return them."""
        raise NotImplementedError

    def add(self, x: float):
        raise NotImplementedError

    # -- state -----------------------------------------------------------------
    def clear(self):
        """Reset to the freshly constructed state; returns self."""
        q, n = self._q, self._n
        for i in range(self._size):
            q[i] = 0.0
            n[i] = float(i + 1)
        self._fill = self._size
        self._reset_desired()
        get_logger().debug("%r cleared", self)
        return self

    @property
    def markers(self) -> int:
        return self._size

    @property
    def ready(self) -> bool:
        """True once the first ``markers`` values have seeded the estimator."""
        return self._fill == 0

    def _observe(self, x: float) -> None:
        """Fold one non-NaN observation into the markers."""
        q, n = self._q, self._n
        if self._fill:
            self._fill -= 1
            q[self._fill] = x
            if not self._fill:
                q.sort()
                for i in range(self._size):
                    n[i] = float(i + 1)
                get_logger().debug("%r seeded with %d values", self, self._size)
            return

        last = self._size - 1
        # Find k: first marker right of the cell containing x; stretch the extremes
        if x < q[0]:
            q[0] = x
            k = 1
        elif x > q[last]:
            q[last] = x
            k = last
        else:
            # q[k-1] <= x < q[k]; the last cell is closed on both ends
            k = min(bisect_right(q, x), last)
        for i in range(k, self._size):
            n[i] += 1.0

        desired = self._update_desired()

        # Adjust heights of interior markers if necessary
        for i in range(1, last):
            d = desired[i] - n[i]
            if (d >= 1.0 and n[i + 1] - n[i] > 1.0) or (d <= -1.0 and n[i - 1] - n[i] < -1.0):
                step = 1 if d > 0 else -1
                candidate = parabolic(i, step, q, n)
                if q[i - 1] < candidate < q[i + 1]:
                    q[i] = candidate
                else:
                    q[i] = linear(i, step, q, n)
                n[i] += step

    # -- queries ---------------------------------------------------------------
    def _index(self, marker: int) -> int:
        try:
            idx = operator.index(marker)
        except TypeError:
            raise InvalidMarker(marker, self._size) from None
        if not 1 <= idx <= self._size:
            raise InvalidMarker(marker, self._size)
        return idx - 1

    def estimate(self, marker: int) -> float:
        """Height of ``marker`` (1-based); NaN until ready."""
        idx = self._index(marker)
        if self._fill:
            return math.nan
        return self._q[idx]

    def count(self, marker: int) -> int:
        """Number of observations at or below ``marker``; 0 until ready."""
        idx = self._index(marker)
        if self._fill:
            return 0
        return int(self._n[idx])

    def estimates(self) -> List[float]:
        return [self.estimate(m) for m in range(1, self._size + 1)]

    def counts(self) -> List[int]:
        return [self.count(m) for m in range(1, self._size + 1)]

    def extend(self, values: Iterable[float]):
        for x in values:
            self.add(x)
        return self

    def copy(self):
        """Independent duplicate: marker lists are copied, not shared."""
        dup = self.__class__.__new__(self.__class__)
        dup.__dict__.update(
            {key: list(value) if isinstance(value, list) else value for key, value in self.__dict__.items()}
        )
        return dup

    __copy__ = copy


__all__ = ["MarkerSet"]
