"""Marker height predictions used by the P² relocation step.

Both functions take an interior marker index ``i`` (never 0 or the last
index), a unit displacement ``d`` (+1 or -1) and the marker heights ``q`` and
positions ``n``.
"""
from __future__ import annotations

from typing import Sequence


def parabolic(i: int, d: int, q: Sequence[float], n: Sequence[float]) -> float:
    """Piecewise-parabolic (P²) prediction for marker ``i`` moved by ``d``."""
    n0, n1, n2 = n[i - 1], n[i], n[i + 1]
    q0, q1, q2 = q[i - 1], q[i], q[i + 1]
    return q1 + d / (n2 - n0) * ((n1 - n0 + d) * (q2 - q1) / (n2 - n1) + (n2 - n1 - d) * (q1 - q0) / (n1 - n0))


def linear(i: int, d: int, q: Sequence[float], n: Sequence[float]) -> float:
    """Linear prediction towards the neighbour on side ``d``.

    The result always lies between ``q[i]`` and that neighbour, even when
    their difference is too large to represent.
    """
    j = i + 1 if d > 0 else i - 1
    span = n[j] - n[i]
    lo, hi = (q[i], q[j]) if d > 0 else (q[j], q[i])
    candidate = q[i] + d * (q[j] - q[i]) / span
    if lo <= candidate <= hi:
        return candidate
    # q[j] - q[i] overflowed; weighted blend never forms the difference
    t = d / span
    candidate = q[i] * (1.0 - t) + q[j] * t
    return min(max(candidate, lo), hi)


__all__ = ["parabolic", "linear"]
