"""Exceptions raised by the estimators.

Not-ready is not an error: queries return NaN / 0 until the fill phase is over
(see ``ready``). Only bad construction parameters and out-of-range marker
indices raise.
"""
from __future__ import annotations


class P2Error(Exception):
    """Base class for psquared errors."""


class ConfigurationError(P2Error, ValueError):
    """Estimator constructed with an out-of-range parameter."""


class InvalidMarker(P2Error, IndexError):
    """Marker index outside 1..markers passed to estimate or count."""

    def __init__(self, marker: object, markers: int) -> None:
        self.marker = marker
        self.markers = markers
        super().__init__(f"marker {marker!r} out of range 1..{markers}")


__all__ = ["P2Error", "ConfigurationError", "InvalidMarker"]
