"""psquared: constant-memory quantile and histogram estimation (P² algorithm).

The version is read from installed package metadata so an editable install or
wheel always reports what pyproject.toml declares, falling back to a hardcoded
string when metadata is unavailable (direct source usage).
"""

from __future__ import annotations

from importlib import metadata as _metadata

from .errors import ConfigurationError, InvalidMarker, P2Error
from .histogram import HistogramEstimator
from .quantile import QuantileEstimator

__all__ = [
	"__version__",
	"QuantileEstimator",
	"HistogramEstimator",
	"ConfigurationError",
	"InvalidMarker",
	"P2Error",
]

_FALLBACK_VERSION = "0.1.0"  # MUST match pyproject.toml [project].version

try:  # pragma: no cover - success path covered indirectly via CLI test
	__version__ = _metadata.version("psquared")  # type: ignore[assignment]
except _metadata.PackageNotFoundError:  # pragma: no cover - fallback exercised if metadata missing
	__version__ = _FALLBACK_VERSION
