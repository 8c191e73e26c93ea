import json
import re
from typing import Optional

from .logutil import get_logger

# Keys tried, in order, when a JSON record names no field explicitly
_DEFAULT_FIELDS = ("value", "v", "latency", "duration")
_SPLIT = re.compile(r"[\s,;]+")


def parse_value(line: str, field: Optional[str] = None) -> Optional[float]:
    """
    Extract one observation from a text line.
    Blank lines and '#' comments give None. JSON objects yield `field` (or the
    first of value/v/latency/duration present); otherwise the first token is
    parsed as a float. 'nan' parses and is left for the estimator to discard.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None

    if line.startswith("{") and line.endswith("}"):
        try:
            obj = json.loads(line)
        except ValueError as exc:
            get_logger().warning("JSON parse failed: %s", exc)
            return None
        keys = (field,) if field else _DEFAULT_FIELDS
        for key in keys:
            raw = obj.get(key)
            if raw is None:
                continue
            try:
                return float(raw)
            except (TypeError, ValueError):
                return None
        return None

    token = _SPLIT.split(line, maxsplit=1)[0]
    try:
        return float(token)
    except ValueError:
        return None
