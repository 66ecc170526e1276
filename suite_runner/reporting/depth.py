"""Depth limited conversion of run results into plain JSON values."""

import dataclasses
from enum import Enum
from pathlib import PurePath
from typing import Any, Optional


def limit_depth(value: Any, depth: Optional[int]) -> Any:
    """Convert a value into JSON compatible data, keeping ``depth`` levels.

    Mappings, sequences and dataclasses count as containers. A container
    found once ``depth`` levels have been used up is replaced by its string
    form; scalars are kept at any level. ``None`` keeps everything.

    Args:
        value: The value to convert.
        depth: Number of container levels to expand.
    """
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, PurePath):
        return str(value)

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        if depth is not None and depth <= 0:
            return str(value)
        return {
            f.name: limit_depth(getattr(value, f.name), _next(depth))
            for f in dataclasses.fields(value)
        }

    if isinstance(value, dict):
        if depth is not None and depth <= 0:
            return str(value)
        return {str(k): limit_depth(v, _next(depth)) for k, v in value.items()}

    if isinstance(value, (list, tuple, set, frozenset)):
        if depth is not None and depth <= 0:
            return str(value)
        items = sorted(value, key=str) if isinstance(value, (set, frozenset)) else value
        return [limit_depth(item, _next(depth)) for item in items]

    return str(value)


def to_plain(value: Any) -> Any:
    """Convert without any depth limit."""
    return limit_depth(value, None)


def _next(depth: Optional[int]) -> Optional[int]:
    return None if depth is None else depth - 1
