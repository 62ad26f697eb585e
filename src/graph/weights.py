# src/graph/weights.py — v1
"""Edge weight extraction.

Weights are read from edge properties. Anything that is not a finite real
number falls back to the default; values below the floor are clamped.
"""

from __future__ import annotations

import math
from typing import Callable, Sequence

from flexalgo.core.models import Edge

WeightFn = Callable[[Edge], float]

DEFAULT_WEIGHT_KEYS: tuple[str, ...] = ("weight",)


def get_edge_weight(
    edge: Edge | None,
    keys: Sequence[str] = DEFAULT_WEIGHT_KEYS,
    default_value: float = 1.0,
    min_value: float = 0.0,
) -> float:
    """Read the first present weight key of `edge`.

    Args:
        edge: Edge to inspect (None yields the default).
        keys: Property names tried in order.
        default_value: Weight when no key holds a usable number.
        min_value: Lower clamp applied to a usable number.

    Returns:
        Edge weight.
    """
    if edge is not None:
        for key in keys:
            if key in edge.properties:
                value = edge.properties[key]
                if _is_real(value):
                    value = float(value)
                    return min_value if value < min_value else value
    return default_value


def make_weight_fn(
    keys: str | Sequence[str] = DEFAULT_WEIGHT_KEYS,
    default_value: float = 1.0,
    min_value: float = 0.0,
) -> WeightFn:
    """Bind weight-lookup options into a single-argument callable."""
    key_list = (keys,) if isinstance(keys, str) else tuple(keys)

    def _weight(edge: Edge) -> float:
        return get_edge_weight(
            edge, keys=key_list, default_value=default_value, min_value=min_value,
        )

    return _weight


def _is_real(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
