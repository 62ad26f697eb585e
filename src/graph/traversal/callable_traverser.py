# src/graph/traversal/callable_traverser.py — v1
"""Adapter over a host-provided `traverse(nodes, options)` function.

The host function follows the UDF runtime convention:
    fn(nodes, {"direction": d, "returnType": "edges"}) -> list[list[edge]]
Raw edges are coerced into Edge models. Errors raised by the host function
propagate unchanged.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from flexalgo.core.models import Edge
from flexalgo.graph.traversal.base_traverser import BaseTraverser, Direction

HostTraverseFn = Callable[[list[Any], dict[str, Any]], Any]


class CallableTraverser(BaseTraverser):
    """Wraps a host traverse function."""

    def __init__(self, fn: HostTraverseFn) -> None:
        self._fn = fn

    @property
    def provider_name(self) -> str:
        return "callable"

    def traverse(self, nodes: Sequence[Any], direction: Direction) -> list[list[Edge]]:
        batch = list(nodes)
        raw = self._fn(batch, {"direction": direction, "returnType": "edges"}) or []
        rows: list[list[Edge]] = []
        for i in range(len(batch)):
            row = raw[i] if i < len(raw) else None
            rows.append([Edge.from_raw(e) for e in (row or [])])
        return rows
