# src/graph/traversal/base_traverser.py — v1
"""Abstract traversal capability consumed by every algorithm.

A traverser answers one question: for each node in a batch, which edges are
reachable in a given direction. Results are index-aligned with the batch.
Implementations must be synchronous and report stable endpoint identities.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Literal, Sequence

from flexalgo.core.errors import AlgorithmPreconditionError
from flexalgo.core.models import Edge

Direction = Literal["incoming", "outgoing"]
DirectionArg = Literal["incoming", "outgoing", "both"]

VALID_DIRECTIONS: tuple[str, ...] = ("incoming", "outgoing")


class BaseTraverser(ABC):
    """Unified interface for traversal backends."""

    @abstractmethod
    def traverse(self, nodes: Sequence[Any], direction: Direction) -> list[list[Edge]]:
        """Return, for each node in `nodes`, its edges in `direction`."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (callable, networkx)."""

    def edges_for(self, node: Any, direction: Direction) -> list[Edge]:
        """Edges of a single node in one direction."""
        rows = self.traverse([node], direction)
        return list(rows[0]) if rows else []

    def traverse_many(
        self, nodes: Sequence[Any], directions: Sequence[Direction],
    ) -> list[list[Edge]]:
        """Concatenate per-node results over several directions, in order."""
        merged: list[list[Edge]] = [[] for _ in nodes]
        for direction in directions:
            rows = self.traverse(nodes, direction)
            for i in range(len(nodes)):
                if i < len(rows) and rows[i]:
                    merged[i].extend(rows[i])
        return merged


def normalize_directions(direction: str | Sequence[str] | None) -> list[Direction]:
    """Expand a direction argument into concrete traversal directions.

    "both" (and None) becomes ["incoming", "outgoing"]; lists are expanded
    element-wise. Duplicates are dropped, first occurrence wins.

    Raises:
        AlgorithmPreconditionError: On an unknown direction string.
    """
    raw: list[str | None]
    if direction is None:
        raw = ["both"]
    elif isinstance(direction, str):
        raw = [direction]
    else:
        raw = list(direction)

    out: list[Direction] = []
    for d in raw:
        if d is None:
            continue
        expanded = list(VALID_DIRECTIONS) if d == "both" else [d]
        for e in expanded:
            if e not in VALID_DIRECTIONS:
                raise AlgorithmPreconditionError(
                    f"Unknown traversal direction: {e!r}. "
                    f"Use 'incoming', 'outgoing' or 'both'."
                )
            if e not in out:
                out.append(e)  # type: ignore[arg-type]
    return out
