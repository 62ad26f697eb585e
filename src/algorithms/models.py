# src/algorithms/models.py — v1
"""Option and result models of the algorithm entry points.

Options accept the camelCase keys a host passes in its configuration record
(maxEdgesPerNode) as well as the snake_case field names. Lenient fields
(damping, maxIterations, tolerance, seed, caps) repair invalid values instead
of rejecting them; structural problems (nodes not a list) fail validation.
"""

from __future__ import annotations

import math
from typing import Any, Callable

from pydantic import Field, field_validator

from flexalgo.core.models import CamelModel, NodeId, ParentLink
from flexalgo.graph.adjacency import AdjacencyDebug
from flexalgo.graph.identity import stable_key
from flexalgo.algorithms.community import LevelStats

DEFAULT_DAMPING = 0.85
DEFAULT_MAX_ITERATIONS = 50
DEFAULT_TOLERANCE = 1e-8


def _finite(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


# === OPTIONS ===


class AlgorithmOptions(CamelModel):
    """Fields shared by every entry point."""

    get_node_id: Callable[[Any], Any] | None = None
    debug: bool = False


class GraphScanOptions(AlgorithmOptions):
    """Options of algorithms that build an adjacency over a node list."""

    nodes: list[Any] = Field(strict=True)
    direction: str | list[str] | None = "both"
    max_edges_per_node: int | None = None
    weight_attribute: str | list[str] = "weight"
    default_weight: float = 1.0
    min_weight: float = 0.0

    @field_validator("max_edges_per_node", mode="before")
    @classmethod
    def coerce_edge_cap(cls, v: Any) -> int | None:
        """Infinity or None means no cap; negatives read as zero."""
        if v is None or (isinstance(v, float) and math.isinf(v) and v > 0):
            return None
        if not _finite(v):
            return None
        return max(0, int(math.floor(v)))


class CommunityOptions(GraphScanOptions):
    """Louvain options."""

    get_weight: Callable[[Any], float] | None = None
    resolution: float = 1.0
    max_passes: int = 10
    max_levels: int = 10
    min_gain: float = 1e-12
    seed: int | None = None

    @field_validator("seed", mode="before")
    @classmethod
    def coerce_seed(cls, v: Any) -> int | None:
        """Only finite numbers seed the generator."""
        if not _finite(v):
            return None
        return int(v)


class LouvainOptions(CommunityOptions):
    """Louvain options (seed optional, input order when absent)."""


class LeidenOptions(CommunityOptions):
    """Leiden options (seed drives deterministic node order)."""


class PageRankOptions(GraphScanOptions):
    """Weighted PageRank options."""

    damping: float = DEFAULT_DAMPING
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    tolerance: float = DEFAULT_TOLERANCE

    @field_validator("damping", mode="before")
    @classmethod
    def clamp_damping(cls, v: Any) -> float:
        if not _finite(v):
            return DEFAULT_DAMPING
        return min(1.0, max(0.0, float(v)))

    @field_validator("max_iterations", mode="before")
    @classmethod
    def coerce_max_iterations(cls, v: Any) -> int:
        if not _finite(v) or v <= 0:
            return DEFAULT_MAX_ITERATIONS
        return max(1, int(math.floor(v)))

    @field_validator("tolerance", mode="before")
    @classmethod
    def coerce_tolerance(cls, v: Any) -> float:
        if not _finite(v) or v < 0:
            return DEFAULT_TOLERANCE
        return float(v)


class DegreeCentralityOptions(GraphScanOptions):
    """Degree centrality options."""

    get_weight: Callable[[Any], float] | None = None
    normalized: bool = True


class TraversalOptions(AlgorithmOptions):
    """BFS/DFS options. `allow_edge` is checked by the entry point."""

    start_node: Any = None
    allow_edge: Any = None
    direction: str | list[str] | None = "outgoing"
    max_depth: int | None = None
    max_visited: int | None = None
    get_neighbor: Callable[[Any, Any], Any] | None = None

    @field_validator("max_depth", "max_visited", mode="before")
    @classmethod
    def coerce_bound(cls, v: Any) -> int | None:
        if v is None or (isinstance(v, float) and math.isinf(v) and v > 0):
            return None
        if not _finite(v):
            return None
        return max(0, int(math.floor(v)))


# === RESULTS ===


class CommunityDebug(CamelModel):
    adjacency: AdjacencyDebug | None = None
    levels: list[LevelStats] = Field(default_factory=list)


class CommunityResult(CamelModel):
    """Louvain/Leiden output. Keys are stringified ids, members are native ids."""

    partition: dict[str, int] = Field(default_factory=dict)
    communities: dict[str, list[Any]] = Field(default_factory=dict)
    levels: int = 0
    modularity: float = 0.0
    debug: CommunityDebug | None = None


class PageRankDebug(CamelModel):
    adjacency: AdjacencyDebug | None = None
    deltas: list[float] = Field(default_factory=list)


class PageRankResult(CamelModel):
    """Scores keyed by stringified node id."""

    scores: dict[str, float] = Field(default_factory=dict)
    iterations: int = 0
    converged: bool = True
    debug: PageRankDebug | None = None


class DegreeCentralityResult(CamelModel):
    n: int = 0
    max_degree: int = 0
    degree: dict[str, int] = Field(default_factory=dict)
    weighted_degree: dict[str, float] = Field(default_factory=dict)
    normalized: dict[str, float] | None = None
    debug: AdjacencyDebug | None = None


class TraversalResult(CamelModel):
    """Traversal tree rooted at the start node, keyed by native node id.

    `visited` lists node ids in discovery order, start node first.
    """

    start_id: Any = None
    parent: dict[Any, ParentLink] = Field(default_factory=dict)
    visited: list[Any] = Field(default_factory=list)

    def path_to(self, node_id: NodeId) -> list[Any]:
        """Node ids from the start node to `node_id`; [] if not visited."""
        if node_id not in self.parent and node_id != self.start_id:
            return []
        path = [node_id]
        while path[-1] in self.parent:
            path.append(self.parent[path[-1]].parent_id)
        path.reverse()
        return path

    def depth_of(self, node_id: NodeId) -> int | None:
        """Hop count from the start node, None if not visited."""
        path = self.path_to(node_id)
        return len(path) - 1 if path else None

    def to_record(self) -> dict[str, Any]:
        return {
            "parent": {
                stable_key(k): link.model_dump(by_alias=True) for k, link in self.parent.items()
            },
            "visited": list(self.visited),
        }
