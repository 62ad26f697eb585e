# src/graph/adjacency.py — v1
"""Weighted adjacency construction from a traversal oracle.

Builds an in-memory WeightedAdjacency (dict of dicts) over exactly the given
node set. Edges reaching outside the set are discarded. The undirected
variant is symmetric and feeds community detection and degree centrality;
the directed variant feeds PageRank.

When both directions are queried, an edge whose two endpoints are known is
counted from its source's outgoing query only, so each in-set edge
contributes its weight once.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from pydantic import Field

from flexalgo.core.errors import AlgorithmPreconditionError
from flexalgo.core.models import CamelModel, Edge
from flexalgo.graph.identity import default_node_id, endpoint_ids, other_endpoint, stable_key
from flexalgo.graph.traversal.base_traverser import BaseTraverser, normalize_directions
from flexalgo.graph.weights import WeightFn, get_edge_weight

logger = logging.getLogger(__name__)

WeightedAdjacency = dict[Any, dict[Any, float]]


class AdjacencyDebug(CamelModel):
    """Build counters, returned only on request. Never affect results."""

    edge_counts: dict[str, int] = Field(default_factory=dict)
    edge_keys: int = 0
    total_edge_weight: float = 0.0
    total_self_loop_weight: float = 0.0
    directions: list[str] = Field(default_factory=list)
    skipped_out_of_scope: int = 0
    dropped_ambiguous: int = 0


@dataclass
class AdjacencyBuild:
    """Adjacency plus the ordered node ids it was built over."""

    adjacency: WeightedAdjacency
    node_ids: list[Any]
    debug: AdjacencyDebug | None = None


@dataclass
class _Accumulator:
    symmetric: bool
    pair_weight: dict[tuple[Any, Any], float] = field(default_factory=dict)
    self_loop_weight: dict[Any, float] = field(default_factory=lambda: defaultdict(float))

    def add(self, a: Any, b: Any, w: float) -> None:
        if a == b:
            self.self_loop_weight[a] += w
            return
        key = self._key(a, b)
        self.pair_weight[key] = self.pair_weight.get(key, 0.0) + w

    def _key(self, a: Any, b: Any) -> tuple[Any, Any]:
        if not self.symmetric:
            return (a, b)
        # Order by string form so mixed int/str ids still compare.
        return (a, b) if stable_key(a) <= stable_key(b) else (b, a)


def build_undirected_adjacency(
    traverser: BaseTraverser | None,
    nodes: list[Any],
    direction: str | Sequence[str] | None = "both",
    max_edges_per_node: int | None = None,
    get_node_id: Callable[[Any], Any] = default_node_id,
    get_weight: WeightFn | None = None,
    debug: bool = False,
) -> AdjacencyBuild:
    """Build a symmetric weighted adjacency over `nodes`.

    Args:
        traverser: Traversal capability.
        nodes: Input nodes (ids, mappings or objects with `.id`).
        direction: "incoming", "outgoing", "both" or a list of these.
        max_edges_per_node: Cap on edges read per (node, direction); None = no cap.
        get_node_id: Node id extractor.
        get_weight: Edge weight function (default: "weight" property, 1 if absent).
        debug: Collect build counters.

    Returns:
        AdjacencyBuild with `adjacency[a][b] == adjacency[b][a]`.

    Raises:
        AlgorithmPreconditionError: Missing traverser or `nodes` not a list.
    """
    return _build(
        traverser, nodes, direction, max_edges_per_node,
        get_node_id, get_weight, debug, symmetric=True,
    )


def build_directed_adjacency(
    traverser: BaseTraverser | None,
    nodes: list[Any],
    direction: str | Sequence[str] | None = "both",
    max_edges_per_node: int | None = None,
    get_node_id: Callable[[Any], Any] = default_node_id,
    get_weight: WeightFn | None = None,
    debug: bool = False,
) -> AdjacencyBuild:
    """Build a directed weighted adjacency `adjacency[src][dst]` over `nodes`.

    Same parameters and errors as build_undirected_adjacency.
    """
    return _build(
        traverser, nodes, direction, max_edges_per_node,
        get_node_id, get_weight, debug, symmetric=False,
    )


def _build(
    traverser: BaseTraverser | None,
    nodes: list[Any],
    direction: str | Sequence[str] | None,
    max_edges_per_node: int | None,
    get_node_id: Callable[[Any], Any],
    get_weight: WeightFn | None,
    debug: bool,
    symmetric: bool,
) -> AdjacencyBuild:
    if not isinstance(nodes, list):
        raise AlgorithmPreconditionError("adjacency builder: `nodes` must be a list")
    if traverser is None:
        raise AlgorithmPreconditionError(
            "adjacency builder: traversal capability is not available"
        )

    weight_of = get_weight or get_edge_weight
    directions = normalize_directions(direction)
    merged = "incoming" in directions and "outgoing" in directions

    node_ids: list[Any] = []
    batch: list[tuple[Any, Any]] = []
    allowed: set[Any] = set()
    for node in nodes:
        node_id = get_node_id(node)
        if node_id is None or node_id in allowed:
            continue
        allowed.add(node_id)
        node_ids.append(node_id)
        batch.append((node, node_id))

    acc = _Accumulator(symmetric=symmetric)
    stats = AdjacencyDebug(directions=list(directions)) if debug else None

    for dir_ in directions:
        for node, current_id in batch:
            edges = traverser.edges_for(node, dir_)
            if stats is not None:
                k = stable_key(current_id)
                stats.edge_counts[k] = stats.edge_counts.get(k, 0) + len(edges)
            if max_edges_per_node is not None:
                edges = edges[:max_edges_per_node]

            for edge in edges:
                _accumulate(
                    acc, edge, dir_, current_id, allowed, merged,
                    get_node_id, weight_of, stats,
                )

    adjacency: WeightedAdjacency = {node_id: {} for node_id in node_ids}
    for node_id, w in acc.self_loop_weight.items():
        row = adjacency[node_id]
        row[node_id] = row.get(node_id, 0.0) + w
    for (a, b), w in acc.pair_weight.items():
        adjacency[a][b] = adjacency[a].get(b, 0.0) + w
        if symmetric:
            adjacency[b][a] = adjacency[b].get(a, 0.0) + w

    if stats is not None:
        stats.edge_keys = len(acc.pair_weight)
        stats.total_edge_weight = sum(acc.pair_weight.values())
        stats.total_self_loop_weight = sum(acc.self_loop_weight.values())

    logger.debug(
        "Built %s adjacency: %d nodes, %d edge keys, directions=%s",
        "undirected" if symmetric else "directed",
        len(node_ids), len(acc.pair_weight), directions,
    )
    return AdjacencyBuild(adjacency=adjacency, node_ids=node_ids, debug=stats)


def _accumulate(
    acc: _Accumulator,
    edge: Edge,
    direction: str,
    current_id: Any,
    allowed: set[Any],
    merged: bool,
    get_node_id: Callable[[Any], Any],
    weight_of: WeightFn,
    stats: AdjacencyDebug | None,
) -> None:
    w = weight_of(edge)
    if not w > 0:
        return

    s_id, d_id = endpoint_ids(edge, get_node_id)
    if s_id is not None and d_id is not None:
        if s_id not in allowed or d_id not in allowed:
            if stats is not None:
                stats.skipped_out_of_scope += 1
            return
        if merged and direction == "incoming":
            # Reported again by the source's outgoing query.
            return
        acc.add(s_id, d_id, w)
        return

    # Degraded oracle: only one endpoint reported, infer the neighbor.
    neighbor = other_endpoint(edge, current_id, get_node_id)
    n_id = get_node_id(neighbor) if neighbor is not None else None
    if n_id is None or n_id not in allowed:
        if stats is not None and n_id is not None:
            stats.skipped_out_of_scope += 1
        return
    if n_id == current_id:
        # Indistinguishable from a missing endpoint; real self-loops carry both ids.
        if stats is not None:
            stats.dropped_ambiguous += 1
        return

    if direction == "outgoing" or acc.symmetric:
        acc.add(current_id, n_id, w)
    else:
        acc.add(n_id, current_id, w)
