# src/algorithms/degree_centrality.py — v1
"""Degree centrality over the undirected adjacency of a node set."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from flexalgo.algorithms.context import AlgorithmContext
from flexalgo.algorithms.models import DegreeCentralityOptions, DegreeCentralityResult
from flexalgo.graph.adjacency import build_undirected_adjacency
from flexalgo.graph.identity import stable_key

logger = logging.getLogger(__name__)


def degree_centrality(
    context: AlgorithmContext,
    options: DegreeCentralityOptions | Mapping[str, Any] | None = None,
) -> DegreeCentralityResult:
    """Neighbor count and summed neighbor weight per node.

    Self-loops count toward neither. With `normalized`, degree is divided by
    n - 1 (0 when n <= 1).

    Raises:
        AlgorithmPreconditionError: Missing traverser or `nodes` not a list.
        InvalidOptionsError: Options fail validation.
    """
    opts = context.parse_options(DegreeCentralityOptions, options)
    traverser = context.require_traverser("degreeCentrality")
    build = build_undirected_adjacency(
        traverser,
        opts.nodes,
        direction=opts.direction,
        max_edges_per_node=opts.max_edges_per_node,
        get_node_id=context.node_id_fn(opts),
        get_weight=context.weight_fn(opts),
        debug=opts.debug,
    )

    n = len(build.node_ids)
    degree: dict[str, int] = {}
    weighted: dict[str, float] = {}
    for node_id in build.node_ids:
        neighbors = {
            v: w for v, w in build.adjacency.get(node_id, {}).items() if v != node_id
        }
        key = stable_key(node_id)
        degree[key] = len(neighbors)
        weighted[key] = float(sum(neighbors.values()))

    max_degree = max(degree.values(), default=0)
    normalized: dict[str, float] | None = None
    if opts.normalized:
        denom = n - 1
        normalized = {
            k: (d / denom if denom > 0 else 0.0) for k, d in degree.items()
        }

    logger.info(
        "degreeCentrality: %d nodes, max degree %d", n, max_degree,
        extra={"data": {"nodes": n, "max_degree": max_degree}},
    )
    return DegreeCentralityResult(
        n=n,
        max_degree=max_degree,
        degree=degree,
        weighted_degree=weighted,
        normalized=normalized,
        debug=build.debug,
    )
