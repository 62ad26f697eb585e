# src/algorithms/pagerank.py — v1
"""Weighted PageRank by power iteration over a directed adjacency.

The adjacency is flattened once into numpy edge arrays (source index,
destination index, transition weight). Each iteration then runs on
preallocated buffers: no arrays are created inside the loop.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import numpy as np

from flexalgo.algorithms.context import AlgorithmContext
from flexalgo.algorithms.models import PageRankDebug, PageRankOptions, PageRankResult
from flexalgo.graph.adjacency import WeightedAdjacency, build_directed_adjacency
from flexalgo.graph.identity import stable_key

logger = logging.getLogger(__name__)


def pagerankv(
    context: AlgorithmContext,
    options: PageRankOptions | Mapping[str, Any] | None = None,
) -> PageRankResult:
    """Weighted PageRank over the given nodes.

    Args:
        context: Traverser, id extractor and settings.
        options: PageRankOptions or a configuration mapping (nodes,
            direction, damping, maxIterations, tolerance, weightAttribute,
            defaultWeight, minWeight, maxEdgesPerNode).

    Returns:
        PageRankResult with scores summing to 1 (empty for no nodes).

    Raises:
        AlgorithmPreconditionError: Missing traverser or `nodes` not a list.
        InvalidOptionsError: Options fail validation.
    """
    opts = context.parse_options(PageRankOptions, options)
    traverser = context.require_traverser("pagerankv")
    build = build_directed_adjacency(
        traverser,
        opts.nodes,
        direction=opts.direction,
        max_edges_per_node=opts.max_edges_per_node,
        get_node_id=context.node_id_fn(opts),
        get_weight=context.weight_fn(opts),
        debug=opts.debug,
    )

    scores, iterations, converged, deltas = power_iteration(
        build.adjacency,
        build.node_ids,
        damping=opts.damping,
        max_iterations=opts.max_iterations,
        tolerance=opts.tolerance,
    )

    if not converged:
        logger.warning(
            "pagerankv: no convergence after %d iterations (last delta %.3e)",
            iterations, deltas[-1] if deltas else float("nan"),
        )
    logger.info(
        "pagerankv: %d nodes, %d iterations, converged=%s",
        len(build.node_ids), iterations, converged,
        extra={"data": {
            "nodes": len(build.node_ids),
            "iterations": iterations,
            "converged": converged,
            "last_delta": deltas[-1] if deltas else None,
        }},
    )

    return PageRankResult(
        scores={stable_key(node_id): score for node_id, score in scores.items()},
        iterations=iterations,
        converged=converged,
        debug=PageRankDebug(adjacency=build.debug, deltas=deltas) if opts.debug else None,
    )


def power_iteration(
    adjacency: WeightedAdjacency,
    node_ids: list[Any],
    damping: float = 0.85,
    max_iterations: int = 50,
    tolerance: float = 1e-8,
) -> tuple[dict[Any, float], int, bool, list[float]]:
    """Run the PageRank power iteration.

    Dangling nodes (no positive out-weight) spread their rank uniformly over
    all nodes each iteration, so the rank vector keeps summing to 1.

    Returns:
        (scores by node id, iterations run, converged flag, L1 delta per iteration).
    """
    n = len(node_ids)
    if n == 0:
        return {}, 0, True, []

    index = {node_id: i for i, node_id in enumerate(node_ids)}
    src: list[int] = []
    dst: list[int] = []
    weight: list[float] = []
    for u, row in adjacency.items():
        for v, w in row.items():
            if w > 0:
                src.append(index[u])
                dst.append(index[v])
                weight.append(w)

    src_idx = np.asarray(src, dtype=np.intp)
    dst_idx = np.asarray(dst, dtype=np.intp)
    edge_w = np.asarray(weight, dtype=np.float64)

    out_weight = np.zeros(n, dtype=np.float64)
    np.add.at(out_weight, src_idx, edge_w)
    dangling = (out_weight <= 0).astype(np.float64)
    # Per-edge share of the source's rank.
    transition = edge_w / out_weight[src_idx] if edge_w.size else edge_w

    rank = np.full(n, 1.0 / n, dtype=np.float64)
    nxt = np.empty(n, dtype=np.float64)
    flow = np.empty(edge_w.size, dtype=np.float64)
    diff = np.empty(n, dtype=np.float64)
    base = (1.0 - damping) / n

    deltas: list[float] = []
    converged = False
    iterations = 0
    for _ in range(max_iterations):
        iterations += 1
        dangling_mass = float(np.dot(dangling, rank))
        nxt.fill(base + damping * dangling_mass / n)

        np.take(rank, src_idx, out=flow)
        np.multiply(flow, transition, out=flow)
        flow *= damping
        np.add.at(nxt, dst_idx, flow)

        np.subtract(nxt, rank, out=diff)
        np.abs(diff, out=diff)
        delta = float(diff.sum())
        deltas.append(delta)

        rank, nxt = nxt, rank
        logger.debug("PageRank iteration %d: delta=%.3e", iterations, delta)
        if delta <= tolerance:
            converged = True
            break

    scores = {node_id: float(rank[i]) for i, node_id in enumerate(node_ids)}
    return scores, iterations, converged, deltas
