# src/algorithms/louvain.py — v1
"""Louvain community detection over a traversal-backed node set.

Builds a symmetric weighted adjacency over the given nodes, then runs the
multi-level local-moving / coarsening loop from algorithms.community.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from flexalgo.algorithms.community import (
    RefineFn,
    modularity,
    partition_to_communities,
    run_levels,
)
from flexalgo.algorithms.context import AlgorithmContext
from flexalgo.algorithms.models import (
    CommunityDebug,
    CommunityOptions,
    CommunityResult,
    LouvainOptions,
)
from flexalgo.core.prng import SeededRandom
from flexalgo.graph.adjacency import build_undirected_adjacency
from flexalgo.graph.identity import stable_key

logger = logging.getLogger(__name__)


def louvain(
    context: AlgorithmContext,
    options: LouvainOptions | Mapping[str, Any] | None = None,
) -> CommunityResult:
    """Detect communities by greedy modularity optimization.

    Args:
        context: Traverser, id extractor and settings.
        options: LouvainOptions or a configuration mapping (nodes, direction,
            resolution, maxPasses, maxLevels, minGain, maxEdgesPerNode, seed).

    Returns:
        CommunityResult covering every input node exactly once.

    Raises:
        AlgorithmPreconditionError: Missing traverser or `nodes` not a list.
        InvalidOptionsError: Options fail validation.
    """
    opts = context.parse_options(LouvainOptions, options)
    return detect_communities(context, opts, refine=None, name="louvain")


def detect_communities(
    context: AlgorithmContext,
    opts: CommunityOptions,
    refine: RefineFn | None,
    name: str,
) -> CommunityResult:
    """Shared Louvain/Leiden driver: build, optimize, shape the result."""
    traverser = context.require_traverser(name)
    build = build_undirected_adjacency(
        traverser,
        opts.nodes,
        direction=opts.direction,
        max_edges_per_node=opts.max_edges_per_node,
        get_node_id=context.node_id_fn(opts),
        get_weight=context.weight_fn(opts),
        debug=opts.debug,
    )

    random = SeededRandom(opts.seed) if opts.seed is not None else None
    outcome = run_levels(
        build.adjacency,
        build.node_ids,
        resolution=opts.resolution,
        max_passes=opts.max_passes,
        max_levels=opts.max_levels,
        min_gain=opts.min_gain,
        random=random,
        refine=refine,
    )

    q = modularity(build.adjacency, outcome.partition, opts.resolution)
    communities = partition_to_communities(outcome.partition)
    result = CommunityResult(
        partition={stable_key(k): c for k, c in outcome.partition.items()},
        communities={stable_key(c): members for c, members in communities.items()},
        levels=outcome.levels,
        modularity=q,
        debug=(
            CommunityDebug(adjacency=build.debug, levels=outcome.level_stats)
            if opts.debug else None
        ),
    )

    logger.info(
        "%s: %d nodes, %d communities, %d levels, modularity=%.4f",
        name, len(build.node_ids), len(communities), outcome.levels, q,
        extra={"data": {
            "nodes": len(build.node_ids),
            "communities": len(communities),
            "levels": outcome.levels,
            "modularity": q,
        }},
    )
    return result
