# src/algorithms/traversal.py — v1
"""Breadth-first and depth-first traversal with a caller-supplied edge filter.

Both walks record, for every node they reach, the parent it was first
reached from and the edge used (the ParentMap), plus the visited node ids in
discovery order. A node is claimed by the first allowed edge reaching it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable

from flexalgo.algorithms.context import AlgorithmContext
from flexalgo.algorithms.models import TraversalOptions, TraversalResult
from flexalgo.core.errors import AlgorithmPreconditionError
from flexalgo.core.models import Edge, ParentLink
from flexalgo.graph.identity import other_endpoint
from flexalgo.graph.traversal.base_traverser import BaseTraverser, normalize_directions

logger = logging.getLogger(__name__)

EdgePredicate = Callable[[Edge, Any, Any], bool]


def filter_bfs(
    context: AlgorithmContext,
    options: TraversalOptions | Mapping[str, Any] | None = None,
) -> TraversalResult:
    """Level-by-level traversal from `start_node`.

    Each level is fetched with one batched traverser call. The walk stops
    when a level is empty, `max_depth` levels have been expanded, or more
    than `max_visited` nodes are visited.

    Args:
        context: Traverser, id extractor and settings.
        options: TraversalOptions or a configuration mapping (startNode,
            allowEdge, direction, maxDepth, maxVisited, getNeighbor).

    Returns:
        TraversalResult; empty when `start_node` is None.

    Raises:
        AlgorithmPreconditionError: Missing traverser or `allow_edge` not callable.
    """
    opts = context.parse_options(TraversalOptions, options)
    if opts.start_node is None:
        return TraversalResult()
    traverser, allow_edge = _require(context, opts, "filterBFS")
    get_node_id = context.node_id_fn(opts)
    get_neighbor = _neighbor_fn(opts, get_node_id)
    directions = normalize_directions(opts.direction)

    start_id = get_node_id(opts.start_node)
    result = TraversalResult(start_id=start_id, visited=[start_id])
    seen = {start_id}

    current_level = [opts.start_node]
    depth = 0
    while current_level:
        if opts.max_depth is not None and depth >= opts.max_depth:
            break
        if opts.max_visited is not None and len(seen) > opts.max_visited:
            break

        rows = _fetch(traverser, current_level, directions)
        next_level: list[Any] = []
        for current, edges in zip(current_level, rows):
            current_id = get_node_id(current)
            for edge in edges:
                neighbor = get_neighbor(edge, current)
                if neighbor is None:
                    continue
                n_id = get_node_id(neighbor)
                if n_id is None or n_id in seen:
                    continue
                if allow_edge(edge, neighbor, current):
                    seen.add(n_id)
                    result.visited.append(n_id)
                    result.parent[n_id] = ParentLink(parent_id=current_id, edge=edge)
                    next_level.append(neighbor)

        current_level = next_level
        depth += 1

    logger.info(
        "filterBFS: visited %d nodes over %d levels", len(seen), depth,
        extra={"data": {"visited": len(seen), "levels": depth}},
    )
    return result


def filter_dfs(
    context: AlgorithmContext,
    options: TraversalOptions | Mapping[str, Any] | None = None,
) -> TraversalResult:
    """Depth-first traversal from `start_node` using an explicit stack.

    Stack entries carry their hop count from the start; nodes at
    `max_depth` are not expanded. Edges are pushed in reverse so the first
    reported edge is explored first. Neighbors are marked visited when
    pushed.

    Raises:
        AlgorithmPreconditionError: Missing traverser or `allow_edge` not callable.
    """
    opts = context.parse_options(TraversalOptions, options)
    if opts.start_node is None:
        return TraversalResult()
    traverser, allow_edge = _require(context, opts, "filterDFS")
    get_node_id = context.node_id_fn(opts)
    get_neighbor = _neighbor_fn(opts, get_node_id)
    directions = normalize_directions(opts.direction)

    start_id = get_node_id(opts.start_node)
    result = TraversalResult(start_id=start_id, visited=[start_id])
    seen = {start_id}

    stack: list[tuple[Any, int]] = [(opts.start_node, 0)]
    expanded = 0
    while stack:
        if opts.max_visited is not None and len(seen) > opts.max_visited:
            break

        current, depth = stack.pop()
        if current is None:
            continue
        if opts.max_depth is not None and depth >= opts.max_depth:
            continue

        edges = _fetch(traverser, [current], directions)[0]
        current_id = get_node_id(current)
        expanded += 1

        for edge in reversed(edges):
            neighbor = get_neighbor(edge, current)
            if neighbor is None:
                continue
            n_id = get_node_id(neighbor)
            if n_id is None or n_id in seen:
                continue
            if allow_edge(edge, neighbor, current):
                seen.add(n_id)
                result.visited.append(n_id)
                result.parent[n_id] = ParentLink(parent_id=current_id, edge=edge)
                stack.append((neighbor, depth + 1))
                if opts.max_visited is not None and len(seen) > opts.max_visited:
                    break

    logger.info(
        "filterDFS: visited %d nodes, expanded %d", len(seen), expanded,
        extra={"data": {"visited": len(seen), "expanded": expanded}},
    )
    return result


def _require(
    context: AlgorithmContext, opts: TraversalOptions, caller: str,
) -> tuple[BaseTraverser, EdgePredicate]:
    traverser = context.require_traverser(caller)
    if not callable(opts.allow_edge):
        raise AlgorithmPreconditionError(f"{caller}: `allowEdge` must be a function")
    return traverser, opts.allow_edge


def _neighbor_fn(
    opts: TraversalOptions, get_node_id: Callable[[Any], Any],
) -> Callable[[Edge, Any], Any]:
    if opts.get_neighbor is not None:
        return opts.get_neighbor

    def _other(edge: Edge, current: Any) -> Any:
        return other_endpoint(edge, get_node_id(current), get_node_id)

    return _other


def _fetch(
    traverser: BaseTraverser, batch: list[Any], directions: list[str],
) -> list[list[Edge]]:
    if len(directions) == 1:
        rows = traverser.traverse(batch, directions[0])  # type: ignore[arg-type]
    else:
        rows = traverser.traverse_many(batch, directions)  # type: ignore[arg-type]
    # Pad so every node in the batch has a row.
    return [rows[i] if i < len(rows) and rows[i] else [] for i in range(len(batch))]
