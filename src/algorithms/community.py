# src/algorithms/community.py — v1
"""Modularity optimization mechanics shared by Louvain and Leiden.

- one_level: greedy local moving of nodes between neighboring communities
- induced_graph: coarsening, one node per community
- run_levels: the multi-level loop, with an optional refinement hook
- modularity: Newman modularity of a partition, for reporting

All functions work on WeightedAdjacency (dict of dicts) and never mutate
their inputs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Mapping

from flexalgo.core.models import CamelModel
from flexalgo.core.prng import SeededRandom
from flexalgo.graph.adjacency import WeightedAdjacency
from flexalgo.logging.context import set_stage

logger = logging.getLogger(__name__)

Partition = dict[Any, Any]


@dataclass
class LocalMoveResult:
    """Outcome of one local-moving phase."""

    partition: Partition
    moved: bool
    moves: int = 0


@dataclass
class RefinementResult:
    """Outcome of a refinement step applied after local moving."""

    partition: Partition
    split_communities: int = 0
    total_components: int = 0


class LevelStats(CamelModel):
    """Per-level observability record."""

    level: int
    moved: bool
    moves: int
    communities: int
    modularity: float
    split_communities: int | None = None
    total_components: int | None = None


@dataclass
class LevelsOutcome:
    """Final partition over the original node ids plus per-level stats."""

    partition: Partition
    levels: int
    level_stats: list[LevelStats] = field(default_factory=list)


RefineFn = Callable[[WeightedAdjacency, list[Any], Partition], RefinementResult]


def renumber_partition(partition: Mapping[Any, Hashable]) -> Partition:
    """Map community tokens to 0..k-1 in order of first appearance."""
    new_by_old: dict[Hashable, int] = {}
    out: Partition = {}
    for node_id, comm in partition.items():
        if comm not in new_by_old:
            new_by_old[comm] = len(new_by_old)
        out[node_id] = new_by_old[comm]
    return out


def partition_to_communities(partition: Mapping[Any, Hashable]) -> dict[Any, list[Any]]:
    """Group node ids by community, preserving partition order."""
    communities: dict[Any, list[Any]] = {}
    for node_id, comm in partition.items():
        communities.setdefault(comm, []).append(node_id)
    return communities


def weighted_degrees(
    adjacency: WeightedAdjacency, node_ids: list[Any],
) -> tuple[dict[Any, float], float]:
    """Return (degree per node, m2) where m2 is the sum of all degrees."""
    degree: dict[Any, float] = {}
    m2 = 0.0
    for node_id in node_ids:
        k = sum(adjacency.get(node_id, {}).values())
        degree[node_id] = k
        m2 += k
    return degree, m2


def one_level(
    adjacency: WeightedAdjacency,
    node_ids: list[Any],
    resolution: float = 1.0,
    max_passes: int = 10,
    min_gain: float = 1e-12,
    random: SeededRandom | None = None,
) -> LocalMoveResult:
    """Run one Louvain local-moving phase.

    Every node starts in its own community. Each pass visits every node
    (shuffled per pass when `random` is given) and moves it to the
    neighboring community with the largest gain
    `k_i_in - resolution * tot_c * k_i / m2`, if that gain is positive,
    exceeds `min_gain`, and strictly beats staying put. The current
    community is scored first, so ties keep the node where it is.

    Args:
        adjacency: Symmetric weighted adjacency.
        node_ids: Nodes to iterate (all keys of `adjacency`).
        resolution: Modularity resolution (gamma).
        max_passes: Upper bound on full sweeps.
        min_gain: Gain threshold a move must exceed.
        random: Seeded generator for node order; None keeps input order.

    Returns:
        LocalMoveResult with a densely renumbered partition.
    """
    degree, m2 = weighted_degrees(adjacency, node_ids)

    if not m2 > 0:
        trivial = {node_id: node_id for node_id in node_ids}
        return LocalMoveResult(partition=renumber_partition(trivial), moved=False)

    partition: Partition = {node_id: node_id for node_id in node_ids}
    tot: dict[Any, float] = {node_id: degree[node_id] for node_id in node_ids}

    moved_any = False
    moves = 0

    for pass_ in range(max_passes):
        moved_this_pass = 0
        order = list(node_ids)
        if random is not None:
            random.shuffle(order)

        for node_id in order:
            k_i = degree[node_id]
            current = partition[node_id]

            # Edge weight from node_id into each neighboring community.
            neigh_comms: dict[Any, float] = {}
            for nbr, w in adjacency.get(node_id, {}).items():
                if nbr == node_id or not w > 0:
                    continue
                c = partition[nbr]
                neigh_comms[c] = neigh_comms.get(c, 0.0) + w

            tot[current] -= k_i

            best_comm = current
            best_gain = 0.0
            if current in neigh_comms:
                stay = neigh_comms[current] - resolution * tot[current] * k_i / m2
                if stay > best_gain:
                    best_gain = stay

            for c, k_i_in in neigh_comms.items():
                if c == current:
                    continue
                gain = k_i_in - resolution * tot[c] * k_i / m2
                if gain > best_gain:
                    best_gain = gain
                    best_comm = c

            if best_comm != current and best_gain > min_gain:
                partition[node_id] = best_comm
                moved_this_pass += 1
            else:
                best_comm = current

            tot[best_comm] = tot.get(best_comm, 0.0) + k_i

        moves += moved_this_pass
        logger.debug("Local moving pass %d: %d moves", pass_, moved_this_pass)
        if moved_this_pass == 0:
            break
        moved_any = True

    return LocalMoveResult(
        partition=renumber_partition(partition), moved=moved_any, moves=moves,
    )


def induced_graph(
    adjacency: WeightedAdjacency, partition: Mapping[Any, Any],
) -> tuple[WeightedAdjacency, list[Any]]:
    """Collapse each community into one node, summing all edge weights.

    Weight between two members of the same community becomes a self-loop
    on that community.
    """
    out: WeightedAdjacency = {}
    for i, neigh in adjacency.items():
        ci = partition[i]
        row = out.setdefault(ci, {})
        for j, w in neigh.items():
            cj = partition[j]
            row[cj] = row.get(cj, 0.0) + w
    return out, list(out.keys())


def modularity(
    adjacency: WeightedAdjacency,
    partition: Mapping[Any, Any],
    resolution: float = 1.0,
) -> float:
    """Newman modularity Q of `partition` over `adjacency`.

    Q = sum_c [ in_c / m2 - resolution * (tot_c / m2)^2 ], with m2 the sum of
    weighted degrees. Returns 0.0 for a graph without edges.
    """
    m2 = 0.0
    inner: dict[Any, float] = {}
    tot: dict[Any, float] = {}
    for i, neigh in adjacency.items():
        ci = partition[i]
        for j, w in neigh.items():
            m2 += w
            tot[ci] = tot.get(ci, 0.0) + w
            if partition[j] == ci:
                inner[ci] = inner.get(ci, 0.0) + w
    if not m2 > 0:
        return 0.0
    return sum(
        inner.get(c, 0.0) / m2 - resolution * (t / m2) ** 2
        for c, t in tot.items()
    )


def run_levels(
    adjacency: WeightedAdjacency,
    node_ids: list[Any],
    resolution: float = 1.0,
    max_passes: int = 10,
    max_levels: int = 10,
    min_gain: float = 1e-12,
    random: SeededRandom | None = None,
    refine: RefineFn | None = None,
) -> LevelsOutcome:
    """Alternate local moving (plus optional refinement) and coarsening.

    Stops after `max_levels`, when a level neither moves nor splits
    anything, or when coarsening does not shrink the graph. The per-level
    partitions are composed into one assignment of the original node ids.
    """
    original_to_current: Partition = {node_id: node_id for node_id in node_ids}
    current_adj = adjacency
    current_ids = node_ids
    stats: list[LevelStats] = []

    for level in range(max_levels):
        set_stage(f"level-{level}")
        local = one_level(
            current_adj, current_ids,
            resolution=resolution, max_passes=max_passes,
            min_gain=min_gain, random=random,
        )
        part = local.partition

        refined: RefinementResult | None = None
        if refine is not None:
            refined = refine(current_adj, current_ids, part)
            part = refined.partition

        original_to_current = {
            orig: part[cur] for orig, cur in original_to_current.items()
        }

        level_stats = LevelStats(
            level=level,
            moved=local.moved,
            moves=local.moves,
            communities=len(set(part.values())),
            modularity=modularity(current_adj, part, resolution),
            split_communities=refined.split_communities if refined else None,
            total_components=refined.total_components if refined else None,
        )
        stats.append(level_stats)
        logger.debug(
            "Level %d: moves=%d communities=%d modularity=%.6f",
            level, local.moves, level_stats.communities, level_stats.modularity,
            extra={"data": level_stats.model_dump(exclude_none=True)},
        )

        split = refined.split_communities if refined else 0
        if not local.moved and split == 0:
            break

        induced_adj, induced_ids = induced_graph(current_adj, part)
        if len(induced_ids) >= len(current_ids):
            break

        current_adj = induced_adj
        current_ids = induced_ids

    set_stage(None)
    return LevelsOutcome(
        partition=renumber_partition(original_to_current),
        levels=len(stats),
        level_stats=stats,
    )
