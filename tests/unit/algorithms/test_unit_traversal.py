# tests/unit/algorithms/test_unit_traversal.py — v1
"""Tests for algorithms/traversal.py — filtered BFS and DFS."""

from __future__ import annotations

import networkx as nx
import pytest

from flexalgo.algorithms.context import AlgorithmContext
from flexalgo.algorithms.traversal import filter_bfs, filter_dfs
from flexalgo.core.errors import AlgorithmPreconditionError


def allow_all(edge, neighbor, current):
    return True


@pytest.fixture
def diamond_graph() -> nx.DiGraph:
    """r->a, r->c, a->b, b->d, c->d."""
    return nx.DiGraph([("r", "a"), ("r", "c"), ("a", "b"), ("b", "d"), ("c", "d")])


class TestFilterBFS:
    def test_reaches_whole_chain(self, chain_graph, make_context):
        result = filter_bfs(make_context(chain_graph), {"startNode": 0, "allowEdge": allow_all})
        assert result.visited == [0, 1, 2, 3, 4, 5]
        assert result.parent[3].parent_id == 2
        assert result.path_to(5) == [0, 1, 2, 3, 4, 5]
        assert result.depth_of(4) == 4

    def test_level_order_parents(self, diamond_graph, make_context):
        result = filter_bfs(make_context(diamond_graph), {"startNode": "r", "allowEdge": allow_all})
        assert result.parent["d"].parent_id == "c"
        assert result.depth_of("d") == 2

    @pytest.mark.parametrize("max_depth", [0, 1, 2, 3])
    def test_max_depth(self, chain_graph, make_context, max_depth):
        result = filter_bfs(
            make_context(chain_graph),
            {"startNode": 0, "allowEdge": allow_all, "maxDepth": max_depth},
        )
        assert result.visited == list(range(max_depth + 1))
        assert all(result.depth_of(n) <= max_depth for n in result.visited)

    def test_max_visited_allows_one_batch_overshoot(self, make_context):
        g = nx.balanced_tree(3, 3, create_using=nx.DiGraph)
        result = filter_bfs(
            make_context(g), {"startNode": 0, "allowEdge": allow_all, "maxVisited": 2},
        )
        # Level 1 adds three nodes, then the bound stops the walk.
        assert len(result.visited) == 4

    def test_edge_filter(self, make_context):
        g = nx.DiGraph()
        g.add_edge("a", "b", weight=5)
        g.add_edge("a", "c", weight=1)
        g.add_edge("c", "d", weight=5)
        seen_args = []

        def heavy(edge, neighbor, current):
            seen_args.append((neighbor, current))
            return edge.properties.get("weight", 0) >= 2

        result = filter_bfs(make_context(g), {"startNode": "a", "allowEdge": heavy})
        assert result.visited == ["a", "b"]
        assert ("b", "a") in seen_args

    def test_incoming_direction(self, chain_graph, make_context):
        result = filter_bfs(
            make_context(chain_graph),
            {"startNode": 5, "allowEdge": allow_all, "direction": "incoming"},
        )
        assert result.visited == [5, 4, 3, 2, 1, 0]

    def test_both_directions(self, chain_graph, make_context):
        result = filter_bfs(
            make_context(chain_graph),
            {"startNode": 2, "allowEdge": allow_all, "direction": "both"},
        )
        assert sorted(result.visited) == [0, 1, 2, 3, 4, 5]

    def test_custom_get_neighbor(self, chain_graph, make_context):
        result = filter_bfs(
            make_context(chain_graph),
            {
                "startNode": 0,
                "allowEdge": allow_all,
                "getNeighbor": lambda edge, current: edge.destination,
                "maxDepth": 1,
            },
        )
        assert result.visited == [0, 1]

    def test_host_callable_with_node_objects(self, host_traverse, settings):
        fn = host_traverse([
            {"source": "a", "destination": {"id": "b"}},
            {"source": "b", "destination": {"id": "c"}},
        ])
        ctx = AlgorithmContext.from_source(fn, settings=settings)
        result = filter_bfs(ctx, {"startNode": {"id": "a"}, "allowEdge": allow_all})
        assert result.visited == ["a", "b", "c"]
        # One batched call per expanded level.
        assert [len(nodes) for nodes, _ in fn.calls] == [1, 1, 1]

    def test_none_start_is_noop(self, chain_graph, make_context):
        result = filter_bfs(make_context(chain_graph), {"startNode": None})
        assert result.to_record() == {"parent": {}, "visited": []}

    def test_none_start_without_traverser(self, settings):
        result = filter_bfs(AlgorithmContext(settings=settings), {"startNode": None})
        assert result.visited == []

    def test_missing_allow_edge(self, chain_graph, make_context):
        with pytest.raises(AlgorithmPreconditionError, match="allowEdge"):
            filter_bfs(make_context(chain_graph), {"startNode": 0})

    def test_non_callable_allow_edge(self, chain_graph, make_context):
        with pytest.raises(AlgorithmPreconditionError, match="allowEdge"):
            filter_bfs(make_context(chain_graph), {"startNode": 0, "allowEdge": True})

    def test_missing_traverser(self, settings):
        with pytest.raises(AlgorithmPreconditionError, match="filterBFS"):
            filter_bfs(AlgorithmContext(settings=settings), {"startNode": 0, "allowEdge": allow_all})

    def test_record(self, chain_graph, make_context):
        record = filter_bfs(
            make_context(chain_graph), {"startNode": 0, "allowEdge": allow_all, "maxDepth": 1},
        ).to_record()
        assert record["visited"] == [0, 1]
        assert record["parent"]["1"]["parentId"] == 0
        assert record["parent"]["1"]["edge"]["destination"] == 1


class TestFilterDFS:
    def test_depth_first_parents(self, diamond_graph, make_context):
        result = filter_dfs(make_context(diamond_graph), {"startNode": "r", "allowEdge": allow_all})
        assert result.parent["d"].parent_id == "b"
        assert result.path_to("d") == ["r", "a", "b", "d"]
        assert set(result.visited) == {"r", "a", "b", "c", "d"}

    def test_first_edge_explored_first(self, diamond_graph, make_context):
        expanded = []

        def record(edge, neighbor, current):
            expanded.append(current)
            return True

        filter_dfs(make_context(diamond_graph), {"startNode": "r", "allowEdge": record})
        # After r, the walk continues from a (first reported edge), not c.
        assert expanded[:3] == ["r", "r", "a"]

    @pytest.mark.parametrize("max_depth", [0, 1, 2])
    def test_max_depth_is_hop_limit(self, diamond_graph, make_context, max_depth):
        result = filter_dfs(
            make_context(diamond_graph),
            {"startNode": "r", "allowEdge": allow_all, "maxDepth": max_depth},
        )
        assert all(result.depth_of(n) <= max_depth for n in result.visited)

    def test_max_depth_one(self, diamond_graph, make_context):
        result = filter_dfs(
            make_context(diamond_graph),
            {"startNode": "r", "allowEdge": allow_all, "maxDepth": 1},
        )
        assert set(result.visited) == {"r", "a", "c"}

    def test_max_visited(self, make_context):
        g = nx.balanced_tree(3, 3, create_using=nx.DiGraph)
        result = filter_dfs(
            make_context(g), {"startNode": 0, "allowEdge": allow_all, "maxVisited": 5},
        )
        assert len(result.visited) <= 6

    def test_none_start_is_noop(self, chain_graph, make_context):
        result = filter_dfs(make_context(chain_graph), {"startNode": None, "allowEdge": allow_all})
        assert result.parent == {} and result.visited == []

    def test_missing_allow_edge(self, chain_graph, make_context):
        with pytest.raises(AlgorithmPreconditionError, match="filterDFS"):
            filter_dfs(make_context(chain_graph), {"startNode": 0, "allowEdge": "yes"})

    def test_unknown_start_visits_only_start(self, chain_graph, make_context):
        result = filter_dfs(make_context(chain_graph), {"startNode": 99, "allowEdge": allow_all})
        assert result.visited == [99]
