# tests/unit/graph/test_unit_traversers.py — v1
"""Tests for graph/traversal — backends, factory and direction handling."""

from __future__ import annotations

from types import SimpleNamespace

import networkx as nx
import pytest

from flexalgo.algorithms.context import AlgorithmContext
from flexalgo.algorithms.degree_centrality import degree_centrality
from flexalgo.core.errors import AlgorithmPreconditionError
from flexalgo.core.models import Edge
from flexalgo.graph.traversal.base_traverser import BaseTraverser, normalize_directions
from flexalgo.graph.traversal.callable_traverser import CallableTraverser
from flexalgo.graph.traversal.networkx_traverser import NetworkXTraverser
from flexalgo.graph.traversal.traverser_factory import (
    UnsupportedTraverserError,
    create_traverser,
)


class TestNormalizeDirections:
    def test_both_expands(self):
        assert normalize_directions("both") == ["incoming", "outgoing"]
        assert normalize_directions(None) == ["incoming", "outgoing"]

    def test_single(self):
        assert normalize_directions("outgoing") == ["outgoing"]

    def test_list_dedup(self):
        assert normalize_directions(["outgoing", "both"]) == ["outgoing", "incoming"]

    def test_unknown_raises(self):
        with pytest.raises(AlgorithmPreconditionError, match="Unknown traversal direction"):
            normalize_directions("sideways")


class TestNetworkXTraverser:
    def test_directed_edges(self, rank_graph):
        t = NetworkXTraverser(rank_graph)
        out = t.traverse(["A"], "outgoing")[0]
        assert {(e.source, e.destination) for e in out} == {("A", "B"), ("A", "C")}
        incoming = t.traverse(["A"], "incoming")[0]
        assert {e.source for e in incoming} == {"B", "C"}

    def test_properties_copied(self, rank_graph):
        edge = NetworkXTraverser(rank_graph).edges_for("A", "outgoing")[0]
        assert edge.properties["weight"] in (10, 1)

    def test_unknown_node_gives_empty_row(self, rank_graph):
        t = NetworkXTraverser(rank_graph)
        assert t.traverse(["Z", {"id": "A"}], "outgoing")[0] == []
        assert len(t.traverse(["Z", {"id": "A"}], "outgoing")[1]) == 2

    def test_undirected_reports_each_edge_once(self):
        g = nx.Graph([("a", "b"), ("b", "c")])
        t = NetworkXTraverser(g)
        total = sum(len(t.edges_for(n, "outgoing")) for n in g.nodes)
        assert total == 2
        assert t.graph.is_directed()

    def test_multigraph_keys(self):
        g = nx.MultiDiGraph()
        g.add_edge("a", "b", key="k1", weight=1)
        g.add_edge("a", "b", key="k2", weight=2)
        edges = NetworkXTraverser(g).edges_for("a", "outgoing")
        assert sorted(e.id for e in edges) == ["k1", "k2"]

    def test_traverse_many_concatenates(self, rank_graph):
        rows = NetworkXTraverser(rank_graph).traverse_many(["A"], ["incoming", "outgoing"])
        assert len(rows[0]) == 4


class TestCallableTraverser:
    def test_passes_host_options_and_coerces(self):
        seen = {}

        def fn(nodes, options):
            seen.update(options)
            return [[{"source": n, "destination": "x", "weight": 2}] for n in nodes]

        rows = CallableTraverser(fn).traverse(["a"], "outgoing")
        assert seen == {"direction": "outgoing", "returnType": "edges"}
        assert isinstance(rows[0][0], Edge)
        assert rows[0][0].properties == {"weight": 2}

    def test_attribute_edges_keep_their_weight(self, settings):
        edges = [
            SimpleNamespace(source="a", destination="b", weight=2),
            SimpleNamespace(source="a", destination="c", weight=5),
        ]

        def fn(nodes, options):
            side = "source" if options["direction"] == "outgoing" else "destination"
            return [[e for e in edges if getattr(e, side) == n] for n in nodes]

        rows = CallableTraverser(fn).traverse(["a"], "outgoing")
        assert [e.properties for e in rows[0]] == [{"weight": 2}, {"weight": 5}]

        ctx = AlgorithmContext(traverser=CallableTraverser(fn), settings=settings)
        result = degree_centrality(ctx, {"nodes": ["a", "b", "c"]})
        assert result.weighted_degree["a"] == 7.0
        assert result.weighted_degree["b"] == 2.0

    def test_short_or_none_result_is_padded(self):
        rows = CallableTraverser(lambda nodes, opts: None).traverse(["a", "b"], "incoming")
        assert rows == [[], []]

    def test_host_errors_propagate(self):
        def fn(nodes, options):
            raise RuntimeError("db down")

        with pytest.raises(RuntimeError, match="db down"):
            CallableTraverser(fn).traverse(["a"], "outgoing")


class TestFactory:
    def test_networkx(self, rank_graph):
        t = create_traverser(rank_graph)
        assert t.provider_name == "networkx"

    def test_callable(self):
        assert create_traverser(lambda n, o: []).provider_name == "callable"

    def test_existing_traverser_passthrough(self, rank_graph):
        t = NetworkXTraverser(rank_graph)
        assert create_traverser(t) is t

    def test_none_raises(self):
        with pytest.raises(AlgorithmPreconditionError):
            create_traverser(None)

    def test_unsupported(self):
        with pytest.raises(UnsupportedTraverserError, match="Unsupported"):
            create_traverser(42)

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            BaseTraverser()  # type: ignore[abstract]
