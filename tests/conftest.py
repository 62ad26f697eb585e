# tests/conftest.py — v2
"""Shared test fixtures for all unit tests.

Provides small in-memory graphs, a host-style traverse function and
contexts wired to a NetworkXTraverser. No I/O beyond tmp_path.
"""

from __future__ import annotations

import logging
from itertools import combinations
from typing import Any

import networkx as nx
import pytest

from flexalgo.algorithms.context import AlgorithmContext
from flexalgo.config.settings import Settings
from flexalgo.graph.traversal.networkx_traverser import NetworkXTraverser

TEAMS = {
    "red": ["alice", "bob", "carol", "dave"],
    "green": ["erin", "frank", "grace", "heidi"],
    "blue": ["ivan", "judy", "mallory", "niaj"],
}


# === FIXTURES: Isolation ===


@pytest.fixture(autouse=True)
def _reset_flexalgo_logger():
    """Drop handlers installed by setup_logging so streams do not leak across tests."""
    yield
    root = logging.getLogger("flexalgo")
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)


# === FIXTURES: Graphs ===


@pytest.fixture
def teams() -> dict[str, list[str]]:
    """Team name -> members of the teams_graph fixture."""
    return {name: list(members) for name, members in TEAMS.items()}


@pytest.fixture
def teams_graph() -> nx.DiGraph:
    """Three 4-cliques (weight 10) joined by single weight-1 edges."""
    g = nx.DiGraph()
    for members in TEAMS.values():
        for u, v in combinations(members, 2):
            g.add_edge(u, v, weight=10)
    g.add_edge("dave", "erin", weight=1)
    g.add_edge("heidi", "ivan", weight=1)
    g.add_edge("carol", "grace", weight=1)
    return g


@pytest.fixture
def degree_graph() -> nx.DiGraph:
    """a-b, a-c, b-c, c-d as directed edges."""
    g = nx.DiGraph()
    g.add_edges_from([("a", "b"), ("a", "c"), ("b", "c"), ("c", "d")])
    return g


@pytest.fixture
def rank_graph() -> nx.DiGraph:
    """A->B (10), A->C (1), B->A (1), C->A (1)."""
    g = nx.DiGraph()
    g.add_edge("A", "B", weight=10)
    g.add_edge("A", "C", weight=1)
    g.add_edge("B", "A", weight=1)
    g.add_edge("C", "A", weight=1)
    return g


@pytest.fixture
def chain_graph() -> nx.DiGraph:
    """0 -> 1 -> 2 -> 3 -> 4 -> 5 with integer ids."""
    return nx.path_graph(6, create_using=nx.DiGraph)


# === FIXTURES: Contexts ===


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def make_context(settings: Settings):
    """Factory: context over a networkx graph."""

    def _make(graph: nx.Graph) -> AlgorithmContext:
        return AlgorithmContext(traverser=NetworkXTraverser(graph), settings=settings)

    return _make


@pytest.fixture
def host_traverse():
    """Factory: host-style traverse function over an edge list, recording calls."""

    def _make(edges: list[dict[str, Any]]):
        calls: list[tuple[list[Any], dict[str, Any]]] = []

        def traverse(nodes: list[Any], options: dict[str, Any]) -> list[list[dict]]:
            calls.append((list(nodes), dict(options)))
            out = []
            for node in nodes:
                node_id = node["id"] if isinstance(node, dict) else node
                if options["direction"] == "outgoing":
                    out.append([e for e in edges if e.get("source") == node_id])
                else:
                    out.append([e for e in edges if e.get("destination") == node_id])
            return out

        traverse.calls = calls  # type: ignore[attr-defined]
        return traverse

    return _make
