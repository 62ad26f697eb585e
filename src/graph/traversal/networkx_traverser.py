# src/graph/traversal/networkx_traverser.py — v1
"""In-memory traversal backend over a NetworkX graph.

Directed graphs are used as-is. Undirected graphs are oriented once at
construction, each edge keeping the (u, v) order NetworkX enumerates it in,
so every undirected edge is reported exactly once per direction.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

import networkx as nx

from flexalgo.core.models import Edge
from flexalgo.graph.identity import default_node_id
from flexalgo.graph.traversal.base_traverser import BaseTraverser, Direction

logger = logging.getLogger(__name__)


class NetworkXTraverser(BaseTraverser):
    """Traverser backed by a networkx Graph/DiGraph/MultiGraph/MultiDiGraph."""

    def __init__(
        self,
        graph: nx.Graph,
        get_node_id: Callable[[Any], Any] = default_node_id,
    ) -> None:
        self._graph = graph if graph.is_directed() else _orient(graph)
        self._get_node_id = get_node_id
        self._multi = self._graph.is_multigraph()

    @property
    def provider_name(self) -> str:
        return "networkx"

    @property
    def graph(self) -> nx.DiGraph:
        return self._graph

    def traverse(self, nodes: Sequence[Any], direction: Direction) -> list[list[Edge]]:
        return [self._edges_of(node, direction) for node in nodes]

    def _edges_of(self, node: Any, direction: Direction) -> list[Edge]:
        node_id = self._get_node_id(node)
        if node_id is None or node_id not in self._graph:
            return []

        if direction == "outgoing":
            view = self._graph.out_edges
        else:
            view = self._graph.in_edges

        if self._multi:
            return [
                Edge(source=u, destination=v, properties=dict(data), id=key)
                for u, v, key, data in view(node_id, keys=True, data=True)
            ]
        return [
            Edge(source=u, destination=v, properties=dict(data))
            for u, v, data in view(node_id, data=True)
        ]


def _orient(graph: nx.Graph) -> nx.DiGraph:
    """Copy an undirected graph into a directed one without duplicating edges."""
    directed: nx.DiGraph = nx.MultiDiGraph() if graph.is_multigraph() else nx.DiGraph()
    directed.add_nodes_from(graph.nodes(data=True))
    if graph.is_multigraph():
        directed.add_edges_from(graph.edges(keys=True, data=True))
    else:
        directed.add_edges_from(graph.edges(data=True))
    logger.debug(
        "Oriented undirected graph: %d nodes, %d edges",
        directed.number_of_nodes(), directed.number_of_edges(),
    )
    return directed
