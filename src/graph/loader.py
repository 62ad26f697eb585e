# src/graph/loader.py — v2
"""Load graph files into NetworkX for the command line.

Supported formats, chosen by extension:
    .json            node-link JSON (NetworkX node_link_data layout)
    .graphml         GraphML
    .edgelist, .txt  NetworkX edge list, "source destination [weight]" per line
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import networkx as nx

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".graphml", ".edgelist", ".txt")


class GraphLoadError(ValueError):
    """Raised when a graph file cannot be read."""


def load_graph(path: Path | str) -> nx.Graph:
    """Read a graph file.

    Args:
        path: File to read.

    Returns:
        NetworkX graph. Edge lists load as a DiGraph.

    Raises:
        GraphLoadError: Missing file, unsupported extension or malformed content.
    """
    path = Path(path)
    if not path.is_file():
        raise GraphLoadError(f"Graph file not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            graph = _load_node_link(path)
        elif suffix == ".graphml":
            graph = nx.read_graphml(path)
        elif suffix in (".edgelist", ".txt"):
            graph = _load_edgelist(path)
        else:
            raise GraphLoadError(
                f"Unsupported graph format: {suffix or '(none)'}. "
                f"Supported: {', '.join(SUPPORTED_SUFFIXES)}"
            )
    except GraphLoadError:
        raise
    except (OSError, ValueError, KeyError, TypeError, IndexError, nx.NetworkXError) as exc:
        raise GraphLoadError(f"Cannot read {path.name}: {exc}") from exc

    logger.info(
        "Loaded %s: %d nodes, %d edges",
        path.name, graph.number_of_nodes(), graph.number_of_edges(),
    )
    return graph


def _load_node_link(path: Path) -> nx.Graph:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise GraphLoadError(f"{path.name}: expected a node-link JSON object")
    edges_key = "links" if "links" in data and "edges" not in data else "edges"
    return nx.node_link_graph(data, edges=edges_key)


def _load_edgelist(path: Path) -> nx.DiGraph:
    return nx.read_edgelist(
        path,
        comments="#",
        create_using=nx.DiGraph,
        data=[("weight", float)],
        encoding="utf-8",
    )
