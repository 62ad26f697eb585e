# src/graph/identity.py — v1
"""Node identity extraction and endpoint resolution.

Nodes reach the algorithms in whatever shape the host uses: bare ids,
mappings with an "id" key, or objects exposing `.id`. The extractor is a
plain callable so hosts with other shapes can supply their own.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Protocol

from flexalgo.core.models import Edge


class IdExtractor(Protocol):
    """Strategy returning the NodeId of a node, or None when it has none."""

    def __call__(self, node: Any) -> Any: ...


def default_node_id(node: Any) -> Any:
    """Return the id of `node` (int/str as-is, mapping["id"], or node.id)."""
    if node is None or isinstance(node, bool):
        return None
    if isinstance(node, (int, str)):
        return node
    if isinstance(node, Mapping):
        return node.get("id")
    return getattr(node, "id", None)


def endpoint_ids(
    edge: Edge,
    get_node_id: Callable[[Any], Any] = default_node_id,
) -> tuple[Any, Any]:
    """Return (source_id, destination_id); missing endpoints yield None."""
    s = edge.source
    d = edge.destination
    s_id = get_node_id(s) if s is not None else None
    d_id = get_node_id(d) if d is not None else None
    return s_id, d_id


def other_endpoint(
    edge: Edge,
    current_id: Any,
    get_node_id: Callable[[Any], Any] = default_node_id,
) -> Any:
    """Return the endpoint of `edge` that is not the current node.

    With both endpoints present, the one not matching `current_id` wins (the
    source if neither matches). With a single endpoint, that endpoint is
    assumed to be the reachable neighbor. Returns None for an empty edge.
    """
    s_id, d_id = endpoint_ids(edge, get_node_id)
    if s_id is not None and d_id is not None:
        if s_id == current_id:
            return edge.destination
        if d_id == current_id:
            return edge.source
        return edge.source

    if edge.source is not None:
        return edge.source
    if edge.destination is not None:
        return edge.destination
    return None


def stable_key(node_id: Any) -> str:
    """String form of a NodeId used for result mappings."""
    return str(node_id)
