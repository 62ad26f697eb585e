# src/graph/traversal/traverser_factory.py — v1
"""Factory: wrap whatever traversal capability the host provides."""

from __future__ import annotations

import logging
from typing import Any

import networkx as nx

from flexalgo.core.errors import AlgorithmPreconditionError
from flexalgo.graph.traversal.base_traverser import BaseTraverser

logger = logging.getLogger(__name__)


class UnsupportedTraverserError(AlgorithmPreconditionError):
    """Raised when the traversal source cannot be adapted."""


def create_traverser(source: Any) -> BaseTraverser:
    """Build a traverser from a traverser, a networkx graph or a host function.

    Args:
        source: BaseTraverser, networkx graph, or callable
            `fn(nodes, {"direction", "returnType"})`.

    Returns:
        BaseTraverser instance.

    Raises:
        AlgorithmPreconditionError: If `source` is None.
        UnsupportedTraverserError: If `source` has an unsupported type.
    """
    if source is None:
        raise AlgorithmPreconditionError("traversal capability is not available")

    if isinstance(source, BaseTraverser):
        return source

    if isinstance(source, nx.Graph):
        from flexalgo.graph.traversal.networkx_traverser import NetworkXTraverser
        return NetworkXTraverser(source)

    if callable(source):
        from flexalgo.graph.traversal.callable_traverser import CallableTraverser
        return CallableTraverser(source)

    raise UnsupportedTraverserError(
        f"Unsupported traversal source: {type(source).__name__}. "
        f"Available: BaseTraverser, networkx graph, callable"
    )
