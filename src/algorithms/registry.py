# src/algorithms/registry.py — v1
"""Algorithm registry — name -> entry point table.

Names follow the host's UDF namespace (exp.louvain, exp.filterBFS, ...).
A registry is an ordinary object owned by its caller; load_builtin() can be
called any number of times and always leaves the same table.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel

from flexalgo.algorithms.context import AlgorithmContext
from flexalgo.logging.context import invocation

logger = logging.getLogger(__name__)

EntryPoint = Callable[[AlgorithmContext, Any], BaseModel]


class RegistryError(Exception):
    """Raised when an algorithm name is unknown."""


@dataclass(frozen=True)
class AlgorithmEntry:
    """Registered entry point with a one-line description."""

    name: str
    func: EntryPoint
    description: str = ""


class AlgorithmRegistry:
    """Registry of callable graph algorithms."""

    def __init__(self) -> None:
        self._algorithms: dict[str, AlgorithmEntry] = {}

    @property
    def names(self) -> list[str]:
        """Return sorted list of registered algorithm names."""
        return sorted(self._algorithms.keys())

    def load_builtin(self) -> None:
        """Register every algorithm shipped with the package."""
        from flexalgo.algorithms.degree_centrality import degree_centrality
        from flexalgo.algorithms.leiden import leiden
        from flexalgo.algorithms.louvain import louvain
        from flexalgo.algorithms.pagerank import pagerankv
        from flexalgo.algorithms.traversal import filter_bfs, filter_dfs

        builtin = (
            AlgorithmEntry("exp.louvain", louvain, "Louvain community detection"),
            AlgorithmEntry("exp.leiden", leiden, "Leiden community detection (connected communities)"),
            AlgorithmEntry("exp.pagerankv", pagerankv, "Weighted PageRank"),
            AlgorithmEntry("exp.degreeCentrality", degree_centrality, "Degree centrality"),
            AlgorithmEntry("exp.filterBFS", filter_bfs, "Breadth-first traversal with edge filter"),
            AlgorithmEntry("exp.filterDFS", filter_dfs, "Depth-first traversal with edge filter"),
        )
        for entry in builtin:
            self._algorithms[entry.name] = entry
        logger.debug("Registry loaded %d algorithms", len(self._algorithms))

    def register(self, entry: AlgorithmEntry) -> None:
        """Manually register an algorithm."""
        if entry.name in self._algorithms:
            logger.warning("Overwriting existing algorithm: %s", entry.name)
        self._algorithms[entry.name] = entry

    def get(self, name: str) -> AlgorithmEntry | None:
        """Get algorithm by name, or None if not registered."""
        return self._algorithms.get(name)

    def get_or_raise(self, name: str) -> AlgorithmEntry:
        """Get algorithm by name, raise if not found."""
        entry = self._algorithms.get(name)
        if entry is None:
            raise RegistryError(
                f"Algorithm '{name}' not found in registry. "
                f"Available: {', '.join(self.names)}"
            )
        return entry

    def call(
        self,
        name: str,
        context: AlgorithmContext,
        config: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Run an algorithm by name and return its plain-mapping result.

        Raises:
            RegistryError: Unknown name.
            AlgorithmPreconditionError: Propagated from the entry point.
        """
        entry = self.get_or_raise(name)
        with invocation(name):
            result = entry.func(context, config)
        return result.to_record()  # type: ignore[attr-defined]


def default_registry() -> AlgorithmRegistry:
    """Fresh registry with the built-in algorithms loaded."""
    registry = AlgorithmRegistry()
    registry.load_builtin()
    return registry
