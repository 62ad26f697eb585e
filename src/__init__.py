# src/__init__.py — v1
"""flexalgo: graph community detection, centrality and traversal UDFs."""

from flexalgo.version import __version__

__all__ = ["__version__"]
