# src/algorithms/__init__.py — v1
"""Algorithm entry points: Louvain, Leiden, PageRank, degree centrality, BFS/DFS."""

from flexalgo.algorithms.context import AlgorithmContext
from flexalgo.algorithms.degree_centrality import degree_centrality
from flexalgo.algorithms.leiden import leiden
from flexalgo.algorithms.louvain import louvain
from flexalgo.algorithms.pagerank import pagerankv
from flexalgo.algorithms.registry import AlgorithmRegistry, default_registry
from flexalgo.algorithms.traversal import filter_bfs, filter_dfs

__all__ = [
    "AlgorithmContext",
    "AlgorithmRegistry",
    "default_registry",
    "degree_centrality",
    "filter_bfs",
    "filter_dfs",
    "leiden",
    "louvain",
    "pagerankv",
]
