# src/graph/__init__.py — v1
"""Node identity, edge weights, traversal backends and adjacency building."""
