# src/graph/traversal/__init__.py — v1
"""Traversal backends behind the BaseTraverser interface."""
