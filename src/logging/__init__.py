# src/logging/__init__.py — v1
"""Log formatting, handlers and per-invocation context."""
