# src/core/errors.py — v1
"""Exception types shared by the algorithm entry points."""

from __future__ import annotations


class AlgorithmPreconditionError(TypeError):
    """Raised when a call cannot start (missing traverser, bad nodes, no predicate).

    Fatal and non-retryable: no partial result is produced.
    """


class InvalidOptionsError(AlgorithmPreconditionError):
    """Raised when an algorithm configuration mapping fails validation."""
