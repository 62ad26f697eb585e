# src/logging/context.py — v2
"""Contextual logging support — attach algorithm, invocation_id and stage to log records.

An invocation is one call of an algorithm entry point. The registry sets the
algorithm context around each call; multi-level algorithms update the stage.
"""

from __future__ import annotations

import contextvars
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

_algorithm: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "algorithm", default=None
)
_invocation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "invocation_id", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    algorithm: str | None = None
    invocation_id: str | None = None
    stage: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        algorithm=_algorithm.get(),
        invocation_id=_invocation_id.get(),
        stage=_stage.get(),
    )


def set_stage(stage: str | None) -> None:
    """Set the current stage within an invocation (e.g. "level-2")."""
    _stage.set(stage)


def clear_context() -> None:
    """Reset all context variables."""
    _algorithm.set(None)
    _invocation_id.set(None)
    _stage.set(None)


@contextmanager
def invocation(algorithm: str, invocation_id: str | None = None) -> Iterator[str]:
    """Scope an algorithm call; previous context is restored on exit."""
    tokens = (
        _algorithm.set(algorithm),
        _invocation_id.set(invocation_id or uuid.uuid4().hex[:12]),
        _stage.set(None),
    )
    try:
        yield _invocation_id.get()  # type: ignore[misc]
    finally:
        _stage.reset(tokens[2])
        _invocation_id.reset(tokens[1])
        _algorithm.reset(tokens[0])
